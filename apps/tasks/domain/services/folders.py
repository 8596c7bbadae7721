# apps/tasks/domain/services/folders.py
from typing import List
from apps.tasks.domain.entities import FolderEntity
from apps.tasks.ports.repositories import IFolderRepository


class FolderService:
    """Foldery są tylko nazwami - zmiana lub usunięcie folderu nie dotyka zadań."""

    def __init__(self, repository: IFolderRepository):
        self.repository = repository

    def list_folders(self, user_id: int) -> List[FolderEntity]:
        return self.repository.list_for_user(user_id)

    def add_folder(self, user_id: int, name: str) -> FolderEntity:
        if not name or not name.strip():
            raise ValueError("Folder name cannot be empty")
        return self.repository.add(user_id, name.strip())

    def rename_folder(self, user_id: int, folder_id: int, name: str) -> FolderEntity:
        if not name or not name.strip():
            raise ValueError("Folder name cannot be empty")
        return self.repository.rename(user_id, folder_id, name.strip())

    def delete_folder(self, user_id: int, folder_id: int) -> None:
        self.repository.delete(user_id, folder_id)
