# apps/tasks/ports/repositories.py
from abc import ABC, abstractmethod
from typing import List, Optional
from apps.tasks.domain.entities import TaskEntity, TimeEntryEntity, FolderEntity


class ITaskRepository(ABC):
    @abstractmethod
    def get_by_id(self, user_id: int, task_id: int) -> Optional[TaskEntity]:
        pass

    @abstractmethod
    def list_for_user(self, user_id: int) -> List[TaskEntity]:
        """Zwraca wszystkie zadania użytkownika razem z wpisami czasu (najnowsze pierwsze)."""
        pass

    @abstractmethod
    def save(self, task: TaskEntity, user_id: int) -> TaskEntity:
        """Zapisuje (tworzy lub aktualizuje) zadanie i zwraca zaktualizowaną encję (np. z ID)."""
        pass

    @abstractmethod
    def delete(self, user_id: int, task_id: int) -> None:
        pass


class ITimeEntryRepository(ABC):
    @abstractmethod
    def add(self, entry: TimeEntryEntity, user_id: int) -> TimeEntryEntity:
        pass

    @abstractmethod
    def list_for_task(self, user_id: int, task_id: int) -> List[TimeEntryEntity]:
        pass


class IFolderRepository(ABC):
    @abstractmethod
    def list_for_user(self, user_id: int) -> List[FolderEntity]:
        pass

    @abstractmethod
    def add(self, user_id: int, name: str) -> FolderEntity:
        pass

    @abstractmethod
    def rename(self, user_id: int, folder_id: int, name: str) -> FolderEntity:
        pass

    @abstractmethod
    def delete(self, user_id: int, folder_id: int) -> None:
        pass
