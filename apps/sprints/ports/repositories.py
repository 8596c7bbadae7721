# apps/sprints/ports/repositories.py
from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from apps.sprints.domain.entities import SprintEntity


class ISprintRepository(ABC):
    @abstractmethod
    def list_for_user(self, user_id: int) -> List[SprintEntity]:
        """Sprinty użytkownika posortowane rosnąco po dacie startu."""
        pass

    @abstractmethod
    def get_by_id(self, user_id: int, sprint_id: int) -> Optional[SprintEntity]:
        pass

    @abstractmethod
    def find_overlapping(self, user_id: int, start: date, end: date) -> List[SprintEntity]:
        pass

    @abstractmethod
    def list_containing_task(self, user_id: int, task_id: str) -> List[SprintEntity]:
        pass

    @abstractmethod
    def save(self, sprint: SprintEntity, user_id: int) -> SprintEntity:
        pass

    @abstractmethod
    def delete(self, user_id: int, sprint_id: int) -> None:
        pass
