# apps/goals/ports/repositories.py
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from apps.goals.domain.entities import GoalEntity


class IGoalRepository(ABC):
    @abstractmethod
    def get_active(self, user_id: int, context: str) -> Optional[GoalEntity]:
        pass

    @abstractmethod
    def deactivate_active(self, user_id: int, context: str, points_at_end: int, end_date: datetime) -> int:
        """Dezaktywuje aktywny cel w kontekście. Zwraca liczbę zmienionych wierszy."""
        pass

    @abstractmethod
    def insert(self, goal: GoalEntity, user_id: int) -> GoalEntity:
        pass

    @abstractmethod
    def mark_achieved(self, user_id: int, goal_id: int, achieved_date: datetime, points_at_end: int) -> None:
        pass

    @abstractmethod
    def recent_achieved(self, user_id: int, context: str, limit: int) -> List[GoalEntity]:
        """Ostatnie osiągnięte cele z tej samej rodziny kontekstów (general / sprint_*)."""
        pass

    @abstractmethod
    def list_for_user(self, user_id: int) -> List[GoalEntity]:
        pass
