# apps/sprints/domain/services.py
import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from apps.core.errors import PersistenceError
from apps.sprints.domain.entities import SprintEntity
from apps.sprints.ports.repositories import ISprintRepository

logger = logging.getLogger(__name__)

OVERLAP_MESSAGE = (
    "The selected date range overlaps with an existing sprint. "
    "Please choose a different time range."
)


@dataclass
class SprintResult:
    success: bool
    message: Optional[str] = None
    sprint: Optional[SprintEntity] = None


def find_current_sprint(sprints: Iterable[SprintEntity], today: date) -> Optional[SprintEntity]:
    """Pierwszy sprint (w kolejności listy) zawierający dzisiejszy dzień."""
    for sprint in sprints:
        if sprint.contains(today):
            return sprint
    return None


def merge_task_ids(existing: List[str], new_ids: Iterable) -> List[str]:
    merged = list(existing)
    for task_id in new_ids:
        if str(task_id) not in merged:
            merged.append(str(task_id))
    return merged


class SprintSelection:
    """
    Aktualnie wybrany sprint. Wyliczany jawnie przez refresh() po każdej zmianie
    listy sprintów, a nie jako efekt uboczny renderowania.
    """

    def __init__(self, sprint: Optional[SprintEntity] = None):
        self.sprint = sprint

    @property
    def sprint_id(self) -> Optional[int]:
        return self.sprint.id if self.sprint else None

    def refresh(self, sprints: List[SprintEntity], today: date) -> Optional[SprintEntity]:
        current = find_current_sprint(sprints, today)
        if current is not None:
            self.sprint = current
        elif self.sprint is not None:
            # Ręczny wybór zostaje, o ile sprint nadal istnieje
            self.sprint = next((s for s in sprints if s.id == self.sprint.id), None)
        return self.sprint

    def select(self, sprints: List[SprintEntity], sprint_id: int) -> Optional[SprintEntity]:
        self.sprint = next((s for s in sprints if s.id == sprint_id), None)
        return self.sprint

    def on_updated(self, sprint: SprintEntity) -> None:
        if self.sprint is not None and self.sprint.id == sprint.id:
            self.sprint = sprint

    def on_deleted(self, sprint_id: int) -> None:
        if self.sprint is not None and self.sprint.id == sprint_id:
            self.sprint = None


class SprintService:
    def __init__(self, repository: ISprintRepository):
        self.repository = repository

    def list_sprints(self, user_id: int) -> List[SprintEntity]:
        return self.repository.list_for_user(user_id)

    def create_sprint(self, user_id: int, name: str, start_date: date, end_date: date) -> SprintResult:
        if not name or not name.strip():
            return SprintResult(success=False, message="Sprint name cannot be empty")

        try:
            # 1. Konflikt dat?
            if self.repository.find_overlapping(user_id, start_date, end_date):
                return SprintResult(success=False, message=OVERLAP_MESSAGE)

            # 2. Nowy sprint zawsze z pustą listą zadań
            sprint = self.repository.save(
                SprintEntity(id=None, name=name.strip(), start_date=start_date, end_date=end_date),
                user_id=user_id,
            )
        except PersistenceError as e:
            logger.error("Error creating sprint: %s", e)
            return SprintResult(success=False, message="Failed to create sprint")

        logger.info("Sprint %s created (%s - %s)", sprint.id, start_date, end_date)
        return SprintResult(success=True, sprint=sprint)

    def update_sprint(self, user_id: int, sprint: SprintEntity,
                      selection: Optional[SprintSelection] = None) -> SprintEntity:
        saved = self.repository.save(sprint, user_id=user_id)
        if selection is not None:
            selection.on_updated(saved)
        return saved

    def delete_sprint(self, user_id: int, sprint_id: int,
                      selection: Optional[SprintSelection] = None) -> None:
        # Zadania nie są modyfikowane
        self.repository.delete(user_id, sprint_id)
        if selection is not None:
            selection.on_deleted(sprint_id)

    def add_tasks_to_sprint(self, user_id: int, sprint_id: int, task_ids: Iterable,
                            selection: Optional[SprintSelection] = None) -> Optional[SprintEntity]:
        sprint = self.repository.get_by_id(user_id, sprint_id)
        if sprint is None:
            return None

        sprint.tasks = merge_task_ids(sprint.tasks, task_ids)
        return self.update_sprint(user_id, sprint, selection)

    def remove_task_from_sprint(self, user_id: int, task_id, sprint_id: int,
                                selection: Optional[SprintSelection] = None) -> Optional[SprintEntity]:
        sprint = self.repository.get_by_id(user_id, sprint_id)
        if sprint is None:
            return None

        if not sprint.has_task(task_id):
            return sprint

        sprint.tasks = [tid for tid in sprint.tasks if tid != str(task_id)]
        return self.update_sprint(user_id, sprint, selection)

    def detach_task(self, user_id: int, task_id) -> List[SprintEntity]:
        """Odpina ID zadania od wszystkich sprintów (przed usunięciem zadania)."""
        detached = []
        for sprint in self.repository.list_containing_task(user_id, str(task_id)):
            sprint.tasks = [tid for tid in sprint.tasks if tid != str(task_id)]
            detached.append(self.repository.save(sprint, user_id=user_id))
            logger.info("Detached task %s from sprint %s", task_id, sprint.id)
        return detached

    def sprint_tasks(self, sprint: Optional[SprintEntity], tasks: list) -> list:
        """Zadania sprintu; ID bez pasującego zadania są po cichu pomijane."""
        if sprint is None:
            return []
        return [task for task in tasks if sprint.has_task(task.id)]
