# apps/tasks/domain/services/task_service.py
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from django.utils import timezone

from apps.tasks.domain.entities import TaskEntity, TaskSize, TaskPriority, TimeEntryEntity
from apps.tasks.ports.repositories import ITaskRepository, ITimeEntryRepository

logger = logging.getLogger(__name__)


def validate_task(task: TaskEntity) -> None:
    if not task.title or not task.title.strip():
        raise ValueError("Task title cannot be empty")
    if task.due_date is None:
        raise ValueError("Task due date is required")
    try:
        TaskSize(task.size)
    except ValueError:
        raise ValueError(f"Unknown task size: {task.size}")
    if task.points is not None and task.points < 0:
        raise ValueError("Task points cannot be negative")


@dataclass
class UpdateTaskInput:
    title: Optional[str] = None
    size: Optional[str] = None
    points: Optional[int] = None  # None = wylicz z rozmiaru (gdy zmienia się rozmiar)
    due_date: Optional[datetime] = None
    folder: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    is_completed: Optional[bool] = None


class TaskService:
    def __init__(self, repository: ITaskRepository,
                 time_entries: Optional[ITimeEntryRepository] = None,
                 sprint_service=None,
                 clock: Callable[[], datetime] = timezone.now):
        self.repository = repository
        self.time_entries = time_entries
        self.sprint_service = sprint_service
        self.clock = clock

    def snapshot(self, user_id: int) -> List[TaskEntity]:
        """Pełna migawka zadań użytkownika (z wpisami czasu) - zawsze zastępuje poprzednią."""
        return self.repository.list_for_user(user_id)

    def create_task(self, user_id: int, task: TaskEntity) -> TaskEntity:
        validate_task(task)
        saved = self.repository.save(task, user_id=user_id)
        logger.info("Task %s created (%s, %s pts)", saved.id, saved.size.value, saved.points)
        return saved

    def apply_completion(self, task: TaskEntity, completed: bool) -> TaskEntity:
        """completed_at ustawiamy tylko przy przejściu na True, czyścimy przy cofnięciu."""
        if completed and not task.is_completed:
            task.completed_at = self.clock()
        elif not completed:
            task.completed_at = None
        task.is_completed = completed
        return task

    def update_task(self, user_id: int, task_id: int, changes: UpdateTaskInput) -> TaskEntity:
        # 1. Pobierz zadanie
        task = self.repository.get_by_id(user_id, task_id)
        if not task:
            raise ValueError("Task not found")

        # 2. Nałóż zmiany
        if changes.title is not None:
            task.title = changes.title
        if changes.size is not None and TaskSize(changes.size) != task.size:
            task.size = TaskSize(changes.size)
            task.points = task.size.points
        if changes.points is not None:
            task.points = changes.points
        if changes.due_date is not None:
            task.due_date = changes.due_date
        if changes.folder is not None:
            task.folder = changes.folder or None
        if changes.description is not None:
            task.description = changes.description
        if changes.priority is not None:
            task.priority = TaskPriority(changes.priority) if changes.priority else None
        if changes.is_completed is not None:
            self.apply_completion(task, changes.is_completed)

        validate_task(task)

        # 3. Zapis - stan w pamięci zmienia się dopiero po potwierdzonym zapisie
        return self.repository.save(task, user_id=user_id)

    def set_completed(self, user_id: int, task_id: int, completed: bool = True) -> TaskEntity:
        return self.update_task(user_id, task_id, UpdateTaskInput(is_completed=completed))

    def delete_task(self, user_id: int, task_id: int) -> None:
        """Usuwa zadanie; wcześniej jawnie odpina jego ID od wszystkich sprintów."""
        if self.sprint_service is not None:
            self.sprint_service.detach_task(user_id, task_id)

        self.repository.delete(user_id, task_id)
        logger.info("Task %s deleted", task_id)

    def add_time_entry(self, user_id: int, entry: TimeEntryEntity) -> TimeEntryEntity:
        if self.time_entries is None:
            raise RuntimeError("TaskService was created without a time entry repository")
        if entry.duration < 0:
            raise ValueError("Duration cannot be negative")
        return self.time_entries.add(entry, user_id=user_id)
