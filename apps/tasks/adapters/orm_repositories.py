# apps/tasks/adapters/orm_repositories.py
from typing import List, Optional
from django.db.models import Prefetch
from apps.core.adapters.orm import backend_call
from apps.core.errors import PolicyDeniedError
from apps.tasks.domain.entities import (
    TaskEntity, TaskSize, TaskPriority, TimeEntryEntity, FolderEntity,
)
from apps.tasks.ports.repositories import ITaskRepository, ITimeEntryRepository, IFolderRepository
from apps.tasks.models import Task as TaskModel, TimeEntry as TimeEntryModel, Folder as FolderModel


def entry_to_entity(model: TimeEntryModel) -> TimeEntryEntity:
    return TimeEntryEntity(
        id=model.id,
        task_id=model.task_id,
        date=model.date,
        duration=model.duration,
        start_time=model.start_time,
    )


class DjangoTaskRepository(ITaskRepository):
    def to_entity(self, model: TaskModel, with_entries: bool = True) -> TaskEntity:
        """Konwertuje Model Django -> Czystą Encję."""
        entries = []
        if with_entries:
            # Dzięki prefetch_related w zapytaniu nie ma dodatkowego strzału do DB
            entries = [entry_to_entity(e) for e in model.time_entries.all()]

        return TaskEntity(
            id=model.id,
            title=model.title,
            size=TaskSize(model.size),
            points=model.points,
            due_date=model.due_date,
            folder=model.folder or None,
            description=model.description,
            priority=TaskPriority(model.priority) if model.priority else None,
            is_completed=model.is_completed,
            completed_at=model.completed_at,
            created_at=model.created_at,
            time_entries=entries,
        )

    def _queryset(self, user_id: int):
        return TaskModel.objects.filter(user_id=user_id).prefetch_related(
            Prefetch('time_entries', queryset=TimeEntryModel.objects.order_by('start_time', 'id'))
        )

    def get_by_id(self, user_id: int, task_id: int) -> Optional[TaskEntity]:
        with backend_call("select task"):
            try:
                return self.to_entity(self._queryset(user_id).get(id=task_id))
            except TaskModel.DoesNotExist:
                return None

    def list_for_user(self, user_id: int) -> List[TaskEntity]:
        with backend_call("select tasks"):
            return [self.to_entity(t) for t in self._queryset(user_id).order_by('-created_at', '-id')]

    def save(self, task: TaskEntity, user_id: int) -> TaskEntity:
        data = {
            'title': task.title,
            'description': task.description or "",
            'size': TaskSize(task.size).value,
            'points': task.points,
            'priority': task.priority.value if task.priority else "",
            'due_date': task.due_date,
            'folder': task.folder or "",
            'is_completed': task.is_completed,
            'completed_at': task.completed_at,
        }

        with backend_call("save task"):
            if task.id:
                # Aktualizacja istniejącego (tylko własne wiersze)
                obj = TaskModel.objects.filter(id=task.id, user_id=user_id).first()
                if obj is None:
                    raise PolicyDeniedError(f"Task {task.id} not found for user {user_id}")
                for name, value in data.items():
                    setattr(obj, name, value)
                obj.save()
            else:
                task.id = TaskModel.objects.create(user_id=user_id, **data).id

            return self.to_entity(self._queryset(user_id).get(id=task.id))

    def delete(self, user_id: int, task_id: int) -> None:
        with backend_call("delete task"):
            deleted, _ = TaskModel.objects.filter(id=task_id, user_id=user_id).delete()
        if not deleted:
            raise PolicyDeniedError(f"Task {task_id} not found for user {user_id}")


class DjangoTimeEntryRepository(ITimeEntryRepository):
    def add(self, entry: TimeEntryEntity, user_id: int) -> TimeEntryEntity:
        with backend_call("insert time entry"):
            if not TaskModel.objects.filter(id=entry.task_id, user_id=user_id).exists():
                raise PolicyDeniedError(f"Task {entry.task_id} not found for user {user_id}")

            obj = TimeEntryModel.objects.create(
                user_id=user_id,
                task_id=entry.task_id,
                date=entry.date,
                duration=entry.duration,
                start_time=entry.start_time,
            )
        return entry_to_entity(obj)

    def list_for_task(self, user_id: int, task_id: int) -> List[TimeEntryEntity]:
        with backend_call("select time entries"):
            qs = TimeEntryModel.objects.filter(user_id=user_id, task_id=task_id)
            return [entry_to_entity(e) for e in qs]


class DjangoFolderRepository(IFolderRepository):
    def to_entity(self, model: FolderModel) -> FolderEntity:
        return FolderEntity(id=model.id, name=model.name, created_at=model.created_at)

    def list_for_user(self, user_id: int) -> List[FolderEntity]:
        with backend_call("select folders"):
            return [self.to_entity(f) for f in FolderModel.objects.filter(user_id=user_id)]

    def add(self, user_id: int, name: str) -> FolderEntity:
        with backend_call("insert folder"):
            return self.to_entity(FolderModel.objects.create(user_id=user_id, name=name))

    def rename(self, user_id: int, folder_id: int, name: str) -> FolderEntity:
        with backend_call("update folder"):
            updated = FolderModel.objects.filter(id=folder_id, user_id=user_id).update(name=name)
            if not updated:
                raise PolicyDeniedError(f"Folder {folder_id} not found for user {user_id}")
            return self.to_entity(FolderModel.objects.get(id=folder_id))

    def delete(self, user_id: int, folder_id: int) -> None:
        with backend_call("delete folder"):
            deleted, _ = FolderModel.objects.filter(id=folder_id, user_id=user_id).delete()
        if not deleted:
            raise PolicyDeniedError(f"Folder {folder_id} not found for user {user_id}")
