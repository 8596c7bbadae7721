# apps/tasks/domain/services/notifications.py
from datetime import datetime
from typing import List

from apps.core.ports.local_store import ILocalStore, local_key
from apps.tasks.domain.entities import TaskEntity

SEEN_PURPOSE = 'notificationSeen'


class NotificationService:
    """Zadania z terminem w ciągu najbliższych dni + lokalne flagi "przeczytane"."""

    def __init__(self, local_store: ILocalStore, due_soon_days: int = 3):
        self.local_store = local_store
        self.due_soon_days = due_soon_days

    def due_soon(self, tasks: List[TaskEntity], now: datetime) -> List[TaskEntity]:
        result = []
        for task in tasks:
            if task.is_completed or task.due_date is None:
                continue
            # Pełne dni do terminu (jak differenceInDays - obcięte w stronę zera)
            days_until_due = int((task.due_date - now).total_seconds() // 86400) \
                if task.due_date >= now else -1
            if 0 <= days_until_due <= self.due_soon_days:
                result.append(task)
        return result

    def is_seen(self, user_id: int, task_id: int) -> bool:
        return self.local_store.get(local_key(user_id, SEEN_PURPOSE, task_id)) == "true"

    def unread(self, user_id: int, tasks: List[TaskEntity], now: datetime) -> List[TaskEntity]:
        return [t for t in self.due_soon(tasks, now) if not self.is_seen(user_id, t.id)]

    def mark_seen(self, user_id: int, tasks: List[TaskEntity], now: datetime) -> int:
        due = self.due_soon(tasks, now)
        for task in due:
            self.local_store.set(local_key(user_id, SEEN_PURPOSE, task.id), "true")
        return len(due)
