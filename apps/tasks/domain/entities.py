# apps/tasks/domain/entities.py
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional
from enum import Enum


class TaskSize(str, Enum):
    XS = 'XS'
    S = 'S'
    M = 'M'
    L = 'L'
    XL = 'XL'
    XXL = 'XXL'

    @property
    def points(self) -> int:
        return SIZE_POINTS[self]


# Stała skala punktów (Fibonacci)
SIZE_POINTS = {
    TaskSize.XS: 1,
    TaskSize.S: 2,
    TaskSize.M: 3,
    TaskSize.L: 5,
    TaskSize.XL: 8,
    TaskSize.XXL: 13,
}


def points_for_size(size) -> int:
    return TaskSize(size).points


class TaskPriority(str, Enum):
    LOW = 'Low'
    MEDIUM = 'Medium'
    HIGH = 'High'


@dataclass
class TimeEntryEntity:
    id: Optional[int]
    task_id: int
    date: date  # dzień (do grupowania)
    duration: int  # sekundy, >= 0
    start_time: datetime  # pełny timestamp (do grupowania po godzinie)


@dataclass
class TaskEntity:
    id: Optional[int]  # ID może być None przed zapisem
    title: str
    size: TaskSize = TaskSize.M
    points: int = 3
    due_date: Optional[datetime] = None
    folder: Optional[str] = None
    description: str = ""
    priority: Optional[TaskPriority] = None

    is_completed: bool = False
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    # Kolejność wpisów ma znaczenie tylko dla "ostatniego wpisu"
    time_entries: List[TimeEntryEntity] = field(default_factory=list)

    @property
    def total_seconds(self) -> int:
        return sum(entry.duration for entry in self.time_entries)

    @property
    def total_hours(self) -> float:
        return self.total_seconds / 3600

    @property
    def last_entry(self) -> Optional[TimeEntryEntity]:
        return self.time_entries[-1] if self.time_entries else None


@dataclass
class FolderEntity:
    id: Optional[int]
    name: str
    created_at: Optional[datetime] = None
