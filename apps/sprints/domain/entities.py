# apps/sprints/domain/entities.py
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional


@dataclass
class SprintEntity:
    id: Optional[int]
    name: str
    start_date: date
    end_date: date
    tasks: List[str] = field(default_factory=list)  # ID zadań jako stringi

    def overlaps(self, start: date, end: date) -> bool:
        """Standardowe nakładanie się przedziałów półotwartych."""
        return self.start_date < end and self.end_date > start

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def has_task(self, task_id) -> bool:
        return str(task_id) in self.tasks
