# apps/tasks/application/use_cases.py
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional
from apps.tasks.domain.entities import TaskEntity, TaskSize, TaskPriority, TimeEntryEntity
from apps.tasks.domain.services.task_service import TaskService
from apps.tasks.domain.services.time_entries import (
    calculate_range_duration, duration_from_parts, day_start,
)
from apps.tasks.ports.repositories import ITaskRepository, ITimeEntryRepository


@dataclass
class CreateTaskInput:
    title: str
    user_id: int
    size: str
    due_date: Optional[datetime]
    points: Optional[int] = None  # None = punkty z rozmiaru
    folder: Optional[str] = None
    description: str = ""
    priority: Optional[str] = None


class CreateTaskUseCase:
    def __init__(self, repository: ITaskRepository):
        self.repository = repository

    def execute(self, input_dto: CreateTaskInput) -> TaskEntity:
        if not input_dto.title:
            raise ValueError("Task title cannot be empty")

        try:
            size = TaskSize(input_dto.size)
        except ValueError:
            raise ValueError(f"Unknown task size: {input_dto.size}")

        task = TaskEntity(
            id=None,
            title=input_dto.title,
            size=size,
            points=input_dto.points if input_dto.points is not None else size.points,
            due_date=input_dto.due_date,
            folder=input_dto.folder or None,
            description=input_dto.description,
            priority=TaskPriority(input_dto.priority) if input_dto.priority else None,
        )
        return TaskService(self.repository).create_task(input_dto.user_id, task)


@dataclass
class ManualTimeEntryInput:
    task_id: int
    user_id: int
    day: date
    mode: str = "range"  # "range" albo "duration"
    start: str = "09:00"
    end: str = "10:00"
    hours: int = 0
    minutes: int = 0


class AddManualTimeEntryUseCase:
    def __init__(self, repository: ITimeEntryRepository):
        self.repository = repository

    def build_entry(self, input_dto: ManualTimeEntryInput) -> TimeEntryEntity:
        if input_dto.mode == "duration":
            duration = duration_from_parts(input_dto.hours, input_dto.minutes)
            start_time = day_start(input_dto.day)
        elif input_dto.mode == "range":
            start_time, duration = calculate_range_duration(input_dto.day, input_dto.start, input_dto.end)
        else:
            raise ValueError(f"Unknown time entry mode: {input_dto.mode}")

        if duration <= 0:
            raise ValueError("Time entry duration must be greater than zero")

        return TimeEntryEntity(
            id=None,
            task_id=input_dto.task_id,
            date=input_dto.day,
            duration=duration,
            start_time=start_time,
        )

    def execute(self, input_dto: ManualTimeEntryInput) -> TimeEntryEntity:
        entry = self.build_entry(input_dto)
        return self.repository.add(entry, user_id=input_dto.user_id)
