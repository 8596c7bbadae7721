"""Tests for task CRUD rules in TaskService and CreateTaskUseCase."""

from datetime import datetime

import pytest

from apps.core.errors import PolicyDeniedError
from apps.sprints.domain.entities import SprintEntity
from apps.sprints.domain.services import SprintService
from apps.tasks.application.use_cases import CreateTaskInput, CreateTaskUseCase
from apps.tasks.domain.entities import TaskEntity, TaskSize, TimeEntryEntity
from apps.tasks.domain.services import TaskService, UpdateTaskInput
from fakes import FakeClock, InMemorySprintRepository, InMemoryTaskRepository, InMemoryTimeEntryRepository, UTC

DUE = datetime(2024, 1, 10, 17, 0, tzinfo=UTC)


def _create(repo, **overrides):
    data = dict(title="Write report", user_id=1, size='L', due_date=DUE)
    data.update(overrides)
    return CreateTaskUseCase(repo).execute(CreateTaskInput(**data))


def test_create_derives_points_from_size():
    task = _create(InMemoryTaskRepository())
    assert task.id == 1
    assert task.size == TaskSize.L
    assert task.points == 5
    assert task.is_completed is False


def test_create_keeps_explicit_points():
    assert _create(InMemoryTaskRepository(), points=4).points == 4


@pytest.mark.parametrize("overrides,message", [
    ({'title': ''}, "title cannot be empty"),
    ({'due_date': None}, "due date is required"),
    ({'size': 'HUGE'}, "Unknown task size"),
    ({'points': -1}, "cannot be negative"),
])
def test_create_validation_happens_before_write(overrides, message):
    repo = InMemoryTaskRepository()
    with pytest.raises(ValueError, match=message):
        _create(repo, **overrides)
    assert repo.tasks == {}


def test_size_change_rederives_points_unless_overridden():
    repo = InMemoryTaskRepository()
    task = _create(repo, size='S')
    service = TaskService(repo)

    assert service.update_task(1, task.id, UpdateTaskInput(size='XL')).points == 8
    assert service.update_task(1, task.id, UpdateTaskInput(size='XS', points=6)).points == 6
    # Ten sam rozmiar nie nadpisuje ręcznych punktów
    assert service.update_task(1, task.id, UpdateTaskInput(size='XS')).points == 6


def test_completion_stamps_only_on_transition():
    clock = FakeClock()
    repo = InMemoryTaskRepository()
    task = _create(repo)
    service = TaskService(repo, clock=clock)

    done = service.set_completed(1, task.id, True)
    first_stamp = done.completed_at
    assert first_stamp == clock.now

    clock.advance(seconds=3600)
    again = service.set_completed(1, task.id, True)
    assert again.completed_at == first_stamp

    reopened = service.set_completed(1, task.id, False)
    assert reopened.is_completed is False
    assert reopened.completed_at is None


def test_update_unknown_task():
    with pytest.raises(ValueError, match="Task not found"):
        TaskService(InMemoryTaskRepository()).update_task(1, 42, UpdateTaskInput(title="x"))


def test_failed_write_leaves_stored_task_unchanged():
    repo = InMemoryTaskRepository()
    task = _create(repo)
    service = TaskService(repo)

    with pytest.raises(ValueError):
        service.update_task(1, task.id, UpdateTaskInput(title="   "))
    assert repo.get_by_id(1, task.id).title == "Write report"


def test_delete_detaches_task_from_sprints():
    repo = InMemoryTaskRepository()
    task = _create(repo)
    sprints = InMemorySprintRepository()
    sprints.save(SprintEntity(None, "S1", DUE.date(), DUE.date(), tasks=[str(task.id), "99"]), user_id=1)
    sprints.save(SprintEntity(None, "S2", DUE.date(), DUE.date(), tasks=["99"]), user_id=1)

    TaskService(repo, sprint_service=SprintService(sprints)).delete_task(1, task.id)

    assert repo.tasks == {}
    assert sprints.get_by_id(1, 1).tasks == ["99"]
    assert sprints.get_by_id(1, 2).tasks == ["99"]


def test_delete_missing_task_is_denied():
    with pytest.raises(PolicyDeniedError):
        TaskService(InMemoryTaskRepository()).delete_task(1, 5)


def test_add_time_entry_rejects_negative_duration():
    service = TaskService(InMemoryTaskRepository(), time_entries=InMemoryTimeEntryRepository())
    entry = TimeEntryEntity(id=None, task_id=1, date=DUE.date(), duration=-5, start_time=DUE)
    with pytest.raises(ValueError):
        service.add_time_entry(1, entry)


def test_snapshot_returns_fresh_copies():
    repo = InMemoryTaskRepository([TaskEntity(id=None, title="A", due_date=DUE)])
    service = TaskService(repo)
    snapshot = service.snapshot(1)
    snapshot[0].title = "mutated"
    assert service.snapshot(1)[0].title == "A"
