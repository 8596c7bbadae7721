"""Tests for the goal engine: lifecycle, achievement, suggestions and fallback."""

from datetime import date, datetime

import pytest

from apps.core.storage import StorageOutcome
from apps.goals.domain.entities import GoalEntity, sprint_context
from apps.goals.domain.services import GoalService, round_half_up
from apps.sprints.domain.entities import SprintEntity
from fakes import FakeClock, InMemoryGoalRepository, UTC, make_task


def _service(storage, repo=None, clock=None):
    return GoalService(repo or InMemoryGoalRepository(), storage, clock=clock or FakeClock())


def test_progress_counts_completed_points_only():
    tasks = [make_task(1, 'L', completed=True), make_task(2, 'XXL'), make_task(3, 'S', completed=True)]
    assert GoalService.progress_for(tasks) == 7


def test_sprint_scope_uses_sprint_task_list():
    tasks = [make_task(1, 'L', completed=True), make_task(2, 'S', completed=True)]
    sprint = SprintEntity(4, "S", date(2024, 1, 1), date(2024, 1, 14), tasks=["2"])
    scoped = GoalService.scope_tasks(tasks, sprint_context(4), sprint)
    assert [t.id for t in scoped] == [2]
    assert GoalService.scope_tasks(tasks, sprint_context(4), None) == []
    assert len(GoalService.scope_tasks(tasks, 'general')) == 2


@pytest.mark.parametrize("value", [0, -3, None])
def test_non_positive_goal_rejected(storage, value):
    repo = InMemoryGoalRepository()
    with pytest.raises(ValueError):
        _service(storage, repo).set_goal(1, 'general', value, progress=0)
    assert repo.goals == []


def test_set_goal_deactivates_previous(storage):
    repo = InMemoryGoalRepository()
    service = _service(storage, repo)

    service.set_goal(1, 'general', 10, progress=2, suggested=8)
    result = service.set_goal(1, 'general', 15, progress=6)

    assert result.outcome == StorageOutcome.REMOTE
    first, second = repo.goals
    assert first.is_active is False
    assert first.points_at_end == 6
    assert second.is_active is True
    assert second.points_at_start == 6
    assert repo.goals[0].suggested_value == 8
    assert service.load_target(1, 'general') == 15


def test_one_active_goal_per_context(storage):
    repo = InMemoryGoalRepository()
    service = _service(storage, repo)
    service.set_goal(1, 'general', 10, progress=0)
    service.set_goal(1, sprint_context(3), 5, progress=0)
    assert sorted(g.context for g in repo.goals if g.is_active) == ['general', 'sprint_3']


def test_achievement_fires_exactly_once(storage):
    repo = InMemoryGoalRepository()
    clock = FakeClock()
    service = _service(storage, repo, clock)
    service.set_goal(1, 'general', 10, progress=0)

    transitions = []
    for progress in (9, 10, 12):
        goal = service.load_goal(1, 'general')
        transitions.append(service.check_achievement(1, goal, progress))

    assert transitions == [False, True, False]
    assert repo.mark_calls == 1
    achieved = repo.goals[0]
    assert achieved.achieved is True
    assert achieved.points_at_end == 10
    assert achieved.achieved_date == clock.now


def test_inactive_goal_never_achieves(storage):
    goal = GoalEntity(id=1, goal_value=5, is_active=False)
    assert _service(storage).check_achievement(1, goal, 50) is False


def test_goal_falls_back_to_local_storage(storage, local_store):
    repo = InMemoryGoalRepository(fail_writes=True)
    service = _service(storage, repo)

    result = service.set_goal(1, 'general', 12, progress=0)
    assert result.outcome == StorageOutcome.LOCAL
    assert '1_goalPoints_general' in local_store.data

    repo.fail_reads = True
    assert service.load_target(1, 'general') == 12


def test_local_goal_achievement_is_remembered(storage):
    repo = InMemoryGoalRepository(fail_writes=True, fail_reads=True)
    service = _service(storage, repo)
    service.set_goal(1, 'general', 5, progress=0)

    assert service.check_achievement(1, service.load_goal(1, 'general'), 5) is True
    assert service.check_achievement(1, service.load_goal(1, 'general'), 6) is False

    # Nowy cel = nowe powiadomienie
    service.set_goal(1, 'general', 8, progress=6)
    assert service.check_achievement(1, service.load_goal(1, 'general'), 8) is True


def test_failed_achievement_write_does_not_refire(storage):
    repo = InMemoryGoalRepository()
    service = _service(storage, repo)
    service.set_goal(1, 'general', 5, progress=0)

    repo.fail_writes = True
    assert service.check_achievement(1, service.load_goal(1, 'general'), 5) is True
    assert service.check_achievement(1, service.load_goal(1, 'general'), 7) is False


def test_evaluate_reports_progress_and_transition(storage):
    service = _service(storage)
    service.set_goal(1, 'general', 5, progress=0)
    tasks = [make_task(1, 'L', completed=True)]

    status = service.evaluate(1, 'general', tasks)
    assert (status.target, status.progress, status.achieved, status.just_achieved) == (5, 5, True, True)
    assert service.evaluate(1, 'general', tasks).just_achieved is False


def test_suggestion_averages_last_three_achieved(storage):
    repo = InMemoryGoalRepository()
    for value in (100, 10, 20, 25):
        repo.goals.append(GoalEntity(id=len(repo.goals) + 1, goal_value=value, achieved=True, is_active=False))

    # (10 + 20 + 25) / 3 = 18.33
    assert _service(storage, repo).suggest_goal(1, 'general', []) == 18


def test_suggestion_rounds_half_up(storage):
    repo = InMemoryGoalRepository()
    for value in (10, 11):
        repo.goals.append(GoalEntity(id=value, goal_value=value, achieved=True, is_active=False))
    assert _service(storage, repo).suggest_goal(1, 'general', []) == 11
    assert round_half_up(2.5) == 3


def test_sprint_suggestion_uses_any_sprint_history(storage):
    repo = InMemoryGoalRepository()
    repo.goals.append(GoalEntity(id=1, goal_value=30, context='general', achieved=True))
    repo.goals.append(GoalEntity(id=2, goal_value=12, context='sprint_1', achieved=True))
    assert _service(storage, repo).suggest_goal(1, 'sprint_2', []) == 12


def test_cold_start_suggestion(storage):
    tasks = [make_task(1, 'XXL'), make_task(2, 'L', completed=True), make_task(3, 'XS')]
    # round(0.7 * 19) = 13
    assert _service(storage).suggest_goal(1, 'general', tasks) == 13


def test_cold_start_when_history_unreadable(storage):
    repo = InMemoryGoalRepository(fail_reads=True)
    assert _service(storage, repo).suggest_goal(1, 'general', [make_task(1, 'M')]) == 2


def test_high_target_warning():
    service = GoalService(InMemoryGoalRepository(), storage=None)
    assert service.is_high_target(13, 10) is True
    assert service.is_high_target(12, 10) is False
    assert service.is_high_target(17, 14) is True
    assert service.is_high_target(16, 14) is False


def test_summary_and_history(storage):
    repo = InMemoryGoalRepository()
    repo.goals.extend([
        GoalEntity(id=1, goal_value=5, context='general', achieved=True,
                   achieved_date=datetime(2024, 1, 3, 10, tzinfo=UTC), created_at=datetime(2024, 1, 1, tzinfo=UTC)),
        GoalEntity(id=2, goal_value=8, context='sprint_1', achieved=True,
                   achieved_date=datetime(2024, 1, 4, 10, tzinfo=UTC), created_at=datetime(2024, 1, 2, tzinfo=UTC)),
        GoalEntity(id=3, goal_value=9, context='general', created_at=datetime(2024, 1, 4, tzinfo=UTC)),
    ])
    service = _service(storage, repo)

    summary = service.summary(1, today=date(2024, 1, 5))
    assert summary.total_goals == 3
    assert summary.achieved_goals == 2
    assert summary.general_achieved == 1
    assert summary.sprint_achieved == 1
    assert (summary.current_streak, summary.longest_streak) == (2, 2)

    history = service.history(1)
    assert [h['goal_value'] for h in history] == [5, 8, 9]
    assert history[0]['date'] == '2024-01-01'
    assert history[2]['achieved'] is False


def test_historical_velocity(storage):
    repo = InMemoryGoalRepository()
    service = _service(storage, repo)
    assert service.historical_velocity(1, 'general') == 0

    repo.goals.append(GoalEntity(id=1, goal_value=7, context='general', achieved=True))
    repo.goals.append(GoalEntity(id=2, goal_value=4, context='general', achieved=False))
    assert service.historical_velocity(1, 'general') == 7

    repo.fail_reads = True
    assert service.historical_velocity(1, 'general') == 0


class ContextlessGoalRepository(InMemoryGoalRepository):
    """Schemat bez kolumny context: wczytany cel ma pusty kontekst."""

    def get_active(self, user_id, context):
        goal = super().get_active(user_id, context)
        if goal is not None:
            goal.context = ''
        return goal


def test_achieved_flag_keyed_by_requested_context(storage, local_store):
    repo = ContextlessGoalRepository()
    service = _service(storage, repo)
    service.set_goal(1, 'general', 5, progress=0)
    repo.fail_writes = True
    tasks = [make_task(1, 'L', completed=True)]

    assert service.evaluate(1, 'general', tasks).just_achieved is True
    assert '1_goalAchieved_general' in local_store.data
    assert '1_goalAchieved_' not in local_store.data
    assert service.evaluate(1, 'general', tasks).just_achieved is False
