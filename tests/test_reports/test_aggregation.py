"""Tests for the pure report aggregates."""

from datetime import date, datetime

import pytest

from apps.reports.domain import aggregation
from fakes import UTC, make_task


def test_aggregates_are_deterministic(at):
    tasks = [
        make_task(1, 'L', completed=True, entries=[(at(9), 3600)], folder='Work'),
        make_task(2, 'S', entries=[(at(14), 1800)], folder='Home'),
    ]
    first = (aggregation.hourly_productivity(tasks), aggregation.folder_progress(tasks),
             aggregation.calculate_report_data(tasks, date(2024, 1, 5), UTC).as_dict())
    second = (aggregation.hourly_productivity(tasks), aggregation.folder_progress(tasks),
              aggregation.calculate_report_data(tasks, date(2024, 1, 5), UTC).as_dict())
    assert first == second


def test_size_time_breakdown_percentages(at):
    tasks = [
        make_task(1, 'M', entries=[(at(9), 3600)]),
        make_task(2, 'L', entries=[(at(10), 1200)]),
    ]
    shares = {s.size: s for s in aggregation.size_time_breakdown(tasks)}
    assert list(shares) == ['XS', 'S', 'M', 'L', 'XL', 'XXL']
    assert shares['M'].hours == 1.0
    assert shares['M'].percentage == 75.0
    assert shares['XS'].percentage == 0.0


def test_size_time_breakdown_without_time():
    assert all(s.percentage == 0.0 for s in aggregation.size_time_breakdown([make_task(1)]))


def test_hourly_productivity_ratio(at):
    tasks = [
        make_task(1, completed=True, entries=[(at(9), 3600), (at(14), 1800)]),
        make_task(2, entries=[(at(9, 30), 3600)]),
    ]
    hours = aggregation.hourly_productivity(tasks, UTC)

    assert len(hours) == 24
    assert hours[9].ratio == 0.5
    assert hours[14].ratio == 1.0
    # Godzina bez pracy: stosunek nieokreślony, a nie 0
    assert hours[3].ratio is None
    assert aggregation.most_productive_hour(tasks, UTC) == 14


def test_most_productive_hour_without_entries():
    assert aggregation.most_productive_hour([make_task(1)]) is None


def test_time_distribution_by_size(at):
    tasks = [make_task(1, 'XL', entries=[(at(8), 5400)])]
    rows = aggregation.time_distribution_by_size(tasks, UTC)
    assert rows[8]['XL'] == 1.5
    assert rows[8]['XS'] == 0.0
    assert rows[9]['XL'] == 0.0


def test_work_habits_bands(at):
    tasks = [make_task(1, entries=[(at(8), 3600), (at(13), 3600), (at(18), 1800), (at(23), 1800), (at(4), 3600)])]
    habits = aggregation.work_habits(tasks, UTC)
    assert habits == {'morning': 1.0, 'afternoon': 1.0, 'evening': 0.5, 'night': 1.5}


def test_daily_series_fills_empty_days(at):
    tasks = [make_task(1, entries=[(at(10, day=2), 7200)])]
    series = aggregation.total_time_series(tasks, date(2024, 1, 1), date(2024, 1, 3), 'day')
    assert [(p['period'], p['hours']) for p in series] == [
        ('2024-01-01', 0.0), ('2024-01-02', 2.0), ('2024-01-03', 0.0),
    ]


def test_weekly_series_starts_on_monday(at):
    tasks = [make_task(1, entries=[(at(10, day=9), 3600), (at(10, day=3), 1800)])]
    series = aggregation.total_time_series(tasks, date(2024, 1, 3), date(2024, 1, 10), 'week')
    assert [p['start'] for p in series] == ['2024-01-01', '2024-01-08']
    assert [p['period'] for p in series] == ['2024-W01', '2024-W02']
    assert [p['hours'] for p in series] == [0.5, 1.0]


def test_monthly_series(at):
    tasks = [make_task(1, entries=[(datetime(2024, 2, 20, 9, tzinfo=UTC), 3600)])]
    series = aggregation.total_time_series(tasks, date(2024, 1, 15), date(2024, 3, 2), 'month')
    assert [(p['period'], p['hours']) for p in series] == [('2024-01', 0.0), ('2024-02', 1.0), ('2024-03', 0.0)]


def test_series_rejects_unknown_bucket():
    with pytest.raises(ValueError):
        aggregation.total_time_series([], date(2024, 1, 1), date(2024, 1, 2), 'quarter')


def test_completion_averages_cover_every_size(at):
    tasks = [
        make_task(1, 'M', completed=True, entries=[(at(9), 3600)]),
        make_task(2, 'M', completed=True, entries=[(at(11), 7200)]),
        make_task(3, 'M', entries=[(at(14), 36000)]),
    ]
    stats = aggregation.completion_time_averages(tasks)

    assert set(stats) == {'XS', 'S', 'M', 'L', 'XL', 'XXL'}
    m = stats['M']
    assert (m.average, m.minimum, m.maximum, m.count) == (1.5, 1.0, 2.0, 2)
    assert stats['XS'] == aggregation.CompletionStats()


def test_predictions_and_most_efficient_size(at):
    tasks = [
        make_task(1, 'M', completed=True, entries=[(at(9), 7200)]),
        make_task(2, 'S', completed=True, entries=[(at(12), 1800)]),
    ]
    predicted = {p['size']: p for p in aggregation.predicted_completion_times(tasks)}
    assert predicted['M']['current'] == 2.0
    assert predicted['M']['predicted'] == pytest.approx(1.8)
    assert predicted['XL']['predicted'] == 0.0
    assert aggregation.most_efficient_size(tasks) == 'S'
    assert aggregation.most_efficient_size([]) is None


def test_workload_suggestion_rounds_up():
    tasks = [make_task(1, 'XXL'), make_task(2, 'XL'), make_task(3, 'S'), make_task(4, 'L', completed=True)]
    # 23 pozostałych punktów / 5 dni
    assert aggregation.workload_suggestion(tasks) == 5
    assert aggregation.workload_suggestion([]) == 0


def test_monthly_points_use_creation_month():
    task = make_task(1, 'L', completed=True,
                     created_at=datetime(2023, 12, 28, tzinfo=UTC),
                     completed_at=datetime(2024, 1, 3, tzinfo=UTC))
    assert aggregation.monthly_points([task, make_task(2, 'XL')], UTC) == {'2023-12': 5}


def test_size_counts():
    counts = aggregation.size_counts([make_task(1, 'S'), make_task(2, 'S'), make_task(3, 'XXL')])
    assert counts == {'XS': 0, 'S': 2, 'M': 0, 'L': 0, 'XL': 0, 'XXL': 1}


def test_folder_progress_tie_goes_to_smaller_size():
    tasks = [
        make_task(1, 'M', completed=True, folder='Work'),
        make_task(2, 'S', folder='Work'),
        make_task(3, 'L', completed=True, folder='Home'),
        make_task(4, 'XL'),
    ]
    progress = aggregation.folder_progress(tasks)

    assert set(progress) == {'Work', 'Home'}
    assert progress['Work'] == {'completed': 1, 'total': 2, 'percentage': 50.0, 'dominant_size': 'S'}
    assert progress['Home']['percentage'] == 100.0


def test_report_data_ignores_later_activity(at):
    tasks = [
        make_task(1, 'L', completed=True, entries=[(at(9), 3600)],
                  completed_at=at(12), created_at=datetime(2023, 11, 2, tzinfo=UTC)),
        make_task(2, 'XL', completed=True, entries=[(at(9, day=6), 3600)], completed_at=at(10, day=6)),
        make_task(3, 'S', entries=[(at(10, day=4), 1800)]),
    ]
    snapshot = aggregation.calculate_report_data(tasks, date(2024, 1, 5), UTC)

    assert snapshot.total_time == 5400
    assert snapshot.completed_tasks == 1
    assert snapshot.points_earned == 5
    assert snapshot.task_size_breakdown == {'L': 1, 'S': 1}
    assert snapshot.time_distribution == {'9': 3600, '10': 1800}
    assert snapshot.completion_time_averages == {'L': 3600.0}
    # Tu liczy się miesiąc ukończenia
    assert snapshot.monthly_points == {'2024-01': 5}


def test_snapshot_dict_round_trip():
    snapshot = aggregation.ReportSnapshot(report_date=date(2024, 1, 5), total_time=60, points_earned=3)
    data = snapshot.as_dict()
    assert data['report_date'] == '2024-01-05'
    assert aggregation.ReportSnapshot.from_dict(dict(data, unknown='x')) == snapshot
