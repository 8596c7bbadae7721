# apps/reports/domain/aggregation.py
"""
Czyste agregaty liczone z migawki zadań (TaskEntity + TimeEntryEntity).

Żadna funkcja nie wykonuje I/O; ten sam zestaw zadań daje zawsze ten sam wynik.
Godziny wpisów liczone są w strefie `tz` (domyślnie bieżąca strefa Django).
"""
import math
from collections import Counter
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Optional

from dateutil.relativedelta import relativedelta, MO
from dateutil.rrule import rrule, DAILY, WEEKLY, MONTHLY
from django.utils import timezone

from apps.tasks.domain.entities import TaskEntity, TaskSize

SECONDS_PER_HOUR = 3600

# Pasma godzin dla nawyków pracy: [od, do)
WORK_HABIT_BANDS = (
    ('morning', 5, 12),
    ('afternoon', 12, 17),
    ('evening', 17, 22),
)


def _local(value: datetime, tz=None) -> datetime:
    if timezone.is_aware(value):
        return timezone.localtime(value, tz)
    return value


def _entry_hour(entry, tz=None) -> int:
    return _local(entry.start_time, tz).hour


def _hours(seconds: float) -> float:
    return seconds / SECONDS_PER_HOUR


# --- Rozkład czasu ---

@dataclass
class SizeTimeShare:
    size: str
    hours: float
    percentage: float


def size_time_breakdown(tasks: Iterable[TaskEntity]) -> List[SizeTimeShare]:
    seconds = {size: 0 for size in TaskSize}
    for task in tasks:
        seconds[TaskSize(task.size)] += task.total_seconds

    total = sum(seconds.values())
    return [
        SizeTimeShare(
            size=size.value,
            hours=_hours(value),
            percentage=(value / total * 100) if total else 0.0,
        )
        for size, value in seconds.items()
    ]


@dataclass
class HourProductivity:
    hour: int
    total_seconds: int = 0
    completed_seconds: int = 0

    @property
    def ratio(self) -> Optional[float]:
        # 0/0 jest nieokreślone
        if not self.total_seconds:
            return None
        return self.completed_seconds / self.total_seconds


def hourly_productivity(tasks: Iterable[TaskEntity], tz=None) -> List[HourProductivity]:
    buckets = [HourProductivity(hour=h) for h in range(24)]
    for task in tasks:
        for entry in task.time_entries:
            bucket = buckets[_entry_hour(entry, tz)]
            bucket.total_seconds += entry.duration
            if task.is_completed:
                bucket.completed_seconds += entry.duration
    return buckets


def most_productive_hour(tasks: Iterable[TaskEntity], tz=None) -> Optional[int]:
    best = None
    for bucket in hourly_productivity(tasks, tz):
        if bucket.ratio is None:
            continue
        if best is None or bucket.ratio > best.ratio:
            best = bucket
    return best.hour if best else None


def time_distribution_by_size(tasks: Iterable[TaskEntity], tz=None) -> List[dict]:
    """Wiersz na godzinę 0-23, kolumna (w godzinach) na każdy rozmiar."""
    rows = [dict({'hour': h}, **{size.value: 0.0 for size in TaskSize}) for h in range(24)]
    for task in tasks:
        size = TaskSize(task.size).value
        for entry in task.time_entries:
            rows[_entry_hour(entry, tz)][size] += _hours(entry.duration)
    return rows


def work_habits(tasks: Iterable[TaskEntity], tz=None) -> Dict[str, float]:
    habits = {name: 0.0 for name, _, _ in WORK_HABIT_BANDS}
    habits['night'] = 0.0
    for task in tasks:
        for entry in task.time_entries:
            hour = _entry_hour(entry, tz)
            band = next((name for name, lo, hi in WORK_HABIT_BANDS if lo <= hour < hi), 'night')
            habits[band] += _hours(entry.duration)
    return habits


def total_time_series(tasks: Iterable[TaskEntity], start: date, end: date,
                      bucket: str = 'day') -> List[dict]:
    """
    Suma godzin w okresach dzień / tydzień (od poniedziałku) / miesiąc.
    Okresy bez wpisów mają 0.
    """
    if bucket == 'day':
        freq, label = DAILY, lambda d: d.isoformat()
        period_of = lambda d: d
    elif bucket == 'week':
        freq, label = WEEKLY, lambda d: '%d-W%02d' % d.isocalendar()[:2]
        period_of = lambda d: d + relativedelta(weekday=MO(-1))
    elif bucket == 'month':
        freq, label = MONTHLY, lambda d: d.strftime('%Y-%m')
        period_of = lambda d: d.replace(day=1)
    else:
        raise ValueError(f"Unknown time bucket: {bucket}")

    if end < start:
        return []

    periods = rrule(freq, dtstart=datetime.combine(period_of(start), time.min),
                    until=datetime.combine(end, time.min))
    totals = {p.date(): 0 for p in periods}

    for task in tasks:
        for entry in task.time_entries:
            key = period_of(entry.date)
            if key in totals:
                totals[key] += entry.duration

    return [
        {'period': label(day), 'start': day.isoformat(), 'hours': _hours(seconds)}
        for day, seconds in totals.items()
    ]


# --- Czas ukończenia ---

@dataclass
class CompletionStats:
    average: float = 0.0
    minimum: float = 0.0
    maximum: float = 0.0
    count: int = 0


def _completion_samples(tasks: Iterable[TaskEntity]) -> Dict[TaskSize, List[float]]:
    samples = {size: [] for size in TaskSize}
    for task in tasks:
        if task.is_completed:
            samples[TaskSize(task.size)].append(task.total_hours)
    return samples


def completion_time_averages(tasks: Iterable[TaskEntity]) -> Dict[str, CompletionStats]:
    stats = {}
    for size, hours in _completion_samples(tasks).items():
        if hours:
            stats[size.value] = CompletionStats(
                average=sum(hours) / len(hours),
                minimum=min(hours),
                maximum=max(hours),
                count=len(hours),
            )
        else:
            stats[size.value] = CompletionStats()
    return stats


def predicted_completion_times(tasks: Iterable[TaskEntity], improvement: float = 0.9) -> List[dict]:
    """Prosta ekstrapolacja: przewidywany czas = obecna średnia * improvement."""
    return [
        {'size': size, 'current': stats.average, 'predicted': stats.average * improvement}
        for size, stats in completion_time_averages(tasks).items()
    ]


def most_efficient_size(tasks: Iterable[TaskEntity]) -> Optional[str]:
    """Rozmiar z najniższą średnią czasu ukończenia (tylko rozmiary z próbkami)."""
    candidates = [(size, stats.average) for size, stats in completion_time_averages(tasks).items() if stats.count]
    if not candidates:
        return None
    return min(candidates, key=lambda item: item[1])[0]


# --- Punkty i obciążenie ---

def workload_suggestion(tasks: Iterable[TaskEntity], cadence_days: int = 5) -> int:
    remaining = sum(task.points or 0 for task in tasks if not task.is_completed)
    return math.ceil(remaining / cadence_days)


def monthly_points(tasks: Iterable[TaskEntity], tz=None) -> Dict[str, int]:
    """Punkty ukończonych zadań wg miesiąca UTWORZENIA zadania (YYYY-MM)."""
    months = Counter()
    for task in tasks:
        if task.is_completed and task.created_at is not None:
            months[_local(task.created_at, tz).strftime('%Y-%m')] += task.points or 0
    return dict(sorted(months.items()))


def size_counts(tasks: Iterable[TaskEntity]) -> Dict[str, int]:
    counts = {size.value: 0 for size in TaskSize}
    for task in tasks:
        counts[TaskSize(task.size).value] += 1
    return counts


def folder_progress(tasks: Iterable[TaskEntity]) -> Dict[str, dict]:
    grouped: Dict[str, List[TaskEntity]] = {}
    for task in tasks:
        if task.folder:
            grouped.setdefault(task.folder, []).append(task)

    progress = {}
    for folder, folder_tasks in grouped.items():
        completed = sum(1 for t in folder_tasks if t.is_completed)
        sizes = Counter(TaskSize(t.size) for t in folder_tasks)
        # Remis -> mniejszy rozmiar
        dominant = max(TaskSize, key=lambda s: sizes.get(s, 0))
        progress[folder] = {
            'completed': completed,
            'total': len(folder_tasks),
            'percentage': completed / len(folder_tasks) * 100,
            'dominant_size': dominant.value,
        }
    return progress


# --- Raport dzienny ---

@dataclass
class ReportSnapshot:
    report_date: date
    total_time: int = 0
    completed_tasks: int = 0
    points_earned: int = 0
    task_size_breakdown: Dict[str, int] = field(default_factory=dict)
    time_distribution: Dict[str, int] = field(default_factory=dict)
    completion_time_averages: Dict[str, float] = field(default_factory=dict)
    monthly_points: Dict[str, int] = field(default_factory=dict)

    def as_dict(self) -> dict:
        data = asdict(self)
        data['report_date'] = self.report_date.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'ReportSnapshot':
        values = dict(data)
        report_date = values.get('report_date')
        if isinstance(report_date, str):
            values['report_date'] = date.fromisoformat(report_date[:10])
        return cls(**{k: v for k, v in values.items() if k in cls.__dataclass_fields__})


def calculate_report_data(tasks: Iterable[TaskEntity], report_date: date, tz=None) -> ReportSnapshot:
    """
    Migawka dnia: tylko dane do końca `report_date` (ukończenia, wpisy czasu).
    Punkty miesięczne liczone są tu wg miesiąca UKOŃCZENIA.
    """
    tz = tz or timezone.get_current_timezone()
    cutoff = timezone.make_aware(datetime.combine(report_date + timedelta(days=1), time.min), tz)

    def done_by_cutoff(task: TaskEntity) -> bool:
        return task.is_completed and task.completed_at is not None and task.completed_at < cutoff

    snapshot = ReportSnapshot(report_date=report_date)
    durations: Dict[str, List[int]] = {}
    distribution = Counter()
    sizes = Counter()
    months = Counter()

    for task in tasks:
        entries = [e for e in task.time_entries if e.start_time < cutoff]
        for entry in entries:
            snapshot.total_time += entry.duration
            distribution[str(_entry_hour(entry, tz))] += entry.duration

        if task.completed_at is None or task.completed_at < cutoff:
            sizes[TaskSize(task.size).value] += 1

        if done_by_cutoff(task):
            snapshot.completed_tasks += 1
            snapshot.points_earned += task.points or 0
            durations.setdefault(TaskSize(task.size).value, []).append(sum(e.duration for e in entries))
            months[_local(task.completed_at, tz).strftime('%Y-%m')] += task.points or 0

    snapshot.task_size_breakdown = dict(sizes)
    snapshot.time_distribution = dict(sorted(distribution.items(), key=lambda item: int(item[0])))
    snapshot.completion_time_averages = {
        size: sum(values) / len(values) for size, values in durations.items()
    }
    snapshot.monthly_points = dict(sorted(months.items()))
    return snapshot
