# apps/tasks/domain/services/time_entries.py
from datetime import date, datetime, time, timedelta
from typing import Tuple, Union

from dateutil import parser
from django.utils import timezone

ClockValue = Union[str, time]


def parse_clock(day: date, value: ClockValue, tz=None) -> datetime:
    """Zamienia "HH:MM" (lub obiekt time) na świadomy strefy datetime w danym dniu."""
    if isinstance(value, time):
        naive = datetime.combine(day, value)
    else:
        naive = parser.parse(value, default=datetime.combine(day, time.min))
    return timezone.make_aware(naive.replace(tzinfo=None), tz or timezone.get_current_timezone())


def calculate_range_duration(day: date, start: ClockValue, end: ClockValue, tz=None) -> Tuple[datetime, int]:
    """
    Liczy czas trwania z zakresu start-koniec.
    Koniec wcześniejszy niż start oznacza przejście przez północ (koniec następnego dnia).
    Zwraca (start, sekundy).
    """
    start_dt = parse_clock(day, start, tz)
    end_dt = parse_clock(day, end, tz)

    if end_dt < start_dt:
        end_dt += timedelta(days=1)

    return start_dt, int((end_dt - start_dt).total_seconds())


def duration_from_parts(hours: int, minutes: int) -> int:
    if hours < 0 or minutes < 0:
        raise ValueError("Hours and minutes cannot be negative")
    return (hours * 60 + minutes) * 60


def day_start(day: date, tz=None) -> datetime:
    return timezone.make_aware(datetime.combine(day, time.min), tz or timezone.get_current_timezone())
