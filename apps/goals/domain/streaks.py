# apps/goals/domain/streaks.py
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Set

from django.utils import timezone


@dataclass(frozen=True)
class StreakSummary:
    current: int = 0
    longest: int = 0


def achievement_days(dates: Iterable, tz=None) -> Set[date]:
    """Grupuje daty osiągnięć po dniu kalendarzowym (bez godziny i kontekstu)."""
    days = set()
    for value in dates:
        if value is None:
            continue
        if isinstance(value, datetime):
            if timezone.is_aware(value):
                value = timezone.localtime(value, tz)
            value = value.date()
        days.add(value)
    return days


def calculate_streaks(dates: Iterable, today: date, tz=None) -> StreakSummary:
    days = achievement_days(dates, tz)
    if not days:
        return StreakSummary()

    # Bieżąca seria: musi zaczynać się dziś albo wczoraj
    current = 0
    yesterday = today - timedelta(days=1)
    if today in days or yesterday in days:
        check = today if today in days else yesterday
        while check in days:
            current += 1
            check -= timedelta(days=1)

    # Najdłuższa seria: maksymalne ciągi kolejnych dni
    ordered = sorted(days)
    longest = run = 1
    for prev, curr in zip(ordered, ordered[1:]):
        if (curr - prev).days == 1:
            run += 1
        else:
            run = 1
        longest = max(longest, run)

    return StreakSummary(current=current, longest=longest)
