# apps/goals/domain/entities.py
from dataclasses import dataclass
from typing import Optional
from datetime import datetime

GENERAL_CONTEXT = 'general'
SPRINT_CONTEXT_PREFIX = 'sprint_'


def sprint_context(sprint_id) -> str:
    return f"{SPRINT_CONTEXT_PREFIX}{sprint_id}"


def is_sprint_context(context: str) -> bool:
    return bool(context) and context.startswith(SPRINT_CONTEXT_PREFIX)


def sprint_id_from_context(context: str) -> Optional[str]:
    if not is_sprint_context(context):
        return None
    return context[len(SPRINT_CONTEXT_PREFIX):]


@dataclass
class GoalEntity:
    id: Optional[int]
    goal_value: int
    context: str = GENERAL_CONTEXT
    suggested_value: int = 0
    points_at_start: int = 0
    points_at_end: Optional[int] = None
    is_active: bool = True
    achieved: bool = False
    achieved_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
