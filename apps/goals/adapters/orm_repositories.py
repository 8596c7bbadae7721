# apps/goals/adapters/orm_repositories.py
from datetime import datetime
from typing import List, Optional
from apps.core.adapters.orm import backend_call
from apps.core.errors import PolicyDeniedError
from apps.goals.domain.entities import GoalEntity, GENERAL_CONTEXT, SPRINT_CONTEXT_PREFIX, is_sprint_context
from apps.goals.ports.repositories import IGoalRepository
from apps.goals.models import GoalPoints as GoalModel


class DjangoGoalRepository(IGoalRepository):
    """
    supports_context=False to tryb zdegradowany (schemat bez kolumny context):
    zapytania pomijają filtr kontekstu, a zapisy nie ustawiają wartości kontekstu.
    """

    def __init__(self, supports_context: bool = True):
        self.supports_context = supports_context

    def to_entity(self, model: GoalModel) -> GoalEntity:
        return GoalEntity(
            id=model.id,
            goal_value=model.goal_value,
            context=model.context,
            suggested_value=model.suggested_value,
            points_at_start=model.points_at_start,
            points_at_end=model.points_at_end,
            is_active=model.is_active,
            achieved=model.achieved,
            achieved_date=model.achieved_date,
            end_date=model.end_date,
            created_at=model.created_at,
        )

    def _scoped(self, qs, context: str):
        if self.supports_context:
            return qs.filter(context=context)
        return qs

    def get_active(self, user_id: int, context: str) -> Optional[GoalEntity]:
        with backend_call("select active goal"):
            qs = self._scoped(GoalModel.objects.filter(user_id=user_id, is_active=True), context)
            obj = qs.order_by('-created_at', '-id').first()
        return self.to_entity(obj) if obj else None

    def deactivate_active(self, user_id: int, context: str, points_at_end: int, end_date: datetime) -> int:
        with backend_call("deactivate goals"):
            qs = self._scoped(GoalModel.objects.filter(user_id=user_id, is_active=True), context)
            return qs.update(is_active=False, points_at_end=points_at_end, end_date=end_date)

    def insert(self, goal: GoalEntity, user_id: int) -> GoalEntity:
        data = {
            'goal_value': goal.goal_value,
            'suggested_value': goal.suggested_value,
            'points_at_start': goal.points_at_start,
            'is_active': True,
            'achieved': False,
            'context': goal.context if self.supports_context else '',
        }
        with backend_call("insert goal"):
            return self.to_entity(GoalModel.objects.create(user_id=user_id, **data))

    def mark_achieved(self, user_id: int, goal_id: int, achieved_date: datetime, points_at_end: int) -> None:
        with backend_call("mark goal achieved"):
            updated = GoalModel.objects.filter(id=goal_id, user_id=user_id).update(
                achieved=True, achieved_date=achieved_date, points_at_end=points_at_end,
            )
        if not updated:
            raise PolicyDeniedError(f"Goal {goal_id} not found for user {user_id}")

    def recent_achieved(self, user_id: int, context: str, limit: int) -> List[GoalEntity]:
        with backend_call("select achieved goals"):
            qs = GoalModel.objects.filter(user_id=user_id, achieved=True)
            if self.supports_context:
                if is_sprint_context(context):
                    qs = qs.filter(context__startswith=SPRINT_CONTEXT_PREFIX)
                else:
                    qs = qs.filter(context=GENERAL_CONTEXT)
            return [self.to_entity(g) for g in qs.order_by('-created_at', '-id')[:limit]]

    def list_for_user(self, user_id: int) -> List[GoalEntity]:
        with backend_call("select goals"):
            return [self.to_entity(g) for g in GoalModel.objects.filter(user_id=user_id).order_by('created_at', 'id')]
