# apps/goals/models.py
from django.db import models
from django.conf import settings


class GoalPoints(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)

    # "general" albo "sprint_<id>"; pusty w trybie bez kolumny kontekstu
    context = models.CharField(max_length=100, blank=True, default='general')

    goal_value = models.PositiveIntegerField()
    suggested_value = models.IntegerField(default=0)

    # Migawki postępu
    points_at_start = models.IntegerField(default=0)
    points_at_end = models.IntegerField(null=True, blank=True)

    is_active = models.BooleanField(default=True)
    achieved = models.BooleanField(default=False)
    achieved_date = models.DateTimeField(null=True, blank=True)
    end_date = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'goal_points'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['user', 'context', 'is_active'], name='goal_user_ctx_active_idx'),
        ]

    def __str__(self):
        return f"{self.context or 'goal'}: {self.goal_value} pts"
