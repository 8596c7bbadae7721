from django.contrib import admin
from .models import GoalPoints


@admin.register(GoalPoints)
class GoalPointsAdmin(admin.ModelAdmin):
    list_display = ('user', 'context', 'goal_value', 'is_active', 'achieved', 'achieved_date', 'created_at')
    list_filter = ('is_active', 'achieved', 'context')
