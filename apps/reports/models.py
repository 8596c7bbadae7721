from django.db import models
from django.conf import settings


class Report(models.Model):
    """Zmaterializowana migawka dnia - cache, zawsze do przeliczenia z zadań."""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    report_date = models.DateField()

    total_time = models.PositiveIntegerField(default=0)  # sekundy
    completed_tasks = models.PositiveIntegerField(default=0)
    points_earned = models.PositiveIntegerField(default=0)

    task_size_breakdown = models.JSONField(default=dict, blank=True)
    time_distribution = models.JSONField(default=dict, blank=True)
    completion_time_averages = models.JSONField(default=dict, blank=True)
    monthly_points = models.JSONField(default=dict, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'reports'
        ordering = ['report_date']
        constraints = [
            models.UniqueConstraint(fields=['user', 'report_date'], name='unique_user_report_date'),
        ]

    def __str__(self):
        return f"Report {self.report_date} ({self.user})"
