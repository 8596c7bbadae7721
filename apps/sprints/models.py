# apps/sprints/models.py
from django.db import models
from django.conf import settings


class Sprint(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    name = models.CharField(max_length=200)
    start_date = models.DateField()
    end_date = models.DateField()

    # Lista ID zadań jako stringi (JSON) - bez FK, ID mogą "wisieć" po usunięciu zadania
    tasks = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'sprints'
        ordering = ['start_date', 'id']

    def __str__(self):
        return f"{self.name} ({self.start_date} - {self.end_date})"
