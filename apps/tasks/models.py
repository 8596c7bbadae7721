# apps/tasks/models.py
from django.db import models
from django.conf import settings


class Folder(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    # Unikalność nazwy per user to tylko konwencja (bez constraintu)
    name = models.CharField(max_length=200)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'folders'
        ordering = ['created_at', 'id']

    def __str__(self):
        return self.name


class Task(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    # Używamy TextChoices dla wygody w Adminie, ale mapujemy to na Enum domenowy
    class SizeChoices(models.TextChoices):
        XS = 'XS', 'XS'
        S = 'S', 'S'
        M = 'M', 'M'
        L = 'L', 'L'
        XL = 'XL', 'XL'
        XXL = 'XXL', 'XXL'

    class PriorityChoices(models.TextChoices):
        LOW = 'Low', 'Low'
        MEDIUM = 'Medium', 'Medium'
        HIGH = 'High', 'High'

    size = models.CharField(max_length=3, choices=SizeChoices.choices, default=SizeChoices.M)
    points = models.PositiveIntegerField(default=3)
    priority = models.CharField(max_length=10, choices=PriorityChoices.choices, blank=True)

    due_date = models.DateTimeField()

    # Słaba referencja do folderu (po nazwie) - usunięcie folderu nie rusza zadań
    folder = models.CharField(max_length=200, blank=True)

    is_completed = models.BooleanField(default=False)
    completed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'tasks'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return self.title


class TimeEntry(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='time_entries')

    date = models.DateField()
    duration = models.PositiveIntegerField(help_text="Czas trwania w sekundach")
    start_time = models.DateTimeField()

    class Meta:
        db_table = 'time_entries'
        ordering = ['start_time', 'id']
        verbose_name_plural = 'time entries'

    def __str__(self):
        return f"{self.task_id}: {self.duration}s @ {self.start_time}"
