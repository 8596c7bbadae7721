import django_filters
from django import forms
from .models import Task


class TaskFilter(django_filters.FilterSet):
    title = django_filters.CharFilter(
        lookup_expr='icontains',
        label="Title contains",
        widget=forms.TextInput(attrs={'placeholder': 'Search...'})
    )
    size = django_filters.ChoiceFilter(choices=Task.SizeChoices.choices, label="Size")
    priority = django_filters.ChoiceFilter(choices=Task.PriorityChoices.choices, label="Priority")
    folder = django_filters.CharFilter(label="Folder")
    is_completed = django_filters.BooleanFilter(label="Completed")
    due_before = django_filters.DateTimeFilter(field_name='due_date', lookup_expr='lte', label="Due before")

    class Meta:
        model = Task
        fields = ['size', 'priority', 'folder', 'is_completed']
