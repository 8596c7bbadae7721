from django.contrib import admin
from .models import Task, TimeEntry, Folder


class TimeEntryInline(admin.TabularInline):
    model = TimeEntry
    extra = 0
    fields = ('date', 'start_time', 'duration')


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ('title', 'user', 'size', 'points', 'priority', 'folder', 'due_date', 'is_completed')
    list_filter = ('size', 'priority', 'is_completed')
    search_fields = ('title', 'folder')
    inlines = [TimeEntryInline]


admin.site.register(Folder)
