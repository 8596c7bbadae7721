from django.contrib import admin
from .models import Report


@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    list_display = ('user', 'report_date', 'total_time', 'completed_tasks', 'points_earned', 'updated_at')
    list_filter = ('report_date',)
