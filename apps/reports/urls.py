from django.urls import path
from . import views

urlpatterns = [
    path('stats/', views.stats_api_view, name='reports_stats'),
    path('total-time/', views.total_time_view, name='reports_total_time'),
    path('day/', views.report_day_view, name='report_day'),
    path('range/', views.report_range_view, name='report_range'),
    path('refresh/', views.report_refresh_view, name='report_refresh'),
]
