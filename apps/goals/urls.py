from django.urls import path
from . import views

urlpatterns = [
    path('', views.goal_status_view, name='goal_status'),
    path('set/', views.goal_set_view, name='goal_set'),
    path('suggest/', views.goal_suggest_view, name='goal_suggest'),
    path('summary/', views.goal_summary_view, name='goal_summary'),
    path('history/', views.goal_history_view, name='goal_history'),
]
