# apps/tasks/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path('', views.task_list_view, name='task_list'),
    path('new/', views.task_create_view, name='task_create'),
    path('<int:pk>/edit/', views.task_update_view, name='task_update'),
    path('<int:pk>/complete/', views.task_complete_view, name='task_complete'),
    path('<int:pk>/delete/', views.task_delete_view, name='task_delete'),
    path('<int:pk>/time-entries/', views.time_entry_create_view, name='time_entry_create'),

    path('<int:pk>/timer/start/', views.timer_start_view, name='timer_start'),
    path('timer/pause/', views.timer_pause_view, name='timer_pause'),
    path('timer/stop/', views.timer_stop_view, name='timer_stop'),
    path('timer/', views.timer_status_view, name='timer_status'),

    path('folders/', views.folder_list_view, name='folder_list'),
    path('folders/<int:pk>/rename/', views.folder_rename_view, name='folder_rename'),
    path('folders/<int:pk>/delete/', views.folder_delete_view, name='folder_delete'),

    path('notifications/', views.notifications_view, name='notifications'),
    path('notifications/seen/', views.notifications_seen_view, name='notifications_seen'),
]
