from django.urls import path
from . import views

urlpatterns = [
    path('', views.sprint_list_view, name='sprint_list'),
    path('new/', views.sprint_create_view, name='sprint_create'),
    path('<int:pk>/edit/', views.sprint_update_view, name='sprint_update'),
    path('<int:pk>/delete/', views.sprint_delete_view, name='sprint_delete'),
    path('<int:pk>/select/', views.sprint_select_view, name='sprint_select'),
    path('<int:pk>/tasks/', views.sprint_tasks_view, name='sprint_tasks'),
    path('<int:pk>/tasks/add/', views.sprint_add_tasks_view, name='sprint_add_tasks'),
    path('<int:pk>/tasks/<int:task_id>/remove/', views.sprint_remove_task_view, name='sprint_remove_task'),
]
