# tasktrack/urls.py
from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    path('admin/', admin.site.urls),
    # Tutaj podpinamy nasze aplikacje:
    path('tasks/', include('apps.tasks.urls')),
    path('sprints/', include('apps.sprints.urls')),
    path('goals/', include('apps.goals.urls')),
    path('reports/', include('apps.reports.urls')),
]
