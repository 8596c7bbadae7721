from django.contrib import admin
from .models import Sprint


@admin.register(Sprint)
class SprintAdmin(admin.ModelAdmin):
    list_display = ('name', 'user', 'start_date', 'end_date', 'created_at')
    search_fields = ('name',)
