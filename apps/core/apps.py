from django.apps import AppConfig

class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'  # Ważne: pełna ścieżka
    label = 'core'      # Ważne: krótka nazwa

    def ready(self):
        # Możliwości backendu rozwiązujemy raz, przy starcie procesu
        from apps.core.config import get_backend_capabilities
        get_backend_capabilities()
