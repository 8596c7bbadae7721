# apps/reports/services.py
from apps.core.adapters.cache_store import DjangoCacheLocalStore
from apps.core.config import get_backend_capabilities
from apps.core.storage import FallbackStorage
from apps.reports.adapters.orm_repositories import DjangoReportRepository
from apps.reports.domain.services import ReportService
from apps.tasks.adapters.orm_repositories import DjangoTaskRepository


def build_report_service() -> ReportService:
    capabilities = get_backend_capabilities()
    return ReportService(
        repository=DjangoReportRepository(),
        storage=FallbackStorage(DjangoCacheLocalStore(), remote_enabled=capabilities.reports_table),
    )


def refresh_user_report(user_id: int, today=None):
    """Przelicza dzisiejszy raport użytkownika z aktualnej migawki zadań."""
    tasks = DjangoTaskRepository().list_for_user(user_id)
    return build_report_service().refresh(user_id, tasks, today)
