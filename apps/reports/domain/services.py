# apps/reports/domain/services.py
import logging
from dataclasses import asdict
from datetime import date, datetime, time
from typing import Iterable, List, Optional

from dateutil.rrule import rrule, DAILY
from django.utils import timezone

from apps.core.config import engine_setting
from apps.core.errors import PersistenceError
from apps.core.ports.local_store import local_key
from apps.core.storage import FallbackStorage, StorageResult
from apps.reports.domain import aggregation
from apps.reports.domain.aggregation import ReportSnapshot
from apps.reports.ports.repositories import IReportRepository
from apps.tasks.domain.entities import TaskEntity

logger = logging.getLogger(__name__)

REPORT_PURPOSE = 'report'


class ReportService:
    """
    Raporty dzienne: tabela `reports` jeśli dostępna, inaczej lokalne klucze
    {user}_report_{YYYY-MM-DD}. Raport to tylko cache - zawsze można go przeliczyć.
    """

    def __init__(self, repository: IReportRepository, storage: FallbackStorage, tz=None):
        self.repository = repository
        self.storage = storage
        self.tz = tz

    def _key(self, user_id: int, day: date) -> str:
        return local_key(user_id, REPORT_PURPOSE, day.isoformat())

    def refresh(self, user_id: int, tasks: Iterable[TaskEntity], today: Optional[date] = None) -> StorageResult:
        today = today or timezone.localdate()
        snapshot = aggregation.calculate_report_data(tasks, today, self.tz)
        result = self.storage.write(
            lambda: self.repository.upsert(user_id, snapshot),
            self._key(user_id, today),
            snapshot.as_dict(),
        )
        logger.info("Report %s for user %s refreshed (%s)", today, user_id, result.outcome.value)
        return result

    def get_report(self, user_id: int, day: date) -> Optional[ReportSnapshot]:
        result = self.storage.read(lambda: self.repository.get(user_id, day), self._key(user_id, day))
        if result.value is None:
            return None
        if result.is_remote:
            return result.value
        return ReportSnapshot.from_dict(result.value)

    def get_reports_in_range(self, user_id: int, start: date, end: date) -> List[ReportSnapshot]:
        if self.storage.remote_enabled:
            try:
                return self.repository.list_in_range(user_id, start, end)
            except PersistenceError as e:
                logger.warning("Remote report range failed (%s), reading local reports", e)

        reports = []
        for day in rrule(DAILY, dtstart=datetime.combine(start, time.min), until=datetime.combine(end, time.min)):
            data = self.storage.read_local(self._key(user_id, day.date()))
            if data:
                reports.append(ReportSnapshot.from_dict(data))
        return reports

    def insights(self, tasks: Iterable[TaskEntity], today: Optional[date] = None) -> dict:
        """Wszystkie agregaty ekranu statystyk w jednym słowniku (gotowe do JSON)."""
        tasks = list(tasks)
        today = today or timezone.localdate()
        hourly = aggregation.hourly_productivity(tasks, self.tz)

        return {
            'size_time_breakdown': [asdict(s) for s in aggregation.size_time_breakdown(tasks)],
            'hourly_productivity': [
                {'hour': b.hour, 'total_seconds': b.total_seconds,
                 'completed_seconds': b.completed_seconds, 'ratio': b.ratio}
                for b in hourly
            ],
            'most_productive_hour': aggregation.most_productive_hour(tasks, self.tz),
            'completion_time_averages': {
                size: asdict(stats) for size, stats in aggregation.completion_time_averages(tasks).items()
            },
            'predicted_completion_times': aggregation.predicted_completion_times(tasks),
            'most_efficient_size': aggregation.most_efficient_size(tasks),
            'workload_suggestion': aggregation.workload_suggestion(
                tasks, engine_setting('WORKLOAD_CADENCE_DAYS', 5),
            ),
            'monthly_points': aggregation.monthly_points(tasks, self.tz),
            'size_counts': aggregation.size_counts(tasks),
            'time_distribution_by_size': aggregation.time_distribution_by_size(tasks, self.tz),
            'work_habits': aggregation.work_habits(tasks, self.tz),
            'folder_progress': aggregation.folder_progress(tasks),
            'report': aggregation.calculate_report_data(tasks, today, self.tz).as_dict(),
        }
