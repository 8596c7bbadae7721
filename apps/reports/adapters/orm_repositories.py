# apps/reports/adapters/orm_repositories.py
from datetime import date
from typing import List, Optional
from apps.core.adapters.orm import backend_call
from apps.reports.domain.aggregation import ReportSnapshot
from apps.reports.ports.repositories import IReportRepository
from apps.reports.models import Report as ReportModel

SNAPSHOT_FIELDS = (
    'total_time', 'completed_tasks', 'points_earned', 'task_size_breakdown',
    'time_distribution', 'completion_time_averages', 'monthly_points',
)


class DjangoReportRepository(IReportRepository):
    def to_entity(self, model: ReportModel) -> ReportSnapshot:
        return ReportSnapshot(
            report_date=model.report_date,
            **{name: getattr(model, name) for name in SNAPSHOT_FIELDS},
        )

    def upsert(self, user_id: int, snapshot: ReportSnapshot) -> ReportSnapshot:
        with backend_call("upsert report"):
            obj, _ = ReportModel.objects.update_or_create(
                user_id=user_id,
                report_date=snapshot.report_date,
                defaults={name: getattr(snapshot, name) for name in SNAPSHOT_FIELDS},
            )
        return self.to_entity(obj)

    def get(self, user_id: int, report_date: date) -> Optional[ReportSnapshot]:
        with backend_call("select report"):
            obj = ReportModel.objects.filter(user_id=user_id, report_date=report_date).first()
        return self.to_entity(obj) if obj else None

    def list_in_range(self, user_id: int, start: date, end: date) -> List[ReportSnapshot]:
        with backend_call("select reports"):
            qs = ReportModel.objects.filter(user_id=user_id, report_date__gte=start, report_date__lte=end)
            return [self.to_entity(r) for r in qs.order_by('report_date')]
