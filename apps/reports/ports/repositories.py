# apps/reports/ports/repositories.py
from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from apps.reports.domain.aggregation import ReportSnapshot


class IReportRepository(ABC):
    @abstractmethod
    def upsert(self, user_id: int, snapshot: ReportSnapshot) -> ReportSnapshot:
        """Wstaw albo nadpisz raport (unikalny na user + report_date)."""
        pass

    @abstractmethod
    def get(self, user_id: int, report_date: date) -> Optional[ReportSnapshot]:
        pass

    @abstractmethod
    def list_in_range(self, user_id: int, start: date, end: date) -> List[ReportSnapshot]:
        pass
