"""공수 aggregation over already-fetched work records."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Mapping, Optional

from ..common.money import ZERO, labor_to_clock_hours, round_money
from ..core.constants import STANDARD_WORKDAY_HOURS
from ..work_records.model import WorkRecord
from ..workers.model import Site, Worker
from .calculator.base import PayCalculator
from .model import AggregationResult, CalendarDay, OutputSummary

UNKNOWN_SITE_NAME = "알 수 없는 현장"


def _in_range(record: WorkRecord, start: Optional[date], end: Optional[date]) -> bool:
    if start is not None and record.work_date < start:
        return False
    if end is not None and record.work_date > end:
        return False
    return True


class LaborHourAggregator:
    def __init__(self, *, threshold_hours: Decimal = STANDARD_WORKDAY_HOURS):
        self._threshold = threshold_hours

    def total_manpower(
        self,
        records: Iterable[WorkRecord],
        *,
        worker_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Decimal:
        """Sum of 공수 for the matching records (1.0 = 8 clock hours)."""
        total = ZERO
        for r in records:
            if worker_id is not None and r.worker_id != worker_id:
                continue
            if _in_range(r, start, end):
                total += r.labor_hours
        return total

    def manpower_by_worker(self, records: Iterable[WorkRecord]) -> dict[int, Decimal]:
        totals: dict[int, Decimal] = {}
        for r in records:
            totals[r.worker_id] = totals.get(r.worker_id, ZERO) + r.labor_hours
        return totals

    def aggregate_pay(
        self,
        records: Iterable[WorkRecord],
        calculator_for: Callable[[WorkRecord], PayCalculator],
    ) -> AggregationResult:
        """Split each record on its own, then sum. No overtime carry-over."""
        result = AggregationResult()
        for r in records:
            result = result.add(calculator_for(r).calculate_labor(r.labor_hours))
        return result

    def summarize_output(
        self,
        records: Iterable[WorkRecord],
        *,
        workers: Mapping[int, Worker],
        sites: Mapping[int, Site],
        search: Optional[str] = None,
    ) -> list[OutputSummary]:
        """Per (worker, site) totals; pay is 공수 x the worker's daily rate."""
        needle = search.strip().lower() if search else None
        summaries: dict[tuple[int, int], OutputSummary] = {}

        for r in records:
            worker = workers.get(r.worker_id)
            site = sites.get(r.site_id)
            if not worker or not site:
                continue
            if needle and needle not in worker.full_name.lower():
                continue

            key = (worker.worker_id, site.site_id)
            s = summaries.get(key)
            if s is None:
                s = OutputSummary(
                    worker_id=worker.worker_id,
                    worker_name=worker.full_name,
                    worker_role=worker.role.value,
                    site_id=site.site_id,
                    site_name=site.name,
                )
                summaries[key] = s

            clock_hours = labor_to_clock_hours(r.labor_hours)
            day_pay = round_money(r.labor_hours * worker.effective_daily_rate())

            if r.work_date not in s.work_dates:
                s.work_dates.append(r.work_date)
            s.total_labor_hours += r.labor_hours
            s.total_work_hours += clock_hours
            s.total_overtime_hours += max(ZERO, clock_hours - self._threshold)
            s.base_pay += day_pay
            s.total_pay += day_pay

        out = list(summaries.values())
        for s in out:
            s.work_dates.sort()
        out.sort(key=lambda s: (s.worker_name, s.site_name))
        return out

    def worker_calendar(self, records: Iterable[WorkRecord], *, sites: Mapping[int, Site]) -> list[CalendarDay]:
        days = [
            CalendarDay(
                work_date=r.work_date,
                labor_hours=r.labor_hours,
                site_name=sites[r.site_id].name if r.site_id in sites else UNKNOWN_SITE_NAME,
            )
            for r in records
        ]
        days.sort(key=lambda d: d.work_date)
        return days
