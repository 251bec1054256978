from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import month_bounds, require_date_range
from ..common.logging_config import get_logger
from ..common.money import ZERO, labor_to_clock_hours, round_hours, round_money
from ..core.enums import SalaryStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..work_records.model import WorkRecord
from ..work_records.repository import WorkRecordRepository
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .aggregator import LaborHourAggregator
from .calculator.base import PayCalculator
from .factory import PayCalculatorFactory
from .model import (
    AggregationResult,
    CalendarDay,
    ManpowerTotal,
    OutputSummary,
    SalaryRecord,
    SalaryRule,
    SalaryStats,
)
from .repository import SalaryRecordRepository, SalaryRuleRepository

logger = get_logger("payroll")


class PayrollService:
    """급여 계산/조회 서비스.

    Overtime is split per work record, never pooled over the pay period.
    """

    def __init__(
        self,
        work_records: WorkRecordRepository,
        workers: WorkerRepository,
        rules: SalaryRuleRepository,
        salary_records: SalaryRecordRepository,
        *,
        factory: Optional[PayCalculatorFactory] = None,
        aggregator: Optional[LaborHourAggregator] = None,
    ):
        self._work_records = work_records
        self._workers = workers
        self._rules = rules
        self._salary_records = salary_records
        self._factory = factory or PayCalculatorFactory()
        self._aggregator = aggregator or LaborHourAggregator(threshold_hours=self._factory.threshold_hours)

    def _worker_map(self) -> dict[int, Worker]:
        return {w.worker_id: w for w in self._workers.list_active()}

    def _calculator_resolver(self, workers: dict[int, Worker], rules: Sequence[SalaryRule]):
        def resolve(record: WorkRecord) -> PayCalculator:
            return self._factory.for_worker(worker=workers[record.worker_id], site_id=record.site_id, rules=rules)

        return resolve

    def calculate_salaries(
        self,
        *,
        start: date,
        end: date,
        site_id: Optional[int] = None,
        worker_id: Optional[int] = None,
    ) -> int:
        """Recompute ``calculated`` salary records for the scope; returns the count written."""
        require_date_range(start, end)

        records = self._work_records.list_range(start_date=start, end_date=end, site_id=site_id, worker_id=worker_id)
        workers = self._worker_map()
        rules = [r for r in self._rules.list_all() if r.is_active]
        resolve = self._calculator_resolver(workers, rules)

        # Approved or paid days keep their record; only unsettled days are recomputed.
        settled = {
            (s.worker_id, s.site_id, s.work_date)
            for s in self._salary_records.list_range(
                start_date=start, end_date=end, site_id=site_id, worker_id=worker_id
            )
            if s.status != SalaryStatus.CALCULATED
        }

        calculated: list[SalaryRecord] = []
        skipped = 0
        for r in records:
            if r.labor_hours <= 0:
                continue
            if (r.worker_id, r.site_id, r.work_date) in settled:
                continue
            if r.worker_id not in workers:
                skipped += 1
                continue

            b = resolve(r).calculate_labor(r.labor_hours)
            calculated.append(
                SalaryRecord(
                    worker_id=r.worker_id,
                    site_id=r.site_id,
                    work_date=r.work_date,
                    labor_hours=r.labor_hours,
                    regular_hours=round_hours(b.regular_hours),
                    overtime_hours=round_hours(b.overtime_hours),
                    base_pay=b.regular_pay,
                    overtime_pay=b.overtime_pay,
                    total_pay=b.total_cost,
                    notes=f"공수: {r.labor_hours.normalize():f}",
                )
            )

        if skipped:
            logger.warning("work records skipped: worker not found or inactive", extra={"skipped": skipped})

        written = self._salary_records.replace_calculated(
            start_date=start,
            end_date=end,
            site_id=site_id,
            worker_id=worker_id,
            records=calculated,
        )
        logger.info(
            "salaries calculated",
            extra={"start": start, "end": end, "site_id": site_id, "worker_id": worker_id, "written": written},
        )
        return written

    def list_salary_records(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        site_id: Optional[int] = None,
        worker_id: Optional[int] = None,
        status: Optional[SalaryStatus] = None,
    ) -> Sequence[SalaryRecord]:
        if start and end:
            require_date_range(start, end)
        return self._salary_records.list_range(
            start_date=start, end_date=end, site_id=site_id, worker_id=worker_id, status=status
        )

    def _transition(self, record_ids: Sequence[int], from_status: SalaryStatus, to_status: SalaryStatus) -> int:
        if not record_ids:
            raise ValidationError("처리할 급여 레코드를 선택하세요")
        moved = self._salary_records.transition_status(
            record_ids=[int(i) for i in record_ids],
            from_status=from_status,
            to_status=to_status,
        )
        logger.info(
            "salary records moved",
            extra={"from_status": from_status.value, "to_status": to_status.value, "requested": len(record_ids), "moved": moved},
        )
        return moved

    def approve(self, record_ids: Sequence[int]) -> int:
        return self._transition(record_ids, SalaryStatus.CALCULATED, SalaryStatus.APPROVED)

    def mark_paid(self, record_ids: Sequence[int]) -> int:
        return self._transition(record_ids, SalaryStatus.APPROVED, SalaryStatus.PAID)

    def get_stats(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        site_id: Optional[int] = None,
        worker_id: Optional[int] = None,
    ) -> SalaryStats:
        records = self.list_salary_records(start=start, end=end, site_id=site_id, worker_id=worker_id)

        total_payroll = sum((r.total_pay for r in records), ZERO)
        regular = sum((r.regular_hours for r in records), ZERO)
        overtime = sum((r.overtime_hours for r in records), ZERO)
        all_hours = regular + overtime

        return SalaryStats(
            total_workers=len({r.worker_id for r in records}),
            pending_calculations=sum(1 for r in records if r.status == SalaryStatus.CALCULATED),
            approved_payments=sum(1 for r in records if r.status == SalaryStatus.APPROVED),
            total_payroll=total_payroll,
            average_daily_pay=round_money(total_payroll / len(records)) if records else ZERO,
            overtime_percentage=round_hours(overtime / all_hours * 100) if all_hours > 0 else ZERO,
        )

    def get_output_summary(
        self,
        *,
        start: date,
        end: date,
        site_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> list[OutputSummary]:
        require_date_range(start, end)
        records = self._work_records.list_range(start_date=start, end_date=end, site_id=site_id)
        sites = {s.site_id: s for s in self._workers.list_sites()}
        return self._aggregator.summarize_output(records, workers=self._worker_map(), sites=sites, search=search)

    def get_worker_calendar(self, *, worker_id: int, year: int, month: int) -> list[CalendarDay]:
        start, end = month_bounds(year, month)
        records = self._work_records.list_range(start_date=start, end_date=end, worker_id=worker_id)
        sites = {s.site_id: s for s in self._workers.list_sites()}
        return self._aggregator.worker_calendar(records, sites=sites)

    def get_worker_manpower(self, *, worker_id: int, start: date, end: date) -> ManpowerTotal:
        require_date_range(start, end)
        records = self._work_records.list_range(start_date=start, end_date=end, worker_id=worker_id)
        labor = self._aggregator.total_manpower(records, worker_id=worker_id, start=start, end=end)
        return ManpowerTotal(
            worker_id=worker_id,
            start=start,
            end=end,
            labor_hours=labor,
            clock_hours=labor_to_clock_hours(labor),
            record_count=len(records),
        )

    def aggregate_worker_pay(self, *, worker_id: int, start: date, end: date) -> AggregationResult:
        """Regular/overtime hours and cost for a worker, split record by record."""
        require_date_range(start, end)
        worker = self._workers.get_by_id(worker_id)
        if not worker:
            raise NotFoundError(f"작업자를 찾을 수 없습니다: {worker_id}")

        records = [
            r
            for r in self._work_records.list_range(start_date=start, end_date=end, worker_id=worker_id)
            if r.labor_hours > 0
        ]
        rules = [r for r in self._rules.list_all() if r.is_active]
        return self._aggregator.aggregate_pay(records, self._calculator_resolver({worker_id: worker}, rules))
