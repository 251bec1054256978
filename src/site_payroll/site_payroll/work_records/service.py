from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import require_date_range
from ..common.logging_config import get_logger
from ..core.exceptions import NotFoundError
from ..workers.repository import WorkerRepository
from .model import WorkRecord
from .repository import WorkRecordRepository
from .validation import validate_labor_hours

logger = get_logger("work_records")


class WorkRecordService:
    def __init__(self, records: WorkRecordRepository, workers: WorkerRepository):
        self._records = records
        self._workers = workers

    def submit(self, *, worker_id: int, site_id: int, work_date: date, labor_hours: Any) -> WorkRecord:
        labor = validate_labor_hours(labor_hours)

        worker = self._workers.get_by_id(worker_id)
        if not worker or not worker.is_active:
            raise NotFoundError(f"작업자를 찾을 수 없습니다: {worker_id}")

        record_id = self._records.create(
            worker_id=worker_id,
            site_id=site_id,
            work_date=work_date,
            labor_hours=labor,
        )
        logger.info(
            "work record submitted",
            extra={"record_id": record_id, "worker_id": worker_id, "site_id": site_id, "labor_hours": labor},
        )
        return WorkRecord(
            record_id=record_id,
            worker_id=worker_id,
            site_id=site_id,
            work_date=work_date,
            labor_hours=labor,
        )

    def list_records(
        self,
        *,
        start: date,
        end: date,
        site_id: Optional[int] = None,
        worker_id: Optional[int] = None,
    ) -> Sequence[WorkRecord]:
        require_date_range(start, end)
        return self._records.list_range(start_date=start, end_date=end, site_id=site_id, worker_id=worker_id)
