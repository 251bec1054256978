from datetime import date
from decimal import Decimal

import pytest

from src.site_payroll.site_payroll.core.enums import Role
from src.site_payroll.site_payroll.core.exceptions import NotFoundError, ValidationError
from src.site_payroll.site_payroll.work_records.service import WorkRecordService
from src.site_payroll.site_payroll.workers.model import Worker


@pytest.fixture
def service(work_records_repo, workers_repo):
    return WorkRecordService(work_records_repo, workers_repo)


def test_submit_stores_validated_labor_hours(service, work_records_repo):
    record = service.submit(worker_id=3, site_id=20, work_date=date(2025, 4, 2), labor_hours="1.25")

    assert record.record_id == 6
    assert record.labor_hours == Decimal("1.25")
    assert record.clock_hours == 10
    assert work_records_repo.records[-1].work_date == date(2025, 4, 2)


def test_submit_rejects_invalid_hours_without_writing(service, work_records_repo):
    with pytest.raises(ValidationError):
        service.submit(worker_id=3, site_id=20, work_date=date(2025, 4, 2), labor_hours="0.3")

    assert len(work_records_repo.records) == 5


def test_submit_unknown_worker(service):
    with pytest.raises(NotFoundError):
        service.submit(worker_id=404, site_id=20, work_date=date(2025, 4, 2), labor_hours=1)


def test_submit_inactive_worker(service, workers_repo):
    workers_repo.workers[4] = Worker(worker_id=4, full_name="최퇴사", role=Role.WORKER, is_active=False)

    with pytest.raises(NotFoundError):
        service.submit(worker_id=4, site_id=20, work_date=date(2025, 4, 2), labor_hours=1)


def test_list_records_filters(service):
    records = service.list_records(start=date(2025, 3, 1), end=date(2025, 3, 31), site_id=10)

    assert [r.record_id for r in records] == [1, 4, 2]


def test_list_records_rejects_reversed_range(service):
    with pytest.raises(ValidationError):
        service.list_records(start=date(2025, 3, 31), end=date(2025, 3, 1))
