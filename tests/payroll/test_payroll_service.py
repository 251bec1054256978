from datetime import date
from decimal import Decimal

import pytest

from src.site_payroll.site_payroll.core.enums import Role, RuleType, SalaryStatus
from src.site_payroll.site_payroll.core.exceptions import NotFoundError, ValidationError
from src.site_payroll.site_payroll.payroll.model import SalaryRecord, SalaryRule

MARCH = {"start": date(2025, 3, 1), "end": date(2025, 3, 31)}


def test_calculate_salaries_writes_one_record_per_work_record(payroll_service, salary_records_repo):
    written = payroll_service.calculate_salaries(**MARCH)

    assert written == 4
    pays = sorted(r.total_pay for r in salary_records_repo.records)
    # default 150,000 per 공수: 0.5, 1.0, 1.25, 1.5
    assert pays == [75000, 150000, 187500, 225000]
    assert all(r.status == SalaryStatus.CALCULATED for r in salary_records_repo.records)


def test_calculate_salaries_uses_hourly_rule_with_per_record_overtime(payroll_service, rules_repo, salary_records_repo):
    rules_repo.upsert(
        rule_id=None,
        rule_name="기본 시급",
        rule_type=RuleType.HOURLY_RATE,
        base_amount=Decimal("16250"),
        multiplier=None,
        site_id=None,
        role=Role.WORKER,
        is_active=True,
    )

    payroll_service.calculate_salaries(worker_id=2, **MARCH)

    rec = next(r for r in salary_records_repo.records if r.work_date == date(2025, 3, 4))
    assert rec.labor_hours == Decimal("1.25")
    assert rec.regular_hours == 8
    assert rec.overtime_hours == 2
    assert rec.base_pay == 130000
    assert rec.overtime_pay == 48750
    assert rec.total_pay == 178750
    assert rec.notes == "공수: 1.25"


def test_recalculation_replaces_only_calculated_records(payroll_service, salary_records_repo):
    payroll_service.calculate_salaries(**MARCH)
    first_id = salary_records_repo.records[0].record_id
    payroll_service.approve([first_id])

    written = payroll_service.calculate_salaries(**MARCH)

    assert written == 3
    statuses = [r.status for r in salary_records_repo.records]
    assert statuses.count(SalaryStatus.APPROVED) == 1
    assert statuses.count(SalaryStatus.CALCULATED) == 3


def test_recalculation_never_duplicates_a_settled_work_day(payroll_service, salary_records_repo):
    payroll_service.calculate_salaries(**MARCH)
    first = salary_records_repo.records[0]
    payroll_service.approve([first.record_id])
    payroll_service.mark_paid([first.record_id])

    payroll_service.calculate_salaries(**MARCH)
    payroll_service.calculate_salaries(**MARCH)

    same_day = [
        r
        for r in salary_records_repo.records
        if (r.worker_id, r.site_id, r.work_date) == (first.worker_id, first.site_id, first.work_date)
    ]
    assert [(r.record_id, r.status) for r in same_day] == [(first.record_id, SalaryStatus.PAID)]
    assert len(salary_records_repo.records) == 4
    assert payroll_service.get_stats(**MARCH).total_payroll == 637500


def test_unknown_workers_and_zero_hours_are_skipped(payroll_service, work_records_repo, salary_records_repo):
    work_records_repo.create(worker_id=99, site_id=10, work_date=date(2025, 3, 10), labor_hours=Decimal("1.0"))
    work_records_repo.create(worker_id=2, site_id=10, work_date=date(2025, 3, 11), labor_hours=Decimal("0"))

    assert payroll_service.calculate_salaries(**MARCH) == 4


def test_invalid_range_rejected(payroll_service):
    with pytest.raises(ValidationError):
        payroll_service.calculate_salaries(start=date(2025, 3, 31), end=date(2025, 3, 1))


def test_status_flow_calculated_approved_paid(payroll_service, salary_records_repo):
    payroll_service.calculate_salaries(**MARCH)
    ids = [r.record_id for r in salary_records_repo.records]

    # paying before approval moves nothing
    assert payroll_service.mark_paid(ids) == 0
    assert payroll_service.approve(ids[:2]) == 2
    assert payroll_service.approve(ids[:2]) == 0
    assert payroll_service.mark_paid(ids) == 2

    stats = payroll_service.get_stats()
    assert stats.pending_calculations == 2
    assert stats.approved_payments == 0


def test_approve_requires_ids(payroll_service):
    with pytest.raises(ValidationError):
        payroll_service.approve([])


def test_stats(payroll_service):
    payroll_service.calculate_salaries(**MARCH)

    stats = payroll_service.get_stats(**MARCH)

    assert stats.total_workers == 2
    assert stats.pending_calculations == 4
    assert stats.total_payroll == 637500
    assert stats.average_daily_pay == 159375
    # 6 overtime hours of 34
    assert stats.overtime_percentage == Decimal("17.65")


def test_stats_empty(payroll_service):
    stats = payroll_service.get_stats()

    assert stats.total_workers == 0
    assert stats.total_payroll == 0
    assert stats.average_daily_pay == 0
    assert stats.overtime_percentage == 0


def test_stats_respects_status_mix(salary_records_repo, payroll_service):
    salary_records_repo.replace_calculated(
        start_date=date(2025, 1, 1),
        end_date=date(2025, 1, 31),
        site_id=None,
        worker_id=None,
        records=[
            SalaryRecord(
                worker_id=1,
                site_id=10,
                work_date=date(2025, 1, 2),
                labor_hours=Decimal("1"),
                regular_hours=Decimal("8"),
                overtime_hours=Decimal("0"),
                base_pay=Decimal("100000"),
                overtime_pay=Decimal("0"),
                total_pay=Decimal("100000"),
            )
        ],
    )

    assert payroll_service.get_stats().overtime_percentage == 0


def test_output_summary(payroll_service):
    rows = payroll_service.get_output_summary(**MARCH)

    assert [(r.worker_name, r.site_name) for r in rows] == [
        ("김현장", "강남 A현장"),
        ("이작업", "강남 A현장"),
        ("이작업", "송파 B현장"),
    ]
    assert rows[0].total_pay == Decimal("1.5") * 220000


def test_worker_calendar(payroll_service):
    days = payroll_service.get_worker_calendar(worker_id=2, year=2025, month=3)

    assert [(d.work_date.day, d.labor_hours, d.site_name) for d in days] == [
        (3, Decimal("1.0"), "강남 A현장"),
        (4, Decimal("1.25"), "강남 A현장"),
        (5, Decimal("0.5"), "송파 B현장"),
    ]


def test_worker_calendar_rejects_bad_month(payroll_service):
    with pytest.raises(ValidationError):
        payroll_service.get_worker_calendar(worker_id=2, year=2025, month=13)


def test_worker_manpower(payroll_service):
    total = payroll_service.get_worker_manpower(worker_id=2, **MARCH)

    assert total.labor_hours == Decimal("2.75")
    assert total.clock_hours == 22
    assert total.record_count == 3


def test_aggregate_worker_pay_uses_rules(payroll_service, rules_repo):
    rules_repo.rules[1] = SalaryRule(
        rule_id=1,
        rule_name="시급",
        rule_type=RuleType.HOURLY_RATE,
        base_amount=Decimal("10000"),
    )

    result = payroll_service.aggregate_worker_pay(worker_id=2, **MARCH)

    # 8h + 10h + 4h, overtime only on the 10h day
    assert result.regular_hours == 20
    assert result.overtime_hours == 2
    assert result.total_cost == 20 * 10000 + 2 * 15000


def test_aggregate_worker_pay_unknown_worker(payroll_service):
    with pytest.raises(NotFoundError):
        payroll_service.aggregate_worker_pay(worker_id=404, **MARCH)
