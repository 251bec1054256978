from datetime import date
from decimal import Decimal

from src.site_payroll.site_payroll.payroll.aggregator import UNKNOWN_SITE_NAME, LaborHourAggregator
from src.site_payroll.site_payroll.payroll.calculator.standard_calculator import StandardPayCalculator
from src.site_payroll.site_payroll.payroll.model import RateProfile
from src.site_payroll.site_payroll.work_records.model import WorkRecord


def _rec(worker_id, day, labor, site_id=10):
    return WorkRecord(worker_id=worker_id, site_id=site_id, work_date=date(2025, 3, day), labor_hours=Decimal(labor))


def test_total_manpower_filters_worker_and_range():
    records = [_rec(1, 1, "1.0"), _rec(1, 2, "0.5"), _rec(1, 20, "1.0"), _rec(2, 2, "2.0")]

    total = LaborHourAggregator().total_manpower(records, worker_id=1, start=date(2025, 3, 1), end=date(2025, 3, 10))

    assert total == Decimal("1.5")


def test_manpower_by_worker():
    records = [_rec(1, 1, "1.0"), _rec(2, 1, "0.75"), _rec(1, 2, "1.25")]

    assert LaborHourAggregator().manpower_by_worker(records) == {1: Decimal("2.25"), 2: Decimal("0.75")}


def test_aggregate_pay_splits_overtime_per_record():
    # 0.75 + 1.25 = 2.0 공수 = 16h; pooled would be 8h overtime, per record it is 2h.
    records = [_rec(1, 1, "0.75"), _rec(1, 2, "1.25")]
    calc = StandardPayCalculator(RateProfile(hourly_rate=Decimal("10000")))

    result = LaborHourAggregator().aggregate_pay(records, lambda r: calc)

    assert result.regular_hours == 14
    assert result.overtime_hours == 2
    assert result.total_cost == 6 * 10000 + 8 * 10000 + 2 * 15000


def test_aggregate_pay_of_nothing_is_zero():
    result = LaborHourAggregator().aggregate_pay([], lambda r: None)

    assert (result.regular_hours, result.overtime_hours, result.total_cost) == (0, 0, 0)


def test_summarize_output_groups_by_worker_and_site(workers_repo):
    records = [
        _rec(2, 4, "1.25", site_id=10),
        _rec(2, 3, "1.0", site_id=10),
        _rec(2, 5, "0.5", site_id=20),
        _rec(1, 3, "1.0", site_id=10),
        _rec(99, 3, "1.0", site_id=10),
    ]

    rows = LaborHourAggregator().summarize_output(
        records,
        workers=workers_repo.workers,
        sites=workers_repo.sites,
    )

    by_key = {(r.worker_id, r.site_id): r for r in rows}
    assert set(by_key) == {(2, 10), (2, 20), (1, 10)}

    gangnam = by_key[(2, 10)]
    assert gangnam.work_days_count == 2
    assert gangnam.total_labor_hours == Decimal("2.25")
    assert gangnam.total_work_hours == 18
    assert gangnam.total_overtime_hours == 2
    assert gangnam.total_pay == Decimal("2.25") * 130000
    assert gangnam.first_work_date == date(2025, 3, 3)
    assert gangnam.last_work_date == date(2025, 3, 4)

    # site managers default to 220,000 per 공수
    assert by_key[(1, 10)].total_pay == 220000


def test_summarize_output_search_is_case_insensitive_substring(workers_repo):
    records = [_rec(2, 3, "1.0"), _rec(1, 3, "1.0")]

    rows = LaborHourAggregator().summarize_output(
        records, workers=workers_repo.workers, sites=workers_repo.sites, search="현장"
    )

    assert [r.worker_id for r in rows] == [1]


def test_worker_calendar_uses_placeholder_for_unknown_site(workers_repo):
    days = LaborHourAggregator().worker_calendar(
        [_rec(2, 5, "1.0", site_id=99), _rec(2, 2, "0.5", site_id=10)], sites=workers_repo.sites
    )

    assert [d.work_date.day for d in days] == [2, 5]
    assert days[0].site_name == "강남 A현장"
    assert days[1].site_name == UNKNOWN_SITE_NAME
