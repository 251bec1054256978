from __future__ import annotations

import csv
import io
from typing import Iterable

import pandas as pd

from .model import OutputSummary, SalaryRecord

OUTPUT_SUMMARY_COLUMNS = {
    "worker_name": "작업자",
    "worker_role": "역할",
    "site_name": "현장",
    "work_days_count": "근무일수",
    "total_labor_hours": "총 공수",
    "total_work_hours": "총 근무시간",
    "total_overtime_hours": "연장시간",
    "base_pay": "기본급",
    "total_pay": "총 지급액",
    "first_work_date": "첫 근무일",
    "last_work_date": "마지막 근무일",
}

SALARY_RECORD_FIELDS = [
    "record_id",
    "work_date",
    "worker_id",
    "site_id",
    "labor_hours",
    "regular_hours",
    "overtime_hours",
    "base_pay",
    "overtime_pay",
    "bonus_pay",
    "deductions",
    "total_pay",
    "status",
    "notes",
]


def output_summary_frame(rows: Iterable[OutputSummary]) -> pd.DataFrame:
    data = [
        {
            "worker_name": s.worker_name,
            "worker_role": s.worker_role,
            "site_name": s.site_name,
            "work_days_count": s.work_days_count,
            "total_labor_hours": float(s.total_labor_hours),
            "total_work_hours": float(s.total_work_hours),
            "total_overtime_hours": float(s.total_overtime_hours),
            "base_pay": int(s.base_pay),
            "total_pay": int(s.total_pay),
            "first_work_date": s.first_work_date.strftime("%Y-%m-%d") if s.first_work_date else "",
            "last_work_date": s.last_work_date.strftime("%Y-%m-%d") if s.last_work_date else "",
        }
        for s in rows
    ]
    df = pd.DataFrame(data, columns=list(OUTPUT_SUMMARY_COLUMNS))
    return df.rename(columns=OUTPUT_SUMMARY_COLUMNS)


def output_summary_to_xlsx(rows: Iterable[OutputSummary]) -> bytes:
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        output_summary_frame(rows).to_excel(writer, index=False, sheet_name="출력현황")
    return out.getvalue()


def salary_records_to_csv(records: Iterable[SalaryRecord]) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=SALARY_RECORD_FIELDS)
    writer.writeheader()
    for r in records:
        writer.writerow(
            {
                "record_id": r.record_id,
                "work_date": r.work_date.strftime("%Y-%m-%d"),
                "worker_id": r.worker_id,
                "site_id": r.site_id,
                "labor_hours": r.labor_hours,
                "regular_hours": r.regular_hours,
                "overtime_hours": r.overtime_hours,
                "base_pay": r.base_pay,
                "overtime_pay": r.overtime_pay,
                "bonus_pay": r.bonus_pay,
                "deductions": r.deductions,
                "total_pay": r.total_pay,
                "status": r.status.value,
                "notes": r.notes or "",
            }
        )
    return out.getvalue().encode("utf-8-sig")
