"""Recalculate salary records for one month.

Usage: python scripts/calculate_salaries.py 2025-03 [--site-id 1] [--worker-id 7]
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.site_payroll.site_payroll.common.datetime_utils import month_bounds
from src.site_payroll.site_payroll.common.logging_config import configure_logging
from src.site_payroll.site_payroll.container import build_container


def _parse_month(value: str) -> tuple[int, int]:
    try:
        year, month = value.split("-")
        return int(year), int(month)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {value!r}") from None


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("month", type=_parse_month, help="YYYY-MM")
    parser.add_argument("--site-id", type=int, default=None)
    parser.add_argument("--worker-id", type=int, default=None)
    args = parser.parse_args(argv)

    configure_logging()
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    start, end = month_bounds(*args.month)
    written = container.payroll_service.calculate_salaries(
        start=start, end=end, site_id=args.site_id, worker_id=args.worker_id
    )
    print(f"OK: {written} salary records calculated for {start:%Y-%m}")


if __name__ == "__main__":
    main()
