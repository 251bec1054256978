"""Example: calling the payroll layer directly (no Flask).

Controllers stay thin; the business rules live in the calculators and services.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.site_payroll.site_payroll.container import build_container
from src.site_payroll.site_payroll.payroll.calculator.standard_calculator import calculate_pay


def main():
    print(calculate_pay(10, 10000).as_dict())

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    print(container.payroll_service.get_worker_manpower(worker_id=1, start=date(2025, 3, 1), end=date(2025, 3, 31)))


if __name__ == "__main__":
    main()
