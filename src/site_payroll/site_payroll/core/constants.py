"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

STANDARD_WORKDAY_HOURS = Decimal("8")
DEFAULT_OVERTIME_MULTIPLIER = Decimal("1.5")

# 공수 submission rules
LABOR_HOURS_STEP = Decimal("0.25")
MAX_LABOR_HOURS_PER_DAY = Decimal("2.0")

# Fallback daily rates (원/공수)
DEFAULT_DAILY_RATE = Decimal("150000")
SITE_MANAGER_DAILY_RATE = Decimal("220000")
WORKER_DAILY_RATE = Decimal("130000")

MONEY_DECIMAL_PLACES = 0
HOURS_DECIMAL_PLACES = 2

# Column limits: hours DECIMAL(6,2), money DECIMAL(14,2)
MAX_HOURS_VALUE = Decimal("9999.99")
MAX_MONEY_VALUE = Decimal("999999999999.99")
