from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """사용자 역할."""

    ADMIN = "admin"
    SITE_MANAGER = "site_manager"
    WORKER = "worker"
    PARTNER = "partner"


class RuleType(str, Enum):
    """급여 계산 규칙 종류."""

    HOURLY_RATE = "hourly_rate"
    DAILY_RATE = "daily_rate"
    OVERTIME_MULTIPLIER = "overtime_multiplier"


class SalaryStatus(str, Enum):
    """급여 레코드 승인 흐름 (calculated -> approved -> paid)."""

    CALCULATED = "calculated"
    APPROVED = "approved"
    PAID = "paid"


class AllocationType(str, Enum):
    WORKER = "worker"
    EQUIPMENT = "equipment"
