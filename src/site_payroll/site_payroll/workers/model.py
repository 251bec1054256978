from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.constants import SITE_MANAGER_DAILY_RATE, WORKER_DAILY_RATE
from ..core.enums import Role


@dataclass(frozen=True)
class Worker:
    """도메인 엔티티: 작업자.

    daily_rate는 개인별 일당 설정이며, 없으면 역할 기본 일당을 사용한다.
    """

    worker_id: int
    full_name: str
    role: Role
    daily_rate: Optional[Decimal] = None
    is_active: bool = True

    def effective_daily_rate(self) -> Decimal:
        if self.daily_rate is not None and self.daily_rate > 0:
            return self.daily_rate
        if self.role == Role.SITE_MANAGER:
            return SITE_MANAGER_DAILY_RATE
        return WORKER_DAILY_RATE


@dataclass(frozen=True)
class Site:
    site_id: int
    name: str
