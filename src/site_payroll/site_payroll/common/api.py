"""Shared helpers for the JSON controllers."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import NotFoundError, ValidationError
from .datetime_utils import parse_optional_date
from .logging_config import get_logger
from .validators import require_int

logger = get_logger("api")


def to_json(value: Any) -> Any:
    """Decimal -> str, date -> ISO, Enum -> value, dataclasses -> dict."""
    if is_dataclass(value) and not isinstance(value, type):
        return to_json(asdict(value))
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, Enum):
        return value.value
    return value


def ok(data: Any = None, *, message: Optional[str] = None, status: int = 200):
    body: dict[str, Any] = {"success": True, "data": to_json(data)}
    if message:
        body["message"] = message
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def api_view(view):
    """Map domain errors to JSON responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except NotFoundError as e:
            return fail(str(e), 404)
        except ValidationError as e:
            return fail(str(e), 400)
        except Exception:
            logger.exception("unhandled error", extra={"path": request.path})
            return fail("시스템 오류가 발생했습니다", 500)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("JSON 본문이 필요합니다")
    return data


def arg_date(name: str) -> Optional[date]:
    return parse_optional_date(request.args.get(name))


def required_arg_date(name: str) -> date:
    value = arg_date(name)
    if value is None:
        raise ValidationError(f"{name} 파라미터가 필요합니다")
    return value


def arg_int(name: str) -> Optional[int]:
    value = request.args.get(name)
    if value in (None, ""):
        return None
    return require_int(value, name)


def body_int(data: dict, name: str, *, required: bool = False) -> Optional[int]:
    value = data.get(name)
    if value in (None, ""):
        if required:
            raise ValidationError(f"{name} 항목이 필요합니다")
        return None
    return require_int(value, name)


def body_ids(data: dict, name: str = "record_ids") -> list[int]:
    ids = data.get(name)
    if not isinstance(ids, list):
        raise ValidationError(f"{name} 목록이 필요합니다")
    return [require_int(i, name) for i in ids]
