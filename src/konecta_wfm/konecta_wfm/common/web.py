from __future__ import annotations

from datetime import date, datetime
from functools import wraps
from typing import Any, Dict, Optional

from flask import request, session

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .datetime_utils import parse_bound, parse_iso_date


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            raise AuthenticationError("Please log in to continue")
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                raise AuthenticationError("Please log in to continue")
            if session.get("role") not in allowed:
                raise AuthorizationError("You do not have permission to perform this action")
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    return Role(session.get("role"))


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def require_field(data: Dict[str, Any], *names: str) -> None:
    missing = [n for n in names if data.get(n) in (None, "")]
    if missing:
        raise ValidationError(f"{' and '.join(missing)} {'is' if len(missing) == 1 else 'are'} required")


def parse_date_field(value: Any, field_name: str) -> date:
    try:
        return parse_iso_date(str(value or "").strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def optional_date_arg(name: str) -> Optional[date]:
    value = (request.args.get(name) or "").strip()
    return parse_date_field(value, name) if value else None


def range_args() -> tuple[Optional[datetime], Optional[datetime]]:
    """`from`/`to` query bounds; a date-only `to` includes that whole day."""
    start = parse_bound(request.args.get("from"))
    end = parse_bound(request.args.get("to"), end_of_day=True)
    return start, end


def as_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    return value is True or value == 1
