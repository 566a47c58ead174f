from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
_PHONE_RE = re.compile(r"^[0-9]{10}$")
_PERSON_NAME_RE = re.compile(r"^[a-zA-Z\s\-']+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} should not be blank")
    return value.strip()


def require_max_length(value: Optional[str], field_name: str, max_len: int) -> Optional[str]:
    if value is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} should not exceed {max_len} characters")
    return value


def require_email(value: Optional[str], field_name: str = "Email") -> str:
    value = require_non_empty(value, field_name)
    if not _EMAIL_RE.match(value):
        raise ValidationError("Invalid email format")
    return value


def require_phone(value: Optional[str], field_name: str = "Phone number") -> str:
    value = require_non_empty(value, field_name)
    if not _PHONE_RE.match(value):
        raise ValidationError(f"{field_name} must be exactly 10 digits")
    return value


def require_person_name(value: Optional[str], field_name: str = "Name") -> str:
    value = require_non_empty(value, field_name)
    if not _PERSON_NAME_RE.match(value):
        raise ValidationError(f"{field_name} can only contain letters, spaces, hyphens, and apostrophes")
    return value


def require_positive_amount(value: Any, field_name: str) -> Decimal:
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"{field_name} must be a number")
    if not amount.is_finite() or amount <= 0:
        raise ValidationError(f"{field_name} must be a positive number")
    return amount


def require_not_future(value: date, field_name: str, *, today: date) -> date:
    if value > today:
        raise ValidationError(f"{field_name} cannot be in the future")
    return value
