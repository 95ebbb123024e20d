"""Shared helper functions for Fitness Club Manager.

Provides general-purpose helpers used across the system:
- Date parsing
- Registration input validation
- Display formatting (money)
- Activity logging to a local file
"""

from __future__ import annotations

import math
from datetime import date, datetime
from pathlib import Path
from typing import Any

import config


# ------------------------------------------------------------
# 1) Dates
# ------------------------------------------------------------


def to_date(value: Any) -> date:
    """Convert a value to a date object.

    Accepts:
    - date
    - datetime
    - text in YYYY-MM-DD form

    Raises:
        ValueError if the value cannot be converted.

    Example:
        >>> to_date('2025-01-15')
        datetime.date(2025, 1, 15)
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.strptime(value.strip(), config.DATE_FORMAT).date()
    raise ValueError("Unsupported date value")


def get_current_datetime() -> str:
    """Return the current date/time as text (config.DATETIME_FORMAT)."""

    return datetime.now().strftime(config.DATETIME_FORMAT)


# ------------------------------------------------------------
# 2) Validation
# ------------------------------------------------------------


def validate_required_fields(fields_dict: dict[str, Any]) -> list[str]:
    """Return the names of fields that are missing or blank.

    Example:
        >>> validate_required_fields({'name': '', 'phone': '555'})
        ['name']
    """

    missing = []
    for k, v in (fields_dict or {}).items():
        if v is None:
            missing.append(str(k))
            continue
        if isinstance(v, str) and not v.strip():
            missing.append(str(k))
    return missing


def validate_member_inputs(
    member_id: str,
    name: str,
    phone: str,
    email: str,
    is_regular: bool,
    referral_source: str = "",
    personal_trainer: str = "",
    date_of_birth: Any = None,
    start_date: Any = None,
) -> list[str]:
    """Validate registration inputs.

    The email is the local part only; the club domain is appended by
    build_email(), so an '@' is rejected. Text fields are stored in
    comma-delimited data files, so commas are rejected too.

    Returns:
        A list of error messages. Empty when everything is valid.
    """

    fields: dict[str, str] = {
        "Member ID": (member_id or "").strip(),
        "Name": (name or "").strip(),
        "Phone number": (phone or "").strip(),
        "Email": (email or "").strip(),
    }
    if is_regular:
        fields["Referral Source"] = (referral_source or "").strip()
    else:
        fields["Personal Trainer name"] = (personal_trainer or "").strip()

    missing = validate_required_fields(fields)
    errors: list[str] = []
    for label in missing:
        if label == "Referral Source":
            errors.append("Referral Source is required for regular members")
        elif label == "Personal Trainer name":
            errors.append("Personal Trainer name is required for premium members")
        else:
            errors.append(f"{label} is required")

    for label, value in fields.items():
        if "," in value:
            errors.append(f"{label} must not contain commas")

    if "Member ID" not in missing and not fields["Member ID"].isdigit():
        errors.append("Member ID must be a valid number")
    if "Phone number" not in missing and not fields["Phone number"].isdigit():
        errors.append("Phone number must contain only numbers")
    if "Email" not in missing and "@" in fields["Email"]:
        errors.append(f"Email should not contain @, we'll add {config.EMAIL_DOMAIN} automatically")

    for label, value in (("Date of birth", date_of_birth), ("Membership start date", start_date)):
        if value is None:
            continue
        try:
            to_date(value)
        except ValueError:
            errors.append(f"{label} must be a valid date (YYYY-MM-DD)")

    return errors


def build_email(local_part: str) -> str:
    """Return the full club email for a local part typed in the form.

    Example:
        >>> build_email('Ann.Smith')
        'ann.smith@gmail.com'
    """

    return (local_part or "").strip().lower() + config.EMAIL_DOMAIN


def parse_amount(text: str) -> float:
    """Parse a money amount typed by the user.

    Raises:
        ValueError if the text is not a finite number.
    """

    value = float(str(text).replace(",", "").strip())
    if not math.isfinite(value):
        raise ValueError(f"Amount must be a finite number: {text}")
    return value


# ------------------------------------------------------------
# 3) Formatting
# ------------------------------------------------------------


def format_money(amount: Any, decimals: int = 2, currency: str | None = None) -> str:
    cur = (currency or "").strip() or config.CURRENCY
    try:
        v = float(amount)
    except (TypeError, ValueError):
        v = 0.0
    return f"{v:,.{int(decimals)}f} {cur}".strip()


# ------------------------------------------------------------
# 4) Activity log
# ------------------------------------------------------------


def log_activity(action: str, details: str, path: Path | None = None) -> None:
    """Append one line to the activity log.

    Does not depend on the roster or the window so it works in every state.
    Write failures are ignored.

    Args:
        action: Kind of operation (e.g. 'register', 'payment').
        details: Free-text details.
        path: Log file; defaults to config.ACTIVITY_LOG_PATH.

    Example:
        >>> log_activity('register', 'Regular member added: Ann')
    """

    log_path = Path(path) if path is not None else config.ACTIVITY_LOG_PATH
    ts = get_current_datetime()

    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with open(log_path, "a", encoding="utf-8") as f:
            f.write(f"{ts} | {action} | {details}\n")
    except OSError:
        pass
