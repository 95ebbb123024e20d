"""Text formats used to write and read the members roster.

Two independent formats live here:
- Report: a bordered fixed-width table meant for people. It is never parsed.
- Data lines: one comma-delimited, tagged record per member (REGULAR/PREMIUM).
  These are what the roster loads from disk.

Fields are not quoted or escaped, so a value containing a comma cannot be
written as a data line.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

import config
from members import GymMember, PremiumMember, RegularMember

# Minimum number of comma-separated fields for a record to be considered.
MIN_FIELDS: int = 15

REPORT_BORDER: str = (
    "+---------+--------------------+--------------------+---------------+-------------------------"
    "+------------+------------+--------+------------+---------------+----------+------------"
    "+--------------------+---------------+"
)
REPORT_HEADER: str = (
    "| ID      | Name               | Location/Type      | Phone         | Email                   "
    "| Start Date | Plan       | Gender | Attendance | Loyalty Points| Status   | DOB        "
    "| Trainer            | Paid Amount   |"
)


def _fmt_date(value) -> str:
    return value.strftime(config.DATE_FORMAT)


def _parse_date(token: str):
    return datetime.strptime(token.strip(), config.DATE_FORMAT).date()


def _parse_bool(token: str) -> bool:
    # Anything other than "true" reads as False; never an error.
    return token.strip().lower() == "true"


def _fmt_bool(value: bool) -> str:
    return "true" if value else "false"


# ------------------------------
# Report (one-way, human readable)
# ------------------------------


def format_report_row(member: GymMember) -> str:
    """Return one fixed-width report row for *member*."""

    if isinstance(member, PremiumMember):
        type_col = "Premium"
        plan_col = "Premium"
        trainer_col = member.personal_trainer
        paid_col = f"{member.paid_amount:<13.2f}"
    elif isinstance(member, RegularMember):
        type_col = member.membership_plan
        plan_col = member.membership_plan
        trainer_col = "N/A"
        paid_col = f"{'N/A':<13}"
    else:
        raise TypeError(f"Unsupported member type: {type(member).__name__}")

    return (
        f"| {member.id:<7} | {member.name:<18} | "
        f"{type_col:<18} | {member.phone_number:<13} | {member.email:<23} | "
        f"{_fmt_date(member.membership_start_date):<10} | {plan_col:<10} | {member.gender:<6} | "
        f"{member.attendance_count:<10d} | {member.loyalty_points:<13d} | {member.status_text:<8} | "
        f"{_fmt_date(member.date_of_birth):<10} | {trainer_col:<18} | {paid_col} |"
    )


def format_report(members: Iterable[GymMember]) -> list[str]:
    """Return the report lines (header, rows, footer) for *members*."""

    lines = [REPORT_BORDER, REPORT_HEADER, REPORT_BORDER]
    lines.extend(format_report_row(m) for m in members)
    lines.append(REPORT_BORDER)
    return lines


# ------------------------------
# Data lines (machine readable)
# ------------------------------


def format_member_line(member: GymMember) -> str:
    """Serialize *member* into a tagged comma-delimited data line."""

    common = [
        member.file_tag,
        member.id,
        member.name,
        member.phone_number,
        member.email,
        member.gender,
        _fmt_date(member.date_of_birth),
        _fmt_date(member.membership_start_date),
        str(member.attendance_count),
        str(member.loyalty_points),
        _fmt_bool(member.active_status),
    ]

    if isinstance(member, RegularMember):
        extra = [
            member.membership_plan,
            str(member.price),
            member.referral_source,
            _fmt_bool(member.eligible_for_upgrade),
            member.removal_reason,
        ]
    elif isinstance(member, PremiumMember):
        extra = [
            member.personal_trainer,
            _fmt_bool(member.payment_complete),
            str(member.paid_amount),
            str(member.discount_amount),
        ]
    else:
        raise TypeError(f"Unsupported member type: {type(member).__name__}")

    fields = common + extra
    if any("," in field for field in fields):
        raise ValueError(f"Member {member.id} has a comma in a text field")
    return ",".join(fields)


def _apply_counters(member: GymMember, parts: list[str]) -> None:
    member.attendance_count = int(parts[8])
    member.loyalty_points = int(parts[9])
    member.active_status = _parse_bool(parts[10])


def _parse_regular(parts: list[str]) -> RegularMember:
    member = RegularMember(
        parts[1],
        parts[2],
        parts[3],
        parts[4],
        parts[5],
        _parse_date(parts[6]),
        _parse_date(parts[7]),
        membership_plan=parts[11],
        referral_source=parts[13],
    )
    _apply_counters(member, parts)
    # parts[12] (price) is not read: price always follows the plan.
    member.eligible_for_upgrade = _parse_bool(parts[14])
    if len(parts) > MIN_FIELDS:
        member.removal_reason = parts[15]
    return member


def _parse_premium(parts: list[str]) -> PremiumMember:
    member = PremiumMember(
        parts[1],
        parts[2],
        parts[3],
        parts[4],
        parts[5],
        _parse_date(parts[6]),
        _parse_date(parts[7]),
        personal_trainer=parts[11],
    )
    _apply_counters(member, parts)
    member.payment_complete = _parse_bool(parts[12])
    member.set_paid_amount(float(parts[13]))
    member.discount_amount = float(parts[14])
    return member


def parse_member_line(line: str) -> GymMember | None:
    """Parse one data line.

    Returns None for lines that should be skipped (unknown tag or too few
    fields). Raises ValueError when a date or number on a tagged line is
    malformed.
    """

    parts = line.rstrip("\r\n").split(",")
    if len(parts) < MIN_FIELDS:
        return None

    tag = parts[0]
    if tag == RegularMember.file_tag:
        return _parse_regular(parts)
    if tag == PremiumMember.file_tag:
        return _parse_premium(parts)
    return None
