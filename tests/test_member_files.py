"""Tests for the report table and the data line format."""

from datetime import date

import pytest

from member_files import (
    REPORT_BORDER,
    REPORT_HEADER,
    format_member_line,
    format_report,
    format_report_row,
    parse_member_line,
)
from members import GymMember, PremiumMember, RegularMember

REGULAR_LINE = "REGULAR,1,Ann,555,ann@x.com,Female,2000-01-01,2024-01-01,5,25,true,Basic,6500,Friend,false"
PREMIUM_LINE = "PREMIUM,2,Bob,556,bob@x.com,Male,1995-06-15,2024-02-01,3,30,false,Sam,false,20000.0,0.0"


# ---------------------------------------------------------------------------
# parse_member_line
# ---------------------------------------------------------------------------


def test_parse_regular_line():
    member = parse_member_line(REGULAR_LINE)

    assert isinstance(member, RegularMember)
    assert member.id == "1"
    assert member.name == "Ann"
    assert member.date_of_birth == date(2000, 1, 1)
    assert member.membership_start_date == date(2024, 1, 1)
    assert member.attendance_count == 5
    assert member.loyalty_points == 25
    assert member.active_status is True
    assert member.membership_plan == "Basic"
    assert member.price == 6500.0
    assert member.referral_source == "Friend"
    assert member.eligible_for_upgrade is False
    assert member.removal_reason == ""


def test_parse_regular_line_with_removal_reason():
    member = parse_member_line(REGULAR_LINE + ",Moved away\n")
    assert member.removal_reason == "Moved away"


def test_parse_regular_price_follows_plan_not_file():
    line = REGULAR_LINE.replace(",Basic,6500,", ",Deluxe,not-a-price,")
    member = parse_member_line(line)
    assert member.membership_plan == "Deluxe"
    assert member.price == 18500.0


def test_parse_premium_line():
    member = parse_member_line(PREMIUM_LINE)

    assert isinstance(member, PremiumMember)
    assert member.personal_trainer == "Sam"
    assert member.paid_amount == 20000.0
    assert member.payment_complete is False
    assert member.discount_amount == 0.0
    assert member.active_status is False


def test_parse_premium_full_payment_marks_complete():
    line = PREMIUM_LINE.replace(",false,20000.0,0.0", ",false,50000.0,5000.0")
    member = parse_member_line(line)
    assert member.payment_complete is True
    assert member.discount_amount == 5000.0


@pytest.mark.parametrize(
    "line",
    [
        "",
        "MEMBER,1,Ann,555,ann@x.com,Female,2000-01-01,2024-01-01,5,25,true,Basic,6500,Friend,false",
        "regular,1,Ann,555,ann@x.com,Female,2000-01-01,2024-01-01,5,25,true,Basic,6500,Friend,false",
        "REGULAR,1,Ann,555",
        "+---------+----------+",
    ],
)
def test_skipped_lines(line):
    assert parse_member_line(line) is None


@pytest.mark.parametrize(
    "bad_line",
    [
        REGULAR_LINE.replace(",5,25,", ",five,25,"),
        REGULAR_LINE.replace("2000-01-01", "01/01/2000"),
        PREMIUM_LINE.replace("20000.0", "lots"),
    ],
)
def test_malformed_values_raise(bad_line):
    with pytest.raises(ValueError):
        parse_member_line(bad_line)


def test_lenient_booleans():
    member = parse_member_line(REGULAR_LINE.replace(",true,Basic", ",TRUE,Basic").replace(",false", ",yes"))
    assert member.active_status is True
    assert member.eligible_for_upgrade is False


# ---------------------------------------------------------------------------
# format_member_line
# ---------------------------------------------------------------------------


def test_format_regular_line(regular_member):
    regular_member.activate()
    regular_member.mark_attendance()
    assert format_member_line(regular_member) == (
        "REGULAR,1,Ann,5550001,ann@gmail.com,Female,2000-01-01,2024-01-01,1,5,true,Basic,6500.0,Friend,false,"
    )


def test_format_premium_line(premium_member):
    premium_member.pay_due_amount(12500)
    assert format_member_line(premium_member) == (
        "PREMIUM,2,Bob,5550002,bob@gmail.com,Male,1995-06-15,2024-02-01,0,0,false,Sam,false,12500.0,0.0"
    )


@pytest.mark.parametrize("field, value", [("name", "Smith, Ann"), ("referral_source", "Web,Friend")])
def test_format_refuses_comma_in_text_field(regular_member, field, value):
    setattr(regular_member, field, value)
    with pytest.raises(ValueError):
        format_member_line(regular_member)


def test_format_refuses_comma_in_trainer(premium_member):
    premium_member.personal_trainer = "Sam, Jr"
    with pytest.raises(ValueError):
        format_member_line(premium_member)


def test_formatted_line_parses_back(premium_member):
    premium_member.activate()
    premium_member.mark_attendance()
    premium_member.pay_due_amount(50000)
    premium_member.calculate_discount()

    loaded = parse_member_line(format_member_line(premium_member))

    assert loaded.details() == premium_member.details()


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------


def test_report_is_framed_by_borders(roster):
    lines = format_report(roster)
    assert lines[0] == REPORT_BORDER
    assert lines[1] == REPORT_HEADER
    assert lines[2] == REPORT_BORDER
    assert lines[-1] == REPORT_BORDER
    assert len(lines) == 4 + len(roster)


def test_report_rows_line_up_with_header(roster):
    for member in roster:
        row = format_report_row(member)
        assert len(row) == len(REPORT_HEADER)
        assert row.count("|") == REPORT_HEADER.count("|")


def test_regular_report_row(regular_member):
    row = format_report_row(regular_member)
    cells = [c.strip() for c in row.strip("|").split("|")]
    assert cells[0] == "1"
    assert cells[2] == "Basic"
    assert cells[6] == "Basic"
    assert cells[10] == "Inactive"
    assert cells[12] == "N/A"
    assert cells[13] == "N/A"


def test_premium_report_row(premium_member):
    premium_member.pay_due_amount(1234.5)
    row = format_report_row(premium_member)
    cells = [c.strip() for c in row.strip("|").split("|")]
    assert cells[2] == "Premium"
    assert cells[6] == "Premium"
    assert cells[12] == "Sam"
    assert cells[13] == "1234.50"


def test_upgraded_regular_report_row_shows_plan(regular_member):
    regular_member.upgrade_plan("Standard")
    cells = [c.strip() for c in format_report_row(regular_member).strip("|").split("|")]
    assert cells[2] == "Standard"
    assert cells[6] == "Standard"


def test_report_row_rejects_unknown_member_type():
    class GuestMember(GymMember):
        file_tag = "GUEST"

        def mark_attendance(self):
            return False, ""

    guest = GuestMember("9", "Gil", "555", "gil@gmail.com", "Male", date(2000, 1, 1), date(2024, 1, 1))
    with pytest.raises(TypeError):
        format_report_row(guest)


def test_report_is_not_loadable(roster):
    assert all(parse_member_line(line) is None for line in format_report(roster))
