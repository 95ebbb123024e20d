"""Tests for the Roster service: registration, lookup and file operations."""

from datetime import date

import pytest

from member_files import REPORT_BORDER, REPORT_HEADER
from members import PremiumMember, RegularMember
from roster import Roster

REGULAR_LINE = "REGULAR,1,Ann,555,ann@x.com,Female,2000-01-01,2024-01-01,5,25,true,Basic,6500,Friend,false"
PREMIUM_LINE = "PREMIUM,2,Bob,556,bob@x.com,Male,1995-06-15,2024-02-01,3,30,false,Sam,false,20000.0,0.0"


def _regular(member_id="10", name="Cara"):
    return RegularMember(
        member_id, name, "5550010", "cara@gmail.com", "Female",
        date(1990, 3, 3), date(2024, 3, 1), membership_plan="Standard", referral_source="Web",
    )


# ---------------------------------------------------------------------------
# Registration & lookup
# ---------------------------------------------------------------------------


def test_add_keeps_registration_order(roster):
    roster.add(_regular())
    assert [m.id for m in roster] == ["1", "2", "10"]


def test_duplicate_id_rejected(roster):
    ok, msg = roster.add(_regular(member_id="1", name="Other"))
    assert ok is False
    assert "already exists" in msg
    assert len(roster) == 2
    assert roster.find_by_id("1").name == "Ann"


def test_constructor_adds_members(regular_member, premium_member):
    roster = Roster([regular_member, premium_member])
    assert [m.id for m in roster] == ["1", "2"]


def test_constructor_rejects_duplicate_ids(regular_member):
    with pytest.raises(ValueError, match="already exists"):
        Roster([regular_member, _regular(member_id="1", name="Other")])


def test_find_by_id(roster, premium_member):
    assert roster.find_by_id("2") is premium_member
    assert roster.find_by_id(" 2 ") is premium_member
    assert roster.find_by_id("99") is None
    assert "2" in roster
    assert "99" not in roster


def test_members_property_is_a_copy(roster):
    roster.members.clear()
    assert len(roster) == 2


def test_lifecycle_through_lookup(roster):
    member = roster.find_by_id("1")
    member.activate()
    member.mark_attendance()
    assert roster.find_by_id("1").attendance_count == 1


def test_stats(roster, premium_member):
    premium_member.activate()
    premium_member.pay_due_amount(15000)
    stats = roster.get_stats()
    assert stats == {
        "total": 2,
        "active": 1,
        "inactive": 1,
        "regular": 1,
        "premium": 1,
        "premium_collected": 15000.0,
    }


# ---------------------------------------------------------------------------
# Report export
# ---------------------------------------------------------------------------


def test_export_empty_roster_fails(tmp_path):
    path = tmp_path / "members.txt"
    ok, msg = Roster().export_to_text(path)
    assert ok is False
    assert msg == "No members to export"
    assert not path.exists()


def test_export_writes_bordered_table(roster, tmp_path):
    path = tmp_path / "members.txt"
    ok, msg = roster.export_to_text(path)

    assert ok is True
    assert msg.startswith("2 members")
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[:3] == [REPORT_BORDER, REPORT_HEADER, REPORT_BORDER]
    assert lines[-1] == REPORT_BORDER
    assert len(lines) == 6


def test_export_reports_io_errors(roster, tmp_path):
    ok, msg = roster.export_to_text(tmp_path / "missing-dir" / "members.txt")
    assert ok is False
    assert msg.startswith("Error saving to file")


def test_exported_report_cannot_be_imported(roster, tmp_path):
    path = tmp_path / "members.txt"
    roster.export_to_text(path)

    ok, _, count = roster.import_from_text(path)

    assert ok is True
    assert count == 0
    assert len(roster) == 0


# ---------------------------------------------------------------------------
# Data file save / import
# ---------------------------------------------------------------------------


def test_import_replaces_roster(roster, tmp_path):
    path = tmp_path / "data.txt"
    path.write_text(PREMIUM_LINE + "\n", encoding="utf-8")

    ok, msg, count = roster.import_from_text(path)

    assert ok is True
    assert count == 1
    assert msg == "1 members loaded successfully"
    assert [m.id for m in roster] == ["2"]
    assert isinstance(roster.find_by_id("2"), PremiumMember)
    assert roster.find_by_id("1") is None


def test_import_skips_unknown_and_short_lines(tmp_path):
    path = tmp_path / "data.txt"
    path.write_text(
        "\n".join(
            [
                "# members export",
                REGULAR_LINE,
                "GUEST,3,Dan,557,dan@x.com,Male,1999-01-01,2024-01-01,0,0,false,x,y,z,w",
                "PREMIUM,4,Eve,558",
                PREMIUM_LINE,
                "",
            ]
        ),
        encoding="utf-8",
    )
    roster = Roster()

    ok, _, count = roster.import_from_text(path)

    assert ok is True
    assert count == 2
    assert [m.id for m in roster] == ["1", "2"]


def test_import_aborts_on_malformed_value_and_leaves_roster_empty(roster, tmp_path):
    path = tmp_path / "data.txt"
    path.write_text(
        REGULAR_LINE + "\n" + PREMIUM_LINE.replace("20000.0", "twenty") + "\n",
        encoding="utf-8",
    )

    ok, msg, count = roster.import_from_text(path)

    assert ok is False
    assert msg.startswith("Error reading file")
    assert count == 0
    assert len(roster) == 0


def test_import_missing_file_leaves_roster_untouched(roster, tmp_path):
    ok, msg, count = roster.import_from_text(tmp_path / "nope.txt")
    assert ok is False
    assert count == 0
    assert len(roster) == 2


def test_import_keeps_first_of_duplicate_ids(tmp_path):
    path = tmp_path / "data.txt"
    path.write_text(REGULAR_LINE + "\n" + REGULAR_LINE.replace(",Ann,", ",Annie,") + "\n", encoding="utf-8")
    roster = Roster()

    ok, _, count = roster.import_from_text(path)

    assert ok is True
    assert count == 1
    assert roster.find_by_id("1").name == "Ann"


def test_save_empty_roster_fails(tmp_path):
    ok, msg = Roster().save_to_data_file(tmp_path / "data.txt")
    assert ok is False
    assert msg == "No members to save"


def test_saved_data_file_loads_back(roster, regular_member, premium_member, tmp_path):
    regular_member.activate()
    for _ in range(30):
        regular_member.mark_attendance()
    regular_member.upgrade_plan("Deluxe")
    premium_member.pay_due_amount(50000)
    premium_member.calculate_discount()

    path = tmp_path / "data.txt"
    assert roster.save_to_data_file(path)[0] is True

    restored = Roster()
    ok, _, count = restored.import_from_text(path)

    assert ok is True
    assert count == 2
    for original, loaded in zip(roster, restored):
        assert type(loaded) is type(original)
        assert loaded.details() == original.details()


def test_save_refuses_comma_in_text_field(roster, regular_member, tmp_path):
    regular_member.name = "Smith, Ann"
    path = tmp_path / "data.txt"

    ok, msg = roster.save_to_data_file(path)

    assert ok is False
    assert msg.startswith("Cannot save data file")
    assert not path.exists()
    assert len(roster) == 2
