"""In-memory members roster for Fitness Club Manager.

The roster is created once at startup and handed to whatever needs it (main
window, tests). It keeps registration order and guarantees unique member ids.

File operations:
- export_to_text: bordered report for people (not loadable)
- save_to_data_file: tagged data lines (loadable)
- import_from_text: replace the roster with the records of a data file
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator

from member_files import format_member_line, format_report, parse_member_line
from members import GymMember, PremiumMember, RegularMember


class Roster:
    """Ordered collection of members keyed by unique id.

    The constructor raises ValueError when *members* repeats an id.
    """

    def __init__(self, members: list[GymMember] | None = None) -> None:
        self._members: list[GymMember] = []
        for m in members or []:
            ok, msg = self.add(m)
            if not ok:
                raise ValueError(msg)

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[GymMember]:
        return iter(list(self._members))

    def __contains__(self, member_id: object) -> bool:
        return self.find_by_id(str(member_id)) is not None

    @property
    def members(self) -> list[GymMember]:
        """Return a copy of the members list in registration order."""

        return list(self._members)

    def clear(self) -> None:
        self._members.clear()

    # ------------------------------
    # Member Methods
    # ------------------------------

    def add(self, member: GymMember) -> tuple[bool, str]:
        """Register a member. Duplicate ids are rejected."""

        if self.find_by_id(member.id) is not None:
            return False, f"Member ID already exists: {member.id}"
        self._members.append(member)
        return True, f"{member.member_type} member added: {member.name}"

    def find_by_id(self, member_id: str) -> GymMember | None:
        """Return the member with *member_id*, or None."""

        key = str(member_id).strip()
        for m in self._members:
            if m.id == key:
                return m
        return None

    def get_stats(self) -> dict[str, Any]:
        """Return quick totals for the status bar."""

        regular = [m for m in self._members if isinstance(m, RegularMember)]
        premium = [m for m in self._members if isinstance(m, PremiumMember)]
        active = sum(1 for m in self._members if m.active_status)
        return {
            "total": len(self._members),
            "active": active,
            "inactive": len(self._members) - active,
            "regular": len(regular),
            "premium": len(premium),
            "premium_collected": sum(m.paid_amount for m in premium),
        }

    # ------------------------------
    # File Methods
    # ------------------------------

    def export_to_text(self, path: str | Path) -> tuple[bool, str]:
        """Write the bordered members report to *path*."""

        if not self._members:
            return False, "No members to export"

        try:
            with open(path, "w", encoding="utf-8") as f:
                for line in format_report(self._members):
                    f.write(line + "\n")
        except OSError as e:
            return False, f"Error saving to file: {e}"
        return True, f"{len(self._members)} members saved to file successfully"

    def save_to_data_file(self, path: str | Path) -> tuple[bool, str]:
        """Write one loadable data line per member to *path*."""

        if not self._members:
            return False, "No members to save"

        try:
            lines = [format_member_line(m) for m in self._members]
        except ValueError as e:
            return False, f"Cannot save data file: {e}"

        try:
            with open(path, "w", encoding="utf-8") as f:
                for line in lines:
                    f.write(line + "\n")
        except OSError as e:
            return False, f"Error saving data file: {e}"
        return True, f"{len(self._members)} members saved to data file"

    def import_from_text(self, path: str | Path) -> tuple[bool, str, int]:
        """Replace the roster with the records found in *path*.

        Unknown or short lines are skipped. A malformed number or date aborts
        the whole load and leaves the roster empty.

        Returns: (success, message, loaded_count)
        """

        try:
            f = open(path, "r", encoding="utf-8")
        except OSError as e:
            return False, f"Error reading file: {e}", 0

        with f:
            self.clear()
            loaded: list[GymMember] = []
            try:
                for line in f:
                    member = parse_member_line(line)
                    if member is not None:
                        loaded.append(member)
            except (OSError, ValueError) as e:
                return False, f"Error reading file: {e}", 0

        for m in loaded:
            # Later duplicates of an id are dropped so ids stay unique.
            self.add(m)
        count = len(self._members)
        return True, f"{count} members loaded successfully", count
