"""Member record model for Fitness Club Manager.

Two concrete membership kinds share the GymMember base:
- RegularMember: plan tiers, upgrade eligibility, removal reason
- PremiumMember: personal trainer, payment accumulation, discount

Lifecycle methods never print. They return (success, message) tuples so the
caller decides how to surface the outcome.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from datetime import date

import config


def normalize_plan(plan: str | None) -> str | None:
    """Return the canonical plan name for *plan* (case-insensitive), or None."""

    key = (plan or "").strip().lower()
    for name in config.PLAN_PRICES:
        if name.lower() == key:
            return name
    return None


def plan_price(plan: str | None) -> float:
    """Return the price of a plan. Unknown plans are priced as the default plan."""

    name = normalize_plan(plan) or config.DEFAULT_PLAN
    return config.PLAN_PRICES[name]


def plan_tier(plan: str | None) -> int:
    """Return the tier index of a plan (0 = lowest), or -1 if unknown."""

    name = normalize_plan(plan)
    if name is None:
        return -1
    return list(config.PLAN_PRICES).index(name)


class GymMember(ABC):
    """Shared attributes and lifecycle of every club member."""

    member_type: str = ""
    file_tag: str = ""

    def __init__(
        self,
        member_id: str,
        name: str,
        phone_number: str,
        email: str,
        gender: str,
        date_of_birth: date,
        membership_start_date: date,
    ) -> None:
        self.id: str = str(member_id).strip()
        self.name = name
        self.phone_number = phone_number
        self.email = email
        self.gender = gender
        self.date_of_birth = date_of_birth
        self.membership_start_date = membership_start_date

        self.attendance_count: int = 0
        self.loyalty_points: int = 0
        self.active_status: bool = False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r} name={self.name!r}>"

    # ------------------------------
    # Lifecycle
    # ------------------------------

    def activate(self) -> tuple[bool, str]:
        self.active_status = True
        return True, f"Membership activated for {self.name}"

    def deactivate(self) -> tuple[bool, str]:
        if not self.active_status:
            return False, f"Membership is already inactive for {self.name}"
        self.active_status = False
        return True, f"Membership deactivated for {self.name}"

    @abstractmethod
    def mark_attendance(self) -> tuple[bool, str]:
        """Record one visit. Inactive members are refused without changes."""

    def reset(self) -> tuple[bool, str]:
        """Zero the counters and deactivate. Common step of every revert."""

        self.attendance_count = 0
        self.loyalty_points = 0
        self.active_status = False
        return True, f"Member details reset for {self.name}"

    def _record_visit(self, points: int) -> tuple[bool, str]:
        if not self.active_status:
            return False, f"Cannot mark attendance. Membership is not active for {self.name}"
        self.attendance_count += 1
        self.loyalty_points += points
        return True, f"Attendance marked for {self.name}. Total attendance: {self.attendance_count}"

    # ------------------------------
    # Display
    # ------------------------------

    @property
    def status_text(self) -> str:
        return "Active" if self.active_status else "Inactive"

    def details(self) -> list[tuple[str, str]]:
        """Return (label, value) pairs describing the member."""

        return [
            ("Member ID", self.id),
            ("Name", self.name),
            ("Phone Number", self.phone_number),
            ("Email", self.email),
            ("Gender", self.gender),
            ("Date of Birth", self.date_of_birth.strftime(config.DATE_FORMAT)),
            ("Membership Start Date", self.membership_start_date.strftime(config.DATE_FORMAT)),
            ("Attendance Count", str(self.attendance_count)),
            ("Loyalty Points", str(self.loyalty_points)),
            ("Active Status", self.status_text),
            ("Member Type", self.member_type),
        ]


class RegularMember(GymMember):
    """Member on a Basic/Standard/Deluxe plan."""

    member_type = "Regular"
    file_tag = "REGULAR"

    def __init__(
        self,
        member_id: str,
        name: str,
        phone_number: str,
        email: str,
        gender: str,
        date_of_birth: date,
        membership_start_date: date,
        membership_plan: str,
        referral_source: str,
    ) -> None:
        super().__init__(member_id, name, phone_number, email, gender, date_of_birth, membership_start_date)
        self.referral_source = referral_source
        self.eligible_for_upgrade: bool = False
        self.removal_reason: str = ""
        self.membership_plan: str = config.DEFAULT_PLAN
        self.price: float = config.PLAN_PRICES[config.DEFAULT_PLAN]
        self.set_plan(membership_plan)

    def set_plan(self, plan: str) -> None:
        """Assign a plan and its price. Unknown plans fall back to the default plan."""

        self.membership_plan = normalize_plan(plan) or config.DEFAULT_PLAN
        self.price = config.PLAN_PRICES[self.membership_plan]

    def mark_attendance(self) -> tuple[bool, str]:
        ok, msg = self._record_visit(config.REGULAR_LOYALTY_POINTS)
        if ok and self.attendance_count >= config.ATTENDANCE_UPGRADE_LIMIT:
            self.eligible_for_upgrade = True
            msg = f"{msg}. {self.name} has reached the attendance limit and is eligible for an upgrade."
        return ok, msg

    def upgrade_plan(self, new_plan: str) -> tuple[bool, str]:
        """Move to a strictly higher plan tier.

        Same-plan, downgrade and unknown-plan requests are rejected and leave
        the member unchanged.
        """

        current = plan_tier(self.membership_plan)
        target = plan_tier(new_plan)
        if target < 0:
            return False, f"Unknown membership plan: {new_plan}"
        if target <= current:
            return False, "Invalid upgrade path. Cannot downgrade or upgrade to the same plan."

        self.set_plan(new_plan)
        return True, f"{self.name}'s plan upgraded to {self.membership_plan}"

    def revert(self, reason: str) -> tuple[bool, str]:
        self.removal_reason = reason
        self.reset()
        return True, f"Regular member reverted. Reason: {reason}"

    def details(self) -> list[tuple[str, str]]:
        rows = super().details()
        rows += [
            ("Membership Plan", self.membership_plan),
            ("Price", f"{self.price:.2f}"),
            ("Referral Source", self.referral_source),
            ("Eligible for Upgrade", "Yes" if self.eligible_for_upgrade else "No"),
        ]
        if self.removal_reason:
            rows.append(("Removal Reason", self.removal_reason))
        return rows


class PremiumMember(GymMember):
    """Member with a personal trainer and a fixed premium charge."""

    member_type = "Premium"
    file_tag = "PREMIUM"

    charge: float = config.PREMIUM_CHARGE
    discount_rate: float = config.PREMIUM_DISCOUNT_RATE

    def __init__(
        self,
        member_id: str,
        name: str,
        phone_number: str,
        email: str,
        gender: str,
        date_of_birth: date,
        membership_start_date: date,
        personal_trainer: str,
    ) -> None:
        super().__init__(member_id, name, phone_number, email, gender, date_of_birth, membership_start_date)
        self.personal_trainer = personal_trainer
        self.payment_complete: bool = False
        self.paid_amount: float = 0.0
        self.discount_amount: float = 0.0

    @property
    def remaining_amount(self) -> float:
        return self.charge - self.paid_amount

    @property
    def final_amount(self) -> float:
        return self.charge - self.discount_amount

    def set_paid_amount(self, amount: float) -> None:
        """Assign the accumulated payment directly (bulk load)."""

        self.paid_amount = float(amount)
        if self.paid_amount >= self.charge:
            self.payment_complete = True

    def mark_attendance(self) -> tuple[bool, str]:
        return self._record_visit(config.PREMIUM_LOYALTY_POINTS)

    def pay_due_amount(self, amount: float) -> tuple[bool, str]:
        """Accept a payment towards the premium charge.

        Overpayments are clamped to the remaining balance and still count as
        accepted.
        """

        if not math.isfinite(amount) or amount <= 0:
            return False, "Invalid payment amount. Amount must be greater than 0."
        if self.payment_complete:
            return False, f"Payment is already complete for {self.name}"

        notes = []
        remaining = self.remaining_amount
        if amount > remaining:
            notes.append(f"Payment amount exceeds the remaining due. Adjusting to {remaining:.2f}.")
            amount = remaining

        self.paid_amount += amount

        if self.paid_amount >= self.charge:
            self.payment_complete = True
            notes.append(f"Payment completed for {self.name}")
        else:
            notes.append(f"Payment of {amount:.2f} received. Remaining due: {self.remaining_amount:.2f}")
        return True, " ".join(notes)

    def calculate_discount(self) -> tuple[bool, str, float]:
        if not self.payment_complete:
            return False, f"Cannot apply discount. Payment is not complete for {self.name}", 0.0
        self.discount_amount = self.charge * self.discount_rate
        return True, f"Discount of {self.discount_amount:.2f} applied for {self.name}", self.discount_amount

    def revert(self) -> tuple[bool, str]:
        self.reset()
        self.payment_complete = False
        self.paid_amount = 0.0
        self.discount_amount = 0.0
        return True, f"Premium member reverted for {self.name}"

    def details(self) -> list[tuple[str, str]]:
        rows = super().details()
        rows += [
            ("Premium Charge", f"{self.charge:.2f}"),
            ("Personal Trainer", self.personal_trainer),
            ("Payment Status", "Complete" if self.payment_complete else "Incomplete"),
            ("Paid Amount", f"{self.paid_amount:.2f}"),
            ("Remaining Amount", f"{self.remaining_amount:.2f}"),
        ]
        if self.discount_amount > 0:
            rows += [
                ("Discount Amount", f"{self.discount_amount:.2f}"),
                ("Final Amount After Discount", f"{self.final_amount:.2f}"),
            ]
        return rows
