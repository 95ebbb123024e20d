from datetime import date

import pytest

from members import PremiumMember, RegularMember
from roster import Roster


@pytest.fixture
def regular_member():
    """A fresh Basic-plan regular member (inactive)."""
    return RegularMember(
        "1",
        "Ann",
        "5550001",
        "ann@gmail.com",
        "Female",
        date(2000, 1, 1),
        date(2024, 1, 1),
        membership_plan="Basic",
        referral_source="Friend",
    )


@pytest.fixture
def premium_member():
    """A fresh premium member with nothing paid (inactive)."""
    return PremiumMember(
        "2",
        "Bob",
        "5550002",
        "bob@gmail.com",
        "Male",
        date(1995, 6, 15),
        date(2024, 2, 1),
        personal_trainer="Sam",
    )


@pytest.fixture
def roster(regular_member, premium_member):
    """A roster holding one regular and one premium member."""
    r = Roster()
    r.add(regular_member)
    r.add(premium_member)
    return r
