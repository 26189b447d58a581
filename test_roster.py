import logging

import pytest

from catalog import Catalog
from exceptions import (
    DuplicateIdError,
    HasActiveBorrowsError,
    InWaitlistError,
    MemberNotFoundError,
)
from ledger import Ledger
from library_calendar import Date
from models import Member, MemberType
from roster import Roster


@pytest.fixture
def roster():
    r = Roster()
    r.register(1, "Apurv", MemberType.STUDENT)
    r.register(2, "Alex", MemberType.FACULTY)
    return r


def test_register_member_success(roster):
    member = roster.register(3, "Sam", MemberType.FACULTY)
    assert roster.find(3) is member
    assert member.borrowed_count == 0
    assert member.type is MemberType.FACULTY


def test_register_member_duplicate_raises(roster):
    with pytest.raises(DuplicateIdError):
        roster.register(1, "Duplicate Name")
    assert roster.get(1).name == "Apurv"


@pytest.mark.parametrize(
    "given, expected",
    [
        ("faculty", MemberType.FACULTY),
        ("Student", MemberType.STUDENT),
        (2, MemberType.FACULTY),
        (1, MemberType.STUDENT),
    ],
)
def test_register_member_type_codes(roster, given, expected):
    assert roster.register(3, "Sam", given).type is expected


@pytest.mark.parametrize("given", ["Visitor", 9, None])
def test_register_invalid_type_defaults_to_student(roster, given, caplog):
    with caplog.at_level(logging.WARNING, logger="library.roster"):
        member = roster.register(3, "Sam", given)
    assert member.type is MemberType.STUDENT
    assert "Invalid member type" in caplog.text


def test_register_bool_id_raises(roster):
    with pytest.raises(ValueError):
        roster.register(True, "Sam")
    assert len(roster) == 2


def test_register_bool_type_defaults_to_student(roster):
    assert roster.register(3, "Sam", True).type is MemberType.STUDENT
    assert roster.register(4, "Dana", False).type is MemberType.STUDENT


def test_member_without_type_still_serializes():
    assert Member(9, "Odd", type=None).to_dict() == {
        "id": 9, "name": "Odd", "type": None, "borrowed_count": 0,
    }


def test_max_books_allowed(roster):
    assert roster.max_books_allowed(roster.get(1)) == 3
    assert roster.max_books_allowed(roster.get(2)) == 5
    assert roster.max_books_allowed(Member(9, "Odd", type=None)) == 0


def test_list_keeps_registration_order(roster):
    roster.register(0, "Zero")
    assert [m.id for m in roster.list()] == [1, 2, 0]


def test_delete_member_success(roster):
    removed = roster.delete(1, Ledger(), Catalog())
    assert removed.id == 1
    assert roster.find(1) is None


def test_delete_missing_member_raises(roster):
    with pytest.raises(MemberNotFoundError):
        roster.delete(99, Ledger(), Catalog())


def test_delete_member_with_active_borrow_raises(roster):
    ledger = Ledger()
    ledger.open_transaction(5, 1, Date(1, 1, 2025), Date(15, 1, 2025))
    with pytest.raises(HasActiveBorrowsError):
        roster.delete(1, ledger, Catalog())
    assert 1 in roster


def test_delete_member_in_waitlist_raises(roster):
    catalog = Catalog()
    catalog.add(5, "Clean Code", "Robert C. Martin", 1)
    catalog.get(5).waitlist.append(2)
    with pytest.raises(InWaitlistError):
        roster.delete(2, Ledger(), catalog)
    assert 2 in roster
