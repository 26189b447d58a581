import pytest

from catalog import Catalog
from exceptions import (
    ActiveTransactionsExistError,
    BookNotFoundError,
    BooksOnLoanError,
    DuplicateIdError,
    WaitlistNotEmptyError,
)
from ledger import Ledger
from library_calendar import Date


@pytest.fixture
def catalog():
    c = Catalog()
    c.add(1, "Clean Code", "Robert C. Martin", 2)
    c.add(2, "Design Patterns", "GoF", 1)
    return c


def test_add_book_success(catalog):
    book = catalog.add(3, "Refactoring", "Martin Fowler", 4)
    assert catalog.find(3) is book
    assert book.total_copies == 4
    assert book.available_copies == 4
    assert not book.has_waitlist


@pytest.mark.parametrize("copies", [0, -3])
def test_add_book_clamps_copies_to_one(catalog, copies):
    book = catalog.add(3, "Refactoring", "Martin Fowler", copies)
    assert book.total_copies == 1
    assert book.available_copies == 1


def test_add_book_duplicate_raises(catalog):
    with pytest.raises(DuplicateIdError):
        catalog.add(1, "Duplicate", "Someone", 1)
    assert catalog.get(1).title == "Clean Code"


def test_add_book_non_int_id_raises(catalog):
    with pytest.raises(ValueError):
        catalog.add("x", "Bad", "Someone", 1)


@pytest.mark.parametrize("copies", [None, "x", 2.7, True])
def test_add_book_non_int_copies_raises(catalog, copies):
    with pytest.raises(ValueError):
        catalog.add(3, "Refactoring", "Martin Fowler", copies)
    assert catalog.find(3) is None


def test_add_book_bool_id_raises(catalog):
    with pytest.raises(ValueError):
        catalog.add(True, "Bad", "Someone", 1)
    assert len(catalog) == 2


def test_find_and_get(catalog):
    assert catalog.find(99) is None
    with pytest.raises(BookNotFoundError):
        catalog.get(99)


def test_list_books(catalog):
    assert [b.id for b in catalog.list()] == [1, 2]
    assert len(catalog) == 2
    assert 1 in catalog


def test_remove_book_success(catalog):
    removed = catalog.remove(2, Ledger())
    assert removed.id == 2
    assert catalog.find(2) is None


def test_remove_missing_book_raises(catalog):
    with pytest.raises(BookNotFoundError):
        catalog.remove(99, Ledger())


def test_remove_book_with_copies_out_raises(catalog):
    catalog.get(1).available_copies = 1
    with pytest.raises(BooksOnLoanError):
        catalog.remove(1, Ledger())
    assert 1 in catalog


def test_remove_book_with_waitlist_raises(catalog):
    catalog.get(2).waitlist.append(7)
    with pytest.raises(WaitlistNotEmptyError):
        catalog.remove(2, Ledger())
    assert 2 in catalog


def test_remove_book_with_active_transaction_raises(catalog):
    ledger = Ledger()
    ledger.open_transaction(2, 7, Date(1, 1, 2025), Date(15, 1, 2025))
    with pytest.raises(ActiveTransactionsExistError):
        catalog.remove(2, ledger)
    assert 2 in catalog


def test_is_member_waitlisted(catalog):
    assert catalog.is_member_waitlisted(7) is False
    catalog.get(1).waitlist.append(7)
    assert catalog.is_member_waitlisted(7) is True
