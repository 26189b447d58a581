from __future__ import annotations

import argparse
import logging
from typing import Callable, Iterable, List

from catalog import Catalog
from config import DEFAULT_POLICY, LendingPolicy, configure_logging
from exceptions import BorrowLimitReachedError, LibraryError
from ledger import Ledger
from lending_engine import LendingEngine
from library_calendar import Date, add_days, today
from models import MemberType, Transaction
from roster import Roster


logger = logging.getLogger("library")


class LibrarySystem:
    """
    Owns one catalog, roster and ledger and the engine that drives them.

    Construct one per process (or per test) instead of sharing module state.
    """

    def __init__(
        self,
        policy: LendingPolicy = DEFAULT_POLICY,
        clock: Callable[[], Date] = today,
    ) -> None:
        self.policy = policy
        self.catalog = Catalog()
        self.roster = Roster(policy)
        self.ledger = Ledger(policy)
        self.engine = LendingEngine(self.catalog, self.roster, self.ledger, clock=clock)

    def snapshot(self) -> dict:
        """
        Plain-data view of the whole state, for reporting or future storage.
        """
        return {
            "books": [b.to_dict() for b in self.catalog.list()],
            "members": [m.to_dict() for m in self.roster.list()],
            "transactions": [t.to_dict() for t in self.ledger.all()],
        }


def format_transactions(transactions: Iterable[Transaction]) -> str:
    """
    One line per transaction, in the layout the menu front end prints.
    """
    lines: List[str] = []
    for t in transactions:
        line = (
            f"TID: {t.id} | BookID: {t.book_id} | MemberID: {t.member_id}"
            f" | Borrow: {t.borrow_date} | Due: {t.due_date}"
        )
        if t.is_returned:
            line += f" | Returned: {t.return_date} | Fine: Rs {t.fine:.2f}"
        else:
            line += " | Not yet returned"
        lines.append(line)
    return "\n".join(lines)


class _DemoClock:
    def __init__(self, start: Date) -> None:
        self.current = start

    def __call__(self) -> Date:
        return self.current

    def advance(self, days: int) -> None:
        self.current = add_days(self.current, days)


# Main Program
def main() -> None:
    """
    Scripted walk through the lending engine.

    Demonstrated scenarios:
        - adding books and registering members
        - issuing copies and hitting the student borrow limit
        - waitlisting when no copy is on the shelf
        - a late return with a fine, followed by waitlist promotion
        - removal guards
        - active, overdue and per-member transaction listings
    """
    parser = argparse.ArgumentParser(description="Run a scripted library lending demo.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, ...)")
    args = parser.parse_args()

    configure_logging(getattr(logging, args.log_level.upper(), logging.INFO))

    clock = _DemoClock(Date(1, 1, 2025))
    system = LibrarySystem(clock=clock)
    engine = system.engine

    print("\n=== Library Lending Demo ===\n")

    engine.add_book(101, "Clean Code", "Robert C. Martin", 1)
    engine.add_book(102, "Design Patterns", "GoF", 2)
    engine.add_book(103, "Refactoring", "Martin Fowler", 1)
    engine.add_book(104, "Effective Java", "Joshua Bloch", 1)

    engine.register_member(1, "Apurv", MemberType.STUDENT)
    engine.register_member(2, "Alex", MemberType.FACULTY)

    print("Member 1 borrows three books...")
    for book_id in (101, 102, 103):
        outcome = engine.borrow(1, book_id)
        print(f"  {book_id}: {outcome.status.value} due {outcome.transaction.due_date}")

    print("\nAttempting a 4th borrow for a student (should fail)...")
    try:
        engine.borrow(1, 104)
    except BorrowLimitReachedError as e:
        print("Expected violation:", e)

    print("\nMember 2 asks for book 101 (no copies left)...")
    outcome = engine.borrow(2, 101)
    print(f"  {outcome.status.value} at position {outcome.waitlist_position}")

    print("\nAttempting to remove book 101 while waitlisted/on loan...")
    try:
        engine.remove_book(101)
    except LibraryError as e:
        print(f"Expected {e.kind}:", e)

    clock.advance(20)
    print(f"\nOverdue as of {clock()}:")
    print(format_transactions(engine.overdue_transactions()))

    print("\nMember 1 returns book 101 six days late...")
    result = engine.return_book(1, 101)
    print(f"  Fine: Rs {result.fine:.2f}")
    if result.promotion is not None:
        print(f"  Waitlist: member {result.promotion.member_id} {result.promotion.status.value}")

    print("\nActive transactions:")
    print(format_transactions(engine.active_transactions()))

    print("\nHistory for member 1:")
    print(format_transactions(engine.member_history(1)))

    engine.remove_book(104)
    print("\nBook 104 removed.")

    print("\n=== Demo Completed ===\n")


if __name__ == "__main__":
    try:
        main()
    except LibraryError as e:
        logger.error("LibraryError bubbled to top-level | %s", e)
        raise
    except Exception as e:
        logger.exception("Unhandled fatal error | %s", e)
        raise
