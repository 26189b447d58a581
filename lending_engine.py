from __future__ import annotations

import logging
from typing import Callable, List, Optional, Union

from catalog import Catalog
from config import LendingPolicy
from exceptions import (
    AlreadyBorrowedError,
    BorrowLimitReachedError,
    NoActiveTransactionError,
)
from ledger import Ledger
from library_calendar import Date, add_days, today
from models import (
    Book,
    BorrowOutcome,
    BorrowStatus,
    Member,
    MemberType,
    PromotionOutcome,
    PromotionStatus,
    ReturnOutcome,
    Transaction,
)
from roster import Roster


logger = logging.getLogger("library.engine")


class LendingEngine:
    """
    Applies the lending rules across the catalog, roster and ledger.

    Rules enforced:
        (1) Members borrow at most their type's limit (Student 3, Faculty 5)
        (2) Books are due max_borrow_days (14) after the borrow date
        (3) With no copy on the shelf the member joins the book's FIFO waitlist
        (4) Each return promotes at most one waitlisted member
        (5) A member may hold only one open loan per book

    Every operation checks all of its rules before it mutates anything, so a
    raised LibraryError leaves the state untouched.
    """

    def __init__(
        self,
        catalog: Catalog,
        roster: Roster,
        ledger: Ledger,
        clock: Callable[[], Date] = today,
    ) -> None:
        if roster.policy != ledger.policy:
            raise ValueError("roster and ledger must share one LendingPolicy")
        self.catalog = catalog
        self.roster = roster
        self.ledger = ledger
        self.clock = clock

    @property
    def policy(self) -> LendingPolicy:
        return self.ledger.policy

    # Catalog / roster maintenance
    def add_book(self, book_id: int, title: str, author: str, total_copies: int = 1) -> Book:
        return self.catalog.add(book_id, title, author, total_copies)

    def find_book(self, book_id: int) -> Optional[Book]:
        return self.catalog.find(book_id)

    def remove_book(self, book_id: int) -> Book:
        return self.catalog.remove(book_id, self.ledger)

    def list_books(self) -> List[Book]:
        return self.catalog.list()

    def register_member(
        self,
        member_id: int,
        name: str,
        member_type: Union[MemberType, str, int, None] = MemberType.STUDENT,
    ) -> Member:
        return self.roster.register(member_id, name, member_type)

    def find_member(self, member_id: int) -> Optional[Member]:
        return self.roster.find(member_id)

    def delete_member(self, member_id: int) -> Member:
        return self.roster.delete(member_id, self.ledger, self.catalog)

    def list_members(self) -> List[Member]:
        return self.roster.list()

    # Lending
    def borrow(self, member_id: int, book_id: int) -> BorrowOutcome:
        """
        Lends a copy of a book, or queues the member when none is on the shelf.

        Raises:
            MemberNotFoundError
            BookNotFoundError
            BorrowLimitReachedError
            AlreadyBorrowedError
        """
        logger.info("borrow called | member_id=%s book_id=%s", member_id, book_id)

        member = self.roster.get(member_id)
        book = self.catalog.get(book_id)

        limit = self.roster.max_books_allowed(member)
        if member.borrowed_count >= limit:
            raise BorrowLimitReachedError(
                f"Member {member_id} already has {member.borrowed_count} books (limit {limit})."
            )
        if self.ledger.find_active(book_id, member_id) is not None:
            raise AlreadyBorrowedError(
                f"Member {member_id} already has book {book_id} checked out."
            )

        if book.available_copies > 0:
            txn = self._issue(book, member)
            logger.info(
                "Borrow successful | member_id=%s book_id=%s due=%s",
                member_id, book_id, txn.due_date,
            )
            return BorrowOutcome(status=BorrowStatus.ISSUED, transaction=txn)

        # No limit check at enqueue time: it is re-checked on promotion.
        book.waitlist.append(member_id)
        position = len(book.waitlist)
        logger.info(
            "No copies available | member_id=%s book_id=%s waitlist_position=%d",
            member_id, book_id, position,
        )
        return BorrowOutcome(status=BorrowStatus.WAITLISTED, waitlist_position=position)

    def return_book(self, member_id: int, book_id: int) -> ReturnOutcome:
        """
        Closes the member's open loan of a book, charges any fine and hands
        the copy to the next waitlisted member.

        Raises:
            MemberNotFoundError
            BookNotFoundError
            NoActiveTransactionError
        """
        logger.info("return_book called | member_id=%s book_id=%s", member_id, book_id)

        member = self.roster.get(member_id)
        book = self.catalog.get(book_id)

        txn = self.ledger.find_active(book_id, member_id)
        if txn is None:
            raise NoActiveTransactionError(
                f"No active transaction for member_id={member_id}, book_id={book_id}"
            )

        self.ledger.close_transaction(txn, self.clock())
        book.available_copies = min(book.available_copies + 1, book.total_copies)
        member.borrowed_count = max(member.borrowed_count - 1, 0)
        logger.info(
            "Return successful | member_id=%s book_id=%s fine=%.2f",
            member_id, book_id, txn.fine,
        )

        promotion = self.auto_assign(book_id)
        return ReturnOutcome(transaction=txn, promotion=promotion)

    def auto_assign(self, book_id: int) -> Optional[PromotionOutcome]:
        """
        Offers one available copy to the member at the front of the waitlist.

        The front entry is always dequeued. A member who no longer exists,
        is at their limit, or already holds this book is dropped and the copy
        stays on the shelf; the next entry is not tried in the same call.

        Returns None when there is no copy or nobody is waiting.
        """
        book = self.catalog.get(book_id)
        if book.available_copies <= 0 or not book.has_waitlist:
            return None

        next_id = book.waitlist.popleft()
        member = self.roster.find(next_id)
        if member is None:
            logger.warning(
                "Waitlisted member not found | member_id=%s book_id=%s | skipping",
                next_id, book_id,
            )
            return PromotionOutcome(status=PromotionStatus.SKIPPED_MISSING, member_id=next_id)

        if (
            member.borrowed_count >= self.roster.max_books_allowed(member)
            or self.ledger.find_active(book_id, next_id) is not None
        ):
            logger.warning(
                "Waitlisted member not eligible | member_id=%s book_id=%s | skipping",
                next_id, book_id,
            )
            return PromotionOutcome(
                status=PromotionStatus.SKIPPED_INELIGIBLE, member_id=next_id
            )

        txn = self._issue(book, member)
        logger.info(
            "Book auto-assigned from waitlist | member_id=%s book_id=%s due=%s",
            next_id, book_id, txn.due_date,
        )
        return PromotionOutcome(
            status=PromotionStatus.PROMOTED, member_id=next_id, transaction=txn
        )

    # Reporting
    def active_transactions(self) -> List[Transaction]:
        return self.ledger.all_active()

    def overdue_transactions(self, as_of: Optional[Date] = None) -> List[Transaction]:
        if as_of is None:
            as_of = self.clock()
        return self.ledger.all_overdue(as_of)

    def member_history(self, member_id: int) -> List[Transaction]:
        """
        Returns every loan of a member, most recent first.

        Raises:
            MemberNotFoundError
        """
        self.roster.get(member_id)
        return self.ledger.all_for_member(member_id)

    # Internal Helpers
    def _issue(self, book: Book, member: Member) -> Transaction:
        borrow_date = self.clock()
        due_date = add_days(borrow_date, self.policy.max_borrow_days)
        book.available_copies -= 1
        member.borrowed_count += 1
        return self.ledger.open_transaction(book.id, member.id, borrow_date, due_date)
