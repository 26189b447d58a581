from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Deque, Optional

from library_calendar import Date


# Domain Models
class MemberType(Enum):
    STUDENT = "Student"
    FACULTY = "Faculty"


class BorrowStatus(Enum):
    ISSUED = "ISSUED"
    WAITLISTED = "WAITLISTED"


class PromotionStatus(Enum):
    PROMOTED = "PROMOTED"
    SKIPPED_MISSING = "SKIPPED_MISSING"
    SKIPPED_INELIGIBLE = "SKIPPED_INELIGIBLE"


@dataclass
class Book:
    """
    Represents a catalogued title and its copies.

    Attributes:
        id (int): Unique book id.
        title (str): Book title.
        author (str): Author name.
        total_copies (int): Copies owned, at least 1.
        available_copies (int): Copies on the shelf, 0..total_copies.
        waitlist (Deque[int]): Member ids queued for a copy, front first.
    """
    id: int
    title: str
    author: str
    total_copies: int
    available_copies: int
    waitlist: Deque[int] = field(default_factory=deque)

    @property
    def has_waitlist(self) -> bool:
        return len(self.waitlist) > 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "total_copies": self.total_copies,
            "available_copies": self.available_copies,
            "waitlist": list(self.waitlist),
        }


@dataclass
class Member:
    """
    Represents a library member.

    Attributes:
        id (int): Unique member id.
        name (str): Member name.
        type (MemberType): Student or Faculty; decides the borrow limit.
        borrowed_count (int): Number of active loans.
    """
    id: int
    name: str
    type: MemberType = MemberType.STUDENT
    borrowed_count: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": getattr(self.type, "value", None),
            "borrowed_count": self.borrowed_count,
        }


@dataclass
class Transaction:
    """
    A single loan of one copy of a book to one member.

    Only the return-side fields (return_date, is_returned, fine) change,
    and only once, when the loan is closed.
    """
    id: int
    book_id: int
    member_id: int
    borrow_date: Date
    due_date: Date
    return_date: Optional[Date] = None
    is_returned: bool = False
    fine: Decimal = Decimal("0.00")

    def is_open(self) -> bool:
        return not self.is_returned

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "book_id": self.book_id,
            "member_id": self.member_id,
            "borrow_date": str(self.borrow_date),
            "due_date": str(self.due_date),
            "return_date": str(self.return_date) if self.return_date else None,
            "is_returned": self.is_returned,
            "fine": f"{self.fine:.2f}",
        }


# Operation outcomes
@dataclass(frozen=True)
class BorrowOutcome:
    status: BorrowStatus
    transaction: Optional[Transaction] = None
    waitlist_position: Optional[int] = None


@dataclass(frozen=True)
class PromotionOutcome:
    status: PromotionStatus
    member_id: int
    transaction: Optional[Transaction] = None


@dataclass(frozen=True)
class ReturnOutcome:
    transaction: Transaction
    promotion: Optional[PromotionOutcome] = None

    @property
    def fine(self) -> Decimal:
        return self.transaction.fine
