from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional

from config import DEFAULT_POLICY, LendingPolicy, money
from library_calendar import Date, days_between
from models import Transaction


logger = logging.getLogger("library.ledger")


class Ledger:
    """
    Append-only history of loans.

    The ledger does not validate: the lending engine checks every rule
    before it opens or closes a transaction. Queries return the most
    recent transaction first.
    """

    def __init__(self, policy: LendingPolicy = DEFAULT_POLICY) -> None:
        self.policy = policy
        self._transactions: List[Transaction] = []
        self._next_id = 1

    def open_transaction(
        self,
        book_id: int,
        member_id: int,
        borrow_date: Date,
        due_date: Date,
    ) -> Transaction:
        txn = Transaction(
            id=self._next_id,
            book_id=book_id,
            member_id=member_id,
            borrow_date=borrow_date,
            due_date=due_date,
        )
        self._next_id += 1
        self._transactions.append(txn)
        logger.info(
            "Transaction opened | id=%d book_id=%s member_id=%s due=%s",
            txn.id, book_id, member_id, due_date,
        )
        return txn

    def find_active(self, book_id: int, member_id: int) -> Optional[Transaction]:
        for txn in reversed(self._transactions):
            if txn.is_open() and txn.book_id == book_id and txn.member_id == member_id:
                return txn
        return None

    def compute_fine(self, due_date: Date, return_date: Date) -> Decimal:
        """
        Fine for returning on `return_date` a loan due on `due_date`.

        The due date itself is not late. Each later day costs fine_per_day,
        up to max_fine.
        """
        late_days = days_between(due_date, return_date)
        if late_days <= 0:
            return Decimal("0.00")
        return money(min(late_days * self.policy.fine_per_day, self.policy.max_fine))

    def close_transaction(self, txn: Transaction, return_date: Date) -> Transaction:
        txn.return_date = return_date
        txn.is_returned = True
        txn.fine = self.compute_fine(txn.due_date, return_date)
        logger.info(
            "Transaction closed | id=%d returned=%s fine=%.2f",
            txn.id, return_date, txn.fine,
        )
        return txn

    # Queries
    def all(self) -> List[Transaction]:
        return list(reversed(self._transactions))

    def all_active(self) -> List[Transaction]:
        return [t for t in self.all() if t.is_open()]

    def all_for_member(self, member_id: int) -> List[Transaction]:
        return [t for t in self.all() if t.member_id == member_id]

    def all_overdue(self, as_of: Date) -> List[Transaction]:
        return [t for t in self.all_active() if days_between(t.due_date, as_of) > 0]

    def has_active_for_book(self, book_id: int) -> bool:
        return any(t.is_open() and t.book_id == book_id for t in self._transactions)

    def has_active_for_member(self, member_id: int) -> bool:
        return any(t.is_open() and t.member_id == member_id for t in self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)
