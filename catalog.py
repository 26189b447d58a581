from __future__ import annotations

import logging
from typing import Dict, List, Optional

from exceptions import (
    ActiveTransactionsExistError,
    BookNotFoundError,
    BooksOnLoanError,
    DuplicateIdError,
    WaitlistNotEmptyError,
)
from ledger import Ledger
from models import Book


logger = logging.getLogger("library.catalog")


class Catalog:
    """
    Owns every Book, keyed by id.
    """

    def __init__(self) -> None:
        self.books: Dict[int, Book] = {}

    def find(self, book_id: int) -> Optional[Book]:
        return self.books.get(book_id)

    def get(self, book_id: int) -> Book:
        """
        Retrieves a book by id or raises BookNotFoundError.
        """
        if book_id not in self.books:
            raise BookNotFoundError(f"Book not found: id={book_id}")
        return self.books[book_id]

    def add(self, book_id: int, title: str, author: str, total_copies: int) -> Book:
        """
        Adds a new title with all of its copies on the shelf.

        total_copies below 1 is raised to 1.

        Raises:
            DuplicateIdError: If a book with the same id already exists.
            ValueError: If book_id or total_copies is not an int.
        """
        logger.info("add called | id=%s title=%s", book_id, title)

        if not isinstance(book_id, int) or isinstance(book_id, bool):
            raise ValueError("book id must be an int")
        if not isinstance(total_copies, int) or isinstance(total_copies, bool):
            raise ValueError("total copies must be an int")
        if book_id in self.books:
            raise DuplicateIdError(f"Book already exists: id={book_id}")

        copies = max(total_copies, 1)
        book = Book(
            id=book_id,
            title=title,
            author=author,
            total_copies=copies,
            available_copies=copies,
        )
        self.books[book_id] = book
        logger.info("Book added successfully | id=%s copies=%d", book_id, copies)
        return book

    def remove(self, book_id: int, ledger: Ledger) -> Book:
        """
        Removes a book that has every copy in, nobody waiting and no open loans.

        Raises:
            BookNotFoundError
            BooksOnLoanError
            WaitlistNotEmptyError
            ActiveTransactionsExistError
        """
        logger.info("remove called | id=%s", book_id)

        book = self.get(book_id)
        if book.available_copies != book.total_copies:
            raise BooksOnLoanError(
                f"Book {book_id} has {book.total_copies - book.available_copies} copies out."
            )
        if book.has_waitlist:
            raise WaitlistNotEmptyError(
                f"Book {book_id} has {len(book.waitlist)} members waiting."
            )
        if ledger.has_active_for_book(book_id):
            raise ActiveTransactionsExistError(f"Book {book_id} has active transactions.")

        del self.books[book_id]
        logger.info("Book removed successfully | id=%s", book_id)
        return book

    def list(self) -> List[Book]:
        return list(self.books.values())

    def is_member_waitlisted(self, member_id: int) -> bool:
        return any(member_id in b.waitlist for b in self.books.values())

    def __len__(self) -> int:
        return len(self.books)

    def __contains__(self, book_id: int) -> bool:
        return book_id in self.books
