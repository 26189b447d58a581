class LibraryError(Exception):
    """Base exception for library lending errors."""

    kind = "LibraryError"


class DuplicateIdError(LibraryError):
    """Trying to add a book or register a member whose id already exists."""

    kind = "DuplicateId"


class NotFoundError(LibraryError):
    """Requested book or member id does not exist."""

    kind = "NotFound"


class BookNotFoundError(NotFoundError):
    """Requested book id does not exist in the catalog."""


class MemberNotFoundError(NotFoundError):
    """Requested member id does not exist in the roster."""


class BooksOnLoanError(LibraryError):
    """Some copies of the book are still out."""

    kind = "BooksOnLoan"


class WaitlistNotEmptyError(LibraryError):
    """Members are still queued for the book."""

    kind = "WaitlistNotEmpty"


class ActiveTransactionsExistError(LibraryError):
    """Open transactions still reference the book."""

    kind = "ActiveTransactionsExist"


class HasActiveBorrowsError(LibraryError):
    """The member still has books out."""

    kind = "HasActiveBorrows"


class InWaitlistError(LibraryError):
    """The member is queued on at least one book."""

    kind = "InWaitlist"


class BorrowLimitReachedError(LibraryError):
    """The member already holds the maximum number of books for their type."""

    kind = "BorrowLimitReached"


class AlreadyBorrowedError(LibraryError):
    """The member already has an open loan for this book."""

    kind = "AlreadyBorrowed"


class NoActiveTransactionError(LibraryError):
    """No open loan exists for the member and book."""

    kind = "NoActiveTransaction"
