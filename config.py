from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP


# Lending rules
MAX_BORROW_DAYS = 14
FINE_PER_DAY = Decimal("5.00")
MAX_FINE = Decimal("200.00")

MAX_BOOKS_STUDENT = 3
MAX_BOOKS_FACULTY = 5

MONEY_Q = Decimal("0.01")

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def money(x: Decimal) -> Decimal:
    return x.quantize(MONEY_Q, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class LendingPolicy:
    """
    Tunable lending rules.

    Attributes:
        max_borrow_days (int): Loan length; due date is borrow date + this.
        fine_per_day (Decimal): Fine charged per day past the due date.
        max_fine (Decimal): Cap on the fine for a single transaction.
        max_books_student (int): Concurrent loan limit for students.
        max_books_faculty (int): Concurrent loan limit for faculty.
    """
    max_borrow_days: int = MAX_BORROW_DAYS
    fine_per_day: Decimal = FINE_PER_DAY
    max_fine: Decimal = MAX_FINE
    max_books_student: int = MAX_BOOKS_STUDENT
    max_books_faculty: int = MAX_BOOKS_FACULTY


DEFAULT_POLICY = LendingPolicy()


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Attaches a stream handler to the "library" logger once and sets its level.

    Child loggers (library.catalog, library.engine, ...) propagate here.
    """
    logger = logging.getLogger("library")
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
