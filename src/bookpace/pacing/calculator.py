"""Reading pace calculations.

Maps a book's length, progress and target date to a daily page quota.
All functions here are pure: they take the book and the evaluation day
and return fresh values, so results must be recomputed whenever the book
changes or the day rolls over.
"""

import math
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional, Protocol

from .dates import DateLike, days_remaining, is_past

HIGH_INTENSITY_PAGES_PER_DAY = 50


class PacedBook(Protocol):
    """Anything with the fields the calculator reads."""

    total_pages: int
    current_page: int
    target_date: date


class PaceStatus(str, Enum):
    """How a book stands against its deadline."""

    FINISHED = "finished"
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    ON_PLAN = "on_plan"


@dataclass(frozen=True)
class BookStats:
    """Pacing statistics for one book on one day."""

    pages_remaining: int
    days_remaining: int
    pages_per_day: int
    percent_complete: float  # not clamped, may exceed 100
    is_on_track: bool
    is_target_date_in_past: bool

    @property
    def status(self) -> PaceStatus:
        """Distinguish finished from overdue when the quota is zero."""
        if self.pages_remaining == 0:
            return PaceStatus.FINISHED
        if self.is_target_date_in_past:
            return PaceStatus.OVERDUE
        if self.days_remaining == 0:
            return PaceStatus.DUE_TODAY
        return PaceStatus.ON_PLAN

    @property
    def is_high_intensity(self) -> bool:
        return self.pages_per_day > HIGH_INTENSITY_PAGES_PER_DAY


@dataclass(frozen=True)
class ReadingPlan:
    """A book together with its stats and today's target page."""

    book: Any
    stats: BookStats
    target_page: int


def calculate_book_stats(book: PacedBook, today: Optional[DateLike] = None) -> BookStats:
    """Compute the pacing snapshot for a book.

    Args:
        book: Record with total_pages, current_page and target_date
        today: Evaluation day (default: the local calendar date)

    Returns:
        BookStats for that day. A past-due unfinished book gets a quota of
        0; check ``is_target_date_in_past`` to tell it from a finished one.
    """
    pages_remaining = max(0, book.total_pages - book.current_page)
    days_left = days_remaining(book.target_date, today)
    past_due = is_past(book.target_date, today)

    pages_per_day = 0
    if days_left > 0:
        pages_per_day = math.ceil(pages_remaining / days_left)
    elif pages_remaining > 0 and not past_due:
        # Due today: the whole remainder is today's quota
        pages_per_day = pages_remaining

    percent_complete = (
        book.current_page / book.total_pages * 100 if book.total_pages > 0 else 0.0
    )

    return BookStats(
        pages_remaining=pages_remaining,
        days_remaining=days_left,
        pages_per_day=pages_per_day,
        percent_complete=percent_complete,
        is_on_track=pages_remaining == 0,
        is_target_date_in_past=past_due,
    )


def calculate_target_page(book: PacedBook, stats: BookStats) -> int:
    """Page the reader should reach by the end of today."""
    return min(book.total_pages, book.current_page + stats.pages_per_day)


def build_plan(book: PacedBook, today: Optional[DateLike] = None) -> ReadingPlan:
    """Recompute stats and target page for a book.

    Call after every change to the book, and again whenever the day may
    have changed. Nothing is cached.
    """
    stats = calculate_book_stats(book, today)
    return ReadingPlan(book=book, stats=stats, target_page=calculate_target_page(book, stats))


def clamp_percent(value: float) -> float:
    """Clamp a percentage to [0, 100] for display."""
    return min(100.0, max(0.0, value))
