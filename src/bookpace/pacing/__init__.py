"""Reading pace calculations and calendar helpers."""

from .calculator import (
    BookStats,
    PaceStatus,
    ReadingPlan,
    build_plan,
    calculate_book_stats,
    calculate_target_page,
    clamp_percent,
)
from .dates import (
    days_remaining,
    end_of_current_month,
    is_past,
    parse_date,
    today,
)

__all__ = [
    "BookStats",
    "PaceStatus",
    "ReadingPlan",
    "build_plan",
    "calculate_book_stats",
    "calculate_target_page",
    "clamp_percent",
    "days_remaining",
    "end_of_current_month",
    "is_past",
    "parse_date",
    "today",
]
