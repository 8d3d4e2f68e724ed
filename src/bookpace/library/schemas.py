"""Pydantic schemas for book records.

``BookCreate`` and ``BookUpdate`` are the input boundary: they reject
negative page counts and malformed dates before a record ever reaches the
pace calculator. ``BookRecord`` is the stored shape and is taken as-is.
"""

from datetime import date
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from ..pacing.dates import end_of_current_month

DEFAULT_TOTAL_PAGES = 300
UNTITLED = "Untitled Book"


def generate_id() -> str:
    """Generate a UUID string."""
    return str(uuid4())


class BookRecord(BaseModel):
    """A tracked reading goal."""

    id: str = Field(default_factory=generate_id)
    title: str = ""
    total_pages: int
    current_page: int
    target_date: date

    model_config = {"frozen": True}

    @property
    def display_title(self) -> str:
        """Title for display, with a placeholder for untitled books."""
        return self.title or UNTITLED

    @property
    def is_not_started(self) -> bool:
        return self.current_page == 0


class BookCreate(BaseModel):
    """Schema for creating a book."""

    title: str = Field(default="", max_length=500)
    total_pages: int = Field(default=DEFAULT_TOTAL_PAGES, ge=0)
    current_page: int = Field(default=0, ge=0)
    target_date: date = Field(default_factory=end_of_current_month)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: Optional[str]) -> str:
        """Trim surrounding whitespace; None becomes empty."""
        return str(v).strip() if v is not None else ""


class BookUpdate(BaseModel):
    """Schema for updating a book. Only set fields are applied."""

    title: Optional[str] = Field(None, max_length=500)
    total_pages: Optional[int] = Field(None, ge=0)
    current_page: Optional[int] = Field(None, ge=0)
    target_date: Optional[date] = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: Optional[str]) -> Optional[str]:
        return str(v).strip() if v is not None else None
