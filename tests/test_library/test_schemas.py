"""Tests for book record schemas."""

from datetime import date

import pytest
from pydantic import ValidationError

from bookpace.library.schemas import BookCreate, BookRecord, BookUpdate
from bookpace.pacing.dates import end_of_current_month


class TestBookRecord:
    """Tests for BookRecord."""

    def test_id_assigned(self):
        a = BookRecord(total_pages=10, current_page=0, target_date=date(2024, 3, 31))
        b = BookRecord(total_pages=10, current_page=0, target_date=date(2024, 3, 31))
        assert a.id and b.id
        assert a.id != b.id

    def test_display_title_placeholder(self):
        book = BookRecord(total_pages=10, current_page=0, target_date=date(2024, 3, 31))
        assert book.display_title == "Untitled Book"

    def test_display_title(self):
        book = BookRecord(title="Dune", total_pages=10, current_page=0, target_date=date(2024, 3, 31))
        assert book.display_title == "Dune"

    def test_is_not_started(self):
        book = BookRecord(total_pages=10, current_page=0, target_date=date(2024, 3, 31))
        assert book.is_not_started is True

    def test_frozen(self):
        book = BookRecord(total_pages=10, current_page=0, target_date=date(2024, 3, 31))
        with pytest.raises(ValidationError):
            book.current_page = 5

    def test_json_round_trip(self):
        book = BookRecord(title="Dune", total_pages=688, current_page=12, target_date=date(2024, 3, 31))
        data = book.model_dump(mode="json")
        assert data["target_date"] == "2024-03-31"
        assert BookRecord.model_validate(data) == book


class TestBookCreate:
    """Tests for the create boundary."""

    def test_defaults(self):
        data = BookCreate()
        assert data.title == ""
        assert data.total_pages == 300
        assert data.current_page == 0
        assert data.target_date == end_of_current_month()

    def test_title_stripped(self):
        assert BookCreate(title="  Dune  ").title == "Dune"

    def test_parses_iso_date(self):
        assert BookCreate(target_date="2024-03-31").target_date == date(2024, 3, 31)

    def test_rejects_negative_pages(self):
        with pytest.raises(ValidationError):
            BookCreate(total_pages=-1)
        with pytest.raises(ValidationError):
            BookCreate(current_page=-1)

    def test_rejects_bad_date(self):
        with pytest.raises(ValidationError):
            BookCreate(target_date="someday")

    def test_rejects_non_numeric_pages(self):
        with pytest.raises(ValidationError):
            BookCreate(total_pages="lots")


class TestBookUpdate:
    """Tests for the update boundary."""

    def test_only_set_fields(self):
        update = BookUpdate(current_page=120)
        assert update.model_dump(exclude_unset=True) == {"current_page": 120}

    def test_rejects_negative(self):
        with pytest.raises(ValidationError):
            BookUpdate(current_page=-3)

    def test_title_none_kept(self):
        assert BookUpdate().title is None
