"""Unit tests for domain exceptions."""

from src.core.exceptions import (
    CategoryInUseError,
    CategoryNotFoundError,
    CategoryReorderError,
    ExchangeRateFetchError,
    GoPartsError,
    NotFoundError,
    QuoteAlreadyConvertedError,
    QuoteError,
    StorageError,
    ValidationError,
)


class TestGoPartsError:
    """Tests for base GoPartsError exception."""

    def test_basic_initialization(self):
        error = GoPartsError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.code == "GoPartsError"
        assert error.details == {}

    def test_to_dict(self):
        error = GoPartsError("Test error", code="TEST_CODE", details={"extra": "info"})
        assert error.to_dict() == {
            "error": "TEST_CODE",
            "message": "Test error",
            "details": {"extra": "info"},
        }


class TestDomainErrors:
    def test_not_found_hierarchy(self):
        error = CategoryNotFoundError(4)
        assert isinstance(error, NotFoundError)
        assert isinstance(error, StorageError)
        assert error.code == "CATEGORY_NOT_FOUND"
        assert error.details == {"category_id": 4}

    def test_category_in_use_mentions_count(self):
        error = CategoryInUseError(2, 5)
        assert "5 parts" in error.message
        assert error.details["part_count"] == 5

    def test_reorder_error_carries_current_order(self):
        error = CategoryReorderError("boom", [3, 1, 2])
        assert error.details["current_order"] == [3, 1, 2]

    def test_already_converted(self):
        error = QuoteAlreadyConvertedError(9, "ORD-2026-000001")
        assert isinstance(error, QuoteError)
        assert "ORD-2026-000001" in error.message

    def test_validation_error_truncates_value(self):
        error = ValidationError("notes", "too long", "x" * 500)
        assert len(error.details["value"]) == 100
        assert error.code == "VALIDATION_ERROR"

    def test_fetch_error(self):
        error = ExchangeRateFetchError("frankfurter", "HTTP 503")
        assert error.details == {"provider": "frankfurter", "reason": "HTTP 503"}
