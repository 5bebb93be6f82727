"""
GoParts error hierarchy.

Each error carries a stable ``code`` and a ``details`` dict; the API layer
maps the base classes to HTTP statuses and serializes both fields as-is.
"""

from typing import Any


class GoPartsError(Exception):
    """Root of every error the service raises on purpose."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "message": self.message, "details": self.details}


class StorageError(GoPartsError):
    """Persistence failures, and missing rows via NotFoundError."""


class NotFoundError(StorageError):
    """A referenced row does not exist."""

    def __init__(self, entity: str, entity_id: Any, code: str):
        super().__init__(
            f"{entity} not found: {entity_id}",
            code=code,
            details={f"{entity.lower()}_id": entity_id},
        )


class DatabaseError(StorageError):
    """SQLite rejected a statement for a reason other than a constraint."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class DocumentNumberTakenError(StorageError):
    """A generated quote or order number is already stored."""

    def __init__(self, kind: str, number: str):
        super().__init__(
            f"{kind.capitalize()} number {number} is already in use",
            code="DOCUMENT_NUMBER_TAKEN",
            details={"kind": kind, "number": number},
        )


class CategoryNotFoundError(NotFoundError):
    def __init__(self, category_id: int):
        super().__init__("Category", category_id, "CATEGORY_NOT_FOUND")


class PartNotFoundError(NotFoundError):
    def __init__(self, part_id: int):
        super().__init__("Part", part_id, "PART_NOT_FOUND")


class CustomerNotFoundError(NotFoundError):
    def __init__(self, customer_id: int):
        super().__init__("Customer", customer_id, "CUSTOMER_NOT_FOUND")


class SupplierNotFoundError(NotFoundError):
    def __init__(self, supplier_id: int):
        super().__init__("Supplier", supplier_id, "SUPPLIER_NOT_FOUND")


class QuoteNotFoundError(NotFoundError):
    def __init__(self, quote_id: int):
        super().__init__("Quote", quote_id, "QUOTE_NOT_FOUND")


class OrderNotFoundError(NotFoundError):
    def __init__(self, order_id: int):
        super().__init__("Order", order_id, "ORDER_NOT_FOUND")


class ExchangeRateNotFoundError(NotFoundError):
    """No stored rate for a currency pair."""

    def __init__(self, base: str, target: str):
        super().__init__("Exchange rate", f"{base}/{target}", "EXCHANGE_RATE_NOT_FOUND")


class CategoryError(GoPartsError):
    """Category rule violations; surfaced as conflicts."""


class DuplicateCategoryError(CategoryError):
    """Another category already uses this name."""

    def __init__(self, name: str):
        super().__init__(
            "A category with this name already exists",
            code="DUPLICATE_CATEGORY",
            details={"name": name},
        )


class CategoryInUseError(CategoryError):
    """Category still has parts and cannot be hard-deleted."""

    def __init__(self, category_id: int, part_count: int):
        super().__init__(
            f"Cannot delete category with {part_count} parts. "
            "Merge it into another category or reassign its parts first.",
            code="CATEGORY_IN_USE",
            details={"category_id": category_id, "part_count": part_count},
        )


class CategoryReorderError(CategoryError):
    """Reorder batch failed; details carry the reloaded server order."""

    def __init__(self, reason: str, current_order: list[int]):
        super().__init__(
            f"Failed to reorder categories: {reason}",
            code="CATEGORY_REORDER_FAILED",
            details={"reason": reason, "current_order": current_order},
        )


class QuoteError(GoPartsError):
    """Quote lifecycle violations."""


class QuoteAlreadyConvertedError(QuoteError):
    """Quote reached converted_to_order and cannot change further."""

    def __init__(self, quote_id: int, order_number: str | None = None):
        super().__init__(
            f"Quote {quote_id} has already been converted to order"
            + (f" {order_number}" if order_number else ""),
            code="QUOTE_ALREADY_CONVERTED",
            details={"quote_id": quote_id, "order_number": order_number},
        )


class InvalidQuoteTransitionError(QuoteError):
    """Requested status change is not allowed."""

    def __init__(self, quote_id: int, current: str, requested: str):
        super().__init__(
            f"Cannot move quote {quote_id} from '{current}' to '{requested}'",
            code="INVALID_QUOTE_TRANSITION",
            details={"quote_id": quote_id, "current": current, "requested": requested},
        )


class ExchangeRateError(GoPartsError):
    pass


class ExchangeRateFetchError(ExchangeRateError):
    """A rate provider failed to return a usable rate."""

    def __init__(self, provider: str, reason: str):
        super().__init__(
            f"Exchange rate provider '{provider}' failed: {reason}",
            code="EXCHANGE_RATE_FETCH_FAILED",
            details={"provider": provider, "reason": reason},
        )


class ValidationError(GoPartsError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class ConfigurationError(GoPartsError):
    """Settings that cannot be used, such as an empty currency list."""
