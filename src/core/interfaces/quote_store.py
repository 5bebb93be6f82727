"""Abstract interfaces for quote and list-preference storage."""

from abc import ABC, abstractmethod

from src.core.entities.quote import (
    Quote,
    QuoteListFilters,
    QuoteListPreferences,
    QuotePage,
    QuoteStatus,
)


class IQuoteStore(ABC):
    """Interface for quote persistence."""

    @abstractmethod
    async def create(self, quote: Quote) -> Quote:
        """Insert a quote and its line items in one transaction."""
        pass

    @abstractmethod
    async def get(self, quote_id: int) -> Quote | None:
        """Get quote with line items and customer."""
        pass

    @abstractmethod
    async def replace(self, quote: Quote) -> Quote:
        """Update quote fields and swap its line items in one transaction."""
        pass

    @abstractmethod
    async def update_status(
        self, quote_id: int, status: QuoteStatus, notes: str | None = None
    ) -> Quote:
        """Set a non-conversion status; notes replace the quote notes when given."""
        pass

    @abstractmethod
    async def list(self, filters: QuoteListFilters) -> QuotePage:
        """Filtered, sorted, paginated quotes."""
        pass

    @abstractmethod
    async def status_counts(self) -> dict[str, int]:
        """Count per status plus 'all'."""
        pass


class IPreferenceStore(ABC):
    """Interface for per-user quote list preferences."""

    @abstractmethod
    async def load(self, user_id: str) -> QuoteListPreferences | None:
        """Saved preferences, or None."""
        pass

    @abstractmethod
    async def save(self, prefs: QuoteListPreferences) -> QuoteListPreferences:
        """Upsert preferences for a user."""
        pass
