"""Load and save per-user quote list preferences."""

from src.application.dto.requests import SaveQuotePreferencesRequest
from src.application.dto.responses import QuotePreferencesResponse
from src.config import get_logger, get_settings
from src.core.entities.quote import QuoteListPreferences
from src.core.interfaces.quote_store import IPreferenceStore

logger = get_logger(__name__)


class QuotePreferencesUseCase:
    """Explicit load/save of remembered quote list state."""

    def __init__(self, preference_store: IPreferenceStore | None = None):
        self._preference_store = preference_store

    async def _get_preference_store(self) -> IPreferenceStore:
        if self._preference_store is None:
            from src.infrastructure.storage.sqlite import get_preference_store

            self._preference_store = await get_preference_store()
        return self._preference_store

    async def load(self, user_id: str) -> QuoteListPreferences:
        """Saved preferences, or defaults when the user has none."""
        prefs = await (await self._get_preference_store()).load(user_id)
        if prefs is None:
            prefs = QuoteListPreferences(
                user_id=user_id,
                page_size=get_settings().quotes.default_page_size,
            )
        return prefs

    async def save(
        self, user_id: str, request: SaveQuotePreferencesRequest
    ) -> QuoteListPreferences:
        max_page_size = get_settings().quotes.max_page_size
        prefs = QuoteListPreferences(
            user_id=user_id,
            status=None if request.status == "all" else request.status,
            sort_by=request.sort_by,
            sort_order=request.sort_order,
            page_size=min(request.page_size, max_page_size),
        )
        prefs = await (await self._get_preference_store()).save(prefs)
        logger.info("quote_preferences_saved", user_id=user_id)
        return prefs

    def to_response(self, prefs: QuoteListPreferences) -> QuotePreferencesResponse:
        return QuotePreferencesResponse(
            user_id=prefs.user_id,
            status=prefs.status.value if prefs.status else "all",
            sort_by=prefs.sort_by,
            sort_order=prefs.sort_order,
            page_size=prefs.page_size,
        )
