"""Retry policy for inserts keyed by a generated quote or order number."""

from typing import Any

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random,
)

from src.config import get_logger
from src.core.exceptions import DocumentNumberTakenError

logger = get_logger(__name__)

NUMBER_ATTEMPTS = 3


def _log_collision(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "document_number_taken",
        attempt=retry_state.attempt_number,
        number=error.details.get("number") if isinstance(error, DocumentNumberTakenError) else None,
    )


def retry_on_taken_number(attempts: int = NUMBER_ATTEMPTS) -> Any:
    """
    Retry a coroutine that generates its number on each call.

    Numbers come from the millisecond clock, so waiting at least a
    millisecond between attempts always yields a different number.
    """
    return retry(
        stop=stop_after_attempt(attempts),
        wait=wait_random(min=0.002, max=0.01),
        retry=retry_if_exception_type(DocumentNumberTakenError),
        before_sleep=_log_collision,
        reraise=True,
    )
