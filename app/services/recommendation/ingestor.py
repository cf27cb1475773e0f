import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from loguru import logger

from app.core.config import settings
from app.core.exceptions import DataAccessError
from app.core.security import redact_token
from app.models.activity import ActivityHistory
from app.services.store import PropertyStore

T = TypeVar("T")


class ActivityIngestor:
    """
    Reads the bounded interaction history for one user.

    The three reads run concurrently. A slice whose read fails is treated
    as empty so personalization degrades instead of failing the request.
    """

    def __init__(self, store: PropertyStore, history_limit: int | None = None):
        self.store = store
        self.history_limit = history_limit or settings.ACTIVITY_HISTORY_LIMIT

    async def load(self, user_id: str) -> ActivityHistory:
        activity, feedback, saved_ids = await asyncio.gather(
            self._or_empty(self.store.get_activity(user_id, self.history_limit), [], "activity", user_id),
            self._or_empty(self.store.get_feedback(user_id, self.history_limit), [], "feedback", user_id),
            self._or_empty(self.store.get_saved_property_ids(user_id), set(), "saved properties", user_id),
        )
        logger.debug(
            f"[{redact_token(user_id)}] Loaded {len(activity)} activity, {len(feedback)} feedback, "
            f"{len(saved_ids)} saved"
        )
        return ActivityHistory(activity=activity, feedback=feedback, saved_ids=saved_ids)

    @staticmethod
    async def _or_empty(read: Awaitable[T], empty: T, label: str, user_id: str) -> T:
        try:
            return await read
        except DataAccessError as e:
            logger.warning(f"[{redact_token(user_id)}] Failed to load {label}, treating as empty: {e}")
            return empty
