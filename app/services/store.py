from abc import ABC, abstractmethod
from typing import Any

from app.models.activity import ActivityRecord, FeedbackRecord, FeedbackType
from app.models.digest import RecipientProfile
from app.models.property import CandidateProperty, CandidateQuery


class PropertyStore(ABC):
    """
    Data-access interface for everything the personalization system reads or writes.

    Implementations raise :class:`~app.core.exceptions.DataAccessError` on any
    failure; callers decide whether to degrade or surface it.
    """

    @abstractmethod
    async def get_activity(self, user_id: str, limit: int) -> list[ActivityRecord]:
        """Most recent interactions first, at most *limit*."""

    @abstractmethod
    async def get_feedback(self, user_id: str, limit: int) -> list[FeedbackRecord]:
        """Most recent thumbs up/down first, with the rated property's attributes."""

    @abstractmethod
    async def get_saved_property_ids(self, user_id: str) -> set[str]:
        """IDs of properties the user has saved."""

    @abstractmethod
    async def get_candidates(self, query: CandidateQuery) -> list[CandidateProperty]:
        """One page of candidate properties, best deal score first."""

    @abstractmethod
    async def get_recipient(self, user_id: str) -> RecipientProfile | None:
        """Profile fields for the weekly digest, or None if the user has no profile."""

    @abstractmethod
    async def list_digest_recipients(self) -> list[str]:
        """IDs of verified users who have not opted out of weekly picks."""

    @abstractmethod
    async def log_email(self, user_id: str, email_type: str, properties_count: int, status: str) -> None:
        """Record an email send."""

    @abstractmethod
    async def save_feedback(
        self, user_id: str, property_id: str, feedback_type: FeedbackType, context: str | None = None
    ) -> str:
        """Store thumbs feedback and return its ID."""

    @abstractmethod
    async def get_top_rated_properties(self, limit: int) -> list[dict[str, Any]]:
        """Properties with the most thumbs up."""
