"""Shared pytest fixtures: an in-memory store and record factories."""

from datetime import datetime, timezone
from typing import Any

import pytest

from app.core.exceptions import DataAccessError, MailDeliveryError
from app.models.activity import ActivityRecord, FeedbackRecord
from app.models.digest import RecipientProfile
from app.models.property import CandidateProperty, CandidateQuery
from app.services.store import PropertyStore

TS = datetime(2025, 3, 3, 12, 0, 0, tzinfo=timezone.utc)


def make_activity(property_id: str, activity_type: str = "view", **details: Any) -> ActivityRecord:
    return ActivityRecord(propertyId=property_id, activityType=activity_type, details=details, timestamp=TS)


def make_feedback(property_id: str, feedback_type: str = "up", **details: Any) -> FeedbackRecord:
    return FeedbackRecord(
        propertyId=property_id, feedbackType=feedback_type, details=details or None, createdAt=TS
    )


def make_candidate(property_id: str, deal_score: float | None = 50, **attributes: Any) -> CandidateProperty:
    return CandidateProperty(id=property_id, dealScore=deal_score, **attributes)


class FakeStore(PropertyStore):
    """In-memory PropertyStore; set ``fail`` to make named operations raise DataAccessError."""

    def __init__(self) -> None:
        self.activity: dict[str, list[ActivityRecord]] = {}
        self.feedback: dict[str, list[FeedbackRecord]] = {}
        self.saved: dict[str, set[str]] = {}
        self.candidates: list[CandidateProperty] = []
        self.recipients: dict[str, RecipientProfile] = {}
        self.email_logs: list[dict[str, Any]] = []
        self.saved_feedback: list[dict[str, Any]] = []
        self.top_rated: list[dict[str, Any]] = []
        self.queries: list[CandidateQuery] = []
        self.fail: set[str] = set()

    def _check(self, operation: str) -> None:
        if operation in self.fail:
            raise DataAccessError(operation, "simulated outage")

    async def get_activity(self, user_id, limit):
        self._check("get_activity")
        return self.activity.get(user_id, [])[:limit]

    async def get_feedback(self, user_id, limit):
        self._check("get_feedback")
        return self.feedback.get(user_id, [])[:limit]

    async def get_saved_property_ids(self, user_id):
        self._check("get_saved_property_ids")
        return set(self.saved.get(user_id, set()))

    async def get_candidates(self, query):
        self._check("get_candidates")
        self.queries.append(query)
        # Deliberately ignores filters: the scorer must still drop seen ids
        return list(self.candidates)[: query.limit]

    async def get_recipient(self, user_id):
        self._check("get_recipient")
        return self.recipients.get(user_id)

    async def list_digest_recipients(self):
        self._check("list_digest_recipients")
        return list(self.recipients)

    async def log_email(self, user_id, email_type, properties_count, status):
        self._check("log_email")
        self.email_logs.append(
            {"user_id": user_id, "email_type": email_type, "properties_count": properties_count, "status": status}
        )

    async def save_feedback(self, user_id, property_id, feedback_type, context=None):
        self._check("save_feedback")
        self.saved_feedback.append(
            {"user_id": user_id, "property_id": property_id, "feedback_type": feedback_type, "context": context}
        )
        return f"fb-{len(self.saved_feedback)}"

    async def get_top_rated_properties(self, limit):
        self._check("get_top_rated_properties")
        return self.top_rated[:limit]


class FakeRedis:
    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    async def exists(self, key):
        return key in self.data

    async def set(self, key, value, ttl=None):
        self.data[key] = str(value)
        return True


class RecordingMailer:
    def __init__(self, fail_for: set[str] | None = None) -> None:
        self.sent: list[tuple[str, str | None, list]] = []
        self.fail_for = fail_for or set()

    async def send_genie_picks(self, email, name, properties):
        if email in self.fail_for:
            raise MailDeliveryError("rejected")
        self.sent.append((email, name, list(properties)))


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def recording_mailer() -> RecordingMailer:
    return RecordingMailer()
