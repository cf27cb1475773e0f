from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.property import PropertyAttributeSnapshot, RecordId, Signal

FeedbackType = Literal["up", "down"]


class ActivityRecord(BaseModel):
    """
    One historical user interaction with a property.

    Any activity type is accepted: unknown types weigh nothing but the
    property still counts as seen.
    """

    model_config = ConfigDict(frozen=True)

    propertyId: RecordId
    activityType: str = ""
    details: PropertyAttributeSnapshot = Field(default_factory=PropertyAttributeSnapshot)
    timestamp: Signal[datetime] = None

    @field_validator("details", mode="before")
    @classmethod
    def _empty_details(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, PropertyAttributeSnapshot)) else {}


class FeedbackRecord(BaseModel):
    """Explicit thumbs up/down on a property, with the rated property's attributes when known."""

    model_config = ConfigDict(frozen=True)

    propertyId: RecordId
    feedbackType: FeedbackType
    details: PropertyAttributeSnapshot | None = None
    createdAt: datetime | None = None


class ActivityHistory(BaseModel):
    """Everything the ingestor read for one user in one scoring pass."""

    activity: list[ActivityRecord] = Field(default_factory=list)
    feedback: list[FeedbackRecord] = Field(default_factory=list)
    saved_ids: set[str] = Field(default_factory=set)

    @property
    def seen_ids(self) -> set[str]:
        """Property ids the user has already viewed, saved, rated or acted on."""
        ids = {record.propertyId for record in self.activity}
        ids.update(record.propertyId for record in self.feedback)
        ids.update(self.saved_ids)
        return ids
