from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.models.property import SearchPreferences


class RecipientProfile(BaseModel):
    """Profile fields the weekly digest needs for one user."""

    model_config = ConfigDict(extra="ignore")

    id: str
    email: str | None = None
    full_name: str | None = None
    email_preferences: dict[str, Any] = Field(default_factory=dict)
    search_preferences: SearchPreferences | None = None

    @property
    def wants_weekly_picks(self) -> bool:
        return self.email_preferences.get("weeklyPicks") is not False


class DigestRequest(BaseModel):
    userId: str | None = Field(default=None, description="Send to a single user instead of every eligible user")
    testMode: bool = Field(default=False, description="Log instead of sending email")


class DigestError(BaseModel):
    userId: str
    error: str


class DigestResult(BaseModel):
    success: bool = True
    usersNotified: int = 0
    testMode: bool = False
    errors: list[DigestError] = Field(default_factory=list)
