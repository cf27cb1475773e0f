from pydantic import BaseModel, Field


class InterestProfile(BaseModel):
    """
    Behavioral interest counters for one scoring pass.

    Built fresh per request; never persisted.
    """

    counters: dict[str, int] = Field(default_factory=dict, description="Category name → counter")
    top_categories: list[str] = Field(default_factory=list, description="Top 3 categories with a positive counter")
    engagement: dict[str, int] = Field(default_factory=dict, description="Property ID → engagement weight")


class UserPreferences(BaseModel):
    """Preferences inferred from activity, reported back with recommendations."""

    preferredZipcodes: list[str] = Field(default_factory=list)
    preferredPropertyType: str = "single_family"
    minBedrooms: int = 2
    minBathrooms: int = 1
    maxPrice: float = 500000
    targetPrice: float = 300000
    alreadyViewed: list[str] = Field(default_factory=list)
    topInterests: list[str] = Field(default_factory=list)
