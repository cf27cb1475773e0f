from typing import Annotated, Any, TypeVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
    field_validator,
    model_validator,
)

# Keys carried under the nested ATTOM record rather than on the property row
ATTOM_FIELDS = {
    "equity": "equity",
    "owner_occupied": "ownerOccupied",
    "distressed": "distressed",
}


def _coerce_id(value: Any) -> Any:
    if isinstance(value, int):
        return str(value)
    return value


# Store ids arrive as ints or uuids depending on the table
RecordId = Annotated[str, BeforeValidator(_coerce_id)]


def no_signal_on_error(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    """Wrap validator: an unparseable attribute is treated as absent instead of rejecting the row."""
    try:
        return handler(value)
    except ValidationError:
        return None


T = TypeVar("T")

# An attribute that degrades to None when the stored value cannot be parsed
Signal = Annotated[T | None, WrapValidator(no_signal_on_error)]


class PropertyAttributeSnapshot(BaseModel):
    """
    Property attributes captured at interaction time or read from the catalog.

    Every field is optional: a missing value means "no signal", never zero.
    """

    model_config = ConfigDict(extra="ignore")

    priceDropPercent: Signal[float] = None
    potentialROI: Signal[float] = None
    daysOnMarket: Signal[int] = None
    propertyType: Signal[str] = None
    bedrooms: Signal[int] = None
    bathrooms: Signal[float] = None
    price: Signal[float] = None
    zipCode: Signal[str] = None
    equity: Signal[float] = None
    ownerOccupied: Signal[bool] = None
    distressed: Signal[bool] = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_attom_data(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("zipCode") is None and data.get("zipcode") is not None:
            data["zipCode"] = data["zipcode"]

        attom = data.get("attomData") or data.get("attom_data")
        if isinstance(attom, dict):
            for source, target in ATTOM_FIELDS.items():
                if data.get(target) is None and attom.get(source) is not None:
                    data[target] = attom[source]
        return data

    @field_validator("zipCode", mode="before")
    @classmethod
    def _zipcode_as_str(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)


class CandidateProperty(PropertyAttributeSnapshot):
    """A catalog property eligible for recommendation."""

    id: RecordId
    address: Signal[str] = None
    sqft: Signal[float] = None
    yearBuilt: Signal[int] = None
    imageUrl: Signal[str] = None
    dealScore: Signal[float] = Field(default=None, description="Precomputed base quality score")

    @property
    def base_score(self) -> float:
        return self.dealScore or 0.0


class ScoredRecommendation(CandidateProperty):
    """A candidate with its personalized ranking value."""

    matchScore: int = Field(ge=0, le=100)
    matchReason: str


class SearchPreferences(BaseModel):
    """Hard constraints a user stored with their search settings."""

    model_config = ConfigDict(extra="ignore")

    maxPrice: Signal[float] = None
    minBeds: Signal[int] = None
    propertyTypes: list[str] = Field(default_factory=list)


class CandidateQuery(BaseModel):
    """Server-side filters for one page of candidate properties."""

    zipcodes: list[str] = Field(default_factory=list)
    min_bedrooms: int | None = None
    min_bathrooms: float | None = None
    max_price: float | None = None
    property_types: list[str] = Field(default_factory=list)
    exclude_ids: list[str] = Field(default_factory=list)
    limit: int = 10
