from collections.abc import Callable
from dataclasses import dataclass

from app.models.property import PropertyAttributeSnapshot
from app.services.profile.constants import (
    HIGH_EQUITY_MIN,
    HIGH_ROI_MIN_PERCENT,
    LARGE_HOME_MIN_BEDROOMS,
    NEW_LISTING_MAX_DAYS,
    PRICE_DROP_MIN_PERCENT,
    PROPERTY_TYPE_MULTI_FAMILY,
    PROPERTY_TYPE_SINGLE_FAMILY,
    SMALL_HOME_MAX_BEDROOMS,
)


@dataclass(frozen=True)
class InterestCategory:
    """
    A behavioral interest category.

    The same predicate decides whether an interaction counts towards the
    category and whether a candidate earns the category bonus.
    """

    name: str
    bonus: int
    reason: str
    matches: Callable[[PropertyAttributeSnapshot], bool]


def _above(value: float | None, threshold: float) -> bool:
    return value is not None and value > threshold


def _below(value: float | None, threshold: float) -> bool:
    return value is not None and value < threshold


# Declaration order is the tie-break order for the interest signature.
CATEGORIES: tuple[InterestCategory, ...] = (
    InterestCategory(
        "priceDrops", 15, "Price recently dropped", lambda p: _above(p.priceDropPercent, PRICE_DROP_MIN_PERCENT)
    ),
    InterestCategory("highROI", 15, "High ROI potential", lambda p: _above(p.potentialROI, HIGH_ROI_MIN_PERCENT)),
    InterestCategory("newListings", 10, "New on market", lambda p: _below(p.daysOnMarket, NEW_LISTING_MAX_DAYS)),
    InterestCategory(
        "singleFamily", 10, "Single family home", lambda p: p.propertyType == PROPERTY_TYPE_SINGLE_FAMILY
    ),
    InterestCategory(
        "multiFamily", 10, "Multi-family property", lambda p: p.propertyType == PROPERTY_TYPE_MULTI_FAMILY
    ),
    InterestCategory(
        "beds3Plus", 8, "3+ bedrooms", lambda p: p.bedrooms is not None and p.bedrooms >= LARGE_HOME_MIN_BEDROOMS
    ),
    InterestCategory(
        "beds2Minus",
        8,
        "Efficient floor plan",
        lambda p: p.bedrooms is not None and p.bedrooms <= SMALL_HOME_MAX_BEDROOMS,
    ),
    InterestCategory("highEquity", 12, "High equity opportunity", lambda p: _above(p.equity, HIGH_EQUITY_MIN)),
    InterestCategory("ownerOccupied", 8, "Owner occupied", lambda p: p.ownerOccupied is True),
    InterestCategory("nonOwnerOccupied", 8, "Investor-owned property", lambda p: p.ownerOccupied is False),
    InterestCategory("distressed", 15, "Potential distressed opportunity", lambda p: p.distressed is True),
)

CATEGORY_NAMES: tuple[str, ...] = tuple(category.name for category in CATEGORIES)


def matching_categories(snapshot: PropertyAttributeSnapshot | None) -> list[InterestCategory]:
    """Return the categories whose predicate holds for *snapshot*, in declaration order."""
    if snapshot is None:
        return []
    return [category for category in CATEGORIES if category.matches(snapshot)]
