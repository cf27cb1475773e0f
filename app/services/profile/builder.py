from collections import defaultdict
from collections.abc import Iterable

from loguru import logger

from app.models.activity import ActivityHistory, ActivityRecord, FeedbackRecord
from app.models.profile import InterestProfile, UserPreferences
from app.services.profile.categories import CATEGORY_NAMES, matching_categories
from app.services.profile.constants import (
    DEFAULT_MAX_PRICE,
    DEFAULT_MIN_BATHROOMS,
    DEFAULT_MIN_BEDROOMS,
    DEFAULT_PROPERTY_TYPE,
    DEFAULT_TARGET_PRICE,
    MAX_PRICE_CEILING_FACTOR,
    MAX_PRICE_MEDIAN_FACTOR,
    PREFERRED_ZIPCODES_LIMIT,
    TOP_INTERESTS_LIMIT,
)
from app.services.profile.evidence import EvidenceCalculator


class ProfileBuilder:
    """
    Builds the interest profile and preferences from a user's history.

    Design principles:
    - Pure accumulation over a single pass of the history
    - Absent attributes contribute nothing
    - Explicit feedback is layered on top: thumbs up adds, thumbs down subtracts
    - Deterministic: identical history gives an identical profile
    """

    def __init__(self, evidence_calculator: EvidenceCalculator | None = None):
        self.evidence_calculator = evidence_calculator or EvidenceCalculator()

    def build_interest_profile(
        self, activity: Iterable[ActivityRecord], feedback: Iterable[FeedbackRecord] = ()
    ) -> InterestProfile:
        """
        Build interest counters and the top-3 interest signature.

        Args:
            activity: Most recent interactions (views, saves, feedback, offers)
            feedback: Explicit thumbs up/down records

        Returns:
            InterestProfile with counters, top categories and engagement weights
        """
        counters: dict[str, int] = {name: 0 for name in CATEGORY_NAMES}
        engagement: dict[str, int] = defaultdict(int)

        for record in activity:
            engagement[record.propertyId] += self.evidence_calculator.engagement_weight(record)
            for category in matching_categories(record.details):
                counters[category.name] += 1

        for record in feedback:
            weight = self.evidence_calculator.feedback_weight(record)
            for category in matching_categories(record.details):
                counters[category.name] += weight

        top = self.top_interests(counters)
        logger.debug(f"Interest signature: {top} from counters {counters}")
        return InterestProfile(counters=counters, top_categories=top, engagement=dict(engagement))

    @staticmethod
    def top_interests(counters: dict[str, int], limit: int = TOP_INTERESTS_LIMIT) -> list[str]:
        """
        Rank categories by counter, keep only positive ones, truncate to *limit*.

        Ties keep the category declaration order (stable sort).
        """
        ranked = sorted(CATEGORY_NAMES, key=lambda name: -counters.get(name, 0))
        return [name for name in ranked if counters.get(name, 0) > 0][:limit]

    def build_preferences(self, history: ActivityHistory, profile: InterestProfile) -> UserPreferences:
        """
        Derive zipcode, property type and price preferences.

        Zipcode and property type counts accumulate each interaction's
        engagement weight; explicit feedback then adds or subtracts.
        """
        zipcode_counts: dict[str, int] = defaultdict(int)
        type_counts: dict[str, int] = defaultdict(int)
        prices: list[float] = []

        for record in history.activity:
            weight = self.evidence_calculator.engagement_weight(record)
            details = record.details
            if details.zipCode:
                zipcode_counts[details.zipCode] += weight
            if details.propertyType:
                type_counts[details.propertyType] += weight
            if details.price is not None and details.price > 0:
                prices.append(details.price)

        for record in history.feedback:
            if record.details is None:
                continue
            weight = self.evidence_calculator.feedback_weight(record)
            if record.details.zipCode:
                zipcode_counts[record.details.zipCode] += weight
            if record.details.propertyType:
                type_counts[record.details.propertyType] += weight

        preferences = UserPreferences(
            preferredZipcodes=self._ranked_keys(zipcode_counts)[:PREFERRED_ZIPCODES_LIMIT],
            preferredPropertyType=next(iter(self._ranked_keys(type_counts)), DEFAULT_PROPERTY_TYPE),
            minBedrooms=DEFAULT_MIN_BEDROOMS,
            minBathrooms=DEFAULT_MIN_BATHROOMS,
            maxPrice=DEFAULT_MAX_PRICE,
            targetPrice=DEFAULT_TARGET_PRICE,
            alreadyViewed=sorted(history.seen_ids),
            topInterests=list(profile.top_categories),
        )

        if prices:
            sorted_prices = sorted(prices)
            # Upper median for even-length lists
            target = sorted_prices[len(sorted_prices) // 2]
            preferences.targetPrice = target
            preferences.maxPrice = min(target * MAX_PRICE_MEDIAN_FACTOR, sorted_prices[-1] * MAX_PRICE_CEILING_FACTOR)

        return preferences

    @staticmethod
    def _ranked_keys(counts: dict[str, int]) -> list[str]:
        """Keys with a positive count, highest first; ties keep first-seen order."""
        ranked = sorted(counts.items(), key=lambda item: -item[1])
        return [key for key, count in ranked if count > 0]
