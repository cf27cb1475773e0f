from loguru import logger
from pydantic import BaseModel, Field

from app.core.config import settings
from app.core.security import redact_token
from app.models.activity import ActivityHistory
from app.models.profile import InterestProfile, UserPreferences
from app.models.property import CandidateQuery, ScoredRecommendation, SearchPreferences
from app.services.profile.builder import ProfileBuilder
from app.services.profile.explanation import build_reasoning_text
from app.services.profile.scorer import ProfileScorer
from app.services.recommendation.ingestor import ActivityIngestor
from app.services.store import PropertyStore

CANDIDATE_POOL_FACTOR = 3


class RecommendationResult(BaseModel):
    recommendations: list[ScoredRecommendation] = Field(default_factory=list)
    profile: InterestProfile
    preferences: UserPreferences
    reasoning_text: str


class RecommendationEngine:
    """
    Personalized property recommendations for one user.

    Shared by the recommendations endpoint and the weekly digest. Each call
    re-derives the interest profile from scratch; nothing is persisted.
    """

    def __init__(
        self,
        store: PropertyStore,
        ingestor: ActivityIngestor | None = None,
        builder: ProfileBuilder | None = None,
        scorer: ProfileScorer | None = None,
    ):
        self.store = store
        self.ingestor = ingestor or ActivityIngestor(store)
        self.builder = builder or ProfileBuilder()
        self.scorer = scorer or ProfileScorer()

    async def recommend(
        self,
        user_id: str,
        limit: int | None = None,
        constraints: SearchPreferences | None = None,
    ) -> RecommendationResult:
        """
        Recommend up to *limit* unseen properties.

        Args:
            user_id: The user to personalize for
            limit: Number of recommendations (defaults to DEFAULT_RECOMMENDATION_LIMIT)
            constraints: Hard search constraints stored by the user, if any

        Returns:
            RecommendationResult with ranked recommendations and their explanation

        Raises:
            DataAccessError: if the candidate page cannot be fetched
        """
        limit = limit or settings.DEFAULT_RECOMMENDATION_LIMIT

        history = await self.ingestor.load(user_id)
        profile = self.builder.build_interest_profile(history.activity, history.feedback)
        preferences = self.builder.build_preferences(history, profile)

        query = self.build_candidate_query(history, preferences, limit, constraints)
        candidates = await self.store.get_candidates(query)

        recommendations = self.scorer.rank(
            candidates, profile.top_categories, limit=limit, exclude_ids=history.seen_ids
        )
        logger.info(
            f"[{redact_token(user_id)}] {len(recommendations)} recommendations from {len(candidates)} candidates "
            f"(interests: {profile.top_categories or 'none'})"
        )

        return RecommendationResult(
            recommendations=recommendations,
            profile=profile,
            preferences=preferences,
            reasoning_text=build_reasoning_text(preferences),
        )

    @staticmethod
    def build_candidate_query(
        history: ActivityHistory,
        preferences: UserPreferences,
        limit: int,
        constraints: SearchPreferences | None = None,
    ) -> CandidateQuery:
        """
        Candidate filters: inferred preferences, overridden by stored hard constraints.
        """
        query = CandidateQuery(
            zipcodes=list(preferences.preferredZipcodes),
            min_bedrooms=preferences.minBedrooms,
            min_bathrooms=preferences.minBathrooms,
            max_price=preferences.maxPrice,
            exclude_ids=sorted(history.seen_ids),
            limit=min(max(limit * CANDIDATE_POOL_FACTOR, limit), settings.CANDIDATE_POOL_MAX),
        )
        if constraints:
            if constraints.maxPrice is not None:
                query.max_price = constraints.maxPrice
            if constraints.minBeds is not None:
                query.min_bedrooms = constraints.minBeds
            if constraints.propertyTypes:
                query.property_types = list(constraints.propertyTypes)
        return query
