import math
from collections.abc import Iterable

from app.models.property import CandidateProperty, ScoredRecommendation
from app.services.profile.categories import CATEGORIES
from app.services.profile.constants import (
    BASE_SCORE_WEIGHT,
    DEFAULT_MATCH_REASON,
    MATCH_SCORE_MAX,
    MATCH_SCORE_MIN,
)


class ProfileScorer:
    """
    Scores candidates against a user's interest signature.
    """

    @staticmethod
    def score_candidate(candidate: CandidateProperty, top_categories: list[str]) -> ScoredRecommendation:
        """
        Score one candidate.

        Half the base quality score plus a fixed bonus for every top interest
        the candidate matches, clamped to 0-100.

        Args:
            candidate: Candidate property with its deal score and attributes
            top_categories: The user's interest signature (at most 3 names)

        Returns:
            ScoredRecommendation with matchScore and matchReason
        """
        score = candidate.base_score * BASE_SCORE_WEIGHT
        reasons: list[str] = []

        for category in CATEGORIES:
            if category.name in top_categories and category.matches(candidate):
                score += category.bonus
                reasons.append(category.reason)

        clamped = min(MATCH_SCORE_MAX, max(MATCH_SCORE_MIN, score))
        return ScoredRecommendation(
            **candidate.model_dump(),
            matchScore=int(math.floor(clamped + 0.5)),
            matchReason=", ".join(reasons) if reasons else DEFAULT_MATCH_REASON,
        )

    def rank(
        self,
        candidates: Iterable[CandidateProperty],
        top_categories: list[str],
        limit: int,
        exclude_ids: set[str] | None = None,
    ) -> list[ScoredRecommendation]:
        """
        Score, sort and truncate candidates.

        Candidates whose id is in *exclude_ids* are dropped even if the store
        returned them. Ties keep the original candidate order.
        """
        exclude_ids = exclude_ids or set()
        scored = [
            self.score_candidate(candidate, top_categories)
            for candidate in candidates
            if candidate.id not in exclude_ids
        ]
        scored.sort(key=lambda item: item.matchScore, reverse=True)
        return scored[: max(0, limit)]
