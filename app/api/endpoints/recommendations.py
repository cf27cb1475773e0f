from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from pydantic import BaseModel

from app.api.deps import get_current_user, get_recommendation_engine
from app.core.config import settings
from app.core.exceptions import DataAccessError
from app.core.security import redact_token
from app.models.auth import AuthenticatedUser
from app.models.profile import UserPreferences
from app.models.property import ScoredRecommendation
from app.services.recommendation.engine import RecommendationEngine

router = APIRouter(tags=["recommendations"])


class RecommendationExplanation(BaseModel):
    userPreferences: UserPreferences
    reasoningText: str


class RecommendationsResponse(BaseModel):
    success: bool = True
    recommendations: list[ScoredRecommendation]
    explanation: RecommendationExplanation


@router.get("/recommendations", response_model=RecommendationsResponse, response_model_exclude_none=True)
async def get_recommendations(
    limit: int = Query(default=settings.DEFAULT_RECOMMENDATION_LIMIT, ge=1, le=settings.MAX_RECOMMENDATION_LIMIT),
    user: AuthenticatedUser = Depends(get_current_user),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
) -> RecommendationsResponse:
    """
    Personalized property recommendations for the signed-in user.

    An empty list is a normal answer; only a failed candidate fetch is an error.
    """
    try:
        result = await engine.recommend(user.id, limit=limit)
    except DataAccessError as e:
        logger.error(f"[{redact_token(user.id)}] Error getting recommended properties: {e}")
        raise HTTPException(status_code=500, detail="Failed to get recommendations")
    except Exception as e:
        logger.exception(f"[{redact_token(user.id)}] Error generating recommendations: {e}")
        raise HTTPException(status_code=500, detail="Server error")

    return RecommendationsResponse(
        recommendations=result.recommendations,
        explanation=RecommendationExplanation(
            userPreferences=result.preferences,
            reasoningText=result.reasoning_text,
        ),
    )
