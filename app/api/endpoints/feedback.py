from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from pydantic import BaseModel, Field

from app.api.deps import get_current_user, get_store
from app.core.exceptions import DataAccessError
from app.core.security import redact_token
from app.models.activity import FeedbackType
from app.models.auth import AuthenticatedUser
from app.services.store import PropertyStore

router = APIRouter(prefix="/feedback", tags=["feedback"])


class FeedbackRequest(BaseModel):
    propertyId: str = Field(min_length=1)
    feedback: FeedbackType
    context: str | None = None


class FeedbackResponse(BaseModel):
    success: bool = True
    feedbackId: str


@router.post("", response_model=FeedbackResponse)
async def submit_feedback(
    payload: FeedbackRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    store: PropertyStore = Depends(get_store),
) -> FeedbackResponse:
    """Record a thumbs up/down; it shapes the user's next recommendations."""
    try:
        feedback_id = await store.save_feedback(user.id, payload.propertyId, payload.feedback, payload.context)
    except DataAccessError as e:
        logger.error(f"[{redact_token(user.id)}] Error saving feedback: {e}")
        raise HTTPException(status_code=500, detail="Failed to save feedback")

    logger.info(f"[{redact_token(user.id)}] Saved '{payload.feedback}' feedback for property {payload.propertyId}")
    return FeedbackResponse(feedbackId=feedback_id)


@router.get("/top-rated")
async def get_top_rated(
    limit: int = Query(default=5, ge=1, le=50),
    user: AuthenticatedUser = Depends(get_current_user),
    store: PropertyStore = Depends(get_store),
) -> dict[str, Any]:
    try:
        properties = await store.get_top_rated_properties(limit)
    except DataAccessError as e:
        logger.error(f"[{redact_token(user.id)}] Error getting top-rated properties: {e}")
        raise HTTPException(status_code=500, detail="Failed to get top-rated properties")
    return {"success": True, "properties": properties}
