from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from app.api.deps import get_digest, verify_cron_secret
from app.models.digest import DigestRequest
from app.services.digest.service import GeniePicksDigest

router = APIRouter(prefix="/emails", tags=["emails"])


@router.post("/genie-picks", dependencies=[Depends(verify_cron_secret)])
async def send_genie_picks(
    payload: DigestRequest | None = None,
    digest: GeniePicksDigest = Depends(get_digest),
) -> dict[str, Any]:
    """
    Weekly Genie Picks email, called by the scheduler.

    With ``userId`` only that user is processed; otherwise every eligible user.
    """
    payload = payload or DigestRequest()
    try:
        user_ids = await digest.resolve_recipients(payload.userId)
        if not user_ids:
            return {"success": False, "message": "No users to notify"}

        result = await digest.run(user_ids, test_mode=payload.testMode)
        return result.model_dump()
    except Exception as e:
        logger.exception(f"Error in Genie Picks email job: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate emails")
