import secrets

from fastapi import Depends, Header, HTTPException
from loguru import logger

from app.core.config import settings
from app.core.exceptions import DataAccessError
from app.core.security import extract_bearer_token, redact_token
from app.models.auth import AuthenticatedUser
from app.services.digest.ledger import DigestLedger
from app.services.digest.mailer import mailer
from app.services.digest.service import GeniePicksDigest
from app.services.recommendation.engine import RecommendationEngine
from app.services.store import PropertyStore
from app.services.supabase.auth import auth_service
from app.services.supabase.store import supabase_store


def get_store() -> PropertyStore:
    return supabase_store


def get_recommendation_engine(store: PropertyStore = Depends(get_store)) -> RecommendationEngine:
    return RecommendationEngine(store)


def get_digest(
    store: PropertyStore = Depends(get_store),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
) -> GeniePicksDigest:
    return GeniePicksDigest(store=store, engine=engine, mailer=mailer, ledger=DigestLedger())


async def get_current_user(authorization: str | None = Header(default=None)) -> AuthenticatedUser:
    """Resolve the bearer access token to a user, or reject the request with 401."""
    token = extract_bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=401, detail="Authentication required")

    try:
        user = await auth_service.get_user(token)
    except DataAccessError as e:
        logger.error(f"[{redact_token(token)}] Auth service unavailable: {e}")
        raise HTTPException(status_code=503, detail="Authentication service unavailable")

    if user is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user


def verify_cron_secret(authorization: str | None = Header(default=None)) -> None:
    """Scheduled jobs must present ``Bearer <CRON_SECRET>`` when a secret is configured."""
    if not settings.CRON_SECRET:
        return
    token = extract_bearer_token(authorization) or ""
    if not secrets.compare_digest(token, settings.CRON_SECRET):
        raise HTTPException(status_code=401, detail="Unauthorized")
