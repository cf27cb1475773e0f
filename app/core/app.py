from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from app.api.endpoints.health import router as health_router
from app.api.main import api_router
from app.services.digest.mailer import mailer
from app.services.redis_service import redis_service
from app.services.supabase.auth import auth_service
from app.services.supabase.store import supabase_store

from .config import settings
from .version import __version__


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events (startup/shutdown).
    """
    yield
    for name, closer in (
        ("Supabase store", supabase_store.close),
        ("Supabase auth", auth_service.close),
        ("SendGrid", mailer.close),
        ("Redis", redis_service.close),
    ):
        try:
            await closer()
            logger.info(f"{name} client closed")
        except Exception as exc:
            logger.warning(f"Failed to close {name} client: {exc}")


app = FastAPI(
    title="Deal Genie Picks",
    description="Personalized property recommendations and weekly Genie Picks digest",
    version=__version__,
    lifespan=lifespan,
    docs_url=None if settings.APP_ENV != "development" else "/docs",
    redoc_url=None if settings.APP_ENV != "development" else "/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(api_router)
