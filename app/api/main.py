from fastapi import APIRouter

from .endpoints.emails import router as emails_router
from .endpoints.feedback import router as feedback_router
from .endpoints.recommendations import router as recommendations_router

api_router = APIRouter(prefix="/api")


@api_router.get("/")
async def root():
    return {"message": "Deal Genie Picks API is running"}


api_router.include_router(recommendations_router)
api_router.include_router(feedback_router)
api_router.include_router(emails_router)
