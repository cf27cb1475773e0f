import httpx
from async_lru import alru_cache
from loguru import logger

from app.core.base_client import BaseClient
from app.core.config import settings
from app.core.exceptions import DataAccessError
from app.core.security import redact_token
from app.models.auth import AuthenticatedUser


class SupabaseAuthService(BaseClient):
    """
    Resolves Supabase access tokens to users.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        api_key = api_key or settings.SUPABASE_ANON_KEY or settings.SUPABASE_SERVICE_ROLE_KEY or ""
        root = (base_url or settings.SUPABASE_URL).rstrip("/")
        super().__init__(
            base_url=f"{root}/auth/v1",
            timeout=settings.SUPABASE_TIMEOUT_SECONDS,
            max_retries=1,
            headers={"apikey": api_key, "Accept": "application/json"},
            transport=transport,
        )

    @alru_cache(maxsize=2000, ttl=settings.AUTH_CACHE_TTL_SECONDS)
    async def get_user(self, access_token: str) -> AuthenticatedUser | None:
        """
        Return the user owning *access_token*, or None when the token is invalid.

        Raises DataAccessError when the auth service itself is unreachable.
        """
        try:
            data = await self.get("/user", headers={"Authorization": f"Bearer {access_token}"})
        except httpx.HTTPStatusError as e:
            if e.response.status_code in (401, 403):
                logger.debug(f"[{redact_token(access_token)}] Rejected access token")
                return None
            raise DataAccessError("auth/user", str(e)) from e
        except (httpx.RequestError, ValueError) as e:
            raise DataAccessError("auth/user", str(e)) from e

        if not isinstance(data, dict) or not data.get("id"):
            return None
        return AuthenticatedUser(id=str(data["id"]), email=data.get("email"))


auth_service = SupabaseAuthService()
