from datetime import datetime, timezone

from app.core.config import settings
from app.services.redis_service import RedisService, redis_service

# A little over a week so the key outlives the ISO week it marks
LEDGER_TTL_SECONDS = 8 * 24 * 3600


class DigestLedger:
    """
    Remembers which users already received this week's picks.

    Keys are per user per ISO week. When Redis is unavailable every lookup
    reports "not sent", so a Redis outage never blocks the digest.
    """

    def __init__(self, redis: RedisService | None = None, key_prefix: str | None = None):
        self.redis = redis or redis_service
        self.key_prefix = key_prefix or settings.REDIS_DIGEST_KEY

    def _key(self, user_id: str, now: datetime | None = None) -> str:
        now = now or datetime.now(timezone.utc)
        year, week, _ = now.isocalendar()
        return f"{self.key_prefix}{user_id}:{year}-W{week:02d}"

    async def already_sent(self, user_id: str, now: datetime | None = None) -> bool:
        return await self.redis.exists(self._key(user_id, now))

    async def mark_sent(self, user_id: str, now: datetime | None = None) -> None:
        sent_at = (now or datetime.now(timezone.utc)).isoformat()
        await self.redis.set(self._key(user_id, now), sent_at, ttl=LEDGER_TTL_SECONDS)
