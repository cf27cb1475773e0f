from loguru import logger

from app.core.config import settings
from app.core.exceptions import DataAccessError, MailDeliveryError
from app.core.security import redact_token
from app.models.digest import DigestError, DigestResult
from app.services.digest.ledger import DigestLedger
from app.services.digest.mailer import SendGridMailer
from app.services.recommendation.engine import RecommendationEngine
from app.services.store import PropertyStore

EMAIL_TYPE_WEEKLY_PICKS = "weekly_picks"


class GeniePicksDigest:
    """
    Weekly "Genie Picks" email batch.

    Runs the shared recommendation engine once per user and mails the top
    picks. Users are isolated: a failure is recorded and the batch moves on.
    """

    def __init__(
        self,
        store: PropertyStore,
        engine: RecommendationEngine,
        mailer: SendGridMailer,
        ledger: DigestLedger,
    ):
        self.store = store
        self.engine = engine
        self.mailer = mailer
        self.ledger = ledger

    async def resolve_recipients(self, user_id: str | None) -> list[str]:
        if user_id:
            return [user_id]
        try:
            return await self.store.list_digest_recipients()
        except DataAccessError as e:
            logger.error(f"Failed to list users for weekly picks: {e}")
            return []

    async def run(self, user_ids: list[str], test_mode: bool = False) -> DigestResult:
        result = DigestResult(testMode=test_mode)
        logger.info(f"Starting weekly picks for {len(user_ids)} users (test_mode={test_mode})")

        for user_id in user_ids:
            try:
                error = await self._process_user(user_id, test_mode)
            except Exception as e:
                logger.exception(f"[{redact_token(user_id)}] Error processing weekly picks: {e}")
                error = "Processing error"

            if error is None:
                result.usersNotified += 1
            elif error:
                result.errors.append(DigestError(userId=user_id, error=error))

        logger.info(f"Weekly picks finished: {result.usersNotified} notified, {len(result.errors)} errors")
        return result

    async def _process_user(self, user_id: str, test_mode: bool) -> str | None:
        """
        Handle one user.

        Returns None when the user was notified, "" when skipped on purpose,
        or an error message.
        """
        try:
            recipient = await self.store.get_recipient(user_id)
        except DataAccessError as e:
            logger.warning(f"[{redact_token(user_id)}] Failed to fetch profile: {e}")
            recipient = None
        if recipient is None or not recipient.email:
            return "Failed to fetch user data"

        if not recipient.wants_weekly_picks:
            logger.debug(f"[{redact_token(user_id)}] Opted out of weekly picks")
            return ""

        if not test_mode and await self.ledger.already_sent(user_id):
            logger.info(f"[{redact_token(user_id)}] Weekly picks already sent this week, skipping")
            return ""

        try:
            picks = await self.engine.recommend(
                user_id, limit=settings.DIGEST_PICKS_LIMIT, constraints=recipient.search_preferences
            )
        except DataAccessError as e:
            logger.warning(f"[{redact_token(user_id)}] Failed to generate picks: {e}")
            return "Processing error"

        if not picks.recommendations:
            return "No matching properties found"

        if test_mode:
            logger.info(
                f"[TEST MODE] Would send weekly picks to {redact_token(recipient.email)} "
                f"with {len(picks.recommendations)} properties"
            )
        else:
            try:
                await self.mailer.send_genie_picks(recipient.email, recipient.full_name, picks.recommendations)
            except MailDeliveryError as e:
                logger.error(f"[{redact_token(user_id)}] Failed to send weekly picks: {e}")
                return "Failed to send email"
            await self.ledger.mark_sent(user_id)

        try:
            await self.store.log_email(
                user_id,
                EMAIL_TYPE_WEEKLY_PICKS,
                len(picks.recommendations),
                "test" if test_mode else "sent",
            )
        except DataAccessError as e:
            logger.warning(f"[{redact_token(user_id)}] Failed to log weekly picks email: {e}")

        return None
