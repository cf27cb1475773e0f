from datetime import date
from pathlib import Path

import httpx
from jinja2 import Environment, FileSystemLoader, select_autoescape
from loguru import logger

from app.core.base_client import BaseClient
from app.core.config import settings
from app.core.exceptions import MailDeliveryError
from app.models.property import ScoredRecommendation
from app.services.profile.explanation import format_currency

# app/services/digest/mailer.py -> app
templates_dir = Path(__file__).resolve().parent.parent.parent / "templates"

jinja_env = Environment(loader=FileSystemLoader(str(templates_dir)), autoescape=select_autoescape(["html"]))
jinja_env.filters["currency"] = format_currency

GENIE_PICKS_SUBJECT = "Your Weekly Genie Picks Are Here!"


class SendGridMailer(BaseClient):
    """
    Sends the weekly picks email through the SendGrid v3 API.

    Each send is attempted exactly once.
    """

    def __init__(
        self,
        api_key: str | None = None,
        sender: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.SENDGRID_API_KEY
        self.sender = sender or settings.EMAIL_FROM
        super().__init__(
            base_url="https://api.sendgrid.com",
            timeout=10.0,
            max_retries=1,
            headers={"Authorization": f"Bearer {self.api_key or ''}", "Content-Type": "application/json"},
            transport=transport,
        )

    @staticmethod
    def render_genie_picks(name: str | None, properties: list[ScoredRecommendation]) -> str:
        template = jinja_env.get_template("genie_picks.html")
        return template.render(
            name=name or "there",
            properties=properties,
            date=date.today().strftime("%B %d, %Y"),
            app_host=settings.HOST_NAME,
        )

    async def send_genie_picks(self, email: str, name: str | None, properties: list[ScoredRecommendation]) -> None:
        """
        Send the weekly picks email.

        Raises:
            MailDeliveryError: if SendGrid is not configured or rejects the message
        """
        if not self.api_key:
            raise MailDeliveryError("SENDGRID_API_KEY is not configured")

        html = self.render_genie_picks(name, properties)
        payload = {
            "personalizations": [{"to": [{"email": email}]}],
            "from": {"email": self.sender},
            "subject": GENIE_PICKS_SUBJECT,
            "content": [
                {"type": "text/plain", "value": f"Your {len(properties)} Genie Picks for this week are ready."},
                {"type": "text/html", "value": html},
            ],
        }
        try:
            await self.post("/v3/mail/send", json=payload)
        except (httpx.HTTPError, ValueError) as e:
            raise MailDeliveryError(str(e)) from e
        logger.info(f"Sent Genie Picks email with {len(properties)} properties")


mailer = SendGridMailer()
