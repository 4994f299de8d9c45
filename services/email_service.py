"""
Email Service Module

Sends transactional email through the Resend HTTP API.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from config import settings
from config.platforms import ResendConfig
from services import http_client
from utils.exceptions import ValidationError
from utils.helpers import safe_get
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ResendEmailPayload:
    """Request body for POST /emails."""
    sender: str
    to: List[str]
    subject: str
    html: str

    def to_dict(self) -> Dict[str, Any]:
        return {"from": self.sender, "to": self.to, "subject": self.subject, "html": self.html}


def parse_resend_error(data: Any) -> Optional[str]:
    return safe_get(data, "message")


class EmailService:
    """Service for sending email via Resend."""

    name = "resend"

    def __init__(self, config: Optional[ResendConfig] = None):
        self._config = config
        self.session = http_client.build_session()

    def _current_config(self) -> ResendConfig:
        return self._config if self._config is not None else ResendConfig.from_env()

    def send_email(self, subject: str, body: str, recipients: Sequence[str]) -> str:
        """
        Send an HTML email.

        Args:
            subject: Subject line.
            body: HTML body.
            recipients: One or more recipient addresses.

        Returns:
            str: The Resend email id, or "" if the response could not be parsed.

        Raises:
            ValidationError: If no recipients are given.
            ConfigurationError: If the API key or sender address is missing.
            TransportError, PlatformError: If the request fails.
        """
        to = [r.strip() for r in recipients if r and r.strip()]
        if not to:
            raise ValidationError("at least one recipient is required")

        config = self._current_config()
        config.validate()

        payload = ResendEmailPayload(sender=config.from_email, to=to, subject=subject, html=body)
        response = http_client.send(
            self.session, self.name, "POST", settings.RESEND_EMAILS_URL,
            ok_statuses=(200,),
            error_parser=parse_resend_error,
            json=payload.to_dict(),
            headers={"Authorization": f"Bearer {config.api_key}"},
        )

        email_id = http_client.created_id(response, self.name, lambda d: d.get("id"))
        logger.info(f"Email sent to {len(to)} recipient(s) (id={email_id or 'unknown'})")
        return email_id
