"""
Per-Platform Configuration Objects

Each publisher is constructed with one of these dataclasses instead of
reading the process environment itself. ``from_env`` snapshots the
recognized variables; ``validate`` raises ConfigurationError naming the
first missing required variable.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from config import settings
from utils.exceptions import ConfigurationError
from utils.logger import get_logger

logger = get_logger(__name__)


def _require(fields: Tuple[Tuple[str, str], ...]) -> None:
    for env_name, value in fields:
        if not value:
            raise ConfigurationError(f"{env_name} environment variable is required")


@dataclass
class TwitterConfig:
    """OAuth 1.0a user-context credentials for the Twitter/X v2 API."""
    api_key: str = ""
    api_key_secret: str = ""
    access_token: str = ""
    access_token_secret: str = ""
    base_url: str = ""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TwitterConfig":
        return cls(
            api_key=settings.env_str("TWITTER_API_KEY", "", environ),
            api_key_secret=settings.env_str("TWITTER_API_KEY_SECRET", "", environ),
            access_token=settings.env_str("TWITTER_ACCESS_TOKEN", "", environ),
            access_token_secret=settings.env_str("TWITTER_ACCESS_TOKEN_SECRET", "", environ),
            base_url=settings.resolve_base_url("twitter", environ),
        )

    def validate(self) -> None:
        _require((
            ("TWITTER_API_KEY", self.api_key),
            ("TWITTER_API_KEY_SECRET", self.api_key_secret),
            ("TWITTER_ACCESS_TOKEN", self.access_token),
            ("TWITTER_ACCESS_TOKEN_SECRET", self.access_token_secret),
        ))


@dataclass
class MediumConfig:
    """Integration token and publishing options for the Medium API."""
    integration_token: str = ""
    publish_status: str = "public"
    content_format: str = "markdown"
    base_url: str = ""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MediumConfig":
        status = settings.env_str("MEDIUM_PUBLISH_STATUS", "public", environ).strip().lower() or "public"
        if status not in settings.MEDIUM_PUBLISH_STATUSES:
            logger.warning(f"Invalid MEDIUM_PUBLISH_STATUS '{status}', using 'public'")
            status = "public"

        content_format = settings.env_str("MEDIUM_CONTENT_FORMAT", "markdown", environ).strip().lower() or "markdown"
        if content_format not in settings.MEDIUM_CONTENT_FORMATS:
            logger.warning(f"Invalid MEDIUM_CONTENT_FORMAT '{content_format}', using 'markdown'")
            content_format = "markdown"

        return cls(
            integration_token=settings.env_str("MEDIUM_INTEGRATION_TOKEN", "", environ),
            publish_status=status,
            content_format=content_format,
            base_url=settings.resolve_base_url("medium", environ),
        )

    def validate(self) -> None:
        _require((("MEDIUM_INTEGRATION_TOKEN", self.integration_token),))


@dataclass
class SubstackConfig:
    """Session cookie and subdomain for Substack's private posting API."""
    cookie: str = ""
    domain: str = ""
    base_url: str = ""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SubstackConfig":
        return cls(
            cookie=settings.env_str("SUBSTACK_COOKIE", "", environ),
            domain=settings.env_str("SUBSTACK_DOMAIN", "", environ),
            base_url=settings.resolve_base_url("substack", environ),
        )

    def validate(self) -> None:
        _require((
            ("SUBSTACK_COOKIE", self.cookie),
            ("SUBSTACK_DOMAIN", self.domain),
        ))


@dataclass
class LinkedInConfig:
    """Member access token and author URN for LinkedIn UGC posts."""
    access_token: str = ""
    person_urn: str = ""
    base_url: str = ""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LinkedInConfig":
        return cls(
            access_token=settings.env_str("LINKEDIN_ACCESS_TOKEN", "", environ),
            person_urn=settings.env_str("LINKEDIN_PERSON_URN", "", environ),
            base_url=settings.resolve_base_url("linkedin", environ),
        )

    def validate(self) -> None:
        _require((
            ("LINKEDIN_ACCESS_TOKEN", self.access_token),
            ("LINKEDIN_PERSON_URN", self.person_urn),
        ))


@dataclass
class ResendConfig:
    """API key and sender address for Resend transactional email."""
    api_key: str = ""
    from_email: str = ""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ResendConfig":
        return cls(
            api_key=settings.env_str("RESEND_API_KEY", "", environ),
            from_email=settings.env_str("RESEND_FROM_EMAIL", "", environ),
        )

    def validate(self) -> None:
        _require((
            ("RESEND_API_KEY", self.api_key),
            ("RESEND_FROM_EMAIL", self.from_email),
        ))
