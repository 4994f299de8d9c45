"""
Substack Service Module

Publishes blog posts as Substack newsletter posts through the private
posting endpoint that the Substack web editor uses. Authentication is the
browser session cookie (connect.sid).
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from config import settings
from config.platforms import SubstackConfig
from data.models import BlogPost, BlogTag
from services import http_client
from services.composers import compose_newsletter_html
from utils.exceptions import ValidationError
from utils.helpers import clean_tag_values, safe_get
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class SubstackPostPayload:
    """Request body for POST /api/v1/posts."""
    title: str
    body: str
    audience: str = "public"
    type: str = "newsletter"
    draft: bool = False
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if not self.tags:
            data.pop("tags")
        return data


def parse_substack_error(data: Any) -> Optional[str]:
    """Substack answers with either {"errors": [...]} or {"msg": "..."}."""
    errors = safe_get(data, "errors")
    if isinstance(errors, list) and errors:
        return "; ".join(str(e.get("msg", e)) if isinstance(e, dict) else str(e) for e in errors)
    return safe_get(data, "msg")


class SubstackService:
    """Service for Substack newsletter publishing."""

    name = "substack"

    def __init__(self, config: Optional[SubstackConfig] = None):
        """
        Args:
            config: Fixed credentials. When omitted they are read from the
                environment on every publish call.
        """
        self._config = config
        self.session = http_client.build_session(settings.SUBSTACK_USER_AGENT)

    def _current_config(self) -> SubstackConfig:
        return self._config if self._config is not None else SubstackConfig.from_env()

    def build_payload(self, post: BlogPost, tags: Sequence[BlogTag], main_image_url: str,
                      base_url: str) -> SubstackPostPayload:
        return SubstackPostPayload(
            title=post.title,
            body=compose_newsletter_html(post, tags, base_url, main_image_url),
            tags=clean_tag_values(tags, strip_hash=True),
        )

    def publish(self, post: BlogPost, tags: Sequence[BlogTag],
                main_image_url: Optional[str] = None) -> str:
        """
        Publish a post to Substack.

        Returns:
            str: The Substack post id, or "" if the response could not be parsed.

        Raises:
            ConfigurationError: If the cookie or subdomain is missing.
            ValidationError: If no main image URL was supplied.
            TransportError, PlatformError: If the request fails.
        """
        config = self._current_config()
        config.validate()
        if not main_image_url:
            raise ValidationError("a main image URL is required to post to Substack")

        payload = self.build_payload(post, tags, main_image_url, config.base_url)
        url = f"https://{config.domain}.substack.com/api/v1/posts"

        response = http_client.send(
            self.session, self.name, "POST", url,
            ok_statuses=(200, 201),
            error_parser=parse_substack_error,
            json=payload.to_dict(),
            headers={"Cookie": f"connect.sid={config.cookie}"},
        )

        post_id = http_client.created_id(response, self.name, lambda d: d.get("id"))
        logger.info(f"Successfully posted to Substack: {post.title} (id={post_id or 'unknown'})")
        return post_id
