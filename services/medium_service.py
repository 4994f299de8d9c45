"""
Medium Service Module

Publishes blog posts to Medium through the v1 REST API. The author id is
resolved from the integration token on each call via GET /me.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from config import settings
from config.platforms import MediumConfig
from data.models import BlogPost, BlogTag
from services import http_client
from services.composers import compose_long_form_text
from utils.exceptions import SerializationError
from utils.helpers import clean_tag_values, is_valid_url, safe_get
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class MediumPostPayload:
    """Request body for POST /users/{id}/posts."""
    title: str
    content_format: str
    content: str
    publish_status: str
    tags: List[str] = field(default_factory=list)
    canonical_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "title": self.title,
            "contentFormat": self.content_format,
            "content": self.content,
            "publishStatus": self.publish_status,
        }
        if self.tags:
            data["tags"] = self.tags
        if self.canonical_url:
            data["canonicalUrl"] = self.canonical_url
        return data


def parse_medium_error(data: Any) -> Optional[str]:
    return safe_get(data, "errors", 0, "message")


class MediumService:
    """Service for Medium publishing."""

    name = "medium"

    def __init__(self, config: Optional[MediumConfig] = None):
        self._config = config
        self.session = http_client.build_session()

    def _current_config(self) -> MediumConfig:
        return self._config if self._config is not None else MediumConfig.from_env()

    def _auth_headers(self, config: MediumConfig) -> Dict[str, str]:
        return {"Authorization": f"Bearer {config.integration_token}"}

    def get_user_id(self, config: MediumConfig) -> str:
        """
        Resolve the Medium user id behind the integration token.

        Raises:
            SerializationError: If the response carries no user id.
        """
        response = http_client.send(
            self.session, self.name, "GET", f"{settings.MEDIUM_API_URL}/me",
            ok_statuses=(200,),
            error_parser=parse_medium_error,
            headers=self._auth_headers(config),
        )
        user_id = safe_get(http_client.read_json(response, self.name), "data", "id")
        if not user_id:
            raise SerializationError("Medium API returned empty user ID", platform=self.name)
        return str(user_id)

    def build_payload(self, post: BlogPost, tags: Sequence[BlogTag],
                      config: MediumConfig) -> MediumPostPayload:
        return MediumPostPayload(
            title=post.title,
            content_format=config.content_format,
            content=compose_long_form_text(post, tags, config.base_url),
            publish_status=config.publish_status,
            tags=clean_tag_values(tags)[:settings.MEDIUM_MAX_TAGS],
            canonical_url=post.url if is_valid_url(post.url) else None,
        )

    def publish(self, post: BlogPost, tags: Sequence[BlogTag],
                main_image_url: Optional[str] = None) -> str:
        """
        Publish a post to Medium.

        Returns:
            str: The Medium post id, or "" if the response could not be parsed.
        """
        config = self._current_config()
        config.validate()

        user_id = self.get_user_id(config)
        payload = self.build_payload(post, tags, config)

        response = http_client.send(
            self.session, self.name, "POST",
            f"{settings.MEDIUM_API_URL}/users/{user_id}/posts",
            ok_statuses=(200, 201),
            error_parser=parse_medium_error,
            json=payload.to_dict(),
            headers=self._auth_headers(config),
        )

        post_id = http_client.created_id(response, self.name, lambda d: safe_get(d, "data", "id"))
        logger.info(f"Successfully posted to Medium: {post.title} "
                    f"(id={post_id or 'unknown'}, status={config.publish_status})")
        return post_id
