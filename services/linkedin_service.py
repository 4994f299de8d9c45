"""
LinkedIn Service Module

Shares blog posts on the member's LinkedIn feed through the UGC Posts API.
Posts with their own URL are shared as an article link.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from config import settings
from config.platforms import LinkedInConfig
from data.models import BlogPost, BlogTag
from services import http_client
from services.composers import compose_professional_text
from utils.helpers import is_valid_url, safe_get
from utils.logger import get_logger

logger = get_logger(__name__)

SHARE_CONTENT_KEY = "com.linkedin.ugc.ShareContent"
VISIBILITY_KEY = "com.linkedin.ugc.MemberNetworkVisibility"


@dataclass
class LinkedInSharePayload:
    """Request body for POST /v2/ugcPosts."""
    author: str
    text: str
    article_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        share: Dict[str, Any] = {
            "shareCommentary": {"text": self.text},
            "shareMediaCategory": "NONE",
        }
        if self.article_url:
            share["shareMediaCategory"] = "ARTICLE"
            share["media"] = [{"status": "READY", "originalUrl": self.article_url}]
        return {
            "author": self.author,
            "lifecycleState": "PUBLISHED",
            "specificContent": {SHARE_CONTENT_KEY: share},
            "visibility": {VISIBILITY_KEY: "PUBLIC"},
        }


def parse_linkedin_error(data: Any) -> Optional[str]:
    message = safe_get(data, "message")
    code = safe_get(data, "errorCode")
    if message and code:
        return f"{message} (code {code})"
    return message


class LinkedInService:
    """Service for LinkedIn sharing."""

    name = "linkedin"

    def __init__(self, config: Optional[LinkedInConfig] = None):
        self._config = config
        self.session = http_client.build_session()
        self.session.headers["X-Restli-Protocol-Version"] = "2.0.0"

    def _current_config(self) -> LinkedInConfig:
        return self._config if self._config is not None else LinkedInConfig.from_env()

    def build_payload(self, post: BlogPost, tags: Sequence[BlogTag],
                      config: LinkedInConfig) -> LinkedInSharePayload:
        return LinkedInSharePayload(
            author=config.person_urn,
            text=compose_professional_text(post, tags, config.base_url),
            article_url=post.url if is_valid_url(post.url) else None,
        )

    def publish(self, post: BlogPost, tags: Sequence[BlogTag],
                main_image_url: Optional[str] = None) -> str:
        """
        Publish a post to LinkedIn.

        Returns:
            str: The UGC post URN, or "" if the response could not be parsed.
        """
        config = self._current_config()
        config.validate()

        payload = self.build_payload(post, tags, config)
        response = http_client.send(
            self.session, self.name, "POST", settings.LINKEDIN_UGC_POSTS_URL,
            ok_statuses=(201,),
            error_parser=parse_linkedin_error,
            json=payload.to_dict(),
            headers={"Authorization": f"Bearer {config.access_token}"},
        )

        # LinkedIn often returns an empty body and puts the URN in a header
        header_id = response.headers.get("x-restli-id", "")
        if header_id and not response.content:
            post_id = header_id
        else:
            post_id = http_client.created_id(response, self.name, lambda d: d.get("id")) or header_id
        logger.info(f"Successfully posted to LinkedIn: {post.title} (id={post_id or 'unknown'})")
        return post_id
