"""
Fan-Out Publisher

Sends one blog post to every selected platform, one after another.
A failing platform never stops the remaining ones; every outcome is
collected into a PublishResult. There is no retry and no rollback.
"""

from typing import Dict, Iterable, Optional, Sequence

from config import settings
from data.models import BlogPost, BlogTag
from services.linkedin_service import LinkedInService
from services.medium_service import MediumService
from services.protocols import PlatformFailure, PlatformPublisher, PublishResult
from services.substack_service import SubstackService
from services.twitter_service import TwitterService
from utils.exceptions import SiteBackendError
from utils.helpers import parse_platform_list
from utils.logger import get_logger

logger = get_logger(__name__)


def default_publishers() -> Dict[str, PlatformPublisher]:
    """One publisher per platform, reading credentials from the environment per call."""
    return {
        "substack": SubstackService(),
        "medium": MediumService(),
        "twitter": TwitterService(),
        "linkedin": LinkedInService(),
    }


def normalize_selection(platforms: Optional[Iterable[str]]) -> list:
    """
    Lower-case and trim platform names, dropping unknown and duplicate ones.

    A plain string is read as a comma-separated list. The result keeps the
    fixed fan-out order, not the caller's order.
    """
    if isinstance(platforms, str):
        platforms = parse_platform_list(platforms)
    requested = {p.strip().lower() for p in (platforms or []) if p and p.strip()}
    unknown = requested - set(settings.PLATFORMS)
    if unknown:
        logger.warning(f"Ignoring unknown platforms: {', '.join(sorted(unknown))}")
    return [p for p in settings.PLATFORMS if p in requested]


class PostPublisher:
    """Publishes blog posts to the selected external platforms."""

    def __init__(self, publishers: Optional[Dict[str, PlatformPublisher]] = None):
        self.publishers = publishers if publishers is not None else default_publishers()

    def publish_everywhere(
        self,
        post: BlogPost,
        tags: Sequence[BlogTag],
        main_image_url: Optional[str],
        platforms: Optional[Iterable[str]]
    ) -> PublishResult:
        """
        Publish a post to each selected platform.

        Args:
            post: The persisted blog post.
            tags: The post's tags.
            main_image_url: Hero image, required by Substack.
            platforms: Platform names or a comma-separated string, matched
                case-insensitively. An empty or missing selection publishes
                nowhere and succeeds.

        Returns:
            PublishResult: Successes and per-platform failures.
        """
        selected = normalize_selection(platforms)
        result = PublishResult(requested=selected)

        if not selected:
            logger.info(f"No platforms selected for blog post {post.id}; nothing to publish")
            return result

        for platform in selected:
            publisher = self.publishers.get(platform)
            if publisher is None:
                result.failures.append(PlatformFailure(platform, "no publisher configured"))
                logger.error(f"No publisher configured for {platform}")
                continue

            logger.info(f"Posting blog post {post.id} to {platform}")
            try:
                publisher.publish(post, tags, main_image_url)
            except SiteBackendError as e:
                logger.error(f"Failed to post to {platform}: {e}")
                result.failures.append(PlatformFailure(platform, str(e)))
            except Exception as e:
                logger.exception(f"Unexpected error posting to {platform}: {e}")
                result.failures.append(PlatformFailure(platform, str(e) or type(e).__name__))
            else:
                result.successes.append(platform)

        if result.successes:
            logger.info(f"Successfully posted blog post {post.id} to: {', '.join(result.successes)}")
        if not result.ok:
            logger.error(result.error_message)
        return result


def publish_everywhere(
    post: BlogPost,
    tags: Sequence[BlogTag],
    main_image_url: Optional[str],
    platforms: Optional[Iterable[str]]
) -> PublishResult:
    """Publish with the default, environment-configured publishers."""
    return PostPublisher().publish_everywhere(post, tags, main_image_url, platforms)
