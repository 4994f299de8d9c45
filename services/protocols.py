"""
Service Protocol Definitions

This module defines the publisher interface and the result types produced
by the fan-out orchestrator.

Protocols defined:
- PlatformPublisher: Interface implemented by every external publishing service
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

from data.models import BlogPost, BlogTag


@dataclass
class PlatformFailure:
    """One platform that could not be published to, and why."""
    platform: str
    reason: str

    def __str__(self) -> str:
        return f"{self.platform}: {self.reason}"


@dataclass
class PublishResult:
    """Aggregated outcome of one fan-out call.

    ``successes`` lists the platforms that accepted the post in the order they
    were attempted; ``failures`` holds one entry per platform that did not.
    An empty selection yields a result with no entries at all, which is ok.
    """
    requested: List[str] = field(default_factory=list)
    successes: List[str] = field(default_factory=list)
    failures: List[PlatformFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def failed_platforms(self) -> List[str]:
        return [f.platform for f in self.failures]

    @property
    def error_message(self) -> str:
        """Single-line rendering of every failure, or "" when nothing failed."""
        if self.ok:
            return ""
        return "some platforms failed: " + "; ".join(str(f) for f in self.failures)

    def __bool__(self) -> bool:
        return self.ok

    def as_dict(self) -> Dict[str, Any]:
        return {
            "requested": list(self.requested),
            "successes": list(self.successes),
            "failures": [{"platform": f.platform, "reason": f.reason} for f in self.failures],
        }


class PlatformPublisher(Protocol):
    """Protocol defining the interface for platform publishing services.

    Implementations should:
    - Validate their own credentials on every call, before any network work
    - Compose the platform-specific text from the post and tags
    - Raise a SiteBackendError subclass on failure
    """

    name: str

    def publish(
        self,
        post: BlogPost,
        tags: Sequence[BlogTag],
        main_image_url: Optional[str] = None
    ) -> str:
        """Publish a post to the platform.

        Args:
            post: The persisted blog post.
            tags: The post's tags.
            main_image_url: Optional hero image, required by some platforms.

        Returns:
            The identifier of the created remote post, or "" if it could not be read.
        """
        ...
