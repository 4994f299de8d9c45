"""
Tests for the Fan-Out Publisher

Tests cover platform selection, fixed ordering, isolation of failing
platforms, and the aggregated result.
"""

import pytest
from unittest.mock import MagicMock, patch
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.protocols import PlatformFailure, PublishResult
from services.publisher import PostPublisher, normalize_selection, publish_everywhere
from utils.exceptions import ConfigurationError, PlatformError, ValidationError

ALL_PLATFORMS = ["substack", "medium", "twitter", "linkedin"]


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def fake_publishers():
    """One MagicMock publisher per platform, each succeeding by default."""
    publishers = {}
    for name in ALL_PLATFORMS:
        publisher = MagicMock()
        publisher.name = name
        publisher.publish.return_value = f"{name}-id"
        publishers[name] = publisher
    return publishers


@pytest.fixture
def call_order(fake_publishers):
    """Records the order in which publishers are invoked."""
    order = []
    for name, publisher in fake_publishers.items():
        publisher.publish.side_effect = lambda *a, _n=name, **k: order.append(_n) or f"{_n}-id"
    return order


# =============================================================================
# Selection Tests
# =============================================================================

class TestNormalizeSelection:
    """Tests for normalize_selection."""

    def test_fixed_order(self):
        """The fan-out order ignores the caller's order."""
        assert normalize_selection(["linkedin", "twitter", "substack"]) == ["substack", "twitter", "linkedin"]

    def test_case_and_whitespace(self):
        """Names are matched case-insensitively after trimming."""
        assert normalize_selection([" Twitter ", "MEDIUM"]) == ["medium", "twitter"]

    def test_duplicates_collapsed(self):
        """A platform named twice is published once."""
        assert normalize_selection(["twitter", "Twitter"]) == ["twitter"]

    def test_unknown_ignored_with_warning(self, capture_logs):
        """Unknown names are dropped and logged."""
        assert normalize_selection(["myspace", "medium"]) == ["medium"]
        assert any("myspace" in r.getMessage() and r.levelname == "WARNING" for r in capture_logs)

    def test_empty(self):
        """None and [] select nothing."""
        assert normalize_selection(None) == []
        assert normalize_selection([]) == []

    def test_comma_separated_string(self, capture_logs):
        """A string is split on commas, not into characters."""
        assert normalize_selection("twitter, Medium") == ["medium", "twitter"]
        assert normalize_selection(" , ") == []
        assert not any(r.levelname == "WARNING" for r in capture_logs)


# =============================================================================
# Fan-Out Tests
# =============================================================================

class TestPublishEverywhere:
    """Tests for PostPublisher.publish_everywhere."""

    def test_empty_selection_is_noop(self, fake_publishers, make_post):
        """No platforms means no calls and a successful result."""
        result = PostPublisher(fake_publishers).publish_everywhere(make_post(), [], None, [])

        assert result.ok
        assert result.successes == []
        assert result.error_message == ""
        for publisher in fake_publishers.values():
            publisher.publish.assert_not_called()

    def test_all_succeed_in_order(self, fake_publishers, call_order, make_post, make_tags):
        """Every selected platform is called once, in fixed order."""
        post, tags = make_post(), make_tags("python")

        result = PostPublisher(fake_publishers).publish_everywhere(
            post, tags, "https://img.example.com/a.png", ["twitter", "substack", "linkedin", "medium"]
        )

        assert result.ok
        assert call_order == ALL_PLATFORMS
        assert result.successes == ALL_PLATFORMS
        fake_publishers["substack"].publish.assert_called_once_with(post, tags, "https://img.example.com/a.png")

    def test_selection_scopes_calls(self, fake_publishers, make_post):
        """Unselected platforms are never invoked."""
        PostPublisher(fake_publishers).publish_everywhere(make_post(), [], None, ["medium"])

        assert fake_publishers["medium"].publish.call_count == 1
        for name in ("substack", "twitter", "linkedin"):
            fake_publishers[name].publish.assert_not_called()

    def test_string_selection(self, fake_publishers, make_post):
        """A comma-separated selection string publishes to each named platform."""
        result = PostPublisher(fake_publishers).publish_everywhere(make_post(), [], None, "twitter,medium")

        assert fake_publishers["twitter"].publish.call_count == 1
        assert fake_publishers["medium"].publish.call_count == 1
        assert result.successes == ["medium", "twitter"]
        fake_publishers["substack"].publish.assert_not_called()
        fake_publishers["linkedin"].publish.assert_not_called()

    def test_failure_does_not_stop_others(self, fake_publishers, make_post):
        """A failing platform is recorded and the rest still run."""
        fake_publishers["substack"].publish.side_effect = ValidationError(
            "a main image URL is required to post to Substack"
        )
        fake_publishers["twitter"].publish.side_effect = PlatformError("twitter", 403, "duplicate content")

        result = PostPublisher(fake_publishers).publish_everywhere(make_post(), [], None, ALL_PLATFORMS)

        assert not result.ok
        assert result.successes == ["medium", "linkedin"]
        assert result.failed_platforms == ["substack", "twitter"]
        assert result.error_message == (
            "some platforms failed: "
            "substack: a main image URL is required to post to Substack; "
            "twitter: Twitter API error (status 403): duplicate content"
        )
        fake_publishers["linkedin"].publish.assert_called_once()

    def test_unexpected_exception_contained(self, fake_publishers, make_post, capture_logs):
        """Non-application exceptions are also contained per platform."""
        fake_publishers["medium"].publish.side_effect = KeyError("data")

        result = PostPublisher(fake_publishers).publish_everywhere(make_post(), [], None, ["medium", "linkedin"])

        assert result.failed_platforms == ["medium"]
        assert result.successes == ["linkedin"]
        assert any(r.exc_info for r in capture_logs if r.levelname == "ERROR")

    def test_missing_publisher(self, fake_publishers, make_post):
        """A selected platform without a publisher fails alone."""
        del fake_publishers["twitter"]

        result = PostPublisher(fake_publishers).publish_everywhere(make_post(), [], None, ["twitter", "medium"])

        assert result.failed_platforms == ["twitter"]
        assert result.successes == ["medium"]

    def test_configuration_error_reported(self, fake_publishers, make_post):
        """Missing credentials on one platform are reported with its name."""
        fake_publishers["linkedin"].publish.side_effect = ConfigurationError(
            "LINKEDIN_ACCESS_TOKEN environment variable is required"
        )

        result = PostPublisher(fake_publishers).publish_everywhere(make_post(), [], None, ["linkedin"])

        assert str(result.failures[0]) == "linkedin: LINKEDIN_ACCESS_TOKEN environment variable is required"

    def test_module_function_uses_defaults(self, make_post):
        """publish_everywhere builds the default publishers."""
        with patch('services.publisher.default_publishers', return_value={}) as defaults:
            result = publish_everywhere(make_post(), [], None, ["twitter"])

        defaults.assert_called_once()
        assert result.failed_platforms == ["twitter"]


class TestPublishResult:
    """Tests for PublishResult."""

    def test_truthiness(self):
        """A result is truthy exactly when nothing failed."""
        assert PublishResult(requested=["medium"], successes=["medium"])
        assert not PublishResult(failures=[PlatformFailure("medium", "x")])

    def test_as_dict(self):
        """as_dict is JSON friendly."""
        result = PublishResult(["medium", "twitter"], ["medium"], [PlatformFailure("twitter", "boom")])
        assert result.as_dict() == {
            "requested": ["medium", "twitter"],
            "successes": ["medium"],
            "failures": [{"platform": "twitter", "reason": "boom"}],
        }
