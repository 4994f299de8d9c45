"""
Tests for Helper Utilities

Tests cover hashtag formatting, permalink construction, sentence-aware
truncation and the small tag and platform list helpers.
"""

import pytest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data.models import BlogTag
from utils.helpers import (
    build_permalink,
    clean_tag_values,
    format_hashtag,
    hashtag_line,
    is_valid_url,
    parse_platform_list,
    safe_get,
    tag_value,
    truncate_at_sentence,
)


# =============================================================================
# Hashtag Formatting Tests
# =============================================================================

class TestFormatHashtag:
    """Tests for format_hashtag."""

    def test_drops_spaces_and_hyphens(self):
        """Spaces and hyphens are removed, not replaced."""
        assert format_hashtag("machine learning") == "machinelearning"
        assert format_hashtag("open-source") == "opensource"

    def test_lowercases(self):
        """Result is lower-cased."""
        assert format_hashtag("GoLang") == "golang"

    def test_keeps_underscores_and_digits(self):
        """Underscores and non-leading digits survive."""
        assert format_hashtag("web_3_dev") == "web_3_dev"
        assert format_hashtag("python3") == "python3"

    def test_leading_digit_rejected(self):
        """A token starting with a digit becomes empty."""
        assert format_hashtag("3d printing") == ""
        assert format_hashtag("  #2024") == ""

    def test_digit_after_stripped_prefix_rejected(self):
        """Digits exposed by dropped characters still count as leading."""
        assert format_hashtag("#1password") == ""

    def test_empty_and_whitespace(self):
        """Empty, whitespace-only and None inputs give an empty string."""
        assert format_hashtag("") == ""
        assert format_hashtag("   ") == ""
        assert format_hashtag(None) == ""

    def test_non_ascii_letters_dropped(self):
        """Only ASCII letters are kept."""
        assert format_hashtag("café") == "caf"
        assert format_hashtag("日本") == ""

    def test_punctuation_only(self):
        """Input with nothing usable degrades to empty."""
        assert format_hashtag("!!!") == ""

    @pytest.mark.parametrize("raw", [
        "Hello World", "C++", "node.js", "_private", "a-b c_d", "Ünïcödé tag", "42", "x1 y2",
    ])
    def test_output_alphabet(self, raw):
        """Output only uses [a-z0-9_] and never starts with a digit."""
        token = format_hashtag(raw)
        assert all(ch in "abcdefghijklmnopqrstuvwxyz0123456789_" for ch in token)
        assert not token[:1].isdigit()

    @pytest.mark.parametrize("raw", ["python", "data_science", "Rust Lang", "k8s"])
    def test_idempotent(self, raw):
        """Formatting a formatted token changes nothing."""
        once = format_hashtag(raw)
        assert format_hashtag(once) == once


class TestHashtagLine:
    """Tests for hashtag_line."""

    def test_joins_with_spaces(self):
        """Tags become space-separated #tokens."""
        assert hashtag_line(["Python", "web dev"]) == "#python #webdev"

    def test_skips_blank_results(self):
        """Tags that format to nothing are skipped."""
        assert hashtag_line(["2024", "python", "  "]) == "#python"

    def test_limit_applies_before_skipping(self):
        """The limit counts the first N tags, including ones that get skipped."""
        assert hashtag_line(["2024", "a", "b", "c"], limit=3) == "#a #b"

    def test_duplicates_kept(self):
        """Tags normalizing to the same token are each emitted."""
        assert hashtag_line(["Go", "go"]) == "#go #go"

    def test_accepts_tag_models(self):
        """BlogTag objects work as well as strings."""
        assert hashtag_line([BlogTag(value="Testing")]) == "#testing"

    def test_empty(self):
        """No tags gives an empty line."""
        assert hashtag_line([]) == ""


# =============================================================================
# Permalink Tests
# =============================================================================

class TestBuildPermalink:
    """Tests for build_permalink."""

    def test_trailing_slash_stripped(self):
        """One trailing slash is removed."""
        assert build_permalink("https://example.com/", "abc") == "https://example.com/blog/abc"

    def test_without_trailing_slash(self):
        """Base without slash is used as-is."""
        assert build_permalink("https://example.com", "abc") == "https://example.com/blog/abc"

    def test_only_one_slash_stripped(self):
        """Exactly one trailing slash is removed."""
        assert build_permalink("https://example.com//", "abc") == "https://example.com//blog/abc"

    def test_empty_inputs(self):
        """Empty base or id gives an empty string."""
        assert build_permalink("", "abc") == ""
        assert build_permalink("https://example.com", "") == ""
        assert build_permalink(None, "abc") == ""


# =============================================================================
# Truncation Tests
# =============================================================================

class TestTruncateAtSentence:
    """Tests for truncate_at_sentence."""

    def test_short_text_unchanged(self):
        """Text within the limit is returned untouched."""
        assert truncate_at_sentence("Short text.", 50) == "Short text."

    def test_exact_length_unchanged(self):
        """Text exactly at the limit is not truncated."""
        assert truncate_at_sentence("x" * 10, 10) == "x" * 10

    def test_cuts_at_late_period(self):
        """A period past the midpoint becomes the cut point."""
        text = "This is the first sentence. And here comes more text that goes on"
        result = truncate_at_sentence(text, 40)
        assert result == "This is the first sentence...."

    def test_period_at_midpoint_counts(self):
        """A period exactly at the midpoint qualifies."""
        text = "abcd." + "efghijklmnop"
        # prefix of 10 is "abcd.efghi"; period index 4 < 5 -> hard cut
        assert truncate_at_sentence(text, 10) == "abcd.efghi..."
        # prefix of 8 is "abcd.efg"; period index 4 == 8 / 2 -> sentence cut
        assert truncate_at_sentence(text, 8) == "abcd...."

    def test_hard_cut_without_period(self):
        """No qualifying period means a hard cut plus ellipsis."""
        text = "a" * 30
        assert truncate_at_sentence(text, 10) == "a" * 10 + "..."

    def test_early_period_ignored(self):
        """A period before the midpoint is not used."""
        text = "Hi. " + "b" * 40
        assert truncate_at_sentence(text, 20) == text[:20] + "..."


# =============================================================================
# Misc Helper Tests
# =============================================================================

class TestMiscHelpers:
    """Tests for the remaining helpers."""

    def test_tag_value(self):
        """tag_value accepts strings, models and None."""
        assert tag_value("x") == "x"
        assert tag_value(BlogTag(value="y")) == "y"
        assert tag_value(None) == ""

    def test_clean_tag_values(self):
        """Values are trimmed, blanks dropped and '#' optionally stripped."""
        tags = [" python ", "#go", "", "  "]
        assert clean_tag_values(tags) == ["python", "#go"]
        assert clean_tag_values(tags, strip_hash=True) == ["python", "go"]

    def test_parse_platform_list(self):
        """Names are trimmed and lower-cased; blanks dropped."""
        assert parse_platform_list(" Twitter , MEDIUM,,") == ["twitter", "medium"]
        assert parse_platform_list("") == []
        assert parse_platform_list(None) == []

    def test_is_valid_url(self):
        """URLs need a scheme and a host."""
        assert is_valid_url("https://example.com/post")
        assert not is_valid_url("example.com")

    def test_safe_get(self):
        """Nested lookups fall back to the default."""
        data = {"errors": [{"message": "bad"}]}
        assert safe_get(data, "errors", 0, "message") == "bad"
        assert safe_get(data, "errors", 1, "message") is None
        assert safe_get(None, "x", default="d") == "d"
