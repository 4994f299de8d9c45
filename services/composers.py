"""
Text Composers Module

Builds the platform-specific body for each publishing destination from a
blog post and its tags. Composers are pure: they never fail and silently
leave out fragments whose inputs (summary, URL, tags) are missing.
"""

import re
from typing import Optional, Sequence

from config import settings
from data.models import BlogPost, BlogTag
from utils.helpers import ELLIPSIS, build_permalink, hashtag_line, truncate_at_sentence

PART_SEPARATOR = "\n\n"
URL_PATTERN = re.compile(r"https?://[^ \t\n]*")


def post_link(post: BlogPost, base_url: Optional[str]) -> str:
    """The post's own URL if it has one, otherwise its permalink on the site."""
    if post.url:
        return post.url
    return build_permalink(base_url, post.id)


def _body_source(post: BlogPost) -> str:
    return post.summary if post.summary else (post.content or "")


# =============================================================================
# Twitter
# =============================================================================

def effective_tweet_length(text: str) -> int:
    """
    Count characters the way Twitter does for the 280 character limit.

    Every http(s) URL running up to the next space, tab or newline is
    charged TWITTER_URL_LENGTH characters when it is longer than that.
    Shorter URLs count at their literal length.
    """
    length = len(text)
    for match in URL_PATTERN.finditer(text):
        span = match.end() - match.start()
        if span > settings.TWITTER_URL_LENGTH:
            length = length - span + settings.TWITTER_URL_LENGTH
    return length


def _hard_cap(text: str, limit: int) -> str:
    """
    Cut ``text`` so that it plus an ellipsis fits ``limit`` effective characters.

    Effective length never shrinks as a prefix grows, so the longest fitting
    prefix is found by bisection.
    """
    if effective_tweet_length(text) <= limit:
        return text
    lo, hi = 0, len(text)
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if effective_tweet_length(text[:mid] + ELLIPSIS) <= limit:
            lo = mid
        else:
            hi = mid - 1
    return text[:lo] + ELLIPSIS


def compose_tweet_text(post: BlogPost, tags: Sequence[BlogTag], base_url: Optional[str]) -> str:
    """
    Build tweet text that fits Twitter's 280 character budget.

    The first pass joins the title, a short body, the link and up to four
    hashtags. If that is too long the body is re-budgeted around the title,
    the link and three hashtags, then shrunk further, then hard cut.
    """
    limit = settings.TWITTER_CHARACTER_LIMIT
    link = post_link(post, base_url)
    body = _body_source(post)

    parts = []
    if post.title:
        parts.append(post.title)
    if body:
        parts.append(truncate_at_sentence(body, settings.TWEET_SUMMARY_LENGTH))
    if link:
        parts.append(link)
    hashtags = hashtag_line(tags, settings.TWEET_MAX_HASHTAGS)
    if hashtags:
        parts.append(hashtags)

    text = PART_SEPARATOR.join(parts)
    if effective_tweet_length(text) <= limit:
        return text

    # Fallback: reserve room for title, link and fewer hashtags first
    title_block = post.title + PART_SEPARATOR if post.title else ""
    url_block = PART_SEPARATOR + link if link else ""
    fallback_tags = hashtag_line(tags, settings.TWEET_FALLBACK_MAX_HASHTAGS)
    tag_block = PART_SEPARATOR + fallback_tags if fallback_tags else ""

    url_cost = settings.TWITTER_URL_LENGTH if url_block else 0
    available = limit - len(title_block) - url_cost - len(tag_block)
    available = max(available, settings.TWEET_MIN_BODY_LENGTH)

    if len(body) > available:
        body = truncate_at_sentence(body, available - len(ELLIPSIS))

    text = title_block + body + url_block + tag_block
    length = effective_tweet_length(text)
    if length > limit:
        excess = length - limit
        if len(body) > excess + len(ELLIPSIS):
            body = body[:len(body) - excess - len(ELLIPSIS)] + ELLIPSIS
            text = title_block + body + url_block + tag_block
        else:
            max_literal = limit - url_cost + len(url_block) - len(ELLIPSIS)
            if 0 < max_literal < len(text):
                text = text[:max_literal] + ELLIPSIS

    # Budget arithmetic above is approximate; enforce the limit outright
    return _hard_cap(text, limit)


# =============================================================================
# Substack
# =============================================================================

def compose_newsletter_html(post: BlogPost, tags: Sequence[BlogTag], base_url: Optional[str],
                            image_url: Optional[str] = None) -> str:
    """
    Render the post as the lightweight HTML Substack accepts.

    Layout: optional hero image, content paragraphs (plain text split on
    blank lines unless the content already has <p> markup), a hashtag
    paragraph for every tag, and an "Originally published at" footer.
    """
    chunks = []

    if image_url:
        chunks.append(f'<figure><img src="{image_url}"><figcaption></figcaption></figure><br>')

    content = post.content or ""
    if "<p>" in content:
        chunks.append(content)
    else:
        for paragraph in content.split(PART_SEPARATOR):
            if paragraph.strip():
                chunks.append(f"<p>{paragraph}</p>")

    hashtags = hashtag_line(tags)
    if hashtags:
        chunks.append(f"<p>{hashtags}</p>")

    link = post_link(post, base_url)
    if link:
        chunks.append(f'<p><i>Originally published at <a href="{link}">{link}</a></i></p>')

    return "".join(chunks)


# =============================================================================
# Medium and LinkedIn
# =============================================================================

def _join_with_link_and_tags(title: str, body: str, link: str, tags: Sequence[BlogTag]) -> str:
    parts = []
    if title:
        parts.append(title)
    if body:
        parts.append(body)
    if link:
        parts.append(f"Read more: {link}")
    hashtags = hashtag_line(tags)
    if hashtags:
        parts.append(hashtags)
    return PART_SEPARATOR.join(parts)


def compose_long_form_text(post: BlogPost, tags: Sequence[BlogTag], base_url: Optional[str]) -> str:
    """Title, the full content (capped), a "Read more" link and every hashtag."""
    body = truncate_at_sentence(post.content or "", settings.LONG_FORM_CONTENT_LIMIT)
    return _join_with_link_and_tags(post.title, body, post_link(post, base_url), tags)


def compose_professional_text(post: BlogPost, tags: Sequence[BlogTag], base_url: Optional[str]) -> str:
    """Like the long-form text, but a summary takes the place of the content when present."""
    if post.summary:
        body = post.summary
    else:
        body = truncate_at_sentence(post.content or "", settings.LONG_FORM_CONTENT_LIMIT)
    return _join_with_link_and_tags(post.title, body, post_link(post, base_url), tags)
