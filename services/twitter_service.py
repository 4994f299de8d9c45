"""
Twitter Service Module

This module handles integration with the Twitter/X API v2.
Tweets are created with OAuth 1.0a user-context credentials through
tweepy; the text is composed to fit Twitter's character budget.
"""

from typing import Optional, Sequence

import requests
import tweepy

from config.platforms import TwitterConfig
from data.models import BlogPost, BlogTag
from services.composers import compose_tweet_text, effective_tweet_length
from utils.exceptions import PlatformError, TransportError
from utils.helpers import safe_get
from utils.logger import get_logger

logger = get_logger(__name__)


def _http_error_reason(error: "tweepy.errors.HTTPException") -> str:
    messages = getattr(error, "api_messages", None) or []
    if messages:
        return messages[0]
    response = getattr(error, "response", None)
    try:
        detail = safe_get(response.json(), "detail") if response is not None else None
    except ValueError:
        detail = None
    return detail or str(error)


class TwitterService:
    """Service for Twitter/X integration."""

    name = "twitter"

    def __init__(self, config: Optional[TwitterConfig] = None):
        """
        Args:
            config: Fixed credentials. When omitted they are read from the
                environment on every publish call.
        """
        self._config = config

    def _current_config(self) -> TwitterConfig:
        return self._config if self._config is not None else TwitterConfig.from_env()

    def _create_client(self, config: TwitterConfig) -> tweepy.Client:
        """Create an OAuth 1.0a user-context client."""
        return tweepy.Client(
            consumer_key=config.api_key,
            consumer_secret=config.api_key_secret,
            access_token=config.access_token,
            access_token_secret=config.access_token_secret,
        )

    def publish(self, post: BlogPost, tags: Sequence[BlogTag],
                main_image_url: Optional[str] = None) -> str:
        """
        Post a tweet announcing a blog post.

        Args:
            post: The blog post to announce.
            tags: The post's tags, used as hashtags.
            main_image_url: Unused; tweets are text only.

        Returns:
            str: The created tweet id, or "" if the response had none.

        Raises:
            ConfigurationError: If any OAuth credential is missing.
            PlatformError: If Twitter rejects the tweet.
            TransportError: If the request cannot be sent.
        """
        config = self._current_config()
        config.validate()

        tweet_text = compose_tweet_text(post, tags, config.base_url)
        logger.debug(f"Tweet text ({effective_tweet_length(tweet_text)} effective chars): {tweet_text}")

        try:
            client = self._create_client(config)
            response = client.create_tweet(text=tweet_text, user_auth=True)
        except tweepy.errors.HTTPException as e:
            status = e.response.status_code if e.response is not None else 0
            raise PlatformError(self.name, status, _http_error_reason(e)) from e
        except (tweepy.errors.TweepyException, requests.RequestException) as e:
            raise TransportError(f"failed to send request to Twitter: {e}", platform=self.name) from e

        tweet_id = safe_get(getattr(response, "data", None), "id")
        if not tweet_id:
            logger.warning("Failed to parse Twitter post response, but post was created")
            return ""

        logger.info(f"Successfully posted tweet: {post.title} (id={tweet_id})")
        return str(tweet_id)
