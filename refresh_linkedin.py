"""
LinkedIn Token Refresher

Walks through LinkedIn's OAuth 2.0 authorization-code flow by hand and
stores the new access token as LINKEDIN_ACCESS_TOKEN in the .env file.

Usage:
    python refresh_linkedin.py [--env-file PATH]
"""

import argparse
import logging
import os
import sys
from typing import Callable, Optional
from urllib.parse import urlencode, quote

import requests
from dotenv import load_dotenv, set_key

from config import settings
from utils.exceptions import ConfigurationError, PlatformError, SerializationError, TransportError
from utils.helpers import safe_get
from utils.logger import get_logger, setup_file_logging

logger = get_logger(__name__)


def build_authorization_url(client_id: str, redirect_uri: str) -> str:
    """URL the user opens in a browser to authorize the app."""
    query = urlencode(
        {
            "response_type": "code",
            "client_id": client_id,
            "redirect_uri": redirect_uri,
            "scope": " ".join(settings.LINKEDIN_OAUTH_SCOPES),
        },
        quote_via=quote,
    )
    return f"{settings.LINKEDIN_AUTHORIZATION_URL}?{query}"


def exchange_code(code: str, client_id: str, client_secret: str, redirect_uri: str,
                  session: Optional[requests.Session] = None) -> str:
    """
    Exchange an authorization code for an access token.

    Raises:
        TransportError: If the request fails.
        PlatformError: If LinkedIn does not answer 200.
        SerializationError: If the response has no access_token.
    """
    http = session or requests.Session()
    data = {
        "grant_type": "authorization_code",
        "client_id": client_id,
        "client_secret": client_secret,
        "redirect_uri": redirect_uri,
        "code": code,
    }
    try:
        response = http.post(settings.LINKEDIN_ACCESS_TOKEN_URL, data=data,
                             timeout=settings.REQUEST_TIMEOUT)
    except requests.RequestException as e:
        raise TransportError(f"failed to reach LinkedIn: {e}", platform="linkedin") from e

    if response.status_code != 200:
        raise PlatformError("linkedin", response.status_code, response.text)

    try:
        token = safe_get(response.json(), "access_token")
    except ValueError as e:
        raise SerializationError(f"invalid JSON from LinkedIn: {e}", platform="linkedin") from e
    if not isinstance(token, str) or not token:
        raise SerializationError("response did not contain access_token", platform="linkedin")
    return token


def update_env_file(token: str, env_file_path: str) -> None:
    """Write LINKEDIN_ACCESS_TOKEN into the env file, replacing any previous value."""
    if not os.path.exists(env_file_path):
        raise ConfigurationError(f"could not read {env_file_path}")
    set_key(env_file_path, "LINKEDIN_ACCESS_TOKEN", token, quote_mode="never")


def refresh_token(env_file_path: str, read_code: Callable[[str], str] = input) -> str:
    """
    Run the interactive refresh flow.

    Args:
        env_file_path: The .env file to update.
        read_code: Prompt function returning the pasted authorization code.

    Returns:
        str: The new access token.
    """
    client_id = settings.env_str("LINKEDIN_CLIENT_ID")
    client_secret = settings.env_str("LINKEDIN_CLIENT_SECRET")
    redirect_uri = settings.env_str("LINKEDIN_REDIRECT_URI", settings.LINKEDIN_DEFAULT_REDIRECT_URI)

    if not client_id:
        raise ConfigurationError("LINKEDIN_CLIENT_ID environment variable is required")
    if not client_secret:
        raise ConfigurationError("LINKEDIN_CLIENT_SECRET environment variable is required")

    print("\n1. Open this link to authorize the app:")
    print(f"\n{build_authorization_url(client_id, redirect_uri)}\n")

    code = read_code("2. Paste the 'code' from the browser URL here: ").strip()
    if not code:
        raise ConfigurationError("No code provided")

    logger.info("Exchanging code for access token...")
    token = exchange_code(code, client_id, client_secret, redirect_uri)

    update_env_file(token, env_file_path)
    logger.info(f"Updated LINKEDIN_ACCESS_TOKEN in {env_file_path}")
    return token


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='LinkedIn Token Refresher')
    parser.add_argument('--env-file', type=str, default=settings.ENV_FILE_PATH,
                        help='Path of the .env file to update')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point for the token refresher."""
    args = parse_arguments(argv)
    setup_file_logging(None, logging.INFO)
    load_dotenv(dotenv_path=args.env_file)

    try:
        refresh_token(args.env_file)
    except (ConfigurationError, TransportError, PlatformError, SerializationError) as e:
        logger.error(f"LinkedIn token refresh failed: {e}")
        return 1

    logger.info("Success! Your .env file has been updated with the new token.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
