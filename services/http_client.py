"""
HTTP Helpers for Publishing Services

Shared request handling for the requests-based publishers: one session per
service, transport failures mapped to TransportError, non-success status
codes mapped to PlatformError using the platform's error envelope.
"""

from typing import Any, Callable, Dict, Iterable, Optional

import requests

from config import settings
from utils.exceptions import PlatformError, SerializationError, TransportError
from utils.logger import get_logger

logger = get_logger(__name__)

ErrorParser = Callable[[Any], Optional[str]]


def build_session(user_agent: Optional[str] = None) -> requests.Session:
    """Create a session with the JSON headers every publisher sends."""
    session = requests.Session()
    session.headers.update({
        "Content-Type": "application/json",
        "Accept": "application/json",
        "Accept-Charset": "utf-8",
    })
    if user_agent:
        session.headers["User-Agent"] = user_agent
    return session


def error_reason(response: requests.Response, parser: Optional[ErrorParser]) -> str:
    """
    Extract a human-readable reason from a failed response.

    The platform-specific ``parser`` gets the decoded JSON body; when it
    finds nothing, or the body is not JSON, the raw body text is used.
    """
    if parser is not None:
        try:
            reason = parser(response.json())
        except ValueError:
            reason = None
        if reason:
            return reason
    return response.text


def send(
    session: requests.Session,
    platform: str,
    method: str,
    url: str,
    ok_statuses: Iterable[int],
    error_parser: Optional[ErrorParser] = None,
    **kwargs
) -> requests.Response:
    """
    Issue one request and check its status.

    Raises:
        TransportError: If the request could not be sent or read.
        PlatformError: If the status code is not in ``ok_statuses``.
    """
    kwargs.setdefault("timeout", settings.REQUEST_TIMEOUT)
    try:
        response = session.request(method, url, **kwargs)
    except requests.RequestException as e:
        raise TransportError(f"failed to send request to {platform}: {e}", platform=platform) from e

    if response.status_code not in set(ok_statuses):
        raise PlatformError(platform, response.status_code, error_reason(response, error_parser))
    return response


def read_json(response: requests.Response, platform: str) -> Dict[str, Any]:
    """
    Decode a JSON object body.

    Raises:
        SerializationError: If the body is not a JSON object.
    """
    try:
        data = response.json()
    except ValueError as e:
        raise SerializationError(f"invalid JSON from {platform}: {e}", platform=platform) from e
    if not isinstance(data, dict):
        raise SerializationError(f"unexpected response shape from {platform}", platform=platform)
    return data


def created_id(response: requests.Response, platform: str, extract: Callable[[Dict[str, Any]], Any]) -> str:
    """
    Read the created resource id from a successful response.

    The remote post already exists at this point, so a malformed body is
    only logged.
    """
    try:
        value = extract(read_json(response, platform))
    except SerializationError as e:
        logger.warning(f"{platform} post likely succeeded, but the response could not be parsed: {e}")
        return ""
    if value in (None, ""):
        logger.warning(f"{platform} response did not include a post id")
        return ""
    return str(value)
