"""
Shared Test Fixtures for the Site Backend

This module provides common fixtures used across all test modules.
Fixtures include a clean platform environment, mocked database
connections, log capture, HTTP response factories, and data factories
for blog posts and tags.
"""

import json
import logging
import pytest
from unittest.mock import MagicMock, patch
from datetime import datetime
from typing import Optional, Dict, Any, List
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data.models import BlogPost, BlogTag


PLATFORM_ENV_VARS = [
    "BASE_URL",
    "TWITTER_BASE_URL", "MEDIUM_BASE_URL", "SUBSTACK_BASE_URL", "LINKEDIN_BASE_URL",
    "TWITTER_API_KEY", "TWITTER_API_KEY_SECRET",
    "TWITTER_ACCESS_TOKEN", "TWITTER_ACCESS_TOKEN_SECRET",
    "MEDIUM_INTEGRATION_TOKEN", "MEDIUM_PUBLISH_STATUS", "MEDIUM_CONTENT_FORMAT",
    "SUBSTACK_COOKIE", "SUBSTACK_DOMAIN",
    "LINKEDIN_ACCESS_TOKEN", "LINKEDIN_PERSON_URN",
    "LINKEDIN_CLIENT_ID", "LINKEDIN_CLIENT_SECRET", "LINKEDIN_REDIRECT_URI",
    "RESEND_API_KEY", "RESEND_FROM_EMAIL",
]


# =============================================================================
# Environment Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def clean_platform_env(monkeypatch):
    """
    Remove every publishing credential from the process environment.

    Values loaded from a developer's .env file would otherwise leak into
    tests that read configuration from the environment.
    """
    for name in PLATFORM_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def no_auth(monkeypatch):
    """Disable the bearer check on mutating routes."""
    from config import settings
    monkeypatch.setattr(settings, "BACKEND_PASSWORD", "")


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
def mock_db_connection():
    """
    Mock pyodbc database connection and cursor.

    This fixture provides a mock database connection that simulates
    pyodbc behavior without requiring an actual database connection.

    Usage:
        def test_database(mock_db_connection):
            conn, cursor = mock_db_connection
            cursor.fetchall.return_value = [('row1',), ('row2',)]
            # ... test code

    Returns:
        tuple: A tuple of (mock_connection, mock_cursor).
    """
    mock_cursor = MagicMock()
    mock_cursor.description = None
    mock_cursor.fetchall.return_value = []

    mock_conn = MagicMock()
    mock_conn.cursor.return_value = mock_cursor

    with patch('pyodbc.connect', return_value=mock_conn) as mock_connect:
        mock_conn.connect_mock = mock_connect
        yield mock_conn, mock_cursor


@pytest.fixture
def fake_db():
    """
    A stand-in for DatabaseConnection that records queries.

    ``results`` is a list of return values handed out in order; once it is
    exhausted every query returns an empty list.
    """
    database = MagicMock()
    database.results = []

    def _execute(query, params=None):
        database.calls.append((" ".join(query.split()), params))
        return database.results.pop(0) if database.results else []

    database.calls = []
    database.execute_query.side_effect = _execute
    return database


# =============================================================================
# Logging Fixtures
# =============================================================================

@pytest.fixture
def capture_logs():
    """
    Capture log messages for assertion in tests.

    Returns:
        list: A list that will contain captured log records.
    """
    class LogCapture(logging.Handler):
        def __init__(self):
            super().__init__()
            self.records = []

        def emit(self, record):
            self.records.append(record)

    handler = LogCapture()
    handler.setLevel(logging.DEBUG)

    root_logger = logging.getLogger()
    original_level = root_logger.level
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(handler)

    yield handler.records

    root_logger.removeHandler(handler)
    root_logger.setLevel(original_level)


# =============================================================================
# HTTP Response Fixtures
# =============================================================================

@pytest.fixture
def mock_http_response():
    """
    Factory fixture for creating mock HTTP responses.

    Usage:
        def test_http_request(mock_http_response):
            response = mock_http_response(status_code=201, json_data={'id': 'abc'})

    Returns:
        callable: A factory function for creating mock responses.
    """
    def _create_response(
        status_code: int = 200,
        text: str = '',
        json_data: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> MagicMock:
        mock_response = MagicMock()
        mock_response.status_code = status_code
        mock_response.headers = headers or {}

        if text:
            mock_response.text = text
        elif json_data is not None:
            mock_response.text = json.dumps(json_data)
        else:
            mock_response.text = ''
        mock_response.content = mock_response.text.encode('utf-8')

        if json_data is not None:
            mock_response.json.return_value = json_data
        else:
            mock_response.json.side_effect = ValueError("No JSON data")

        return mock_response

    return _create_response


@pytest.fixture
def mock_session(mock_http_response):
    """
    A requests.Session double whose request() returns queued responses.

    Usage:
        service.session = mock_session
        mock_session.queue(mock_http_response(201, json_data={...}))
    """
    session = MagicMock()
    session.headers = {}
    responses: List[MagicMock] = []

    def _request(method, url, **kwargs):
        return responses.pop(0)

    session.request.side_effect = _request
    session.queue = responses.append
    return session


# =============================================================================
# Data Factories
# =============================================================================

@pytest.fixture
def make_post():
    """
    Factory for BlogPost objects with sensible defaults.

    Usage:
        post = make_post(summary="Short", url=None)
    """
    def _make(**overrides) -> BlogPost:
        values = {
            "id": "5f0c1d9e-6a57-4c3b-9d7e-0b9c6b2f1a11",
            "title": "Building a Personal Site",
            "content": "First paragraph about the site.\n\nSecond paragraph with details.",
            "summary": None,
            "url": None,
            "date_added": datetime(2024, 1, 15, 12, 0, 0),
            "length": 60,
        }
        values.update(overrides)
        return BlogPost(**values)

    return _make


@pytest.fixture
def make_tags():
    """Factory turning strings into BlogTag objects."""
    def _make(*values: str) -> List[BlogTag]:
        return [BlogTag(value=v, blog_post_id="5f0c1d9e-6a57-4c3b-9d7e-0b9c6b2f1a11") for v in values]

    return _make
