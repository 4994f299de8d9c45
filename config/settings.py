"""
Configuration Settings for the Site Backend

This module centralizes all configuration settings for the site backend,
including environment variables, server and database settings, and the
constants used when publishing blog posts to external platforms.
"""

import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional
from dotenv import load_dotenv

from utils.exceptions import ConfigurationError

# Determine the application root directory
APP_ROOT = Path(__file__).resolve().parent.parent
ENV_FILE_PATH = os.getenv("ENV_FILE_PATH", os.path.join(APP_ROOT, '.env'))

# Load environment variables from .env file
load_dotenv(dotenv_path=ENV_FILE_PATH)


def env_str(key: str, default: str = "", environ: Optional[Mapping[str, str]] = None) -> str:
    """Read one value from ``environ`` (the process environment by default)."""
    source = os.environ if environ is None else environ
    value = source.get(key)
    return default if value is None else value


def env_int(key: str, default: int, environ: Optional[Mapping[str, str]] = None) -> int:
    """Read an integer value, falling back to ``default`` when unset or malformed."""
    raw = env_str(key, "", environ)
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def env_list(key: str, default: List[str], environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """Read a comma-separated list, trimming entries and dropping blanks."""
    raw = env_str(key, "", environ)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


# =============================================================================
# Server Settings
# =============================================================================

HOST = os.getenv("HOST", "0.0.0.0")
PORT = env_int("PORT", 8080)
ACCEPTED_ORIGINS = env_list("ACCEPTED_ORIGINS", [])
BACKEND_PASSWORD = os.getenv("BACKEND_PASSWORD", "")

# =============================================================================
# Database Settings
# =============================================================================

DB_DRIVER = os.getenv("DB_DRIVER", "PostgreSQL Unicode")
DB_SERVER = os.getenv("DB_SERVER", "")
DB_PORT = os.getenv("DB_PORT", "5432")
DB_NAME = os.getenv("DB_NAME", "")
DB_USER = os.getenv("DB_USER", "")
DB_PASSWORD = os.getenv("DB_PASSWORD", "")
DB_SSLMODE = os.getenv("DB_SSLMODE", "require")

# Build connection string safely (validation happens in validate_settings())
DB_CONNECTION_STRING = os.getenv("DB_CONNECTION_STRING", "") or ((
    f"DRIVER={{{DB_DRIVER}}};"
    f"SERVER={DB_SERVER};"
    f"PORT={DB_PORT};"
    f"DATABASE={DB_NAME};"
    f"UID={DB_USER};"
    f"PWD={DB_PASSWORD};"
    f"SSLMODE={DB_SSLMODE};"
) if all([DB_SERVER, DB_NAME, DB_USER, DB_PASSWORD]) else "")

# =============================================================================
# Publishing Settings
# =============================================================================

# Fan-out order is fixed: newsletter, long-form, microblog, professional network
PLATFORMS = ["substack", "medium", "twitter", "linkedin"]
DEFAULT_PLATFORMS = [p.lower() for p in env_list("DEFAULT_PLATFORMS", PLATFORMS)]

REQUEST_TIMEOUT = env_int("REQUEST_TIMEOUT", 30)   # Seconds per outbound HTTP call

# Twitter Settings
TWITTER_URL_LENGTH = 23              # t.co shortened URL length
TWITTER_CHARACTER_LIMIT = 280        # Twitter's character limit
TWEET_SUMMARY_LENGTH = 150           # Body budget on the first composition pass
TWEET_MAX_HASHTAGS = 4               # Hashtags on the first pass
TWEET_FALLBACK_MAX_HASHTAGS = 3      # Hashtags when the first pass is too long
TWEET_MIN_BODY_LENGTH = 50           # Body budget floor on the fallback pass

# Long-form and professional network settings
LONG_FORM_CONTENT_LIMIT = 2000       # Content cap for Medium and LinkedIn
MEDIUM_MAX_TAGS = 5                  # Medium rejects more than five tags
MEDIUM_PUBLISH_STATUSES = ("public", "draft", "unlisted")
MEDIUM_CONTENT_FORMATS = ("html", "markdown")

# Substack sits behind bot detection, so requests look like a browser
SUBSTACK_USER_AGENT = ('Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 '
                       '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36')

# API endpoints
MEDIUM_API_URL = "https://api.medium.com/v1"
LINKEDIN_UGC_POSTS_URL = "https://api.linkedin.com/v2/ugcPosts"
RESEND_EMAILS_URL = "https://api.resend.com/emails"
LINKEDIN_AUTHORIZATION_URL = "https://www.linkedin.com/oauth/v2/authorization"
LINKEDIN_ACCESS_TOKEN_URL = "https://www.linkedin.com/oauth/v2/accessToken"
LINKEDIN_DEFAULT_REDIRECT_URI = "https://www.linkedin.com/developers/tools/oauth/redirect"
LINKEDIN_OAUTH_SCOPES = ["openid", "profile", "w_member_social", "email"]


def resolve_base_url(platform: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Resolve the site base URL used to build permalinks for a platform.

    The unified BASE_URL wins; otherwise the platform-specific
    <PLATFORM>_BASE_URL variable is used.

    Args:
        platform: Platform identifier, e.g. "twitter".
        environ: Mapping to read from (defaults to the process environment).

    Returns:
        str: The base URL, or "" when neither variable is set.
    """
    unified = env_str("BASE_URL", "", environ)
    if unified:
        return unified
    return env_str(f"{platform.upper()}_BASE_URL", "", environ)


# =============================================================================
# Configuration Validation
# =============================================================================

def _platform_configured(platform: str) -> bool:
    required = {
        "substack": ("SUBSTACK_COOKIE", "SUBSTACK_DOMAIN"),
        "medium": ("MEDIUM_INTEGRATION_TOKEN",),
        "twitter": ("TWITTER_API_KEY", "TWITTER_API_KEY_SECRET",
                    "TWITTER_ACCESS_TOKEN", "TWITTER_ACCESS_TOKEN_SECRET"),
        "linkedin": ("LINKEDIN_ACCESS_TOKEN", "LINKEDIN_PERSON_URN"),
    }
    return all(env_str(key) for key in required.get(platform, ("",)))


def validate_settings():
    """
    Validate that all required settings are properly configured.

    Publishing credentials are not required here; each publisher checks its
    own credentials when it is asked to publish.

    Raises:
        ConfigurationError: If required settings are missing or invalid.
    """
    errors = []

    if not DB_CONNECTION_STRING:
        errors.append("Database connection string could not be built. "
                      "Set DB_CONNECTION_STRING or DB_SERVER, DB_NAME, DB_USER, DB_PASSWORD.")

    if not 0 < PORT < 65536:
        errors.append(f"PORT must be between 1 and 65535, got {PORT}")

    if REQUEST_TIMEOUT <= 0:
        errors.append(f"REQUEST_TIMEOUT must be positive, got {REQUEST_TIMEOUT}")

    unknown = [p for p in DEFAULT_PLATFORMS if p not in PLATFORMS]
    if unknown:
        errors.append(f"DEFAULT_PLATFORMS contains unknown platforms: {', '.join(unknown)}")

    # Raise all errors at once
    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)

    return True


def get_config_summary() -> Dict:
    """
    Returns a summary of current configuration (without sensitive values).
    Useful for logging startup state.
    """
    return {
        "server": {
            "host": HOST,
            "port": PORT,
            "accepted_origins": ACCEPTED_ORIGINS,
            "auth_enabled": bool(BACKEND_PASSWORD),
        },
        "platforms": {p: _platform_configured(p) for p in PLATFORMS},
        "default_platforms": DEFAULT_PLATFORMS,
        "database": {
            "server": DB_SERVER[:20] + "..." if DB_SERVER and len(DB_SERVER) > 20 else DB_SERVER,
            "database": DB_NAME,
        },
        "email": bool(env_str("RESEND_API_KEY") and env_str("RESEND_FROM_EMAIL")),
    }
