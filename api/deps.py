"""FastAPI dependencies: repositories, the fan-out publisher and the auth check."""

import hmac
import uuid
from functools import lru_cache
from typing import Optional

from fastapi import Header, HTTPException, status

from config import settings
from data.repositories import BlogPostRepo, BlogTagRepo, ProjectRepo, ProjectTagRepo
from services.publisher import PostPublisher


# --- Repos ---
def get_blog_post_repo() -> BlogPostRepo:
    return BlogPostRepo()


def get_blog_tag_repo() -> BlogTagRepo:
    return BlogTagRepo()


def get_project_repo() -> ProjectRepo:
    return ProjectRepo()


def get_project_tag_repo() -> ProjectTagRepo:
    return ProjectTagRepo()


# --- Publishing ---
@lru_cache
def get_post_publisher() -> PostPublisher:
    return PostPublisher()


# --- Auth ---
def require_auth(authorization: Optional[str] = Header(default=None)) -> None:
    """
    Check the bearer secret on mutating routes.

    Only enforced when BACKEND_PASSWORD is configured.
    """
    password = settings.BACKEND_PASSWORD
    if not password:
        return

    expected = f"Bearer {password}"
    if not authorization or not hmac.compare_digest(authorization.encode(), expected.encode()):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="unauthorized")


# --- Path parameters ---
def parse_record_id(raw: str, param_name: str) -> str:
    """Validate a UUID path parameter and return it in canonical form."""
    try:
        return str(uuid.UUID(raw))
    except (ValueError, AttributeError, TypeError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"invalid {param_name}")
