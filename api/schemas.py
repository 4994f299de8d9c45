"""Request bodies accepted by the HTTP API."""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class TagIn(BaseModel):
    value: str


TagInput = Union[str, TagIn]


def tag_values(tags: Optional[List[TagInput]]) -> List[str]:
    """Raw tag strings from a request, trimmed, blanks dropped, order kept."""
    values = []
    for t in tags or []:
        value = (t if isinstance(t, str) else t.value).strip()
        if value:
            values.append(value)
    return values


# --- Blog Posts ---
class BlogPostIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    summary: Optional[str] = None
    content: Optional[str] = None
    url: Optional[str] = None
    date_added: Optional[datetime] = Field(default=None, alias="dateAdded")
    length: Optional[int] = None
    tags: Optional[List[TagInput]] = None


# --- Projects ---
class ProjectIn(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    github_link: Optional[str] = None
    demo_link: Optional[str] = None
    type: Optional[str] = None
    gif_link: Optional[str] = None
    tags: Optional[List[TagInput]] = None
