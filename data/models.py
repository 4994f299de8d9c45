"""
Data Models for the Site Backend

This module contains the data classes for blog posts, projects and their tags.
``to_dict`` renders each model in the JSON shape served by the HTTP API.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


def new_id() -> str:
    """Generate a new record identifier."""
    return str(uuid.uuid4())


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class BlogTag:
    """A free-text label attached to a blog post."""
    value: str
    id: str = field(default_factory=new_id)
    blog_post_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "blog_post_id": self.blog_post_id, "value": self.value}


@dataclass
class BlogPost:
    """A blog post together with its tags."""
    title: str
    content: str
    id: str = field(default_factory=new_id)
    summary: Optional[str] = None
    url: Optional[str] = None
    date_added: Optional[datetime] = None
    date_edited: Optional[datetime] = None
    length: int = 0
    tags: List[BlogTag] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "dateAdded": _iso(self.date_added),
            "length": self.length,
        }
        # Optional fields are omitted rather than sent as null
        if self.summary is not None:
            data["summary"] = self.summary
        if self.date_edited is not None:
            data["dateEdited"] = _iso(self.date_edited)
        if self.url is not None:
            data["url"] = self.url
        if self.tags:
            data["tags"] = [t.to_dict() for t in self.tags]
        return data


@dataclass
class ProjectTag:
    """A free-text label attached to a project."""
    value: str
    id: str = field(default_factory=new_id)
    project_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "project_id": self.project_id, "value": self.value}


@dataclass
class Project:
    """A portfolio project together with its tags."""
    title: str
    description: str
    github_link: str
    demo_link: str
    type: str
    id: str = field(default_factory=new_id)
    gif_link: Optional[str] = None
    tags: List[ProjectTag] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "github_link": self.github_link,
            "demo_link": self.demo_link,
            "type": self.type,
        }
        if self.gif_link is not None:
            data["gif_link"] = self.gif_link
        if self.tags:
            data["tags"] = [t.to_dict() for t in self.tags]
        return data
