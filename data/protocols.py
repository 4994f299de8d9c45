"""
Data Layer Protocol Definitions

This module defines typing.Protocol interfaces for the repositories.
The HTTP layer depends on these protocols so routes can be exercised with
in-memory doubles instead of a real database connection.

Protocols defined:
- BlogPostStorage / BlogTagStorage: blog posts and their tags
- ProjectStorage / ProjectTagStorage: projects and their tags
"""

from typing import List, Optional, Protocol

from data.models import BlogPost, BlogTag, Project, ProjectTag


class BlogPostStorage(Protocol):
    """Protocol defining the interface for blog post storage operations.

    Posts returned by the find methods carry their tags.
    """

    def find_all(self) -> List[BlogPost]:
        """Return every blog post, newest first."""
        ...

    def find_by_id(self, blog_post_id: str) -> Optional[BlogPost]:
        """Return the post with the given id, or None if it does not exist."""
        ...

    def add(self, post: BlogPost) -> BlogPost:
        """Insert a post (without its tags) and return it."""
        ...

    def update(self, post: BlogPost) -> BlogPost:
        """Overwrite the stored post row with ``post``."""
        ...

    def delete(self, blog_post_id: str) -> None:
        """Delete a post and its tags."""
        ...


class BlogTagStorage(Protocol):
    """Protocol for blog tag storage."""

    def find_by_parent(self, blog_post_id: str) -> List[BlogTag]:
        ...

    def add(self, tag: BlogTag) -> BlogTag:
        ...

    def delete_by_parent(self, blog_post_id: str) -> None:
        ...


class ProjectStorage(Protocol):
    """Protocol defining the interface for project storage operations."""

    def find_all(self) -> List[Project]:
        ...

    def find_by_id(self, project_id: str) -> Optional[Project]:
        ...

    def add(self, project: Project) -> Project:
        ...

    def update(self, project: Project) -> Project:
        ...

    def delete(self, project_id: str) -> None:
        ...


class ProjectTagStorage(Protocol):
    """Protocol for project tag storage."""

    def find_by_parent(self, project_id: str) -> List[ProjectTag]:
        ...

    def add(self, tag: ProjectTag) -> ProjectTag:
        ...

    def delete_by_parent(self, project_id: str) -> None:
        ...
