"""
Repositories for Blog Posts, Projects and Their Tags

Each repository issues parameterized SQL through a DatabaseConnection and
maps rows to the dataclasses in data.models. Parents are always loaded
together with their tags.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from data.database import DatabaseConnection, db as default_db
from data.models import BlogPost, BlogTag, Project, ProjectTag, new_id
from utils.logger import get_logger

logger = get_logger(__name__)


def _as_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


# =============================================================================
# Tag Repositories
# =============================================================================

class BlogTagRepo:
    """Storage for blog tags."""

    def __init__(self, database: Optional[DatabaseConnection] = None):
        self.db = database or default_db

    def find_by_parent(self, blog_post_id: str) -> List[BlogTag]:
        rows = self.db.execute_query(
            "SELECT id, blog_post_id, value FROM blog_tags WHERE blog_post_id = ? ORDER BY value",
            (blog_post_id,),
        )
        return [BlogTag(id=r["id"], blog_post_id=r["blog_post_id"], value=r["value"]) for r in rows]

    def add(self, tag: BlogTag) -> BlogTag:
        if not tag.id:
            tag.id = new_id()
        self.db.execute_query(
            "INSERT INTO blog_tags (id, blog_post_id, value) VALUES (?, ?, ?)",
            (tag.id, tag.blog_post_id, tag.value),
        )
        return tag

    def delete_by_parent(self, blog_post_id: str) -> None:
        self.db.execute_query("DELETE FROM blog_tags WHERE blog_post_id = ?", (blog_post_id,))


class ProjectTagRepo:
    """Storage for project tags."""

    def __init__(self, database: Optional[DatabaseConnection] = None):
        self.db = database or default_db

    def find_by_parent(self, project_id: str) -> List[ProjectTag]:
        rows = self.db.execute_query(
            "SELECT id, project_id, value FROM project_tags WHERE project_id = ? ORDER BY value",
            (project_id,),
        )
        return [ProjectTag(id=r["id"], project_id=r["project_id"], value=r["value"]) for r in rows]

    def add(self, tag: ProjectTag) -> ProjectTag:
        if not tag.id:
            tag.id = new_id()
        self.db.execute_query(
            "INSERT INTO project_tags (id, project_id, value) VALUES (?, ?, ?)",
            (tag.id, tag.project_id, tag.value),
        )
        return tag

    def delete_by_parent(self, project_id: str) -> None:
        self.db.execute_query("DELETE FROM project_tags WHERE project_id = ?", (project_id,))


# =============================================================================
# Blog Post Repository
# =============================================================================

class BlogPostRepo:
    """Storage for blog posts."""

    COLUMNS = "id, title, summary, content, date_added, date_edited, length, url"

    def __init__(self, database: Optional[DatabaseConnection] = None,
                 tag_repo: Optional[BlogTagRepo] = None):
        self.db = database or default_db
        self.tags = tag_repo or BlogTagRepo(self.db)

    def _from_row(self, row: Dict[str, Any]) -> BlogPost:
        return BlogPost(
            id=row["id"],
            title=row["title"],
            summary=row.get("summary"),
            content=row["content"],
            date_added=_as_datetime(row.get("date_added")),
            date_edited=_as_datetime(row.get("date_edited")),
            length=row.get("length") or 0,
            url=row.get("url"),
            tags=self.tags.find_by_parent(row["id"]),
        )

    def find_all(self) -> List[BlogPost]:
        rows = self.db.execute_query(
            f"SELECT {self.COLUMNS} FROM blog_posts ORDER BY date_added DESC"
        )
        return [self._from_row(r) for r in rows]

    def find_by_id(self, blog_post_id: str) -> Optional[BlogPost]:
        rows = self.db.execute_query(
            f"SELECT {self.COLUMNS} FROM blog_posts WHERE id = ?", (blog_post_id,)
        )
        return self._from_row(rows[0]) if rows else None

    def add(self, post: BlogPost) -> BlogPost:
        """Insert the post row only; tags are added separately."""
        if not post.id:
            post.id = new_id()
        if post.date_added is None:
            post.date_added = datetime.now()
        self.db.execute_query(
            f"INSERT INTO blog_posts ({self.COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (post.id, post.title, post.summary, post.content, post.date_added,
             post.date_edited, post.length, post.url),
        )
        logger.info(f"Created blog post {post.id}")
        return post

    def update(self, post: BlogPost) -> BlogPost:
        self.db.execute_query(
            "UPDATE blog_posts SET title = ?, summary = ?, content = ?, date_added = ?, "
            "date_edited = ?, length = ?, url = ? WHERE id = ?",
            (post.title, post.summary, post.content, post.date_added,
             post.date_edited, post.length, post.url, post.id),
        )
        return post

    def delete(self, blog_post_id: str) -> None:
        """Delete the post and its tags in one transaction."""
        self.db.execute_many([
            ("DELETE FROM blog_tags WHERE blog_post_id = ?", (blog_post_id,)),
            ("DELETE FROM blog_posts WHERE id = ?", (blog_post_id,)),
        ])
        logger.info(f"Deleted blog post {blog_post_id}")


# =============================================================================
# Project Repository
# =============================================================================

class ProjectRepo:
    """Storage for projects."""

    COLUMNS = "id, title, description, github_link, demo_link, type, gif_link"

    def __init__(self, database: Optional[DatabaseConnection] = None,
                 tag_repo: Optional[ProjectTagRepo] = None):
        self.db = database or default_db
        self.tags = tag_repo or ProjectTagRepo(self.db)

    def _from_row(self, row: Dict[str, Any]) -> Project:
        return Project(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            github_link=row["github_link"],
            demo_link=row["demo_link"],
            type=row["type"],
            gif_link=row.get("gif_link"),
            tags=self.tags.find_by_parent(row["id"]),
        )

    def find_all(self) -> List[Project]:
        rows = self.db.execute_query(f"SELECT {self.COLUMNS} FROM projects ORDER BY title")
        return [self._from_row(r) for r in rows]

    def find_by_id(self, project_id: str) -> Optional[Project]:
        rows = self.db.execute_query(
            f"SELECT {self.COLUMNS} FROM projects WHERE id = ?", (project_id,)
        )
        return self._from_row(rows[0]) if rows else None

    def add(self, project: Project) -> Project:
        """Insert the project row only; tags are added separately."""
        if not project.id:
            project.id = new_id()
        self.db.execute_query(
            f"INSERT INTO projects ({self.COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
            (project.id, project.title, project.description, project.github_link,
             project.demo_link, project.type, project.gif_link),
        )
        logger.info(f"Created project {project.id}")
        return project

    def update(self, project: Project) -> Project:
        self.db.execute_query(
            "UPDATE projects SET title = ?, description = ?, github_link = ?, demo_link = ?, "
            "type = ?, gif_link = ? WHERE id = ?",
            (project.title, project.description, project.github_link, project.demo_link,
             project.type, project.gif_link, project.id),
        )
        return project

    def delete(self, project_id: str) -> None:
        self.db.execute_many([
            ("DELETE FROM project_tags WHERE project_id = ?", (project_id,)),
            ("DELETE FROM projects WHERE id = ?", (project_id,)),
        ])
        logger.info(f"Deleted project {project_id}")
