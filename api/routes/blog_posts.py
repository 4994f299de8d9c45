"""Blog post CRUD routes. Creating a post also fans it out to the selected platforms."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.deps import (
    get_blog_post_repo,
    get_blog_tag_repo,
    get_post_publisher,
    parse_record_id,
    require_auth,
)
from api.schemas import BlogPostIn, tag_values
from config import settings
from data.models import BlogPost, BlogTag
from data.protocols import BlogPostStorage, BlogTagStorage
from services.publisher import PostPublisher
from utils.exceptions import DatabaseError
from utils.helpers import parse_platform_list
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Blog Posts"])

ID_PARAM = "blogPostID"


def _with_tags(post: BlogPost) -> Dict[str, Any]:
    return {"blogPost": post.to_dict(), "tags": [t.to_dict() for t in post.tags]}


def _load_or_404(repo: BlogPostStorage, blog_post_id: str) -> BlogPost:
    post = repo.find_by_id(blog_post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="blog post not found")
    return post


def _add_tags(tag_repo: BlogTagStorage, blog_post_id: str, values: List[str]) -> None:
    for value in values:
        try:
            tag_repo.add(BlogTag(value=value, blog_post_id=blog_post_id))
        except DatabaseError as e:
            # One bad tag does not fail the whole request
            logger.error(f"Failed to create blog tag '{value}': {e}")


def resolve_platforms(raw: Optional[str]) -> List[str]:
    """
    Turn the ``platforms`` query parameter into a selection.

    Absent means the configured default platforms; present but blank
    means no platforms at all.
    """
    if raw is None:
        logger.info(f"Posting blog post to default platforms: {', '.join(settings.DEFAULT_PLATFORMS)}")
        return list(settings.DEFAULT_PLATFORMS)
    selected = parse_platform_list(raw)
    if selected:
        logger.info(f"Posting blog post to selected platforms: {', '.join(selected)}")
    else:
        logger.info("Empty platforms parameter; blog post will not be published anywhere")
    return selected


@router.get("/blog-posts")
def list_blog_posts(repo: BlogPostStorage = Depends(get_blog_post_repo)) -> Dict[str, Any]:
    posts = repo.find_all()
    return {"blogPosts": [_with_tags(p) for p in posts], "total": len(posts)}


@router.get("/blog-post/{blog_post_id}")
def get_blog_post(blog_post_id: str,
                  repo: BlogPostStorage = Depends(get_blog_post_repo)) -> Dict[str, Any]:
    post_id = parse_record_id(blog_post_id, ID_PARAM)
    return _with_tags(_load_or_404(repo, post_id))


@router.post("/blog-post", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_auth)])
def create_blog_post(
    body: BlogPostIn,
    main_image_url: Optional[str] = Query(default=None, alias="mainImageURL"),
    platforms: Optional[str] = Query(default=None),
    repo: BlogPostStorage = Depends(get_blog_post_repo),
    tag_repo: BlogTagStorage = Depends(get_blog_tag_repo),
    publisher: PostPublisher = Depends(get_post_publisher),
) -> Dict[str, Any]:
    """Persist a blog post with its tags, then publish it to the selected platforms."""
    if not body.title:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="title is required")
    if not body.content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="content is required")

    post = BlogPost(
        title=body.title,
        content=body.content,
        summary=body.summary,
        url=body.url,
        date_added=body.date_added or datetime.now(),
        length=body.length or len(body.content),
    )
    repo.add(post)
    _add_tags(tag_repo, post.id, tag_values(body.tags))

    created = _load_or_404(repo, post.id)

    result = publisher.publish_everywhere(created, created.tags, main_image_url,
                                          resolve_platforms(platforms))
    if not result.ok:
        # The post exists; publishing problems are only reported in the logs
        logger.error(f"Blog post {created.id} was created, but publishing failed: {result.error_message}")

    return _with_tags(created)


@router.put("/blog-post/{blog_post_id}", dependencies=[Depends(require_auth)])
def update_blog_post(
    blog_post_id: str,
    body: BlogPostIn,
    repo: BlogPostStorage = Depends(get_blog_post_repo),
    tag_repo: BlogTagStorage = Depends(get_blog_tag_repo),
) -> Dict[str, Any]:
    """Merge the provided fields over the stored post. Tags are replaced only when sent."""
    post_id = parse_record_id(blog_post_id, ID_PARAM)
    existing = _load_or_404(repo, post_id)

    if body.title is not None:
        if not body.title:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="title is required")
        existing.title = body.title
    if body.content is not None:
        if not body.content:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="content is required")
        existing.content = body.content
        existing.length = len(body.content)
    if body.summary is not None:
        existing.summary = body.summary
    if body.url is not None:
        existing.url = body.url
    if body.date_added is not None:
        existing.date_added = body.date_added
    if body.length is not None and body.content is None:
        existing.length = body.length
    existing.date_edited = datetime.now()

    repo.update(existing)

    if body.tags is not None:
        tag_repo.delete_by_parent(post_id)
        _add_tags(tag_repo, post_id, tag_values(body.tags))

    return _with_tags(_load_or_404(repo, post_id))


@router.delete("/blog-post/{blog_post_id}", dependencies=[Depends(require_auth)])
def delete_blog_post(blog_post_id: str,
                     repo: BlogPostStorage = Depends(get_blog_post_repo)) -> Dict[str, str]:
    post_id = parse_record_id(blog_post_id, ID_PARAM)
    _load_or_404(repo, post_id)
    repo.delete(post_id)
    return {"status": "success", "message": "blog post deleted successfully"}
