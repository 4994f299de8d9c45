"""Project CRUD routes."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from api.deps import get_project_repo, get_project_tag_repo, parse_record_id, require_auth
from api.schemas import ProjectIn, tag_values
from data.models import Project, ProjectTag
from data.protocols import ProjectStorage, ProjectTagStorage
from utils.exceptions import DatabaseError
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Projects"])

ID_PARAM = "projectID"
REQUIRED_FIELDS = ("title", "description", "github_link", "demo_link", "type")


def _with_tags(project: Project) -> Dict[str, Any]:
    return {"project": project.to_dict(), "tags": [t.to_dict() for t in project.tags]}


def _load_or_404(repo: ProjectStorage, project_id: str) -> Project:
    project = repo.find_by_id(project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="project not found")
    return project


def _add_tags(tag_repo: ProjectTagStorage, project_id: str, values: List[str]) -> None:
    for value in values:
        try:
            tag_repo.add(ProjectTag(value=value, project_id=project_id))
        except DatabaseError as e:
            logger.error(f"Failed to create project tag '{value}': {e}")


@router.get("/projects")
def list_projects(repo: ProjectStorage = Depends(get_project_repo)) -> Dict[str, Any]:
    projects = repo.find_all()
    return {"projects": [_with_tags(p) for p in projects], "total": len(projects)}


@router.get("/project/{project_id}")
def get_project(project_id: str, repo: ProjectStorage = Depends(get_project_repo)) -> Dict[str, Any]:
    return _with_tags(_load_or_404(repo, parse_record_id(project_id, ID_PARAM)))


@router.post("/project", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_auth)])
def create_project(
    body: ProjectIn,
    repo: ProjectStorage = Depends(get_project_repo),
    tag_repo: ProjectTagStorage = Depends(get_project_tag_repo),
) -> Dict[str, Any]:
    for name in REQUIRED_FIELDS:
        if not getattr(body, name):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{name} is required")

    project = Project(
        title=body.title,
        description=body.description,
        github_link=body.github_link,
        demo_link=body.demo_link,
        type=body.type,
        gif_link=body.gif_link,
    )
    repo.add(project)
    _add_tags(tag_repo, project.id, tag_values(body.tags))
    return _with_tags(_load_or_404(repo, project.id))


@router.put("/project/{project_id}", dependencies=[Depends(require_auth)])
def update_project(
    project_id: str,
    body: ProjectIn,
    repo: ProjectStorage = Depends(get_project_repo),
    tag_repo: ProjectTagStorage = Depends(get_project_tag_repo),
) -> Dict[str, Any]:
    """Merge the provided fields over the stored project. Tags are replaced only when sent."""
    record_id = parse_record_id(project_id, ID_PARAM)
    existing = _load_or_404(repo, record_id)

    for name in REQUIRED_FIELDS:
        value = getattr(body, name)
        if value is None:
            continue
        if not value:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{name} is required")
        setattr(existing, name, value)
    if body.gif_link is not None:
        existing.gif_link = body.gif_link or None

    repo.update(existing)

    if body.tags is not None:
        tag_repo.delete_by_parent(record_id)
        _add_tags(tag_repo, record_id, tag_values(body.tags))

    return _with_tags(_load_or_404(repo, record_id))


@router.delete("/project/{project_id}", dependencies=[Depends(require_auth)])
def delete_project(project_id: str, repo: ProjectStorage = Depends(get_project_repo)) -> Dict[str, str]:
    record_id = parse_record_id(project_id, ID_PARAM)
    _load_or_404(repo, record_id)
    repo.delete(record_id)
    return {"status": "success", "message": "project deleted successfully"}
