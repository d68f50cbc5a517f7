from typing import Literal

from collabx.core.exceptions import PermissionDenied
from collabx.core.rate_limit import RATE_LIMITS, limiter
from collabx.core.security import Identity
from collabx.db import get_db
from collabx.routers.auth import get_current_user
from collabx.routers.join_requests import build_join_request_read
from collabx.schemas import (
    JoinRequestCreate,
    JoinRequestRead,
    PaginatedResponse,
    ProjectCreate,
    ProjectDetail,
    ProjectListResponse,
    ProjectRead,
    TeamMemberAddRequest,
    TeamMemberDetail,
    TeamMemberRead,
)
from collabx.schemas.enums import (
    JoinRequestStatus,
    ProjectDifficulty,
    ProjectDomain,
    ProjectStatus,
)
from collabx.services import join_request_service, project_service, roster_service
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("", response_model=PaginatedResponse[ProjectRead])
def list_projects(
    search: str | None = Query(default=None),
    domain: ProjectDomain | None = Query(default=None),
    difficulty: ProjectDifficulty | None = Query(default=None),
    project_status: ProjectStatus | None = Query(default=None, alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
) -> PaginatedResponse[ProjectRead]:
    """
    List projects with pagination.

    - **search**: matches title, description or a required skill
    - **domain** / **difficulty** / **status**: exact filters
    """
    total, projects = project_service.list_projects(
        db,
        search=search,
        domain=domain.value if domain else None,
        difficulty=difficulty.value if difficulty else None,
        status=project_status.value if project_status else None,
        skip=skip,
        limit=limit,
    )
    return PaginatedResponse(
        total=total,
        skip=skip,
        limit=limit,
        items=[ProjectRead.model_validate(p, from_attributes=True) for p in projects],
    )


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMITS["project_operations"])
def create_project(
    request: Request,
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
) -> ProjectRead:
    project = project_service.create_project(db, payload, current_user)
    return ProjectRead.model_validate(project, from_attributes=True)


@router.get("/my", response_model=ProjectListResponse)
def get_my_projects(
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
) -> ProjectListResponse:
    projects = project_service.list_projects_for_owner(db, current_user.uid)
    return ProjectListResponse(
        items=[ProjectRead.model_validate(p, from_attributes=True) for p in projects],
        total=len(projects),
    )


@router.get("/{project_id}", response_model=ProjectDetail)
def get_project_detail(
    project_id: str,
    db: Session = Depends(get_db),
) -> ProjectDetail:
    project = project_service.get_project(db, project_id)
    return ProjectDetail.model_validate(project, from_attributes=True)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    project = project_service.get_project(db, project_id)
    project_service.ensure_can_manage(project, current_user, "delete this project")
    project_service.delete_project(db, project)
    return None


@router.get("/{project_id}/team", response_model=list[TeamMemberDetail])
def list_team_members(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
) -> list[TeamMemberDetail]:
    project = project_service.get_project(db, project_id)
    is_member = any(m.user_id == current_user.uid for m in project.team)
    if not (is_member or project_service.can_manage(project, current_user)):
        raise PermissionDenied("You don't have permission to view this team")
    return roster_service.list_team(db, project.id)


@router.post(
    "/{project_id}/team", response_model=TeamMemberRead, status_code=status.HTTP_201_CREATED
)
def add_team_member(
    project_id: str,
    payload: TeamMemberAddRequest,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
) -> TeamMemberRead:
    project = project_service.get_project(db, project_id)
    project_service.ensure_can_manage(project, current_user, "manage this team")
    member = roster_service.add_member(
        db, project.id, payload.user_id, payload.user_name, payload.role
    )
    return TeamMemberRead.model_validate(member, from_attributes=True)


@router.delete("/{project_id}/team/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_team_member(
    project_id: str,
    user_id: str,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    """Remove a member. Removing someone who is not on the team is a no-op."""
    project = project_service.get_project(db, project_id)
    project_service.ensure_can_manage(project, current_user, "manage this team")
    roster_service.remove_member(db, project.id, user_id)
    return None


@router.post(
    "/{project_id}/join-requests",
    response_model=JoinRequestRead,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(RATE_LIMITS["join_request_operations"])
def submit_join_request(
    request: Request,
    project_id: str,
    payload: JoinRequestCreate,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
) -> JoinRequestRead:
    join_request = join_request_service.submit(
        db,
        project_id,
        current_user,
        role=payload.role,
        skills=payload.skills,
        message=payload.message,
    )
    return build_join_request_read(join_request)


@router.get("/{project_id}/join-requests", response_model=list[JoinRequestRead])
def list_project_join_requests(
    project_id: str,
    request_status: JoinRequestStatus | None = Query(default=None, alias="status"),
    sort: Literal["match", "recent"] = Query(default="match"),
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
) -> list[JoinRequestRead]:
    """Owner view of a project's requests, best match first unless ``sort=recent``."""
    project = project_service.get_project(db, project_id)
    project_service.ensure_can_manage(project, current_user, "view join requests for this project")
    requests = join_request_service.list_for_project(
        db, project.id, status=request_status.value if request_status else None
    )
    return [build_join_request_read(jr) for jr in join_request_service.sort_requests(requests, sort)]
