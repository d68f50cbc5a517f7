from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import String, cast, or_
from sqlalchemy.orm import Session

from collabx import models
from collabx.core.exceptions import PermissionDenied, ResourceNotFound
from collabx.core.logging import get_logger
from collabx.core.security import Identity
from collabx.schemas import ProjectCreate

logger = get_logger(__name__)


def get_project(db: Session, project_id: uuid.UUID | str) -> models.Project:
    try:
        project_pk = project_id if isinstance(project_id, uuid.UUID) else uuid.UUID(str(project_id))
    except (TypeError, ValueError):
        raise ResourceNotFound(f"Invalid project ID format: '{project_id}'")
    project = db.get(models.Project, project_pk)
    if project is None:
        raise ResourceNotFound(f"Project with id '{project_pk}' not found")
    return project


def can_manage(project: models.Project, identity: Optional[Identity]) -> bool:
    if identity is None:
        return False
    return identity.is_admin or project.created_by == identity.uid


def ensure_can_manage(project: models.Project, identity: Optional[Identity], action: str) -> None:
    if not can_manage(project, identity):
        raise PermissionDenied(f"You don't have permission to {action}")


def _should_add_creator(creator: Identity, add_me_to_team: Optional[bool]) -> bool:
    # Admins join only when they ask to; everyone else joins unless they opt out.
    if creator.is_admin:
        return add_me_to_team is True
    return add_me_to_team is not False


def create_project(db: Session, payload: ProjectCreate, creator: Identity) -> models.Project:
    skills_required = payload.skills_required
    if skills_required is None:
        skills_required = list(payload.skills_have) + [
            s for s in payload.skills_need if s not in payload.skills_have
        ]

    project = models.Project(
        title=payload.title,
        description=payload.description,
        domain=payload.domain.value,
        difficulty=payload.difficulty.value,
        skills_required=skills_required,
        skills_have=list(payload.skills_have),
        skills_need=list(payload.skills_need),
        team_size=payload.team_size,
        reference_url=payload.reference_url,
        created_by=creator.uid,
        owner_name=creator.name,
        status="pending",
    )
    if _should_add_creator(creator, payload.add_me_to_team):
        project.team.append(
            models.ProjectTeamMember(user_id=creator.uid, user_name=creator.name, role="owner")
        )

    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info(
        "project_created",
        project_id=str(project.id),
        created_by=creator.uid,
        creator_on_team=bool(project.team),
    )
    return project


def list_projects(
    db: Session,
    *,
    search: Optional[str] = None,
    domain: Optional[str] = None,
    difficulty: Optional[str] = None,
    status: Optional[str] = None,
    skip: int = 0,
    limit: int = 20,
) -> tuple[int, list[models.Project]]:
    """
    Filter projects the way the browse page does: free-text search over title,
    description and required skills, plus exact domain/difficulty/status.
    """
    query = db.query(models.Project)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                models.Project.title.ilike(pattern),
                models.Project.description.ilike(pattern),
                cast(models.Project.skills_required, String).ilike(pattern),
            )
        )
    if domain:
        query = query.filter(models.Project.domain == domain)
    if difficulty:
        query = query.filter(models.Project.difficulty == difficulty)
    if status:
        query = query.filter(models.Project.status == status)

    total = query.count()
    items = query.order_by(models.Project.created_at.desc()).offset(skip).limit(limit).all()
    return total, items


def list_projects_for_owner(db: Session, owner_uid: str) -> list[models.Project]:
    return (
        db.query(models.Project)
        .filter(models.Project.created_by == owner_uid)
        .order_by(models.Project.created_at.desc())
        .all()
    )


def delete_project(db: Session, project: models.Project) -> None:
    project_id = str(project.id)
    db.delete(project)
    db.commit()
    logger.info("project_deleted", project_id=project_id)


def set_project_status(db: Session, project: models.Project, status: str) -> models.Project:
    project.status = status
    db.commit()
    db.refresh(project)
    logger.info("project_status_changed", project_id=str(project.id), status=status)
    return project
