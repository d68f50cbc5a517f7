"""
Team roster bookkeeping.

The member count is never written separately: it is ``len(project.team)``,
so every add/remove here is a single-row insert or delete inside one
transaction and the count cannot drift from the roster.
"""

from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from collabx import models
from collabx.core.exceptions import CapacityExceeded
from collabx.core.logging import get_logger
from collabx.core.settings import settings
from collabx.schemas import TeamMemberDetail
from collabx.services.project_service import get_project

logger = get_logger(__name__)

PROFILE_PLACEHOLDER_EMAIL = "Not available"


def _find_member(
    db: Session, project_id: uuid.UUID, user_id: str
) -> Optional[models.ProjectTeamMember]:
    return (
        db.query(models.ProjectTeamMember)
        .filter(
            models.ProjectTeamMember.project_id == project_id,
            models.ProjectTeamMember.user_id == user_id,
        )
        .first()
    )


def count_members(db: Session, project_id: uuid.UUID) -> int:
    return (
        db.query(func.count(models.ProjectTeamMember.id))
        .filter(models.ProjectTeamMember.project_id == project_id)
        .scalar()
    )


def lock_project(db: Session, project_id: uuid.UUID | str) -> models.Project:
    """
    Take the project's write lock for the rest of the current transaction.

    Roster changes that depend on the member count (capacity checks, accepting
    a join request) call this first, so they run one at a time per project.
    The no-op update must be the first write of the transaction: on sqlite it
    takes the database write lock, on other backends the project row lock.
    """
    project = get_project(db, project_id)
    db.query(models.Project).filter(models.Project.id == project.id).update(
        {models.Project.updated_at: models.Project.updated_at}, synchronize_session=False
    )
    return project


def stage_member(
    db: Session,
    project: models.Project,
    user_id: str,
    user_name: str,
    role: Optional[str] = None,
) -> tuple[models.ProjectTeamMember, bool]:
    """
    Add a roster row inside the caller's transaction without committing.

    Returns ``(member, created)``. The caller must hold ``lock_project`` when
    capacity is enforced, otherwise two callers can both see a free seat.
    """
    existing = _find_member(db, project.id, user_id)
    if existing is not None:
        return existing, False

    if settings.enforce_team_capacity:
        current = count_members(db, project.id)
        if current >= project.team_size:
            raise CapacityExceeded(
                "Team is already at full capacity",
                {"team_size": project.team_size, "current_members": current},
            )

    member = models.ProjectTeamMember(
        project_id=project.id, user_id=user_id, user_name=user_name, role=role
    )
    db.add(member)
    db.flush()
    return member, True


def add_member(
    db: Session,
    project_id: uuid.UUID | str,
    user_id: str,
    user_name: str,
    role: Optional[str] = None,
) -> models.ProjectTeamMember:
    """
    Append a member to the roster. Adding someone already on it is a no-op
    that returns the existing entry.
    """
    project = lock_project(db, project_id)
    try:
        member, created = stage_member(db, project, user_id, user_name, role)
        db.commit()
    except CapacityExceeded:
        db.rollback()
        raise
    except IntegrityError:
        # Lost a race with a concurrent add of the same user
        db.rollback()
        existing = _find_member(db, project.id, user_id)
        if existing is None:
            raise
        return existing

    db.refresh(member)
    if not created:
        logger.info("roster_member_already_present", project_id=str(project.id), user_id=user_id)
        return member
    logger.info(
        "roster_member_added",
        project_id=str(project.id),
        user_id=user_id,
        role=role,
    )
    return member


def remove_member(db: Session, project_id: uuid.UUID | str, user_id: str) -> bool:
    """Remove a member. Returns False (and changes nothing) for a non-member."""
    project = get_project(db, project_id)
    member = _find_member(db, project.id, user_id)
    if member is None:
        return False

    db.delete(member)
    db.commit()
    logger.info("roster_member_removed", project_id=str(project.id), user_id=user_id)
    return True


def list_team(db: Session, project_id: uuid.UUID | str) -> list[TeamMemberDetail]:
    """Roster entries enriched with the members' current email and skills."""
    project = get_project(db, project_id)
    user_ids = [m.user_id for m in project.team]
    profiles: dict[str, models.UserProfile] = {}
    if user_ids:
        rows = db.query(models.UserProfile).filter(models.UserProfile.id.in_(user_ids)).all()
        profiles = {p.id: p for p in rows}

    result: list[TeamMemberDetail] = []
    for member in project.team:
        profile = profiles.get(member.user_id)
        result.append(
            TeamMemberDetail(
                user_id=member.user_id,
                user_name=member.user_name,
                role=member.role,
                joined_at=member.joined_at,
                email=(profile.email if profile and profile.email else PROFILE_PLACEHOLDER_EMAIL),
                skills=list(profile.skills or []) if profile else [],
            )
        )
    return result
