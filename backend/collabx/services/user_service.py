from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from collabx import models
from collabx.core.exceptions import InvalidInput
from collabx.core.security import Identity
from collabx.schemas import UserProfileRead, UserProfileUpdate
from collabx.schemas.enums import JoinRequestRole

_PROFILE_FIELDS = ("name", "email", "skills", "role", "reg_no", "linkedin", "github")
ALLOWED_ROLES = tuple(r.value for r in JoinRequestRole)


def get_profile(db: Session, uid: str) -> Optional[models.UserProfile]:
    return db.get(models.UserProfile, uid)


def merge_profile(db: Session, uid: str, **fields: Any) -> models.UserProfile:
    """
    Upsert a profile, touching only the fields given with a non-None value.

    Does not commit; the caller decides the transaction boundary.
    """
    profile = db.get(models.UserProfile, uid)
    if profile is None:
        profile = models.UserProfile(id=uid, skills=[])
        db.add(profile)
    for field, value in fields.items():
        if field not in _PROFILE_FIELDS:
            raise ValueError(f"Unknown profile field: {field}")
        if value is not None:
            setattr(profile, field, list(value) if field == "skills" else value)
    return profile


def update_own_profile(
    db: Session, identity: Identity, payload: UserProfileUpdate
) -> models.UserProfile:
    updates = payload.model_dump(exclude_unset=True)
    role = updates.get("role")
    if role is not None and role not in ALLOWED_ROLES:
        raise InvalidInput("role must be 'developer' or 'learner'", {"field": "role"})
    if updates.get("reg_no") is not None:
        updates["reg_no"] = updates["reg_no"].strip() or None
    updates.setdefault("email", identity.email or None)
    profile = merge_profile(db, identity.uid, **updates)
    if not profile.name:
        profile.name = identity.name
    db.commit()
    db.refresh(profile)
    return profile


def count_projects_created(db: Session, uid: str) -> int:
    return (
        db.query(func.count(models.Project.id)).filter(models.Project.created_by == uid).scalar()
    ) or 0


def build_profile_read(db: Session, identity: Identity) -> UserProfileRead:
    profile = get_profile(db, identity.uid)
    projects_created = count_projects_created(db, identity.uid)
    if profile is None:
        return UserProfileRead(
            id=identity.uid,
            name=identity.name,
            email=identity.email or None,
            is_admin=identity.is_admin,
            projects_created=projects_created,
        )
    return UserProfileRead(
        id=profile.id,
        name=profile.name or identity.name,
        email=profile.email or identity.email or None,
        skills=list(profile.skills or []),
        role=profile.role,
        reg_no=profile.reg_no,
        linkedin=profile.linkedin,
        github=profile.github,
        is_admin=identity.is_admin,
        projects_created=projects_created,
        updated_at=profile.updated_at,
    )
