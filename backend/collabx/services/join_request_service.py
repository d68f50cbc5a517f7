"""
Join request lifecycle.

A request is created ``pending`` and moves exactly once to ``accepted`` or
``rejected``::

    pending --accept--> accepted
    pending --reject--> rejected

The transition is written as a conditional update on ``status = 'pending'``,
so of two concurrent decisions on the same request only one can land. An
accept also takes the project's roster lock and inserts the roster row in
the same transaction, so concurrent accepts on one project are serialized
and a capacity check cannot be raced past. If the roster insert fails for
any reason other than capacity, the request keeps its ``accepted`` status,
is flagged ``needs_resync`` and ``PartialFailure`` is raised so the owner
can repair it with ``resync``.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from sqlalchemy.orm import Session

from collabx import models
from collabx.core.exceptions import (
    CapacityExceeded,
    InvalidInput,
    InvalidState,
    PartialFailure,
    ResourceNotFound,
)
from collabx.core.logging import get_logger
from collabx.core.security import Identity
from collabx.schemas.enums import JoinRequestRole, JoinRequestStatus
from collabx.services import roster_service, user_service
from collabx.services.project_service import get_project
from collabx.services.skill_match import match_score

logger = get_logger(__name__)

ALLOWED_ROLES = tuple(r.value for r in JoinRequestRole)
TERMINAL_STATES = frozenset({JoinRequestStatus.ACCEPTED.value, JoinRequestStatus.REJECTED.value})

SORT_BY_MATCH = "match"
SORT_BY_RECENT = "recent"


def _clean_skills(skills: Optional[Iterable[str]]) -> list[str]:
    cleaned: list[str] = []
    for skill in skills or []:
        if skill and skill.strip() and skill.strip() not in cleaned:
            cleaned.append(skill.strip())
    return cleaned


def submit(
    db: Session,
    project_id: uuid.UUID | str,
    candidate: Identity,
    role: str,
    skills: Optional[Sequence[str]],
    message: Optional[str] = None,
) -> models.JoinRequest:
    """
    Create a pending join request scored against the project's required skills.

    Also merges the candidate's skills and role into their profile.
    """
    if role not in ALLOWED_ROLES:
        raise InvalidInput(
            f"role must be one of: {', '.join(ALLOWED_ROLES)}", {"field": "role"}
        )
    cleaned_skills = _clean_skills(skills)
    if not cleaned_skills:
        raise InvalidInput("Select at least one skill", {"field": "skills"})

    project = get_project(db, project_id)

    if any(m.user_id == candidate.uid for m in project.team):
        raise InvalidState("You are already a member of this project")

    pending = (
        db.query(models.JoinRequest)
        .filter(
            models.JoinRequest.project_id == project.id,
            models.JoinRequest.user_id == candidate.uid,
            models.JoinRequest.status == JoinRequestStatus.PENDING.value,
        )
        .first()
    )
    if pending is not None:
        raise InvalidState(
            "You already have a pending request for this project",
            {"request_id": str(pending.id)},
        )

    score = match_score(project.skills_required, cleaned_skills)

    user_service.merge_profile(
        db,
        candidate.uid,
        name=candidate.name,
        email=candidate.email or None,
        skills=cleaned_skills,
        role=role,
    )

    request = models.JoinRequest(
        project_id=project.id,
        user_id=candidate.uid,
        user_name=candidate.name,
        role=role,
        skills=cleaned_skills,
        message=message.strip() if message and message.strip() else None,
        match_percentage=score,
        status=JoinRequestStatus.PENDING.value,
    )
    db.add(request)
    db.commit()
    db.refresh(request)

    logger.info(
        "join_request_submitted",
        request_id=str(request.id),
        project_id=str(project.id),
        user_id=candidate.uid,
        match_percentage=score,
    )
    return request


def get_request(db: Session, request_id: uuid.UUID | str) -> models.JoinRequest:
    try:
        request_pk = request_id if isinstance(request_id, uuid.UUID) else uuid.UUID(str(request_id))
    except (TypeError, ValueError):
        raise ResourceNotFound(f"Invalid join request ID format: '{request_id}'")
    request = db.get(models.JoinRequest, request_pk)
    if request is None:
        raise ResourceNotFound(f"Join request with id '{request_pk}' not found")
    return request


def list_for_project(
    db: Session, project_id: uuid.UUID | str, status: Optional[str] = None
) -> list[models.JoinRequest]:
    """All requests for a project in storage order; use ``sort_requests`` to order."""
    project = get_project(db, project_id)
    query = db.query(models.JoinRequest).filter(models.JoinRequest.project_id == project.id)
    if status:
        query = query.filter(models.JoinRequest.status == status)
    return query.all()


def list_for_user(db: Session, user_id: str) -> list[models.JoinRequest]:
    return (
        db.query(models.JoinRequest)
        .filter(models.JoinRequest.user_id == user_id)
        .order_by(models.JoinRequest.created_at.desc())
        .all()
    )


def sort_requests(
    requests: Iterable[models.JoinRequest], by: str = SORT_BY_MATCH
) -> list[models.JoinRequest]:
    """Order by match percentage (best first) or by recency (newest first)."""
    if by == SORT_BY_MATCH:
        return sorted(
            requests, key=lambda r: (r.match_percentage, r.created_at), reverse=True
        )
    if by == SORT_BY_RECENT:
        return sorted(requests, key=lambda r: r.created_at, reverse=True)
    raise InvalidInput(
        f"sort must be '{SORT_BY_MATCH}' or '{SORT_BY_RECENT}'", {"field": "sort"}
    )


def _mark_decided(
    db: Session,
    request: models.JoinRequest,
    target: JoinRequestStatus,
    decided_by: Optional[str],
    needs_resync: bool = False,
) -> None:
    values = {
        "status": target.value,
        "decided_at": datetime.now(timezone.utc),
        "decided_by": decided_by,
    }
    if needs_resync:
        values["needs_resync"] = True
    updated = (
        db.query(models.JoinRequest)
        .filter(
            models.JoinRequest.id == request.id,
            models.JoinRequest.status == JoinRequestStatus.PENDING.value,
        )
        .update(values, synchronize_session=False)
    )
    if updated == 0:
        db.rollback()
        db.refresh(request)
        raise InvalidState(
            f"Join request has already been {request.status}", {"status": request.status}
        )


def decide(
    db: Session,
    request_id: uuid.UUID | str,
    outcome: str,
    decided_by: Optional[str] = None,
) -> models.JoinRequest:
    """
    Move a pending request to ``accepted`` or ``rejected``.

    Accepting locks the project, flips the status and inserts the roster row
    in one transaction. A full team (with capacity enforced) rolls all of it
    back and the request stays ``pending``. Any other roster failure leaves
    the request ``accepted`` with ``needs_resync`` set and raises
    ``PartialFailure``.
    """
    try:
        target = JoinRequestStatus(outcome)
    except ValueError:
        raise InvalidInput(
            "outcome must be 'accepted' or 'rejected'", {"field": "outcome"}
        )
    if target.value not in TERMINAL_STATES:
        raise InvalidState("A join request can only be accepted or rejected")

    request = get_request(db, request_id)
    if request.status in TERMINAL_STATES:
        raise InvalidState(
            f"Join request has already been {request.status}", {"status": request.status}
        )

    if target is JoinRequestStatus.REJECTED:
        _mark_decided(db, request, target, decided_by)
    else:
        _accept(db, request, decided_by)
    db.commit()

    logger.info(
        "join_request_decided",
        request_id=str(request.id),
        project_id=str(request.project_id),
        outcome=target.value,
        decided_by=decided_by,
    )
    db.refresh(request)
    return request


def _accept(db: Session, request: models.JoinRequest, decided_by: Optional[str]) -> None:
    request_id = request.id
    project = roster_service.lock_project(db, request.project_id)
    _mark_decided(db, request, JoinRequestStatus.ACCEPTED, decided_by)
    try:
        roster_service.stage_member(
            db, project, request.user_id, request.user_name, request.role
        )
    except CapacityExceeded:
        db.rollback()
        logger.info("join_request_refused_team_full", request_id=str(request_id))
        raise
    except Exception as exc:
        db.rollback()
        logger.error(
            "roster_sync_failed",
            request_id=str(request_id),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        # Status only; resync adds the missing roster row
        _mark_decided(
            db, request, JoinRequestStatus.ACCEPTED, decided_by, needs_resync=True
        )
        db.commit()
        raise PartialFailure(
            "Join request was accepted but the team roster could not be updated",
            {"request_id": str(request_id), "needs_resync": True},
        ) from exc


def resync(db: Session, request_id: uuid.UUID | str) -> models.JoinRequest:
    """Re-apply the roster add for an accepted request; safe to repeat."""
    request = get_request(db, request_id)
    if request.status != JoinRequestStatus.ACCEPTED.value:
        raise InvalidState("Only accepted requests can be re-synced", {"status": request.status})

    roster_service.add_member(
        db, request.project_id, request.user_id, request.user_name, request.role
    )
    if request.needs_resync:
        request.needs_resync = False
        db.commit()
        logger.info("join_request_resynced", request_id=str(request.id))
    db.refresh(request)
    return request
