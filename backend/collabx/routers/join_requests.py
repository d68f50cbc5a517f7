from collabx import models
from collabx.core.exceptions import PermissionDenied
from collabx.core.security import Identity
from collabx.db import get_db
from collabx.routers.auth import get_current_user
from collabx.schemas import JoinRequestDecision, JoinRequestRead, JoinRequestUser
from collabx.services import join_request_service
from collabx.services.project_service import can_manage, ensure_can_manage, get_project
from collabx.services.skill_match import match_band
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

router = APIRouter(prefix="/api/join-requests", tags=["join-requests"])


def build_join_request_read(join_request: models.JoinRequest) -> JoinRequestRead:
    return JoinRequestRead(
        id=join_request.id,
        project_id=join_request.project_id,
        user_id=join_request.user_id,
        user=JoinRequestUser(id=join_request.user_id, name=join_request.user_name),
        role=join_request.role,
        skills=list(join_request.skills or []),
        message=join_request.message,
        match_percentage=join_request.match_percentage,
        match_band=match_band(join_request.match_percentage),
        status=join_request.status,
        needs_resync=bool(join_request.needs_resync),
        created_at=join_request.created_at,
        decided_at=join_request.decided_at,
    )


@router.get("/mine", response_model=list[JoinRequestRead])
def list_my_join_requests(
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
) -> list[JoinRequestRead]:
    return [
        build_join_request_read(jr)
        for jr in join_request_service.list_for_user(db, current_user.uid)
    ]


@router.get("/{request_id}", response_model=JoinRequestRead)
def get_join_request(
    request_id: str,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
) -> JoinRequestRead:
    join_request = join_request_service.get_request(db, request_id)
    if join_request.user_id != current_user.uid:
        project = get_project(db, join_request.project_id)
        if not can_manage(project, current_user):
            raise PermissionDenied("You don't have permission to view this join request")
    return build_join_request_read(join_request)


@router.post("/{request_id}/decision", response_model=JoinRequestRead)
def decide_join_request(
    request_id: str,
    payload: JoinRequestDecision,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
) -> JoinRequestRead:
    """
    Accept or reject a pending request. Accepting adds the candidate to the
    project's team. Deciding an already decided request returns 409.
    """
    join_request = join_request_service.get_request(db, request_id)
    project = get_project(db, join_request.project_id)
    ensure_can_manage(project, current_user, "decide join requests for this project")

    decided = join_request_service.decide(
        db, join_request.id, payload.outcome.value, decided_by=current_user.uid
    )
    return build_join_request_read(decided)


@router.post("/{request_id}/resync", response_model=JoinRequestRead)
def resync_join_request(
    request_id: str,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
) -> JoinRequestRead:
    join_request = join_request_service.get_request(db, request_id)
    project = get_project(db, join_request.project_id)
    ensure_can_manage(project, current_user, "re-sync join requests for this project")
    return build_join_request_read(join_request_service.resync(db, join_request.id))
