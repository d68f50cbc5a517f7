from collabx.core.security import Identity
from collabx.db import get_db
from collabx.routers.auth import get_current_user
from collabx.schemas import UserProfileRead, UserProfileUpdate
from collabx.services import user_service
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

router = APIRouter(prefix="/api/me", tags=["me"])


@router.get("/profile", response_model=UserProfileRead)
def get_my_profile(
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
) -> UserProfileRead:
    """Profile snapshot plus the number of projects the caller created."""
    return user_service.build_profile_read(db, current_user)


@router.put("/profile", response_model=UserProfileRead)
def update_my_profile(
    payload: UserProfileUpdate,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
) -> UserProfileRead:
    user_service.update_own_profile(db, current_user, payload)
    return user_service.build_profile_read(db, current_user)
