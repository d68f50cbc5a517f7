import uuid
from enum import Enum

from collabx import models
from collabx.core.exceptions import raise_not_found
from collabx.core.security import Identity
from collabx.db import get_db
from collabx.routers.auth import require_admin
from collabx.schemas import HackathonCreate, HackathonRead, HackathonUpdate, PaginatedResponse
from collabx.schemas.enums import HackathonStatus
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

router = APIRouter()


def _to_columns(data: dict) -> dict:
    return {k: v.value if isinstance(v, Enum) else v for k, v in data.items()}


@router.get("/", response_model=PaginatedResponse[HackathonRead])
def list_hackathons(
    hackathon_status: HackathonStatus | None = Query(default=None, alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db),
):
    query = db.query(models.Hackathon)
    if hackathon_status:
        query = query.filter(models.Hackathon.status == hackathon_status.value)
    total = query.count()
    items = query.order_by(models.Hackathon.event_date).offset(skip).limit(limit).all()
    return PaginatedResponse(
        items=items,
        total=total,
        skip=skip,
        limit=limit,
    )


@router.get("/{hackathon_id}", response_model=HackathonRead)
def get_hackathon(hackathon_id: uuid.UUID, db: Session = Depends(get_db)):
    obj = db.get(models.Hackathon, hackathon_id)
    if not obj:
        raise_not_found("Hackathon", hackathon_id)
    return obj


@router.post("/", response_model=HackathonRead, status_code=status.HTTP_201_CREATED)
def create_hackathon(
    payload: HackathonCreate,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    obj = models.Hackathon(**_to_columns(payload.model_dump()), created_by=admin.uid)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.put("/{hackathon_id}", response_model=HackathonRead)
def update_hackathon(
    hackathon_id: uuid.UUID,
    payload: HackathonUpdate,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    obj = db.get(models.Hackathon, hackathon_id)
    if not obj:
        raise_not_found("Hackathon", hackathon_id)
    for field, value in _to_columns(payload.model_dump(exclude_unset=True)).items():
        setattr(obj, field, value)
    db.commit()
    db.refresh(obj)
    return obj


@router.delete("/{hackathon_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_hackathon(
    hackathon_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    obj = db.get(models.Hackathon, hackathon_id)
    if not obj:
        raise_not_found("Hackathon", hackathon_id)
    db.delete(obj)
    db.commit()
    return None
