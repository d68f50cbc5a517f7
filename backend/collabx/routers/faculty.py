import uuid

from collabx import models
from collabx.core.exceptions import raise_not_found
from collabx.core.security import Identity
from collabx.db import get_db
from collabx.routers.auth import require_admin
from collabx.schemas import FacultyCreate, FacultyRead, FacultyUpdate, PaginatedResponse
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

router = APIRouter()


@router.get("/", response_model=PaginatedResponse[FacultyRead])
def list_faculty(
    department: str | None = Query(default=None),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db),
):
    query = db.query(models.Faculty)
    if department:
        query = query.filter(models.Faculty.department == department)
    total = query.count()
    items = query.order_by(models.Faculty.name).offset(skip).limit(limit).all()
    return PaginatedResponse(
        items=items,
        total=total,
        skip=skip,
        limit=limit,
    )


@router.get("/{faculty_id}", response_model=FacultyRead)
def get_faculty(faculty_id: uuid.UUID, db: Session = Depends(get_db)):
    obj = db.get(models.Faculty, faculty_id)
    if not obj:
        raise_not_found("Faculty", faculty_id)
    return obj


@router.post("/", response_model=FacultyRead, status_code=status.HTTP_201_CREATED)
def create_faculty(
    payload: FacultyCreate,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    obj = models.Faculty(**payload.model_dump())
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.put("/{faculty_id}", response_model=FacultyRead)
def update_faculty(
    faculty_id: uuid.UUID,
    payload: FacultyUpdate,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    obj = db.get(models.Faculty, faculty_id)
    if not obj:
        raise_not_found("Faculty", faculty_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(obj, field, value)
    db.commit()
    db.refresh(obj)
    return obj


@router.delete("/{faculty_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_faculty(
    faculty_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    obj = db.get(models.Faculty, faculty_id)
    if not obj:
        raise_not_found("Faculty", faculty_id)
    db.delete(obj)
    db.commit()
    return None
