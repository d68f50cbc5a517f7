from collabx import models
from collabx.core.security import Identity
from collabx.db import get_db
from collabx.routers.auth import require_admin
from collabx.schemas import (
    AdminDashboardResponse,
    DepartmentCount,
    ProjectRead,
    ProjectStatusUpdate,
)
from collabx.services import project_service
from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

router = APIRouter(prefix="/api/admin", tags=["admin"])


def _count(db: Session, column) -> int:
    return db.query(func.count(column)).scalar() or 0


@router.get("/dashboard", response_model=AdminDashboardResponse)
def get_admin_dashboard(
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
) -> AdminDashboardResponse:
    pending_requests = (
        db.query(func.count(models.JoinRequest.id))
        .filter(models.JoinRequest.status == "pending")
        .scalar()
    ) or 0

    status_rows = (
        db.query(models.Project.status, func.count(models.Project.id))
        .group_by(models.Project.status)
        .all()
    )
    department_rows = (
        db.query(models.Faculty.department, func.count(models.Faculty.id))
        .group_by(models.Faculty.department)
        .order_by(func.count(models.Faculty.id).desc(), models.Faculty.department)
        .all()
    )

    return AdminDashboardResponse(
        projects_total=_count(db, models.Project.id),
        faculty_total=_count(db, models.Faculty.id),
        hackathons_total=_count(db, models.Hackathon.id),
        users_total=_count(db, models.UserProfile.id),
        pending_join_requests=pending_requests,
        projects_by_status={status: count for status, count in status_rows if status is not None},
        faculty_by_department=[
            DepartmentCount(name=department or "Unknown", count=count)
            for department, count in department_rows
        ],
    )


@router.patch("/projects/{project_id}/status", response_model=ProjectRead)
def update_project_status(
    project_id: str,
    payload: ProjectStatusUpdate,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
) -> ProjectRead:
    project = project_service.get_project(db, project_id)
    project = project_service.set_project_status(db, project, payload.status.value)
    return ProjectRead.model_validate(project, from_attributes=True)
