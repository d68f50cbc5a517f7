from typing import Dict, List

from pydantic import BaseModel, Field


class DepartmentCount(BaseModel):
    name: str
    count: int


class AdminDashboardResponse(BaseModel):
    projects_total: int
    faculty_total: int
    hackathons_total: int
    users_total: int
    pending_join_requests: int
    projects_by_status: Dict[str, int] = Field(default_factory=dict)
    faculty_by_department: List[DepartmentCount] = Field(default_factory=list)
