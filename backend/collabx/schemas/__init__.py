from .admin import AdminDashboardResponse, DepartmentCount
from .faculty import FacultyCreate, FacultyRead, FacultyUpdate
from .hackathon import HackathonCreate, HackathonRead, HackathonUpdate
from .join_request import (
    JoinRequestCreate,
    JoinRequestDecision,
    JoinRequestRead,
    JoinRequestUser,
)
from .pagination import PaginatedResponse
from .project import (
    ProjectCreate,
    ProjectDetail,
    ProjectListResponse,
    ProjectRead,
    ProjectStatusUpdate,
    TeamMemberAddRequest,
    TeamMemberDetail,
    TeamMemberRead,
)
from .user import UserProfileRead, UserProfileUpdate

__all__ = [
    "AdminDashboardResponse",
    "DepartmentCount",
    "FacultyCreate",
    "FacultyRead",
    "FacultyUpdate",
    "HackathonCreate",
    "HackathonRead",
    "HackathonUpdate",
    "JoinRequestCreate",
    "JoinRequestDecision",
    "JoinRequestRead",
    "JoinRequestUser",
    "PaginatedResponse",
    "ProjectCreate",
    "ProjectDetail",
    "ProjectListResponse",
    "ProjectRead",
    "ProjectStatusUpdate",
    "TeamMemberAddRequest",
    "TeamMemberDetail",
    "TeamMemberRead",
    "UserProfileRead",
    "UserProfileUpdate",
]
