from .faculty import Faculty
from .hackathon import Hackathon
from .join_request import JoinRequest
from .project import Project
from .team_member import ProjectTeamMember
from .user_profile import UserProfile

__all__ = [
    "Faculty",
    "Hackathon",
    "JoinRequest",
    "Project",
    "ProjectTeamMember",
    "UserProfile",
]
