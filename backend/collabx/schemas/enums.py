# Enums for CollabX
from enum import Enum


class ProjectDomain(str, Enum):
    """Project domain"""

    AI = "ai"
    WEB = "web"
    IOT = "iot"
    CYBER = "cyber"


class ProjectDifficulty(str, Enum):
    """Project difficulty level"""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class ProjectStatus(str, Enum):
    """Moderation status of a project"""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class JoinRequestRole(str, Enum):
    """Role a candidate applies for"""

    DEVELOPER = "developer"
    LEARNER = "learner"


class JoinRequestStatus(str, Enum):
    """Lifecycle state of a join request"""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class HackathonStatus(str, Enum):
    UPCOMING = "Upcoming"
    ONGOING = "Ongoing"
    COMPLETED = "Completed"


class HackathonFormat(str, Enum):
    VIRTUAL = "Virtual"
    IN_PERSON = "In-Person"
    HYBRID = "Hybrid"


__all__ = [
    "ProjectDomain",
    "ProjectDifficulty",
    "ProjectStatus",
    "JoinRequestRole",
    "JoinRequestStatus",
    "HackathonStatus",
    "HackathonFormat",
]
