import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from collabx.schemas.enums import ProjectDifficulty, ProjectDomain, ProjectStatus


class ProjectBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    domain: ProjectDomain
    difficulty: ProjectDifficulty
    skills_have: List[str] = Field(default_factory=list)
    skills_need: List[str] = Field(default_factory=list)
    team_size: int = Field(3, ge=1, le=50)
    reference_url: Optional[str] = None


class ProjectCreate(ProjectBase):
    # Defaults to skills_have + skills_need when omitted
    skills_required: Optional[List[str]] = None
    # None means "use the default for my account type"
    add_me_to_team: Optional[bool] = None


class TeamMemberRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    user_name: str
    role: Optional[str] = None
    joined_at: datetime


class TeamMemberDetail(TeamMemberRead):
    email: str = "Not available"
    skills: List[str] = Field(default_factory=list)


class TeamMemberAddRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    user_name: str = Field(..., min_length=1)
    role: Optional[str] = None


class ProjectRead(ProjectBase):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    skills_required: List[str]
    current_members: int
    created_by: str
    owner_name: Optional[str] = None
    status: ProjectStatus
    created_at: datetime
    updated_at: datetime


class ProjectDetail(ProjectRead):
    team: List[TeamMemberRead] = Field(default_factory=list)


class ProjectListResponse(BaseModel):
    items: List[ProjectRead]
    total: int


class ProjectStatusUpdate(BaseModel):
    status: ProjectStatus
