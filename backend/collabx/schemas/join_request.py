import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from collabx.schemas.enums import JoinRequestStatus


class JoinRequestCreate(BaseModel):
    # Checked by the coordinator so a bad role never creates a record
    role: str
    skills: List[str] = Field(default_factory=list)
    message: Optional[str] = None


class JoinRequestUser(BaseModel):
    id: str
    name: str


class JoinRequestRead(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    user_id: str
    user: JoinRequestUser
    role: str
    skills: List[str]
    message: Optional[str] = None
    match_percentage: int
    match_band: str
    status: JoinRequestStatus
    needs_resync: bool = False
    created_at: datetime
    decided_at: Optional[datetime] = None


class JoinRequestDecision(BaseModel):
    outcome: JoinRequestStatus
