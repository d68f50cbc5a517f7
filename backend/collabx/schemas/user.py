from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class UserProfileRead(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    role: Optional[str] = None
    reg_no: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    is_admin: bool = False
    projects_created: int = 0
    updated_at: Optional[datetime] = None


class UserProfileUpdate(BaseModel):
    name: Optional[str] = None
    skills: Optional[List[str]] = None
    role: Optional[str] = None
    reg_no: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
