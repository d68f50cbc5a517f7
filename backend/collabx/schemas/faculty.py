import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

MAX_DESCRIPTION_WORDS = 500


def _check_word_limit(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value.split()) > MAX_DESCRIPTION_WORDS:
        raise ValueError(f"description must be at most {MAX_DESCRIPTION_WORDS} words")
    return value


class FacultyBase(BaseModel):
    name: str
    department: str
    designation: str
    domain: str
    email: str
    skills: str = ""
    description: str = ""
    avatar: Optional[str] = None

    @field_validator("description")
    @classmethod
    def description_word_limit(cls, v):
        return _check_word_limit(v)


class FacultyCreate(FacultyBase):
    pass


class FacultyUpdate(BaseModel):
    name: Optional[str] = None
    department: Optional[str] = None
    designation: Optional[str] = None
    domain: Optional[str] = None
    email: Optional[str] = None
    skills: Optional[str] = None
    description: Optional[str] = None
    avatar: Optional[str] = None

    @field_validator("description")
    @classmethod
    def description_word_limit(cls, v):
        return _check_word_limit(v)


class FacultyRead(FacultyBase):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
