import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from collabx.schemas.enums import HackathonFormat, HackathonStatus


class HackathonBase(BaseModel):
    event_name: str
    event_date: date
    status: HackathonStatus = HackathonStatus.UPCOMING
    category: str
    format: HackathonFormat
    joining_url: str


class HackathonCreate(HackathonBase):
    pass


class HackathonUpdate(BaseModel):
    event_name: Optional[str] = None
    event_date: Optional[date] = None
    status: Optional[HackathonStatus] = None
    category: Optional[str] = None
    format: Optional[HackathonFormat] = None
    joining_url: Optional[str] = None


class HackathonRead(HackathonBase):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_by: Optional[str] = None
    created_at: datetime
