import uuid

from collabx.db import Base
from sqlalchemy import Column, Date, DateTime, String, func
from sqlalchemy.dialects.postgresql import UUID


class Hackathon(Base):
    __tablename__ = "hackathon"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    event_name = Column(String(255), nullable=False)
    event_date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default="Upcoming")
    category = Column(String(100), nullable=False)
    format = Column(String(20), nullable=False)
    joining_url = Column(String(512), nullable=False)
    created_by = Column(String(128), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
