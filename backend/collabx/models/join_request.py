import uuid
from datetime import datetime, timezone

from collabx.db import Base
from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship


class JoinRequest(Base):
    __tablename__ = "join_request"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    project_id = Column(
        UUID(as_uuid=True), ForeignKey("project.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(String(128), nullable=False, index=True)
    user_name = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)
    skills = Column(JSON, nullable=False, default=list)
    message = Column(Text, nullable=True)
    match_percentage = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False, default="pending")
    # Set when the request was accepted but the roster write did not land
    needs_resync = Column(Boolean, nullable=False, default=False)
    # Python-side timestamps: server CURRENT_TIMESTAMP only has second precision on sqlite
    created_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )
    decided_at = Column(DateTime(timezone=True), nullable=True)
    decided_by = Column(String(128), nullable=True)

    project = relationship("Project", back_populates="join_requests")

    __table_args__ = (Index("ix_join_request_project_status", "project_id", "status"),)
