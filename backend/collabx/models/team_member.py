from datetime import datetime, timezone

from collabx.db import Base
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship


class ProjectTeamMember(Base):
    """
    One roster entry. ``user_name`` and ``role`` are a snapshot taken at join
    time and are not refreshed when the member's profile changes.
    """

    __tablename__ = "project_team_member"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(
        UUID(as_uuid=True), ForeignKey("project.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(String(128), nullable=False)
    user_name = Column(String(255), nullable=False)
    role = Column(String(50), nullable=True)
    joined_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    project = relationship("Project", back_populates="team")

    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="uq_project_team_member"),
    )
