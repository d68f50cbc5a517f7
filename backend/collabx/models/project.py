import uuid

from collabx.db import Base
from sqlalchemy import JSON, Column, DateTime, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship


class Project(Base):
    __tablename__ = "project"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    domain = Column(String(20), nullable=False)
    difficulty = Column(String(20), nullable=False)
    skills_required = Column(JSON, nullable=False, default=list)
    skills_have = Column(JSON, nullable=False, default=list)
    skills_need = Column(JSON, nullable=False, default=list)
    team_size = Column(Integer, nullable=False, default=3)
    reference_url = Column(String(512), nullable=True)
    created_by = Column(String(128), nullable=False, index=True)
    owner_name = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    team = relationship(
        "ProjectTeamMember",
        back_populates="project",
        order_by="ProjectTeamMember.id",
        cascade="all, delete-orphan",
    )
    join_requests = relationship(
        "JoinRequest", back_populates="project", cascade="all, delete-orphan"
    )

    @property
    def current_members(self) -> int:
        # Derived from the roster, never stored
        return len(self.team)
