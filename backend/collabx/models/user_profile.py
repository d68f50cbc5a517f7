from collabx.db import Base
from sqlalchemy import JSON, Column, DateTime, String, func


class UserProfile(Base):
    """Profile snapshot keyed by the identity provider's uid."""

    __tablename__ = "user_profile"

    id = Column(String(128), primary_key=True)
    name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    skills = Column(JSON, nullable=False, default=list)
    role = Column(String(20), nullable=True)
    reg_no = Column(String(64), nullable=True)
    linkedin = Column(String(255), nullable=True)
    github = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
