import enum
from sqlalchemy import Column, Integer, String, DateTime, Enum, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship
from app.core.database import Base


class JobStatus(str, enum.Enum):
    """
    Application status of a tracked job.

    - PENDING: Application sent, no answer yet
    - INTERVIEW: Interview scheduled or in progress
    - DECLINED: Rejected by the company
    """
    PENDING = "pending"
    INTERVIEW = "interview"
    DECLINED = "declined"


class JobType(str, enum.Enum):
    """Employment type of the position."""
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    INTERNSHIP = "internship"
    REMOTE = "remote"


class Job(Base):
    """
    A job application tracked by a single user.
    Only the owner (created_by) can see or modify it.
    """
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    company = Column(String(50), nullable=False)
    position = Column(String(100), nullable=False, index=True)
    status = Column(Enum(JobStatus), default=JobStatus.PENDING, nullable=False, index=True)
    job_type = Column(Enum(JobType), default=JobType.FULL_TIME, nullable=False)
    job_location = Column(String, default="my city", nullable=False)

    # Owner; never reassigned after creation
    created_by = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    owner = relationship("User", back_populates="jobs")

    def __repr__(self):
        return f"<Job(id={self.id}, company='{self.company}', position='{self.position}', status={self.status.value})>"
