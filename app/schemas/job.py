from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime
from uuid import UUID

from app.models.job import JobStatus, JobType


class CamelModel(BaseModel):
    """Base schema exposing snake_case attributes as camelCase JSON keys"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True  # Allows conversion from SQLAlchemy models


class JobCreateRequest(CamelModel):
    """Schema for creating a new job"""
    company: str = Field(..., min_length=1, max_length=50)
    position: str = Field(..., min_length=1, max_length=100)
    status: JobStatus = JobStatus.PENDING
    job_type: JobType = JobType.FULL_TIME
    job_location: Optional[str] = Field(None, min_length=1)


class JobUpdateRequest(CamelModel):
    """
    Schema for updating a job. Every field is optional.

    company/position carry no min_length here: an empty string must reach the
    handler so it can be rejected with 400 rather than a 422 validation error.
    """
    company: Optional[str] = Field(None, max_length=50)
    position: Optional[str] = Field(None, max_length=100)
    status: Optional[JobStatus] = None
    job_type: Optional[JobType] = None
    job_location: Optional[str] = Field(None, min_length=1)


class JobResponse(CamelModel):
    """Schema for job response"""
    id: int
    company: str
    position: str
    status: JobStatus
    job_type: JobType
    job_location: str
    created_by: UUID
    created_at: datetime
    updated_at: Optional[datetime] = None


class JobEnvelope(CamelModel):
    """Single job wrapped as {"job": ...}"""
    job: JobResponse


class JobListResponse(CamelModel):
    """One page of jobs plus totals for the whole filtered result"""
    jobs: List[JobResponse]
    total_jobs: int
    num_of_pages: int


class StatusCounts(CamelModel):
    """Number of jobs per status; absent statuses are reported as 0"""
    pending: int = 0
    interview: int = 0
    declined: int = 0


class MonthlyApplications(CamelModel):
    """Applications created in one calendar month, labelled like 'Jan 2024'"""
    date: str
    count: int


class StatsResponse(CamelModel):
    """Dashboard statistics for the current user"""
    default_stats: StatusCounts
    monthly_applications: List[MonthlyApplications]
