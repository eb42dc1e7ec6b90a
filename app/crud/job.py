"""
CRUD operations for the Job model.

Every function takes the owner's user id and filters on it, so a job is only
ever visible to (and mutable by) the user who created it.
"""

import math
from typing import Dict, List, Optional, Tuple, Type, TypeVar, Union
from uuid import UUID
from sqlalchemy.orm import Session
from app.core.exceptions import BadRequestError
from app.models.job import Job, JobStatus, JobType
from app.schemas.job import JobCreateRequest, JobUpdateRequest

PAGE_SIZE = 10

# Sentinel filter value meaning "no constraint on this field"
ALL = "all"

# Sort key -> ORDER BY clauses. id is the final tie-breaker so pages never overlap.
SORT_OPTIONS: Dict[str, tuple] = {
    "latest": (Job.created_at.desc(), Job.id.desc()),
    "oldest": (Job.created_at.asc(), Job.id.asc()),
    "a-z": (Job.position.asc(), Job.id.asc()),
    "z-a": (Job.position.desc(), Job.id.desc()),
}

# Largest value of the integer primary key column
MAX_JOB_ID = 2**31 - 1

# Used when the sort key is absent or not in SORT_OPTIONS: insertion order
DEFAULT_ORDER = (Job.id.asc(),)

E = TypeVar("E", JobStatus, JobType)


def _parse_filter(value: Optional[str], enum_cls: Type[E], field: str) -> Optional[E]:
    """Convert a query-string filter to an enum member; None/""/"all" mean no filter."""
    if not value or value == ALL:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join([ALL] + [member.value for member in enum_cls])
        raise BadRequestError(f"Invalid {field} '{value}'. Expected one of: {allowed}")


def _parse_page(value: Union[int, str, None]) -> int:
    """Page number from the query string; missing, non-numeric or below 1 means 1."""
    try:
        page = int(value)
    except (TypeError, ValueError):
        return 1
    return max(page, 1)


def create(db: Session, owner_id: UUID, job_data: JobCreateRequest) -> Job:
    """
    Create a new job owned by owner_id.

    Returns:
        Created Job instance with id and timestamps loaded
    """
    db_job = Job(
        **job_data.model_dump(exclude_none=True),
        created_by=owner_id,
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    return db_job


def get_by_id(db: Session, job_id: int, owner_id: UUID) -> Optional[Job]:
    """
    Retrieve a job by id, only if owner_id owns it.

    Returns:
        Job instance if found, None otherwise
    """
    if not 1 <= job_id <= MAX_JOB_ID:
        return None
    return db.query(Job).filter(Job.id == job_id, Job.created_by == owner_id).first()


def get_multi(
    db: Session,
    owner_id: UUID,
    search: Optional[str] = None,
    status: Optional[str] = None,
    job_type: Optional[str] = None,
    sort: Optional[str] = None,
    page: Union[int, str, None] = 1,
) -> Tuple[List[Job], int, int]:
    """
    Filter, sort and paginate the owner's jobs.

    Args:
        db: Database session
        owner_id: Owner whose jobs are searched
        search: Case-insensitive substring matched against position
        status: Status value or "all"
        job_type: Job type value or "all"
        sort: One of SORT_OPTIONS; anything else keeps insertion order
        page: 1-based page number; missing, non-numeric or below 1 means 1.
            A page past the last one is empty.

    Returns:
        (jobs on the page, total matching jobs, number of pages)

    Raises:
        BadRequestError: If status or job_type is not a known value
    """
    status_filter = _parse_filter(status, JobStatus, "status")
    job_type_filter = _parse_filter(job_type, JobType, "jobType")

    query = db.query(Job).filter(Job.created_by == owner_id)

    if search:
        query = query.filter(Job.position.icontains(search, autoescape=True))
    if status_filter:
        query = query.filter(Job.status == status_filter)
    if job_type_filter:
        query = query.filter(Job.job_type == job_type_filter)

    total_jobs = query.count()

    num_of_pages = math.ceil(total_jobs / PAGE_SIZE)

    page = _parse_page(page)
    if page > num_of_pages:
        return [], total_jobs, num_of_pages

    order = SORT_OPTIONS.get(sort, DEFAULT_ORDER)
    jobs = query.order_by(*order).offset((page - 1) * PAGE_SIZE).limit(PAGE_SIZE).all()
    return jobs, total_jobs, num_of_pages


def update(
    db: Session,
    job_id: int,
    owner_id: UUID,
    job_data: JobUpdateRequest
) -> Optional[Job]:
    """
    Apply the fields present in job_data to an owned job.

    Returns:
        Updated Job instance if found, None otherwise
    """
    job = get_by_id(db, job_id, owner_id)
    if not job:
        return None

    for field, value in job_data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(job, field, value)

    db.commit()
    db.refresh(job)

    return job


def delete(db: Session, job_id: int, owner_id: UUID) -> bool:
    """
    Delete an owned job.

    Returns:
        True if deleted, False if not found
    """
    job = get_by_id(db, job_id, owner_id)
    if not job:
        return False

    db.delete(job)
    db.commit()

    return True


def count_for_owner(db: Session, owner_id: UUID) -> int:
    """Total number of jobs owned by owner_id."""
    return db.query(Job).filter(Job.created_by == owner_id).count()
