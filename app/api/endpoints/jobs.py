import logging
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_user_id, get_writable_user_id
from app.core.exceptions import BadRequestError, NotFoundError
from app.crud import job as job_crud
from app.schemas.job import (
    JobCreateRequest,
    JobUpdateRequest,
    JobEnvelope,
    JobListResponse,
    JobResponse,
    StatsResponse,
)
from app.services import job_stats

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=JobListResponse)
def list_jobs(
    search: Optional[str] = None,
    status: Optional[str] = None,
    job_type: Optional[str] = Query(None, alias="jobType"),
    sort: Optional[str] = None,
    page: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_user_id)
):
    """
    List the current user's jobs, 10 per page.

    Args:
        search: Case-insensitive substring of the position
        status: pending, interview, declined or all
        jobType: full-time, part-time, internship, remote or all
        sort: latest, oldest, a-z or z-a (default: creation order)
        page: Page number starting at 1 (anything unparseable means 1)
    """
    jobs, total_jobs, num_of_pages = job_crud.get_multi(
        db,
        user_id,
        search=search,
        status=status,
        job_type=job_type,
        sort=sort,
        page=page,
    )
    return JobListResponse(
        jobs=[JobResponse.model_validate(job) for job in jobs],
        total_jobs=total_jobs,
        num_of_pages=num_of_pages
    )


@router.get("/stats", response_model=StatsResponse)
def show_stats(
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_user_id)
):
    """
    Dashboard statistics: job count per status and applications per month
    for the six most recent months with activity.
    """
    return job_stats.get_stats(db, user_id)


@router.post("/", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_writable_user_id)
):
    """
    Create a job owned by the current user.
    """
    try:
        new_job = job_crud.create(db, user_id, request)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating job for user {user_id}: {e}")
        raise

    logger.info(f"Created job {new_job.id}: {new_job.position} at {new_job.company} (user {user_id})")
    return JobEnvelope(job=JobResponse.model_validate(new_job))


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(
    job_id: int,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_user_id)
):
    """
    Retrieve one of the current user's jobs.
    """
    job = job_crud.get_by_id(db, job_id, user_id)

    if not job:
        raise NotFoundError(f"No job with id {job_id}")

    return JobEnvelope(job=JobResponse.model_validate(job))


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_writable_user_id)
):
    """
    Update any subset of company, position, status, jobType and jobLocation.

    company and position cannot be set to an empty string.
    """
    if request.company == "" or request.position == "":
        raise BadRequestError("Company or Position fields cannot be empty")

    try:
        job = job_crud.update(db, job_id, user_id, request)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating job {job_id}: {e}")
        raise

    if not job:
        raise NotFoundError(f"No job with id {job_id}")

    logger.info(f"Updated job {job_id}")
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.delete("/{job_id}", status_code=200)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_writable_user_id)
):
    """
    Delete one of the current user's jobs. Responds with an empty body.
    """
    deleted = job_crud.delete(db, job_id, user_id)

    if not deleted:
        raise NotFoundError(f"No job with id {job_id}")

    logger.info(f"Deleted job {job_id}")
    return Response(status_code=200)
