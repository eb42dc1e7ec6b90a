"""
Seed the database with mock job records for one user.

The JSON file holds an array of job objects using the API's camelCase keys
(company, position, status, jobType, jobLocation) plus an optional createdAt
timestamp, so dashboards have history to show.

Run this script from the project root:
    python populate.py MOCK_DATA.json --email someone@example.com
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import SessionLocal
from app.core.logging_config import setup_logging
from app.crud import job as job_crud
from app.crud import user as user_crud
from app.models.job import Job
from app.schemas.job import JobCreateRequest

logger = logging.getLogger(__name__)


def build_jobs(records: List[Dict[str, Any]], owner_id) -> List[Job]:
    """Validate raw records and turn them into unsaved Job rows."""
    jobs = []
    for index, record in enumerate(records):
        job_data = JobCreateRequest.model_validate(record)
        job = Job(**job_data.model_dump(exclude_none=True), created_by=owner_id)
        created_at = record.get("createdAt")
        if created_at:
            job.created_at = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
        jobs.append(job)
        logger.debug(f"Record {index}: {job_data.position} at {job_data.company}")
    return jobs


def populate(db: Session, records: List[Dict[str, Any]], email: str) -> int:
    """
    Insert records as jobs owned by the user with the given email.

    All rows are committed together; nothing is written if any record is invalid.

    Returns:
        Number of jobs inserted

    Raises:
        ValueError: If no user has that email
    """
    owner = user_crud.get_by_email(db, email)
    if owner is None:
        raise ValueError(f"No user with email {email}")

    jobs = build_jobs(records, owner.id)
    try:
        db.add_all(jobs)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Inserted {len(jobs)} jobs for {email} ({job_crud.count_for_owner(db, owner.id)} total)")
    return len(jobs)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Load mock jobs for a user")
    parser.add_argument("path", help="JSON file containing an array of jobs")
    parser.add_argument("--email", default=settings.DEMO_USER_EMAIL, help="Owner's email (default: demo user)")
    args = parser.parse_args(argv)

    setup_logging(settings.LOG_LEVEL, json_logs=False)

    db = SessionLocal()
    try:
        with open(args.path, encoding="utf-8") as f:
            records = json.load(f)
        populate(db, records, args.email)
    except Exception as e:
        logger.error(f"Populate failed: {e}")
        return 1
    finally:
        db.close()

    logger.info("Populate completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
