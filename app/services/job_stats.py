"""
Dashboard statistics for a user's jobs.

Two grouped queries:
- number of jobs per status, with every status present (0 when unused)
- number of jobs created per calendar month for the most recent months
"""

import logging
from datetime import datetime
from typing import Dict, List
from uuid import UUID

from sqlalchemy import extract, func
from sqlalchemy.orm import Session

from app.models.job import Job, JobStatus

logger = logging.getLogger(__name__)

# Number of most recent months reported in the monthly series
MONTHS_WINDOW = 6


def count_by_status(db: Session, owner_id: UUID) -> Dict[str, int]:
    """
    Count the owner's jobs per status.

    Returns:
        {"pending": n, "interview": n, "declined": n}; statuses without jobs are 0
    """
    rows = (
        db.query(Job.status, func.count(Job.id))
        .filter(Job.created_by == owner_id)
        .group_by(Job.status)
        .all()
    )

    counts = {status.value: 0 for status in JobStatus}
    for status, count in rows:
        counts[status.value] = count
    return counts


def month_label(year: int, month: int) -> str:
    """Format a (year, month) pair as 'Jan 2024'."""
    return datetime(year, month, 1).strftime("%b %Y")


def monthly_applications(db: Session, owner_id: UUID, months: int = MONTHS_WINDOW) -> List[Dict]:
    """
    Count the owner's jobs per creation month.

    Only the `months` most recent months that have jobs are returned,
    oldest first.

    Returns:
        [{"date": "Jan 2024", "count": 3}, ...]
    """
    year = extract("year", Job.created_at).label("year")
    month = extract("month", Job.created_at).label("month")

    rows = (
        db.query(year, month, func.count(Job.id))
        .filter(Job.created_by == owner_id)
        .group_by(year, month)
        .order_by(year.desc(), month.desc())
        .limit(months)
        .all()
    )

    # Query returns newest first; present oldest first
    return [
        {"date": month_label(int(year_value), int(month_value)), "count": count}
        for year_value, month_value, count in reversed(rows)
    ]


def get_stats(db: Session, owner_id: UUID) -> Dict:
    """Both statistics in the shape returned by GET /jobs/stats."""
    stats = {
        "default_stats": count_by_status(db, owner_id),
        "monthly_applications": monthly_applications(db, owner_id),
    }
    logger.debug(f"Stats for {owner_id}: {stats}")
    return stats
