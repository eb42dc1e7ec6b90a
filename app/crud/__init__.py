"""
CRUD operations (Create, Read, Update, Delete) for database models.

This layer keeps SQLAlchemy queries out of the API routes.
"""

from app.crud import job, user

__all__ = ["job", "user"]
