"""
FastAPI dependencies for authentication and ownership.

Every job route resolves the caller through `get_current_user`; the user's id
is the owner identity that scopes all job queries.
"""

import logging
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import BadRequestError, UnauthenticatedError
from app.core.security import JWTError, decode_token
from app.models.user import User

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>)
# auto_error=False so a missing header is reported as 401 by our own handler
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Extract and validate the current user from the JWT bearer token.

    Raises:
        UnauthenticatedError: If the token is missing or invalid, or the user
            no longer exists or is inactive
    """
    if credentials is None:
        raise UnauthenticatedError("Authentication invalid")

    try:
        payload = decode_token(credentials.credentials)
        user_id = UUID(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise UnauthenticatedError("Authentication invalid")

    user = db.query(User).filter(User.id == user_id).first()
    if user is None or not user.is_active:
        raise UnauthenticatedError("Authentication invalid")

    return user


def get_user_id(user: User = Depends(get_current_user)) -> UUID:
    """
    Owner identity of the caller.

    Usage:
        @router.get("/jobs")
        def list_jobs(user_id: UUID = Depends(get_user_id), db: Session = Depends(get_db)):
            jobs = db.query(Job).filter(Job.created_by == user_id).all()
    """
    return user.id


def is_demo_user(user: User) -> bool:
    # Exact match: emails are stored and looked up case-sensitively
    return user.email == settings.DEMO_USER_EMAIL


def get_writable_user(user: User = Depends(get_current_user)) -> User:
    """
    Current user, rejecting the shared read-only demo account.

    Raises:
        BadRequestError: If the caller is the demo user
    """
    if is_demo_user(user):
        logger.warning(f"Blocked write attempt by demo user {user.id}")
        raise BadRequestError("Test User. Read Only!")
    return user


def get_writable_user_id(user: User = Depends(get_writable_user)) -> UUID:
    """Owner identity for create/update/delete routes."""
    return user.id
