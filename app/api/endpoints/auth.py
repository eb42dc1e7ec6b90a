"""
Authentication endpoints.

- POST /register: Create a user account and return a token
- POST /login: Authenticate with email/password and return a token
- GET /me: Current user profile
- PATCH /me: Update the current user's profile
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_current_user, get_writable_user
from app.core.exceptions import BadRequestError, UnauthenticatedError
from app.core.security import create_access_token
from app.crud import user as user_crud
from app.models.user import User
from app.schemas.user import (
    AuthResponse,
    UserLoginRequest,
    UserRegisterRequest,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


def _auth_response(user: User) -> AuthResponse:
    token = create_access_token(data={"sub": str(user.id), "name": user.name})
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post("/register", status_code=201, response_model=AuthResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account.

    Returns the profile and a token for immediate use.
    """
    if user_crud.get_by_email(db, request.email):
        raise BadRequestError("Email already registered")

    try:
        new_user = user_crud.create(db, request)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error registering {request.email}: {e}")
        raise

    logger.info(f"New user registered: {new_user.email} (id: {new_user.id})")
    return _auth_response(new_user)


@router.post("/login", response_model=AuthResponse)
def login(
    request: UserLoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return a JWT access token.
    """
    user = user_crud.authenticate(db, request.email, request.password)
    if not user:
        raise UnauthenticatedError("Invalid Credentials")

    logger.info(f"User logged in: {user.email}")
    return _auth_response(user)


@router.get("/me", response_model=UserResponse)
def get_current_user_profile(
    current_user: User = Depends(get_current_user)
):
    """
    Get current authenticated user's profile.
    """
    return UserResponse.model_validate(current_user)


@router.patch("/me", response_model=AuthResponse)
def update_current_user(
    request: UserUpdateRequest,
    current_user: User = Depends(get_writable_user),
    db: Session = Depends(get_db)
):
    """
    Update name, lastName, email and location. Returns a fresh token.
    """
    existing = user_crud.get_by_email(db, request.email)
    if existing and existing.id != current_user.id:
        raise BadRequestError("Email already registered")

    try:
        user = user_crud.update_profile(db, current_user, request)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating profile for user {current_user.id}: {e}")
        raise

    logger.info(f"Updated profile for user {user.id}")
    return _auth_response(user)
