"""
CRUD operations for the User model.
"""

from typing import Optional
from sqlalchemy.orm import Session
from app.core.security import get_password_hash, verify_password
from app.models.user import User
from app.schemas.user import UserRegisterRequest, UserUpdateRequest


def get_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def create(db: Session, user_data: UserRegisterRequest) -> User:
    """
    Create a user with a bcrypt-hashed password.

    Caller is responsible for checking the email is not already registered.
    """
    profile = user_data.model_dump(exclude={"password"}, exclude_none=True)
    db_user = User(
        **profile,
        hashed_password=get_password_hash(user_data.password),
    )

    db.add(db_user)
    db.commit()
    db.refresh(db_user)

    return db_user


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    """Return the user if the email exists and the password matches."""
    user = get_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


def update_profile(db: Session, user: User, user_data: UserUpdateRequest) -> User:
    for field, value in user_data.model_dump().items():
        setattr(user, field, value)

    db.commit()
    db.refresh(user)

    return user
