# User persistence and lookups
import logging
from typing import List, Optional, Union
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from user_portal.core.security import hash_password
from user_portal.models.schemas import UserCreate, UserUpdate
from user_portal.models.user import User, UserRole
from user_portal.services.results import ServiceErrorCode, ServiceResult

LOGGER = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"
EMAIL_TAKEN = "A user with this email already exists"


def _parse_id(user_id: Union[str, UUID]) -> Optional[UUID]:
    if isinstance(user_id, UUID):
        return user_id
    try:
        return UUID(str(user_id))
    except ValueError:
        return None


def _find(db: Session, user_id: Union[str, UUID]) -> Optional[User]:
    parsed = _parse_id(user_id)
    if parsed is None:
        return None
    return db.get(User, parsed)


def _internal_error(db: Session, operation: str, e: SQLAlchemyError) -> ServiceResult:
    db.rollback()
    LOGGER.error("Database error in %s: %s", operation, e)
    return ServiceResult.failure(ServiceErrorCode.INTERNAL_ERROR, str(e))


def create_user(db: Session, data: UserCreate) -> ServiceResult[User]:
    """Store a new user with a hashed password."""
    user = User(
        email=data.email,
        password_hash=hash_password(data.password),
        role=data.role,
        first_name=data.first_name,
        last_name=data.last_name,
    )
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        LOGGER.info("Rejected duplicate email %s", data.email)
        return ServiceResult.failure(ServiceErrorCode.CONFLICT, EMAIL_TAKEN)
    except SQLAlchemyError as e:
        return _internal_error(db, "create_user", e)

    LOGGER.info("Created user %s with role %s", user.id, user.role.value)
    return ServiceResult.success(user)


def get_user_by_id(db: Session, user_id: Union[str, UUID]) -> ServiceResult[User]:
    try:
        user = _find(db, user_id)
    except SQLAlchemyError as e:
        return _internal_error(db, "get_user_by_id", e)

    if user is None:
        return ServiceResult.failure(ServiceErrorCode.NOT_FOUND, USER_NOT_FOUND)
    return ServiceResult.success(user)


def update_person(
    db: Session, user_id: Union[str, UUID], data: UserUpdate
) -> ServiceResult[User]:
    """Apply the fields the client actually sent. A new password is re-hashed."""
    changes = data.model_dump(exclude_unset=True)
    try:
        user = _find(db, user_id)
        if user is None:
            return ServiceResult.failure(ServiceErrorCode.NOT_FOUND, USER_NOT_FOUND)

        password = changes.pop("password", None)
        if password:
            user.password_hash = hash_password(password)
        for field, value in changes.items():
            if value is None and field in ("email", "role"):
                continue
            setattr(user, field, value)

        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        return ServiceResult.failure(ServiceErrorCode.CONFLICT, EMAIL_TAKEN)
    except SQLAlchemyError as e:
        return _internal_error(db, "update_person", e)

    LOGGER.info("Updated user %s", user.id)
    return ServiceResult.success(user)


def delete_user(db: Session, user_id: Union[str, UUID]) -> ServiceResult[UUID]:
    try:
        user = _find(db, user_id)
        if user is None:
            return ServiceResult.failure(ServiceErrorCode.NOT_FOUND, USER_NOT_FOUND)
        deleted_id = user.id
        db.delete(user)
        db.commit()
    except SQLAlchemyError as e:
        return _internal_error(db, "delete_user", e)

    LOGGER.info("Deleted user %s", deleted_id)
    return ServiceResult.success(deleted_id)


def get_users_by_role(db: Session, role: UserRole) -> ServiceResult[List[User]]:
    statement = select(User).where(User.role == role).order_by(User.created_at, User.email)
    try:
        users = list(db.scalars(statement).all())
    except SQLAlchemyError as e:
        return _internal_error(db, "get_users_by_role", e)
    return ServiceResult.success(users)


def get_user_by_email(db: Session, email: str) -> ServiceResult[User]:
    try:
        user = db.scalars(select(User).where(User.email == email)).first()
    except SQLAlchemyError as e:
        return _internal_error(db, "get_user_by_email", e)

    if user is None:
        return ServiceResult.failure(ServiceErrorCode.NOT_FOUND, USER_NOT_FOUND)
    return ServiceResult.success(user)
