# Authentication logic
import logging
from typing import Optional

from sqlalchemy.orm import Session

from user_portal.core.security import verify_password
from user_portal.models.user import User
from user_portal.services import user_service
from user_portal.services.results import ServiceErrorCode, ServiceResult

LOGGER = logging.getLogger(__name__)

MISSING_FIELDS = "Email and password are required."
INVALID_CREDENTIALS = "Invalid credentials"


def authenticate_user(
    db: Session, email: Optional[str], password: Optional[str]
) -> ServiceResult[User]:
    """Authenticate a user by email and password.

    Inputs are validated before any lookup, and an unknown email gets the same
    answer as a wrong password so callers cannot tell which field was wrong.
    """
    if not email or not password:
        return ServiceResult.failure(ServiceErrorCode.VALIDATION_ERROR, MISSING_FIELDS)

    found = user_service.get_user_by_email(db, email)
    if not found.ok:
        if found.error.code == ServiceErrorCode.NOT_FOUND:
            LOGGER.info("Login failed: unknown email")
            return ServiceResult.failure(
                ServiceErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS
            )
        return found

    user = found.value
    if not verify_password(password, user.password_hash):
        LOGGER.info("Login failed: wrong password for user %s", user.id)
        return ServiceResult.failure(
            ServiceErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS
        )

    return ServiceResult.success(user)
