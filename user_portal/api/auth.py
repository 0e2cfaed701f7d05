# Login, logout and session endpoints
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from user_portal.api.deps import get_session_payload
from user_portal.api.responses import to_response
from user_portal.core.config import settings
from user_portal.core.rate_limit import check_login_rate_limit
from user_portal.core.security import create_user_token
from user_portal.db.session import get_db
from user_portal.models.schemas import LoginRequest, MessageResponse, SessionStatus
from user_portal.services.auth_service import authenticate_user
from user_portal.services.results import ServiceResult

LOGGER = logging.getLogger(__name__)

router = APIRouter()

LOGIN_OK = "User logged in successfully."
LOGOUT_OK = "User has been logged out."


@router.post(
    "/login",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(check_login_rate_limit)],
)
def login(
    login_data: Optional[LoginRequest] = None, db: Session = Depends(get_db)
) -> Response:
    """Login endpoint.

    Verifies email and password, then sets the signed session token as an
    HTTP-only cookie. Missing fields, a missing body and bad credentials all
    answer 400.
    """
    login_data = login_data or LoginRequest()
    result = authenticate_user(db, login_data.email, login_data.password)
    if not result.ok:
        return to_response(result)

    user = result.value
    response = to_response(
        ServiceResult.success(MessageResponse(message=LOGIN_OK)),
        status.HTTP_201_CREATED,
    )
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_user_token(user),
        max_age=settings.JWT_ACCESS_TOKEN_EXPIRE_HOURS * 3600,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite=settings.SESSION_COOKIE_SAMESITE,
    )
    LOGGER.info("User %s logged in", user.id)
    return response


@router.post("/logout", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def logout(response: Response) -> MessageResponse:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite=settings.SESSION_COOKIE_SAMESITE,
    )
    return MessageResponse(message=LOGOUT_OK)


@router.get("/session", response_model=SessionStatus)
def session_status(
    payload: Optional[Dict[str, Any]] = Depends(get_session_payload),
) -> SessionStatus:
    """Report whether the request carries a valid session cookie."""
    if payload is None:
        return SessionStatus(authenticated=False)

    return SessionStatus(
        authenticated=True,
        user_id=payload.get("sub"),
        email=payload.get("email"),
        role=payload.get("role"),
    )
