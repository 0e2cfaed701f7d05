# Dependency injection (session cookie verification)
from fastapi import HTTPException, Request, status
from typing import Any, Dict, Optional

from user_portal.core.config import settings
from user_portal.core.security import decode_token


def get_session_payload(request: Request) -> Optional[Dict[str, Any]]:
    """
    Read the session cookie and verify the JWT inside it.

    Returns the token payload, or None when the cookie is missing, expired
    or forged. Validity comes from the token itself, nothing is cached.
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return None

    payload = decode_token(token)
    if payload is None or not payload.get("sub"):
        return None
    return payload


def require_session(request: Request) -> Dict[str, Any]:
    """Like get_session_payload, but answers 401 when there is no valid session."""
    payload = get_session_payload(request)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return payload
