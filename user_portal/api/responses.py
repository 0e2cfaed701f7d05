# Service result -> HTTP response mapping shared by all handlers
import logging
from typing import Any, Callable, Optional

from fastapi import Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from user_portal.services.results import ServiceErrorCode, ServiceResult

LOGGER = logging.getLogger(__name__)

ERROR_STATUS = {
    ServiceErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ServiceErrorCode.INVALID_CREDENTIALS: status.HTTP_400_BAD_REQUEST,
    ServiceErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ServiceErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ServiceErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def to_response(
    result: ServiceResult,
    success_status: int = status.HTTP_200_OK,
    serialize: Optional[Callable[[Any], Any]] = None,
) -> Response:
    """
    Translate a ServiceResult into an HTTP response.

    Success uses `success_status` with the (optionally serialized) value as
    JSON body, except 204 which has no body. Errors become
    {"message": ...} with the status from ERROR_STATUS.
    """
    if not result.ok:
        code = ERROR_STATUS.get(result.error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        if code >= 500:
            LOGGER.error("Service failure (%s): %s", result.error.code.value, result.error.message)
        return error_response(code, result.error.message)

    if success_status == status.HTTP_204_NO_CONTENT:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    body = serialize(result.value) if serialize else result.value
    return JSONResponse(status_code=success_status, content=jsonable_encoder(body))
