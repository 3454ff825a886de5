from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger

from app.shared.api.utils import ApiFailure, make_response
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

# Seconds a client should wait before retrying after a store outage
STORE_RETRY_AFTER_SECONDS = 2


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render AppError as an ApiFailure envelope with the error's HTTP status."""
    # caller_info points at the raise site, not at this handler
    log_msg = (
        f"{exc.errcode} {exc.erresid} {request.method} {request.url.path} "
        f"msg={exc.errmesg} caller={exc.caller_info}"
    )
    if exc.status_code >= HttpStatusCode.INTERNAL_SERVER_ERROR:
        logger.error(log_msg)
    else:
        logger.warning(log_msg)

    failure = ApiFailure(errcode=exc.errcode, errmesg=exc.errmesg, erresid=exc.erresid)
    response = make_response(failure, status_code=exc.status_code)
    if exc.errcode == AppErrorCode.E_STORE_UNAVAILABLE.value:
        response.headers["Retry-After"] = str(STORE_RETRY_AFTER_SECONDS)
    return response
