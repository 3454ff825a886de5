"""Application error type shared by the domain and API layers."""

import inspect
from enum import Enum, IntEnum
from uuid import uuid4


class AppErrorCode(str, Enum):
    E_INTERNAL_ERROR = "E_INTERNAL_ERROR"
    E_INVALID_REQUEST = "E_INVALID_REQUEST"
    E_INVALID_STATE = "E_INVALID_STATE"
    E_CHANNEL_NOT_FOUND = "E_CHANNEL_NOT_FOUND"
    E_CHAT_DISABLED = "E_CHAT_DISABLED"
    E_WATCH_SESSION_NOT_FOUND = "E_WATCH_SESSION_NOT_FOUND"
    E_STORE_UNAVAILABLE = "E_STORE_UNAVAILABLE"
    E_UNAUTHENTICATED = "E_UNAUTHENTICATED"
    E_BAD_CREDENTIALS = "E_BAD_CREDENTIALS"

    def __str__(self) -> str:
        return self.value


class HttpStatusCode(IntEnum):
    OK = 200
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    NOT_FOUND = 404
    CONFLICT = 409
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503


class AppError(Exception):
    """Error carrying an API error code, a message and the HTTP status to answer with.

    The raising call site is captured so the API error handler can log where the
    error originated rather than where it was converted.
    """

    def __init__(
        self,
        errcode: AppErrorCode | str = AppErrorCode.E_INTERNAL_ERROR,
        errmesg: str = "We are sorry, an error occurred.",
        status_code: HttpStatusCode | int = HttpStatusCode.INTERNAL_SERVER_ERROR,
    ):
        super().__init__(errmesg)
        self.errcode = errcode.value if isinstance(errcode, AppErrorCode) else str(errcode)
        self.errmesg = errmesg
        self.status_code = int(status_code)
        self.erresid = uuid4().hex[:10]

        frame = inspect.currentframe()
        caller = frame.f_back if frame else None
        if caller is not None:
            module = inspect.getmodule(caller)
            module_name = module.__name__ if module else caller.f_code.co_filename
            self.caller_info = f"{module_name}:{caller.f_code.co_name}:{caller.f_lineno}"
        else:
            self.caller_info = "unknown"

    def __repr__(self) -> str:
        return f"AppError(errcode={self.errcode!r}, errmesg={self.errmesg!r}, status_code={self.status_code})"
