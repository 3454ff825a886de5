import time
import traceback
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from granian import Granian
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.errors import app_error_handler
from app.app_config import get_app_environ_config
from app.domain.auth import AuthContext, DemoAuthProvider, SessionStorage
from app.domain.live.broadcast import BroadcastService
from app.domain.live.watch import WatchService
from app.schemas.init_schemas import init_schema
from app.shared.api.utils import (
    api_failure,
    init_logger,
    load_routes,
    validation_exception_handler,
)
from app.shared.storage.mongo import get_mongo_manager
from app.utils.app_errors import AppError, AppErrorCode


REQUEST_ID_HEADER = "X-Request-ID"

# Polled by the orchestrator; logged at debug only
QUIET_PATHS = {"/api/v1/health"}


class HTTPLoggingMiddleware(BaseHTTPMiddleware):
    """Access log with a per-request id echoed back in `X-Request-ID`.

    Watch pages poll `/watch/snapshot`, so a request id supplied by the caller
    is reused to tie a page's polls together in the logs.
    """

    async def dispatch(self, request: Request, call_next):  # type: ignore
        started = time.perf_counter()
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        path = request.url.path
        log = logger.debug if path in QUIET_PATHS else logger.info

        try:
            response = await call_next(request)
        except Exception as exc:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error(
                f"[{request_id}] {request.method} {path} crashed after {elapsed_ms:.2f}ms: "
                f"{type(exc).__name__}: {exc}\n{traceback.format_exc()}"
            )

            failure = api_failure(
                errcode=AppErrorCode.E_INTERNAL_ERROR,
                errmesg=f"Internal server error (request_id: {request_id})",
            )
            response = ORJSONResponse(status_code=500, content=failure.model_dump())
            response.headers[REQUEST_ID_HEADER] = request_id
            return response

        elapsed_ms = (time.perf_counter() - started) * 1000
        log(f"[{request_id}] {request.method} {path} -> {response.status_code} in {elapsed_ms:.2f}ms")
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


@asynccontextmanager
async def lifespan(server: FastAPI):
    init_logger()

    logger.info("Application startup...")

    settings = get_app_environ_config()

    # Initialize MongoDB schemas and Beanie ODM
    await init_schema()

    server.state.watch_service = WatchService()
    server.state.broadcast_service = BroadcastService(settings.FRONTEND_BASE_URL)
    server.state.auth_context = AuthContext(
        DemoAuthProvider(),
        SessionStorage(settings.AUTH_SESSION_FILE),
    )
    server.state.auth_context.initialize()

    load_routes(server, "/api/v1")

    yield

    logger.info("Application shutdown...")

    await server.state.watch_service.close_all()
    get_mongo_manager().close_all()


app = FastAPI(
    version="1.0",
    title="Live Watch API",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    default_response_class=ORJSONResponse,
    lifespan=lifespan,
)

app.add_middleware(HTTPLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,  # type: ignore
    allow_origins=get_app_environ_config().API_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore
app.add_exception_handler(AppError, app_error_handler)  # type: ignore


def build_granian_kwargs():
    settings = get_app_environ_config()
    kwargs = {
        "interface": "asgi",
        "address": settings.API_HOST,
        "port": settings.API_PORT,
        "workers": settings.API_WORKERS,
        "reload": settings.DEBUG,
    }

    return kwargs


if __name__ == "__main__":
    granian_kwargs = build_granian_kwargs()
    Granian("app.main:app", **granian_kwargs).serve()
