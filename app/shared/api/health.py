from fastapi import APIRouter, Request

from .utils import ApiSuccess

router = APIRouter()


@router.get("/health", response_model=ApiSuccess)
async def health(request: Request):
    """Liveness plus the number of watch pages this worker is hosting."""
    watch_service = getattr(request.app.state, "watch_service", None)
    open_sessions = watch_service.open_count if watch_service is not None else 0
    return ApiSuccess(results={"status": "OK", "open_watch_sessions": open_sessions})
