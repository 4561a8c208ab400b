from starlette.middleware.base import BaseHTTPMiddleware
import uuid, time, logging

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """``/api/trips/`` routes like ``/api/trips``; ``/`` stays as is."""
    if len(path) > 1 and path.endswith("/"):
        return path[:-1]
    return path


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        # Rewrite the scope before anything reads request.url
        path = normalize_path(request.scope["path"])
        if path != request.scope["path"]:
            request.scope["path"] = path
            raw_path = request.scope.get("raw_path")
            if raw_path and raw_path.endswith(b"/"):
                request.scope["raw_path"] = raw_path[:-1]

        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start) * 1000
        logger.info(
            f"{request.method} {path} {response.status_code} {duration_ms:.2f}ms",
            extra={"request_id": request_id, "duration_ms": duration_ms},
        )
        response.headers["X-Request-ID"] = request_id
        return response
