import time
import logging
from fastapi import Request
from starlette.responses import Response

logger = logging.getLogger("access")


def access_record(request: Request, response: Response, elapsed_ms: float) -> dict:
    user = getattr(request.state, "user", None)
    return {
        "client_addr": request.client.host if request.client else "unknown",
        "method": request.method,
        "path": request.url.path,
        "complaint_id": request.path_params.get("complaint_id", "-"),
        "user_id": user.id if user else "anonymous",
        "status_code": response.status_code,
        "process_time_ms": round(elapsed_ms, 2),
    }


async def request_logging_middleware(request: Request, call_next):
    start_time = time.perf_counter()

    response = await call_next(request)

    record = access_record(
        request, response, (time.perf_counter() - start_time) * 1000
    )
    logger.info("%s %s", request.method, request.url.path, extra=record)

    return response
