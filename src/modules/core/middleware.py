import uuid
from typing import Any, Callable, Dict, Optional

import structlog
from django.http import HttpRequest, HttpResponse

logger = structlog.get_logger()


class RequestContextMiddleware:
    """Middleware that binds per-request context into structlog.

    Reads the X-Request-ID header from the incoming request, or generates a
    new UUID4 when absent.  The ID is bound to every log line of the
    request through structlog contextvars and echoed back via the
    X-Request-ID response header.  Once the URL is resolved, the tenant
    (``owner_id`` URL kwarg) is bound as well so engine logs can be
    filtered per owner.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.META.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)

        logger.info(
            "request_started",
            method=request.method,
            path=request.get_full_path(),
        )

        response = self.get_response(request)

        logger.info(
            "request_finished",
            method=request.method,
            path=request.get_full_path(),
            status_code=response.status_code,
        )

        response["X-Request-ID"] = cid
        return response

    def process_view(
        self,
        request: HttpRequest,
        view_func: Callable[..., Any],
        view_args: tuple,
        view_kwargs: Dict[str, Any],
    ) -> Optional[HttpResponse]:
        owner_id = view_kwargs.get("owner_id")
        if owner_id:
            structlog.contextvars.bind_contextvars(owner_id=str(owner_id))
        return None
