"""Request logging and metrics middleware."""

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from backend.circuit_flow.api.errors import unhandled_error_handler
from backend.circuit_flow.utils.logging import StructuredRequestLogger
from backend.circuit_flow.utils.metrics import PrometheusRequestMetrics

UNMATCHED_ROUTE = "unmatched"


def resolve_route(request: Request) -> str:
    """Return the template of the route that handled the request.

    Only known after routing, when the router has stored the matched route in
    the scope. Unmatched paths share one label to bound cardinality.
    """
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


class RequestMetricsMiddleware(BaseHTTPMiddleware):
    """Log every request and record Prometheus metrics.

    Records:
    - method, route template, status code
    - latency in milliseconds (also returned as X-Process-Time)

    Unexpected exceptions become the redacted 500 response here, inside the
    CORS layer, so browsers can read the error body.
    """

    def __init__(self, app, request_logger=None, metrics=None) -> None:  # type: ignore[no-untyped-def]
        super().__init__(app)
        self._logger = request_logger or StructuredRequestLogger()
        self._metrics = metrics or PrometheusRequestMetrics()

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        error_reason = None

        try:
            response = await call_next(request)
        except Exception as e:
            error_reason = type(e).__name__
            response = await unhandled_error_handler(request, e)

        latency_ms = (time.perf_counter() - start) * 1000
        route = resolve_route(request)
        self._metrics.record_request(request.method, route, response.status_code, latency_ms)
        self._logger.log_request(
            request.method, route, response.status_code, latency_ms, error_reason=error_reason
        )
        response.headers["X-Process-Time"] = f"{latency_ms:.2f}ms"
        return response
