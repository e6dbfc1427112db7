"""Unit tests for the metrics route label."""

from types import SimpleNamespace

from starlette.requests import Request

from backend.circuit_flow.api.middleware import UNMATCHED_ROUTE, resolve_route


def _request(**scope: object) -> Request:
    return Request({"type": "http", "method": "GET", "path": "/x", "headers": [], **scope})


def test_uses_matched_route_template() -> None:
    """Test the template is read from the route the router matched."""
    route = SimpleNamespace(path="/api/documents/{document_id}")

    assert resolve_route(_request(route=route)) == "/api/documents/{document_id}"


def test_unmatched_request() -> None:
    assert resolve_route(_request()) == UNMATCHED_ROUTE
    assert resolve_route(_request(route=object())) == UNMATCHED_ROUTE
