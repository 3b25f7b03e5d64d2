"""
Route table for Library API

The table is declared, not computed: each entry maps an HTTP method and an
API Gateway path pattern to a handler exported by library_backend.handler.
The CDK API stack wires API Gateway methods from it, handlers take their
CORS Allow-Methods from it, and dispatch() uses it to serve proxy events
locally (tests, sam-style local invocation).
"""

from __future__ import annotations

import importlib
import logging
import re
from dataclasses import dataclass

from library_backend.utils.response import error_response, no_content_response

logger = logging.getLogger()

HANDLER_MODULE = "library_backend.handler"
CORS_ALLOW_HEADERS = ("Content-Type", "Authorization")


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    handler: str
    function_id: str
    table: str
    writes: bool = False

    @property
    def entry_point(self) -> str:
        """Lambda handler string for this route."""
        return f"{HANDLER_MODULE}.{self.handler}"


ROUTES: tuple[Route, ...] = (
    Route("GET", "/getBooks", "list_books_handler", "GetBooksFunction", "books"),
    Route("GET", "/getBooks/{id}", "get_book_handler", "GetBookFunction", "books"),
    Route(
        "GET",
        "/reading-lists",
        "list_reading_lists_handler",
        "GetReadingListsFunction",
        "reading_lists",
    ),
    Route(
        "POST",
        "/reading-lists",
        "create_reading_list_handler",
        "CreateReadingListFunction",
        "reading_lists",
        writes=True,
    ),
    Route(
        "PUT",
        "/reading-lists/{id}",
        "update_reading_list_handler",
        "UpdateReadingListFunction",
        "reading_lists",
        writes=True,
    ),
    Route(
        "DELETE",
        "/reading-lists/{id}",
        "delete_reading_list_handler",
        "DeleteReadingListFunction",
        "reading_lists",
        writes=True,
    ),
)


def allowed_methods(path: str) -> tuple[str, ...]:
    """Methods declared for a path pattern, in table order."""
    return tuple(route.method for route in ROUTES if route.path == path)


def _pattern(path: str) -> re.Pattern:
    # "{id}" matches a single path segment
    regex = re.sub(r"\\\{(\w+)\\\}", r"(?P<\1>[^/]+)", re.escape(path))
    return re.compile(f"^{regex}$")


_PATTERNS = {route.path: _pattern(route.path) for route in ROUTES}


def match_path(path: str) -> tuple[str | None, dict[str, str]]:
    """
    Find the declared path pattern matching a concrete request path.

    Returns:
        tuple: (path_pattern, path_parameters) - path_pattern is None if nothing matches
    """
    normalized = "/" + path.strip("/")
    for pattern_path, pattern in _PATTERNS.items():
        match = pattern.match(normalized)
        if match:
            return pattern_path, match.groupdict()
    return None, {}


def find_route(method: str, path_pattern: str) -> Route | None:
    for route in ROUTES:
        if route.method == method and route.path == path_pattern:
            return route
    return None


def dispatch(event: dict, context) -> dict:
    """
    Route an API Gateway proxy event to its handler.

    Unknown paths get 404, undeclared methods 405 and OPTIONS preflight 204.
    """
    method = (event.get("httpMethod") or "").upper()
    path = event.get("path") or ""

    path_pattern, path_params = match_path(path)
    if path_pattern is None:
        logger.warning(f"No route for {method} {path}")
        return error_response(404, "Not Found", f"No route for {path}")

    methods = allowed_methods(path_pattern)
    if method == "OPTIONS":
        return no_content_response(methods)

    route = find_route(method, path_pattern)
    if route is None:
        logger.warning(f"Method {method} not allowed on {path_pattern}")
        return error_response(
            405, "Method Not Allowed", f"{method} is not supported on {path_pattern}", methods
        )

    handler_module = importlib.import_module(HANDLER_MODULE)
    routed_event = {**event, "resource": path_pattern, "pathParameters": path_params or None}
    logger.info(f"Dispatching {method} {path} to {route.handler}")
    return getattr(handler_module, route.handler)(routed_event, context)
