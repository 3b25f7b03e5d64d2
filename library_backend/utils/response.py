"""
Response building utilities for Library API

Provides functions to create standardized API Gateway proxy responses.
"""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, Iterable

DEFAULT_ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE")


def cors_headers(methods: Iterable[str] = DEFAULT_ALLOWED_METHODS) -> dict:
    """
    Build the permissive CORS headers sent with every response.

    Args:
        methods: HTTP methods allowed on the route (OPTIONS is always added)

    Returns:
        dict: CORS headers
    """
    allowed = [m for m in methods if m != "OPTIONS"] + ["OPTIONS"]
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Headers": "Content-Type,Authorization",
        "Access-Control-Allow-Methods": ",".join(allowed),
    }


def convert_decimal(value: Any) -> Any:
    """
    Convert Decimal types (from DynamoDB) to int or float for JSON serialization.

    Args:
        value: Value that might be a Decimal

    Returns:
        Converted value (int if whole number, float otherwise, original value if not a Decimal)
    """
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return convert_decimal(value)
    if isinstance(value, (set, frozenset)):
        # DynamoDB string/number sets
        return sorted(convert_decimal(v) for v in value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def api_response(
    status_code: int, body: Any, methods: Iterable[str] = DEFAULT_ALLOWED_METHODS
) -> dict:
    """
    Helper to format API Gateway response with CORS headers.

    Args:
        status_code: HTTP status code
        body: Response body (will be JSON serialized)
        methods: HTTP methods allowed on the route

    Returns:
        dict: API Gateway response with headers
    """
    return {
        "statusCode": status_code,
        "body": json.dumps(body, default=_json_default),
        "headers": {"Content-Type": "application/json", **cors_headers(methods)},
    }


def no_content_response(methods: Iterable[str] = DEFAULT_ALLOWED_METHODS) -> dict:
    """Helper to create a 204 response with an empty body."""
    return {
        "statusCode": 204,
        "body": "",
        "headers": cors_headers(methods),
    }


def error_response(
    status_code: int, error: str, message: str, methods: Iterable[str] = DEFAULT_ALLOWED_METHODS
) -> dict:
    """
    Helper to create error response.

    Args:
        status_code: HTTP status code
        error: Error type/category
        message: Error message
        methods: HTTP methods allowed on the route

    Returns:
        dict: API Gateway error response
    """
    return api_response(status_code, {"error": error, "message": message}, methods)
