"""
Request validation utilities for Library API

Provides functions to validate and extract data from API Gateway events.
Every helper raises ValidationError when the request is unusable.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import unquote

from library_backend.utils.errors import ValidationError

logger = logging.getLogger()


def get_path_param(event: dict, param: str) -> str:
    """
    Extract and URL-decode a path parameter from API Gateway event.

    Args:
        event: API Gateway event
        param: Parameter name to extract

    Returns:
        str: Decoded value

    Raises:
        ValidationError: If the parameter is missing or empty
    """
    path_params = event.get("pathParameters") or {}
    value = path_params.get(param)
    if not value:
        logger.warning(f"Missing {param} in path parameters")
        raise ValidationError(f"{param.capitalize()} is required in path")
    return unquote(value)


def get_query_param(event: dict, param: str, default: str | None = None) -> str | None:
    """
    Extract a query string parameter, falling back to default when missing or empty.
    """
    query_params = event.get("queryStringParameters") or {}
    return query_params.get(param) or default


def parse_json_body(event: dict, required: bool = False) -> dict:
    """
    Parse JSON object body from API Gateway event.

    Args:
        event: API Gateway event
        required: Whether an absent or empty body is an error

    Returns:
        dict: Parsed body ({} when absent and not required)

    Raises:
        ValidationError: If the body is required but missing, is not valid JSON
            or is not a JSON object
    """
    raw_body = event.get("body")
    if not raw_body:
        if required:
            logger.warning("No request body provided")
            raise ValidationError("Request body is required")
        return {}

    try:
        body = json.loads(raw_body)
    except json.JSONDecodeError:
        logger.warning("Invalid JSON in request body")
        raise ValidationError("Invalid JSON in request body")

    if not isinstance(body, dict):
        logger.warning("Request body is not a JSON object")
        raise ValidationError("Request body must be a JSON object")
    return body


def validate_string_field(
    body: dict, field: str, max_length: int = 500, required: bool = False
) -> None:
    """
    Validate a string field in request body.

    A required field must be present and non-empty after trimming.

    Args:
        body: Request body dictionary
        field: Field name to validate
        max_length: Maximum allowed length
        required: Whether the field is required

    Raises:
        ValidationError: If validation fails
    """
    if field not in body or body[field] is None:
        if required:
            raise ValidationError(f'Field "{field}" is required')
        return

    value = body[field]
    if not isinstance(value, str):
        raise ValidationError(f'Field "{field}" must be a string')

    if len(value) > max_length:
        raise ValidationError(f'Field "{field}" exceeds maximum length of {max_length}')

    if required and not value.strip():
        raise ValidationError(f'Field "{field}" cannot be empty')


def validate_string_list_field(body: dict, field: str, max_items: int = 500) -> None:
    """
    Validate an optional list-of-strings field (e.g. bookIds).

    Raises:
        ValidationError: If the value is not a list of strings or is too long
    """
    value: Any = body.get(field)
    if value is None:
        return

    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f'Field "{field}" must be a list of strings')

    if len(value) > max_items:
        raise ValidationError(f'Field "{field}" exceeds maximum of {max_items} items')
