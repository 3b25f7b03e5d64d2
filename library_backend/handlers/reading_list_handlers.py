"""
Lambda handlers for reading list operations (list, create, update, delete)

Reading lists live in the ReadingLists table keyed by (id, userId). There is
no auth layer yet, so requests without a userId act as config.DEFAULT_USER_ID.
"""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import Any

from library_backend import config
from library_backend.routes import allowed_methods
from library_backend.utils.dynamodb import (
    delete_item,
    put_item,
    query_index,
    scan_items,
    update_item,
)
from library_backend.utils.errors import ApiError, ValidationError
from library_backend.utils.response import api_response, error_response, no_content_response
from library_backend.utils.validation import (
    get_path_param,
    get_query_param,
    parse_json_body,
    validate_string_field,
    validate_string_list_field,
)

logger = config.configure_logging(logging.getLogger())

COLLECTION_METHODS = allowed_methods("/reading-lists")
ITEM_METHODS = allowed_methods("/reading-lists/{id}")


def _now() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds")


def _validate_optional_fields(body: dict) -> None:
    validate_string_field(body, "userId", max_length=config.MAX_NAME_LENGTH)
    validate_string_field(body, "description", max_length=config.MAX_DESCRIPTION_LENGTH)
    validate_string_list_field(body, "bookIds", max_items=config.MAX_BOOK_IDS)


def _user_id_from_body(body: dict) -> str:
    return body.get("userId") or config.DEFAULT_USER_ID


def list_reading_lists_handler(event, context):
    """
    Lambda handler to list a user's reading lists.
    Reads optional 'userId' query parameter. Returns a JSON array, empty when
    the user has no lists.
    """
    logger.info("list_reading_lists_handler invoked")

    try:
        user_id = get_query_param(event, "userId", config.DEFAULT_USER_ID)
        table = config.get_reading_lists_table()

        if config.READING_LISTS_USER_INDEX:
            items = query_index(table, config.READING_LISTS_USER_INDEX, "userId", user_id)
        else:
            # userId is the sort key, so without the index this is a filtered full scan
            items = scan_items(table, "userId", user_id)

        logger.info(f"Found {len(items)} reading lists for user: {user_id}")
        return api_response(200, items, COLLECTION_METHODS)

    except ApiError as e:
        logger.warning(f"Request failed with {e.status_code}: {e.message}")
        return error_response(e.status_code, e.error, e.message, COLLECTION_METHODS)
    except Exception as e:
        logger.error(f"Error fetching reading lists: {str(e)}", exc_info=True)
        return error_response(
            500, "Internal Server Error", "Failed to fetch reading lists", COLLECTION_METHODS
        )


def create_reading_list_handler(event, context):
    """
    Lambda handler to create a reading list.
    Accepts JSON body:
    - name: required, non-empty
    - userId, description, bookIds: optional
    Returns the stored record with 201.
    """
    logger.info("create_reading_list_handler invoked")

    try:
        body = parse_json_body(event, required=True)

        validate_string_field(body, "name", max_length=config.MAX_NAME_LENGTH, required=True)
        _validate_optional_fields(body)

        created_at = _now()
        reading_list: dict[str, Any] = {
            "id": str(uuid.uuid4()),
            "userId": _user_id_from_body(body),
            "name": body["name"],
            "description": body.get("description") or "",
            "bookIds": body.get("bookIds") or [],
            "createdAt": created_at,
            "updatedAt": created_at,
        }

        put_item(config.get_reading_lists_table(), reading_list)
        logger.info(
            f"Created reading list {reading_list['id']} for user: {reading_list['userId']}"
        )

        return api_response(201, reading_list, COLLECTION_METHODS)

    except ApiError as e:
        logger.warning(f"Request failed with {e.status_code}: {e.message}")
        return error_response(e.status_code, e.error, e.message, COLLECTION_METHODS)
    except Exception as e:
        logger.error(f"Error creating reading list: {str(e)}", exc_info=True)
        return error_response(
            500, "Internal Server Error", "Failed to create reading list", COLLECTION_METHODS
        )


def update_reading_list_handler(event, context):
    """
    Lambda handler to update a reading list.
    Expects list ID in path parameter 'id'.
    Accepts JSON body with optional name, description, bookIds and userId.
    description and bookIds are overwritten (defaulting to "" and []), name only
    when supplied. The item is not checked for existence first.
    """
    logger.info("update_reading_list_handler invoked")

    try:
        list_id = get_path_param(event, "id")
        body = parse_json_body(event)

        validate_string_field(body, "name", max_length=config.MAX_NAME_LENGTH)
        if isinstance(body.get("name"), str) and not body["name"].strip():
            raise ValidationError('Field "name" cannot be empty')
        _validate_optional_fields(body)

        user_id = _user_id_from_body(body)
        logger.info(f"Updating reading list: {list_id} for user: {user_id}")

        fields: dict[str, Any] = {}
        if body.get("name") is not None:
            fields["name"] = body["name"]
        fields["description"] = body.get("description") or ""
        fields["bookIds"] = body.get("bookIds") or []
        fields["updatedAt"] = _now()

        updated = update_item(
            config.get_reading_lists_table(), {"id": list_id, "userId": user_id}, fields
        )

        return api_response(200, updated, ITEM_METHODS)

    except ApiError as e:
        logger.warning(f"Request failed with {e.status_code}: {e.message}")
        return error_response(e.status_code, e.error, e.message, ITEM_METHODS)
    except Exception as e:
        logger.error(f"Error updating reading list: {str(e)}", exc_info=True)
        return error_response(
            500, "Internal Server Error", "Failed to update reading list", ITEM_METHODS
        )


def delete_reading_list_handler(event, context):
    """
    Lambda handler to delete a reading list.
    Expects list ID in path parameter 'id' and optional 'userId' query parameter.
    Deleting a list that does not exist still returns 204.
    """
    logger.info("delete_reading_list_handler invoked")

    try:
        list_id = get_path_param(event, "id")
        user_id = get_query_param(event, "userId", config.DEFAULT_USER_ID)

        logger.info(f"Deleting reading list: {list_id} for user: {user_id}")
        delete_item(config.get_reading_lists_table(), {"id": list_id, "userId": user_id})

        return no_content_response(ITEM_METHODS)

    except ApiError as e:
        logger.warning(f"Request failed with {e.status_code}: {e.message}")
        return error_response(e.status_code, e.error, e.message, ITEM_METHODS)
    except Exception as e:
        logger.error(f"Error deleting reading list: {str(e)}", exc_info=True)
        return error_response(
            500, "Internal Server Error", "Failed to delete reading list", ITEM_METHODS
        )
