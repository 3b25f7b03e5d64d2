"""
DynamoDB utilities for Library API

Provides update expression builders and thin wrappers around boto3 Table
calls. Every wrapper translates botocore failures into StorageError so
handlers only ever see the error taxonomy.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict

from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import BotoCoreError, ClientError

from library_backend.utils.errors import StorageError

if TYPE_CHECKING:
    from mypy_boto3_dynamodb.service_resource import Table

logger = logging.getLogger()


def build_update_expression(
    fields: dict[str, Any],
) -> tuple[str, dict[str, Any], dict[str, str]]:
    """
    Build a DynamoDB SET expression from a dictionary of fields.

    Args:
        fields: Dictionary of field names to values

    Returns:
        tuple: (update_expression, expression_attribute_values, expression_attribute_names)

    Example:
        fields = {"name": "Sci-Fi", "bookIds": ["b1"]}
        expr, values, names = build_update_expression(fields)
        # expr = "SET #name = :name, #bookIds = :bookIds"
        # values = {":name": "Sci-Fi", ":bookIds": ["b1"]}
        # names = {"#name": "name", "#bookIds": "bookIds"}
    """
    set_parts = []
    expr_attr_values: dict[str, Any] = {}
    expr_attr_names: dict[str, str] = {}

    for field, value in fields.items():
        # Placeholders avoid reserved word conflicts ("name" is reserved)
        name_placeholder = f"#{field}"
        value_placeholder = f":{field}"

        expr_attr_names[name_placeholder] = field
        expr_attr_values[value_placeholder] = value
        set_parts.append(f"{name_placeholder} = {value_placeholder}")

    return "SET " + ", ".join(set_parts), expr_attr_values, expr_attr_names


def build_update_params(
    key: Dict[str, Any],
    fields: Dict[str, Any],
    return_values: str = "ALL_NEW",
) -> Dict[str, Any]:
    """
    Build complete DynamoDB update_item parameters.

    Args:
        key: Primary key for the item to update
        fields: Dictionary of field names to values
        return_values: Return values option (default: ALL_NEW)

    Returns:
        dict: Complete parameters for table.update_item()
    """
    update_expression, expr_values, expr_names = build_update_expression(fields)

    params = {
        "Key": key,
        "UpdateExpression": update_expression,
        "ExpressionAttributeNames": expr_names,
        "ExpressionAttributeValues": expr_values,
        "ReturnValues": return_values,
    }

    return params


def _storage_failure(operation: str, error: Exception) -> StorageError:
    logger.error(f"DynamoDB {operation} failed: {str(error)}", exc_info=True)
    return StorageError(f"DynamoDB {operation} failed: {str(error)}")


def get_item(table: "Table", key: dict[str, Any]) -> dict[str, Any] | None:
    """
    Fetch a single item by primary key.

    Returns:
        dict: The item, or None if no item has that key
    """
    try:
        response = table.get_item(Key=key)
    except (ClientError, BotoCoreError) as e:
        raise _storage_failure("get_item", e) from e
    return response.get("Item")


def put_item(table: "Table", item: dict[str, Any]) -> None:
    try:
        table.put_item(Item=item)
    except (ClientError, BotoCoreError) as e:
        raise _storage_failure("put_item", e) from e


def update_item(table: "Table", key: dict[str, Any], fields: dict[str, Any]) -> dict[str, Any]:
    """
    SET the given fields on the item addressed by key and return all new attributes.

    No existence condition is applied, so a missing key is created.
    """
    try:
        response = table.update_item(**build_update_params(key, fields))
    except (ClientError, BotoCoreError) as e:
        raise _storage_failure("update_item", e) from e
    return response.get("Attributes", {})


def delete_item(table: "Table", key: dict[str, Any]) -> None:
    """Delete by key. Deleting a missing key succeeds."""
    try:
        table.delete_item(Key=key)
    except (ClientError, BotoCoreError) as e:
        raise _storage_failure("delete_item", e) from e


def scan_items(
    table: "Table", filter_attribute: str | None = None, filter_value: Any = None
) -> list[dict[str, Any]]:
    """
    Scan the whole table, following LastEvaluatedKey pagination.

    Args:
        table: DynamoDB table
        filter_attribute: Optional attribute that must equal filter_value

    Returns:
        list: All matching items
    """
    scan_kwargs: dict[str, Any] = {}
    if filter_attribute:
        scan_kwargs["FilterExpression"] = Attr(filter_attribute).eq(filter_value)

    try:
        response = table.scan(**scan_kwargs)
        items = response.get("Items", [])

        while "LastEvaluatedKey" in response:
            response = table.scan(ExclusiveStartKey=response["LastEvaluatedKey"], **scan_kwargs)
            items.extend(response.get("Items", []))
    except (ClientError, BotoCoreError) as e:
        raise _storage_failure("scan", e) from e

    return items


def query_index(
    table: "Table", index_name: str, key_attribute: str, key_value: Any
) -> list[dict[str, Any]]:
    """Query a secondary index by its partition key, following pagination."""
    query_kwargs: dict[str, Any] = {
        "IndexName": index_name,
        "KeyConditionExpression": Key(key_attribute).eq(key_value),
    }

    try:
        response = table.query(**query_kwargs)
        items = response.get("Items", [])

        while "LastEvaluatedKey" in response:
            response = table.query(ExclusiveStartKey=response["LastEvaluatedKey"], **query_kwargs)
            items.extend(response.get("Items", []))
    except (ClientError, BotoCoreError) as e:
        raise _storage_failure("query", e) from e

    return items
