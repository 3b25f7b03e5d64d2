"""
Unit tests for utility modules
"""

import json
from decimal import Decimal
from unittest.mock import Mock, patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from library_backend import config
from library_backend.utils.dynamodb import (
    build_update_expression,
    build_update_params,
    delete_item,
    get_item,
    query_index,
    scan_items,
    update_item,
)
from library_backend.utils.errors import NotFoundError, StorageError, ValidationError
from library_backend.utils.response import (
    api_response,
    convert_decimal,
    cors_headers,
    error_response,
    no_content_response,
)
from library_backend.utils.validation import (
    get_path_param,
    get_query_param,
    parse_json_body,
    validate_string_field,
    validate_string_list_field,
)


# ============================================================================
# DynamoDB Utility Tests
# ============================================================================


def test_build_update_expression_sets_all_fields():
    """Test SET expression with placeholders for every field"""

    expr, values, names = build_update_expression(
        {"name": "Sci-Fi", "bookIds": ["1"], "updatedAt": "2024-01-01T00:00:00+00:00"}
    )

    assert expr == "SET #name = :name, #bookIds = :bookIds, #updatedAt = :updatedAt"
    assert values == {
        ":name": "Sci-Fi",
        ":bookIds": ["1"],
        ":updatedAt": "2024-01-01T00:00:00+00:00",
    }
    assert names == {"#name": "name", "#bookIds": "bookIds", "#updatedAt": "updatedAt"}


def test_build_update_expression_keeps_empty_values():
    """Test that empty strings and lists are written, not removed"""

    expr, values, _ = build_update_expression({"description": "", "bookIds": []})

    assert expr == "SET #description = :description, #bookIds = :bookIds"
    assert values == {":description": "", ":bookIds": []}


def test_build_update_params_defaults():
    """Test update params use ALL_NEW and no condition"""

    params = build_update_params(key={"id": "list-1", "userId": "1"}, fields={"name": "A"})

    assert params == {
        "Key": {"id": "list-1", "userId": "1"},
        "UpdateExpression": "SET #name = :name",
        "ExpressionAttributeNames": {"#name": "name"},
        "ExpressionAttributeValues": {":name": "A"},
        "ReturnValues": "ALL_NEW",
    }


def test_build_update_params_return_values():
    """Test update params with a custom ReturnValues option"""

    params = build_update_params(
        key={"id": "list-1"}, fields={"name": "A"}, return_values="UPDATED_NEW"
    )

    assert "ConditionExpression" not in params
    assert params["ReturnValues"] == "UPDATED_NEW"


def test_get_item_returns_none_when_missing():
    mock_table = Mock()
    mock_table.get_item.return_value = {}

    assert get_item(mock_table, {"id": "nope"}) is None


def test_get_item_wraps_client_error():
    """Test that botocore errors become StorageError with a generic public message"""

    mock_table = Mock()
    mock_table.get_item.side_effect = ClientError(
        {"Error": {"Code": "ResourceNotFoundException", "Message": "Table not found"}}, "GetItem"
    )

    with pytest.raises(StorageError) as exc_info:
        get_item(mock_table, {"id": "1"})

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "An internal error occurred"
    assert "Table not found" in exc_info.value.detail
    assert isinstance(exc_info.value.__cause__, ClientError)


def test_scan_items_wraps_connection_error():
    mock_table = Mock()
    mock_table.scan.side_effect = EndpointConnectionError(endpoint_url="https://dynamodb")

    with pytest.raises(StorageError):
        scan_items(mock_table)


def test_scan_items_without_filter():
    mock_table = Mock()
    mock_table.scan.return_value = {"Items": [{"id": "1"}]}

    assert scan_items(mock_table) == [{"id": "1"}]
    mock_table.scan.assert_called_once_with()


def test_query_index_pagination():
    mock_table = Mock()
    mock_table.query.side_effect = [
        {"Items": [{"id": "a"}], "LastEvaluatedKey": {"id": "a", "userId": "1"}},
        {"Items": [{"id": "b"}]},
    ]

    items = query_index(mock_table, "userId-index", "userId", "1")

    assert [item["id"] for item in items] == ["a", "b"]
    assert mock_table.query.call_args.kwargs["ExclusiveStartKey"] == {"id": "a", "userId": "1"}
    assert mock_table.query.call_args.kwargs["IndexName"] == "userId-index"


def test_update_item_returns_attributes():
    mock_table = Mock()
    mock_table.update_item.return_value = {"Attributes": {"id": "list-1", "name": "A"}}

    assert update_item(mock_table, {"id": "list-1", "userId": "1"}, {"name": "A"}) == {
        "id": "list-1",
        "name": "A",
    }


def test_delete_item_wraps_client_error():
    mock_table = Mock()
    mock_table.delete_item.side_effect = ClientError(
        {"Error": {"Code": "ValidationException", "Message": "bad key"}}, "DeleteItem"
    )

    with pytest.raises(StorageError):
        delete_item(mock_table, {"id": "list-1"})


# ============================================================================
# Response Utility Tests
# ============================================================================


def test_api_response_headers():
    resp = api_response(200, {"ok": True}, ("GET", "POST"))

    assert resp["statusCode"] == 200
    assert json.loads(resp["body"]) == {"ok": True}
    assert resp["headers"] == {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Headers": "Content-Type,Authorization",
        "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    }


def test_api_response_serializes_dynamodb_types():
    resp = api_response(200, {"pages": Decimal("320"), "rating": Decimal("4.5"), "tags": {"b", "a"}})

    assert json.loads(resp["body"]) == {"pages": 320, "rating": 4.5, "tags": ["a", "b"]}


def test_api_response_rejects_unknown_types():
    with pytest.raises(TypeError):
        api_response(200, {"obj": object()})


def test_cors_headers_does_not_duplicate_options():
    assert cors_headers(["GET", "OPTIONS"])["Access-Control-Allow-Methods"] == "GET,OPTIONS"


def test_no_content_response():
    resp = no_content_response(("DELETE",))

    assert resp["statusCode"] == 204
    assert resp["body"] == ""
    assert resp["headers"]["Access-Control-Allow-Methods"] == "DELETE,OPTIONS"


def test_error_response_body():
    resp = error_response(404, "Not Found", "Book not found")

    assert resp["statusCode"] == 404
    assert json.loads(resp["body"]) == {"error": "Not Found", "message": "Book not found"}


def test_convert_decimal():
    assert convert_decimal(Decimal("10")) == 10
    assert isinstance(convert_decimal(Decimal("10")), int)
    assert convert_decimal(Decimal("1.5")) == 1.5
    assert convert_decimal(Decimal("1E+30")) == 10**30
    assert convert_decimal("text") == "text"


# ============================================================================
# Validation Utility Tests
# ============================================================================


def test_get_path_param_decodes():
    assert get_path_param({"pathParameters": {"id": "a%20b"}}, "id") == "a b"


@pytest.mark.parametrize("event", [{}, {"pathParameters": None}, {"pathParameters": {"id": ""}}])
def test_get_path_param_missing(event):
    with pytest.raises(ValidationError) as exc_info:
        get_path_param(event, "id")

    assert exc_info.value.message == "Id is required in path"
    assert exc_info.value.status_code == 400


def test_get_query_param_default():
    assert get_query_param({"queryStringParameters": None}, "userId", "1") == "1"
    assert get_query_param({"queryStringParameters": {"userId": ""}}, "userId", "1") == "1"
    assert get_query_param({"queryStringParameters": {"userId": "9"}}, "userId", "1") == "9"


def test_parse_json_body_optional_missing():
    assert parse_json_body({"body": None}) == {}


def test_parse_json_body_required_missing():
    with pytest.raises(ValidationError, match="Request body is required"):
        parse_json_body({}, required=True)


def test_parse_json_body_invalid():
    with pytest.raises(ValidationError, match="Invalid JSON"):
        parse_json_body({"body": "{oops"})


def test_parse_json_body_not_object():
    with pytest.raises(ValidationError, match="JSON object"):
        parse_json_body({"body": "42"})


def test_validate_string_field_rules():
    validate_string_field({}, "description")
    validate_string_field({"description": None}, "description")
    validate_string_field({"name": "ok"}, "name", required=True)

    with pytest.raises(ValidationError, match="must be a string"):
        validate_string_field({"name": 5}, "name")

    with pytest.raises(ValidationError, match="maximum length of 3"):
        validate_string_field({"name": "long"}, "name", max_length=3)

    with pytest.raises(ValidationError, match="cannot be empty"):
        validate_string_field({"name": "\t "}, "name", required=True)


def test_validate_string_list_field_rules():
    validate_string_list_field({}, "bookIds")
    validate_string_list_field({"bookIds": ["1", "2"]}, "bookIds")

    with pytest.raises(ValidationError, match="list of strings"):
        validate_string_list_field({"bookIds": "1"}, "bookIds")

    with pytest.raises(ValidationError, match="maximum of 1 items"):
        validate_string_list_field({"bookIds": ["1", "2"]}, "bookIds", max_items=1)


def test_error_taxonomy_status_codes():
    assert ValidationError("x").status_code == 400
    assert NotFoundError("x").status_code == 404
    assert StorageError("x").status_code == 500


# ============================================================================
# Config Tests
# ============================================================================


def test_get_reading_lists_table_is_cached():
    """Test the table is created once per process from the shared resource"""

    mock_resource = Mock()

    with patch.object(config, "dynamodb", mock_resource), \
         patch.object(config, "reading_lists_table", None), \
         patch.object(config, "READING_LISTS_TABLE_NAME", "library-reading-lists"):
        first = config.get_reading_lists_table()
        second = config.get_reading_lists_table()

    assert first is second
    mock_resource.Table.assert_called_once_with("library-reading-lists")


def test_get_books_table_requires_name():
    with patch.object(config, "books_table", None), \
         patch.object(config, "BOOKS_TABLE_NAME", None):
        with pytest.raises(StorageError):
            config.get_books_table()


def test_get_dynamodb_created_lazily():
    with patch.object(config, "dynamodb", None), \
         patch.object(config.boto3, "resource") as mock_resource:
        resource = config.get_dynamodb()
        assert config.get_dynamodb() is resource

    mock_resource.assert_called_once_with("dynamodb", region_name=config.AWS_REGION)
