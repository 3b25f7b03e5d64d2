"""
Configuration and AWS client initialization for Library API Lambda handlers

This module provides:
- The DynamoDB service resource (created lazily, once per process)
- Environment variable configuration
- Constants used across handlers
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import boto3

from library_backend.utils.errors import StorageError

if TYPE_CHECKING:
    from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table

logger = logging.getLogger()

# Constants
MAX_NAME_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 1000
MAX_BOOK_IDS = 500

# Environment configuration
AWS_REGION = os.environ.get("AWS_REGION", "us-east-1")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
BOOKS_TABLE_NAME = os.environ.get("BOOKS_TABLE_NAME")
READING_LISTS_TABLE_NAME = os.environ.get("READING_LISTS_TABLE_NAME")
# Optional GSI on userId; when unset, reading lists are listed with a filtered scan
READING_LISTS_USER_INDEX = os.environ.get("READING_LISTS_USER_INDEX")
# Stand-in owner for requests that carry no userId (there is no auth layer)
DEFAULT_USER_ID = os.environ.get("DEFAULT_USER_ID", "1")

# Tables are resolved on first use so importing the handlers never needs AWS access.
# Tests replace these attributes with mocks.
dynamodb: "DynamoDBServiceResource | None" = None
books_table: "Table | None" = None
reading_lists_table: "Table | None" = None


def configure_logging(logger: logging.Logger) -> logging.Logger:
    """Apply LOG_LEVEL to a handler module's logger."""
    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    return logger


def get_dynamodb() -> "DynamoDBServiceResource":
    """Return the process-wide DynamoDB resource, creating it on first call."""
    global dynamodb
    if dynamodb is None:
        dynamodb = boto3.resource("dynamodb", region_name=AWS_REGION)
    return dynamodb


def get_books_table() -> "Table":
    global books_table
    if books_table is None:
        if not BOOKS_TABLE_NAME:
            logger.error("BOOKS_TABLE_NAME environment variable is not set")
            raise StorageError("BOOKS_TABLE_NAME is not configured")
        books_table = get_dynamodb().Table(BOOKS_TABLE_NAME)
    return books_table


def get_reading_lists_table() -> "Table":
    global reading_lists_table
    if reading_lists_table is None:
        if not READING_LISTS_TABLE_NAME:
            logger.error("READING_LISTS_TABLE_NAME environment variable is not set")
            raise StorageError("READING_LISTS_TABLE_NAME is not configured")
        reading_lists_table = get_dynamodb().Table(READING_LISTS_TABLE_NAME)
    return reading_lists_table
