"""
Lambda handlers for Library API

This module serves as the entry point for all Lambda functions.
It re-exports handlers from their respective modules for Lambda function configuration.

Architecture:
- API Gateway -> Lambda -> DynamoDB (Books table, read only)
- API Gateway -> Lambda -> DynamoDB (ReadingLists table)

Handlers:
1. list_books_handler: GET /getBooks - lists all books with a count
2. get_book_handler: GET /getBooks/{id} - fetches a single book
3. list_reading_lists_handler: GET /reading-lists - lists a user's reading lists
4. create_reading_list_handler: POST /reading-lists - creates a reading list
5. update_reading_list_handler: PUT /reading-lists/{id} - overwrites a reading list
6. delete_reading_list_handler: DELETE /reading-lists/{id} - deletes a reading list
7. router_handler: dispatches any of the above through the route table
"""

from library_backend import config
from library_backend.handlers.book_handlers import get_book_handler, list_books_handler
from library_backend.handlers.reading_list_handlers import (
    create_reading_list_handler,
    delete_reading_list_handler,
    list_reading_lists_handler,
    update_reading_list_handler,
)
from library_backend.routes import dispatch as router_handler

__all__ = [
    "list_books_handler",
    "get_book_handler",
    "list_reading_lists_handler",
    "create_reading_list_handler",
    "update_reading_list_handler",
    "delete_reading_list_handler",
    "router_handler",
    # Also export config for tests
    "config",
]
