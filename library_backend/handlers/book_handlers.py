"""
Lambda handlers for book read operations (list, get)

Books are seeded out-of-band (see scripts/seed-books.py); the API only reads them.
Book attributes are passed through untouched.
"""

from __future__ import annotations

import logging

from library_backend import config
from library_backend.routes import allowed_methods
from library_backend.utils.dynamodb import get_item, scan_items
from library_backend.utils.errors import ApiError, NotFoundError
from library_backend.utils.response import api_response, error_response
from library_backend.utils.validation import get_path_param

logger = config.configure_logging(logging.getLogger())

BOOKS_METHODS = allowed_methods("/getBooks")
BOOK_METHODS = allowed_methods("/getBooks/{id}")


def list_books_handler(event, context):
    """
    Lambda handler to list all books from DynamoDB.
    Returns {"books": [...], "count": n} with every record in the Books table.
    """
    logger.info("list_books_handler invoked")

    try:
        books = scan_items(config.get_books_table())
        logger.info(f"Retrieved {len(books)} books from DynamoDB")

        return api_response(200, {"books": books, "count": len(books)}, BOOKS_METHODS)

    except ApiError as e:
        logger.warning(f"Request failed with {e.status_code}: {e.message}")
        return error_response(e.status_code, e.error, e.message, BOOKS_METHODS)
    except Exception as e:
        logger.error(f"Error listing books: {str(e)}", exc_info=True)
        return error_response(500, "Internal Server Error", "Failed to list books", BOOKS_METHODS)


def get_book_handler(event, context):
    """
    Lambda handler to fetch a single book.
    Expects book ID in path parameter 'id'.
    """
    logger.info("get_book_handler invoked")

    try:
        book_id = get_path_param(event, "id")
        logger.info(f"Fetching book: {book_id}")

        book = get_item(config.get_books_table(), {"id": book_id})
        if book is None:
            logger.warning(f"Book not found: {book_id}")
            raise NotFoundError(f'Book "{book_id}" not found')

        return api_response(200, book, BOOK_METHODS)

    except ApiError as e:
        logger.warning(f"Request failed with {e.status_code}: {e.message}")
        return error_response(e.status_code, e.error, e.message, BOOK_METHODS)
    except Exception as e:
        logger.error(f"Error fetching book: {str(e)}", exc_info=True)
        return error_response(500, "Internal Server Error", "Failed to fetch book", BOOK_METHODS)
