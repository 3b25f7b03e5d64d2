#!/usr/bin/env python3
"""
Seed the DynamoDB Books table from a JSON file.

Books are read-only through the API, so this script is how they get into the
table. The file holds a JSON array of book objects; every object needs an
"id" and all other attributes (title, author, ...) are stored as given.
Books that already exist are skipped unless --overwrite is passed.

Environment Variables (optional):
    AWS_PROFILE: AWS profile name (default: 'default')
    AWS_REGION: AWS region (default: 'us-east-1')
    BOOKS_TABLE_NAME: DynamoDB table name (default: 'library-books')

Usage:
    python scripts/seed-books.py scripts/sample-books.json [--dry-run] [--overwrite]
"""

import argparse
import json
import os
import sys
from decimal import Decimal

import boto3

PROFILE = os.environ.get('AWS_PROFILE', 'default')
REGION = os.environ.get('AWS_REGION', 'us-east-1')
TABLE_NAME = os.environ.get('BOOKS_TABLE_NAME', 'library-books')


def load_books(path: str) -> list:
    """
    Load and check the books file.

    DynamoDB rejects floats, so numbers are parsed as Decimal.
    """
    with open(path, encoding='utf-8') as f:
        books = json.load(f, parse_float=Decimal)

    if not isinstance(books, list):
        raise ValueError(f"{path} must contain a JSON array of books")

    for index, book in enumerate(books):
        if not isinstance(book, dict) or not book.get('id'):
            raise ValueError(f"Book at index {index} is missing an 'id'")

    return books


def seed_books(path: str, dry_run: bool = False, overwrite: bool = False) -> None:
    books = load_books(path)

    session = boto3.Session(profile_name=PROFILE, region_name=REGION)
    table = session.resource('dynamodb').Table(TABLE_NAME)

    print(f"📖 Loaded {len(books)} books from {path}")
    print(f"📊 Target DynamoDB table: {TABLE_NAME}")
    print(f"🌎 Using AWS Region: {REGION}")
    if dry_run:
        print("🧪 Dry run - nothing will be written")
    print()

    books_written = 0
    books_skipped = 0

    with table.batch_writer(overwrite_by_pkeys=['id']) as batch:
        for book in books:
            if not overwrite and 'Item' in table.get_item(Key={'id': book['id']}):
                print(f"⏭️  Skipping (already exists): {book['id']}")
                books_skipped += 1
                continue

            print(f"✅ {book['id']}: {book.get('title', '(untitled)')}")
            if not dry_run:
                batch.put_item(Item=book)
            books_written += 1

    print()
    print("=" * 60)
    print("📊 Seed Summary:")
    print(f"   Books in file: {len(books)}")
    print(f"   Books {'to write' if dry_run else 'written'}: {books_written}")
    print(f"   Books skipped (already in DB): {books_skipped}")
    print("=" * 60)


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the Books table from a JSON file")
    parser.add_argument('path', help="JSON file with an array of books")
    parser.add_argument('--dry-run', action='store_true', help="Show what would be written")
    parser.add_argument('--overwrite', action='store_true', help="Replace books that already exist")
    args = parser.parse_args()

    try:
        seed_books(args.path, dry_run=args.dry_run, overwrite=args.overwrite)
    except KeyboardInterrupt:
        print("\n⚠️  Seeding interrupted by user")
        return 1
    except (OSError, ValueError) as e:
        print(f"\n❌ Seeding failed: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
