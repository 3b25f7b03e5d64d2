"""
DynamoDB tables for the Library API.

Books are keyed by id. Reading lists are keyed by (id, userId) with a
global secondary index on userId so a user's lists can be queried.
"""

from typing import Any

from aws_cdk import CfnOutput, RemovalPolicy, Stack
from aws_cdk import aws_dynamodb as dynamodb
from constructs import Construct

READING_LISTS_USER_INDEX = "userId-index"


class DatabaseStack(Stack):
    """Stack holding the Books and ReadingLists tables."""

    def __init__(self, scope: Construct, id: str, **kwargs: Any) -> None:
        super().__init__(scope, id, **kwargs)

        self.books_table = dynamodb.Table(
            self,
            "BooksTable",
            table_name="library-books",
            partition_key=dynamodb.Attribute(name="id", type=dynamodb.AttributeType.STRING),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            removal_policy=RemovalPolicy.DESTROY,  # Use RETAIN for production
        )

        self.reading_lists_table = dynamodb.Table(
            self,
            "ReadingListsTable",
            table_name="library-reading-lists",
            partition_key=dynamodb.Attribute(name="id", type=dynamodb.AttributeType.STRING),
            sort_key=dynamodb.Attribute(name="userId", type=dynamodb.AttributeType.STRING),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            removal_policy=RemovalPolicy.DESTROY,  # Use RETAIN for production
        )

        self.reading_lists_table.add_global_secondary_index(
            index_name=READING_LISTS_USER_INDEX,
            partition_key=dynamodb.Attribute(name="userId", type=dynamodb.AttributeType.STRING),
            projection_type=dynamodb.ProjectionType.ALL,
        )
        self.reading_lists_user_index = READING_LISTS_USER_INDEX

        CfnOutput(
            self,
            "BooksTableName",
            value=self.books_table.table_name,
            description="Books table name (seed with scripts/seed-books.py)",
        )
