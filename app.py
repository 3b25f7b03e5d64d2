#!/usr/bin/env python3
import os

import aws_cdk as cdk

from infrastructure.api_stack import ApiStack
from infrastructure.database_stack import DatabaseStack

app = cdk.App()
env = cdk.Environment(
    account=os.environ.get("CDK_DEFAULT_ACCOUNT"),
    region=os.environ.get("CDK_DEFAULT_REGION", "us-east-1"),
)

database_stack = DatabaseStack(app, "LibraryDatabaseStack", env=env)

api_stack = ApiStack(
    app,
    "LibraryApiStack",
    books_table=database_stack.books_table,
    reading_lists_table=database_stack.reading_lists_table,
    reading_lists_user_index=database_stack.reading_lists_user_index,
    default_user_id=os.environ.get("DEFAULT_USER_ID", "1"),
    env=env,
)
api_stack.add_dependency(database_stack)

app.synth()
