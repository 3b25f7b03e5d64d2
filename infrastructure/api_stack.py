"""
REST API and Lambda functions for the Library API.

One Python Lambda per entry in library_backend.routes.ROUTES; API Gateway
resources and methods are created from the same table.
"""

from pathlib import Path
from typing import Any

from aws_cdk import CfnOutput, Duration, Stack
from aws_cdk import aws_apigateway as apigateway
from aws_cdk import aws_dynamodb as dynamodb
from aws_cdk import aws_lambda as lambda_
from constructs import Construct

from library_backend.routes import CORS_ALLOW_HEADERS, ROUTES

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Only the handler package is shipped; boto3 comes with the Lambda runtime
ASSET_EXCLUDES = [
    "*",
    "!library_backend",
    "!library_backend/**",
    "**/__pycache__",
]


class ApiStack(Stack):
    """Stack wiring API Gateway routes to the Library API handlers."""

    def __init__(
        self,
        scope: Construct,
        id: str,
        books_table: dynamodb.ITable,
        reading_lists_table: dynamodb.ITable,
        reading_lists_user_index: str | None = None,
        default_user_id: str = "1",
        **kwargs: Any,
    ) -> None:
        super().__init__(scope, id, **kwargs)

        self.books_table = books_table
        self.reading_lists_table = reading_lists_table

        self.api = apigateway.RestApi(
            self,
            "LibraryAPI",
            rest_api_name="Library Recommendation System API",
            description="Books and reading lists API",
            default_cors_preflight_options=apigateway.CorsOptions(
                allow_origins=apigateway.Cors.ALL_ORIGINS,
                allow_methods=apigateway.Cors.ALL_METHODS,
                allow_headers=list(CORS_ALLOW_HEADERS),
            ),
        )

        code = lambda_.Code.from_asset(str(PROJECT_ROOT), exclude=ASSET_EXCLUDES)

        self.functions: dict[str, lambda_.Function] = {}
        for route in ROUTES:
            if route.table == "books":
                table = books_table
                environment = {"BOOKS_TABLE_NAME": books_table.table_name}
            else:
                table = reading_lists_table
                environment = {
                    "READING_LISTS_TABLE_NAME": reading_lists_table.table_name,
                    "DEFAULT_USER_ID": default_user_id,
                }
                if reading_lists_user_index:
                    environment["READING_LISTS_USER_INDEX"] = reading_lists_user_index
            environment["LOG_LEVEL"] = "INFO"

            function = lambda_.Function(
                self,
                route.function_id,
                runtime=lambda_.Runtime.PYTHON_3_12,
                handler=route.entry_point,
                code=code,
                timeout=Duration.seconds(10),
                memory_size=256,
                architecture=lambda_.Architecture.ARM_64,
                environment=environment,
            )

            if route.writes:
                table.grant_read_write_data(function)
            else:
                table.grant_read_data(function)

            resource = self.api.root.resource_for_path(route.path)
            resource.add_method(route.method, apigateway.LambdaIntegration(function))
            self.functions[route.handler] = function

        CfnOutput(
            self,
            "ApiUrl",
            value=self.api.url,
            description="API Gateway URL",
        )
