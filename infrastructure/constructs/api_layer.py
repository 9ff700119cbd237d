"""
API layer construct: shared Lambda + HTTP API routes.

A single Lambda keeps the wired stores warm and reduces cold start costs.
Uses Docker bundling for dependencies (runs in CI/CD pipeline).
"""

from aws_cdk import (
    BundlingOptions,
    Duration,
    aws_lambda as _lambda,
    aws_apigatewayv2 as apigw,
    aws_apigatewayv2_integrations as integrations,
    aws_logs as logs,
)
from constructs import Construct

ROUTE_DEFS = (
    (apigw.HttpMethod.GET, "/health"),
    (apigw.HttpMethod.POST, "/tickets"),
    (apigw.HttpMethod.GET, "/tickets"),
    (apigw.HttpMethod.GET, "/tickets/{id}"),
    (apigw.HttpMethod.PUT, "/tickets/{id}/status"),
    (apigw.HttpMethod.PUT, "/tickets/{id}/assign"),
    (apigw.HttpMethod.GET, "/tickets/{id}/history"),
    (apigw.HttpMethod.POST, "/tickets/{id}/comments"),
    (apigw.HttpMethod.GET, "/customers/{id}/tickets"),
    (apigw.HttpMethod.GET, "/agents/{id}/tickets"),
)


class ApiLayerConstruct(Construct):
    """Expose ticketing endpoints via HTTP API."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        environment: str,
        tickets_table_name: str,
        history_table_name: str,
        log_level: str = "INFO",
        default_page_limit: int = 20,
        max_page_limit: int = 100,
        lambda_memory_mb: int = 256,
        lambda_timeout_seconds: int = 15,
    ) -> None:
        super().__init__(scope, construct_id)

        # Bundle Lambda code with dependencies using Docker (works in CI/CD)
        bundled_code = _lambda.Code.from_asset(
            "src",
            bundling=BundlingOptions(
                image=_lambda.Runtime.PYTHON_3_12.bundling_image,
                command=[
                    "bash", "-c",
                    "pip install -r requirements-lambda.txt -t /asset-output && "
                    "cp -r . /asset-output"
                ],
            ),
        )

        self.main_lambda = _lambda.Function(
            self,
            "ApiHandler",
            runtime=_lambda.Runtime.PYTHON_3_12,
            handler="handlers.main.lambda_handler",
            code=bundled_code,
            memory_size=lambda_memory_mb,
            timeout=Duration.seconds(lambda_timeout_seconds),
            architecture=_lambda.Architecture.X86_64,
            environment={
                "ENVIRONMENT": environment,
                "LOG_LEVEL": log_level,
                "STORAGE_BACKEND": "dynamodb",
                "TICKETS_TABLE": tickets_table_name,
                "TICKET_HISTORY_TABLE": history_table_name,
                "DEFAULT_PAGE_LIMIT": str(default_page_limit),
                "MAX_PAGE_LIMIT": str(max_page_limit),
            },
            log_retention=logs.RetentionDays.ONE_WEEK,
        )

        # HTTP API with minimal latency and low cost.
        self.api = apigw.HttpApi(
            self,
            "HttpApi",
            api_name=f"ticketing-api-{environment}",
            cors_preflight=apigw.CorsPreflightOptions(
                allow_origins=["*"],
                allow_methods=[apigw.CorsHttpMethod.ANY],
            ),
        )

        integration = integrations.HttpLambdaIntegration(
            "LambdaIntegration", self.main_lambda
        )

        for method, path in ROUTE_DEFS:
            self.api.add_routes(
                path=path,
                methods=[method],
                integration=integration,
            )
