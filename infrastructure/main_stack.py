"""
Main CDK Stack for the ticket lifecycle service.
"""

from aws_cdk import (
    Stack,
    Tags,
    CfnOutput,
)
from constructs import Construct

from infrastructure.constructs.data_layer import DataLayerConstruct
from infrastructure.constructs.api_layer import ApiLayerConstruct
from infrastructure.config.settings import Settings


class TicketingServiceStack(Stack):
    """Main stack wiring all constructs together."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        settings: Settings,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # Global tags for cost/accounting.
        Tags.of(self).add("Project", "ticketing-service")
        Tags.of(self).add("Environment", settings.environment)
        Tags.of(self).add("ManagedBy", "cdk")

        # 1) Data layer.
        data_construct = DataLayerConstruct(
            self,
            "DataLayer",
            tickets_table_name=settings.tickets_table_name,
            history_table_name=settings.history_table_name,
            point_in_time_recovery=settings.point_in_time_recovery,
            retain_tables=settings.retain_tables,
        )

        # 2) API layer (single Lambda).
        api_construct = ApiLayerConstruct(
            self,
            "ApiLayer",
            environment=settings.environment,
            tickets_table_name=data_construct.tickets_table.table_name,
            history_table_name=data_construct.history_table.table_name,
            log_level=settings.log_level,
            default_page_limit=settings.default_page_limit,
            max_page_limit=settings.max_page_limit,
            lambda_memory_mb=settings.lambda_memory_mb,
            lambda_timeout_seconds=settings.lambda_timeout_seconds,
        )

        # Tickets are read and conditionally rewritten; history is only
        # appended and queried.
        data_construct.tickets_table.grant_read_write_data(api_construct.main_lambda)
        data_construct.history_table.grant(
            api_construct.main_lambda, "dynamodb:PutItem", "dynamodb:Query"
        )

        # Outputs to quickly find resources.
        CfnOutput(self, "ApiEndpoint", value=api_construct.api.api_endpoint)
        CfnOutput(self, "TicketsTable", value=data_construct.tickets_table.table_name)
        CfnOutput(self, "TicketHistoryTable", value=data_construct.history_table.table_name)
