"""
Data layer construct: DynamoDB tickets table + append-only history table.
"""

from aws_cdk import (
    RemovalPolicy,
    aws_dynamodb as dynamodb,
)
from constructs import Construct

CUSTOMER_INDEX = "customer_id-created_at-index"
AGENT_INDEX = "assigned_agent_id-status-index"


class DataLayerConstruct(Construct):
    """Provision ticket storage."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        tickets_table_name: str,
        history_table_name: str,
        point_in_time_recovery: bool,
        retain_tables: bool,
    ) -> None:
        super().__init__(scope, construct_id)

        removal_policy = RemovalPolicy.RETAIN if retain_tables else RemovalPolicy.DESTROY

        # Tickets keyed by id; GSIs serve the per-customer and per-agent lists.
        self.tickets_table = dynamodb.Table(
            self,
            "TicketsTable",
            table_name=tickets_table_name,
            partition_key=dynamodb.Attribute(name="id", type=dynamodb.AttributeType.STRING),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            encryption=dynamodb.TableEncryption.AWS_MANAGED,
            point_in_time_recovery=point_in_time_recovery,
            removal_policy=removal_policy,
        )
        self.tickets_table.add_global_secondary_index(
            index_name=CUSTOMER_INDEX,
            partition_key=dynamodb.Attribute(
                name="customer_id", type=dynamodb.AttributeType.STRING
            ),
            sort_key=dynamodb.Attribute(name="created_at", type=dynamodb.AttributeType.STRING),
        )
        self.tickets_table.add_global_secondary_index(
            index_name=AGENT_INDEX,
            partition_key=dynamodb.Attribute(
                name="assigned_agent_id", type=dynamodb.AttributeType.STRING
            ),
            sort_key=dynamodb.Attribute(name="status", type=dynamodb.AttributeType.STRING),
        )

        # History: one partition per ticket, entries ordered by "<timestamp>#<id>".
        self.history_table = dynamodb.Table(
            self,
            "TicketHistoryTable",
            table_name=history_table_name,
            partition_key=dynamodb.Attribute(
                name="ticket_id", type=dynamodb.AttributeType.STRING
            ),
            sort_key=dynamodb.Attribute(name="entry_key", type=dynamodb.AttributeType.STRING),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            encryption=dynamodb.TableEncryption.AWS_MANAGED,
            point_in_time_recovery=point_in_time_recovery,
            removal_policy=removal_policy,
        )
