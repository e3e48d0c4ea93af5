"""
Thin Table Gateway

This module wraps the boto3 DynamoDB resource for a single partitioned table.
Tables are keyed by ``PartitionKey`` (HASH) and ``RowKey`` (RANGE), both
strings.

The gateway is responsible for:
- Creating the boto3 session/resource lazily from TableStoreConfig
- Resolving a table, creating it when it does not exist yet
- Raw pass-through for Query, with error mapping
- Conditional PutItem/DeleteItem that report a failed condition as ``False``

Everything above the gateway (segment walking, lookup-then-delete) lives in
the read/write APIs under ``handlers``.
"""

import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config import TableStoreConfig
from ..exceptions import (
    MalformedFilterError,
    RetryableError,
    StoreUnavailableError,
    ValidationError,
)
from ..models import PARTITION_KEY, ROW_KEY

logger = logging.getLogger(__name__)

THROTTLING_CODES = frozenset([
    'ProvisionedThroughputExceededException', 'RequestLimitExceeded',
    'ThrottlingException', 'TooManyRequestsException', 'SlowDown',
])

SERVICE_FAILURE_CODES = frozenset([
    'InternalServerError', 'ServiceUnavailable', 'ServiceUnavailableException',
    'InternalFailure', 'RequestTimeoutException',
])

CREDENTIAL_CODES = frozenset([
    'UnrecognizedClientException', 'AccessDeniedException',
    'InvalidSignatureException', 'IncompleteSignatureException',
    'ExpiredTokenException', 'MissingAuthenticationToken',
])


def error_code(error: ClientError) -> str:
    return error.response.get('Error', {}).get('Code', '')


def map_store_error(
    error: Exception,
    operation: str,
    table_name: str,
    resource_id: Optional[str] = None
) -> Exception:
    """Map a boto3/botocore failure to a table store exception.

    Args:
        error: ClientError from the service, or a BotoCoreError raised before
            a response was received (no credentials, endpoint unreachable)
        operation: The operation that failed (e.g. "Query", "PutItem")
        table_name: The physical table name
        resource_id: Optional composite key rendered for context

    Returns:
        Appropriate table store exception
    """
    context = f"{operation} on {table_name}"
    if resource_id:
        context += f" (resource: {resource_id})"

    if not isinstance(error, ClientError):
        return StoreUnavailableError(
            f"Store unreachable - {context}: {error}",
            original_error=error,
            context={'table_name': table_name}
        )

    code = error_code(error)
    full_message = f"{context}: {error.response.get('Error', {}).get('Message', '')}"

    if code == 'ValidationException':
        if operation == 'Query':
            return MalformedFilterError(f"Key condition rejected - {full_message}", original_error=error)
        return ValidationError(f"Validation failed - {full_message}", original_error=error)

    elif code == 'ItemCollectionSizeLimitExceededException':
        return ValidationError(f"Item collection size limit exceeded - {full_message}", original_error=error)

    elif code == 'ResourceNotFoundException':
        return StoreUnavailableError(
            f"Table not found - {full_message}",
            original_error=error,
            context={'table_name': table_name}
        )

    elif code in THROTTLING_CODES:
        return RetryableError(f"Throttling - {full_message}", original_error=error)

    elif code in SERVICE_FAILURE_CODES:
        return RetryableError(f"Service unavailable - {full_message}", original_error=error)

    elif code in CREDENTIAL_CODES:
        return StoreUnavailableError(
            f"Authentication/authorization failed - {full_message}",
            original_error=error,
            context={'table_name': table_name}
        )

    logger.warning(f"Unknown store error code '{code}' mapped to StoreUnavailableError")
    return StoreUnavailableError(
        f"Store operation failed - {full_message}",
        original_error=error,
        context={'table_name': table_name}
    )


def _is_success(response: Dict[str, Any]) -> bool:
    status = response.get('ResponseMetadata', {}).get('HTTPStatusCode', 200)
    return 200 <= status <= 299


def _render_key(key: Dict[str, Any]) -> str:
    return f"{key.get(PARTITION_KEY)}/{key.get(ROW_KEY)}"


def create_dynamodb_resource(config: TableStoreConfig):
    """Create a boto3 DynamoDB resource from configuration.

    Raises:
        StoreUnavailableError: If the session or resource cannot be created
    """
    try:
        session = boto3.Session(
            aws_access_key_id=config.aws_access_key_id,
            aws_secret_access_key=config.aws_secret_access_key,
            region_name=config.region_name
        )

        resource_kwargs = {
            'region_name': config.region_name,
            'config': Config(
                retries={'max_attempts': config.retries},
                max_pool_connections=config.max_pool_connections,
                read_timeout=config.timeout_seconds,
                connect_timeout=config.timeout_seconds
            )
        }
        if config.endpoint_url:
            resource_kwargs['endpoint_url'] = config.endpoint_url

        return session.resource('dynamodb', **resource_kwargs)
    except Exception as e:
        logger.error(f"Failed to create DynamoDB resource: {e}")
        raise StoreUnavailableError(f"Failed to connect to store: {e}", e) from e


class TableGateway:
    """
    Thin gateway for one partitioned table.

    Holds the boto3 resource for connection reuse; holds no record data.
    """

    def __init__(self, config: TableStoreConfig, table_name: str, dynamodb=None):
        """Initialize table gateway.

        Args:
            config: Table store configuration
            table_name: Physical table name
            dynamodb: Existing boto3 DynamoDB resource to share (optional)
        """
        self.config = config
        self.table_name = table_name
        self._dynamodb = dynamodb
        self._table = None

    @property
    def dynamodb(self):
        """Lazy initialization of the DynamoDB resource."""
        if self._dynamodb is None:
            self._dynamodb = create_dynamodb_resource(self.config)
        return self._dynamodb

    @property
    def table(self):
        """boto3 Table handle; does not check that the table exists."""
        if self._table is None:
            try:
                self._table = self.dynamodb.Table(self.table_name)
            except StoreUnavailableError:
                raise
            except Exception as e:
                logger.error(f"Failed to access table '{self.table_name}': {e}")
                raise StoreUnavailableError(f"Failed to access table '{self.table_name}': {e}", e) from e
        return self._table

    def resolve(self):
        """
        Return a handle to the table, creating it if absent.

        Idempotent: a table that already exists, or that another caller is
        creating at the same time, is not an error.

        Raises:
            StoreUnavailableError: Store unreachable, credentials unresolved,
                or table missing while auto-creation is disabled
        """
        table = self.table
        try:
            table.load()
            return table
        except ClientError as e:
            if error_code(e) != 'ResourceNotFoundException':
                raise map_store_error(e, "DescribeTable", self.table_name) from e
            if not self.config.auto_create_tables:
                raise StoreUnavailableError(
                    f"Table '{self.table_name}' does not exist and auto-creation is disabled",
                    original_error=e,
                    context={'table_name': self.table_name}
                ) from e
        except BotoCoreError as e:
            logger.error(f"Failed to resolve table '{self.table_name}': {e}")
            raise map_store_error(e, "DescribeTable", self.table_name) from e

        return self._create_table()

    def _create_table(self):
        create_kwargs = {
            'TableName': self.table_name,
            'KeySchema': [
                {'AttributeName': PARTITION_KEY, 'KeyType': 'HASH'},
                {'AttributeName': ROW_KEY, 'KeyType': 'RANGE'},
            ],
            'AttributeDefinitions': [
                {'AttributeName': PARTITION_KEY, 'AttributeType': 'S'},
                {'AttributeName': ROW_KEY, 'AttributeType': 'S'},
            ],
            'BillingMode': self.config.billing_mode,
        }
        if self.config.billing_mode == 'PROVISIONED':
            create_kwargs['ProvisionedThroughput'] = {'ReadCapacityUnits': 5, 'WriteCapacityUnits': 5}

        try:
            table = self.dynamodb.create_table(**create_kwargs)
            logger.info(f"Created table {self.table_name}")
        except ClientError as e:
            if error_code(e) != 'ResourceInUseException':
                raise map_store_error(e, "CreateTable", self.table_name) from e
            # Created concurrently by another caller
            table = self.dynamodb.Table(self.table_name)
        except BotoCoreError as e:
            raise map_store_error(e, "CreateTable", self.table_name) from e

        try:
            table.wait_until_exists()
        except (ClientError, BotoCoreError) as e:
            raise map_store_error(e, "DescribeTable", self.table_name) from e

        self._table = table
        return table

    def query(self, **kwargs) -> Dict[str, Any]:
        """
        Execute a Query and return the raw response (one segment).

        Args:
            **kwargs: boto3 query parameters (KeyConditionExpression,
                ExclusiveStartKey, Limit, ...)

        Returns:
            Raw response; ``LastEvaluatedKey`` is present when more segments exist
        """
        try:
            return self.table.query(**kwargs)
        except (ClientError, BotoCoreError) as e:
            raise map_store_error(e, "Query", self.table_name) from e

    def put_item(self, item: Dict[str, Any], condition_expression=None) -> bool:
        """
        Put an item, returning whether the store accepted it.

        A failed ``condition_expression`` is reported as ``False``; other
        store failures raise.
        """
        put_kwargs = {'Item': item}
        if condition_expression is not None:
            put_kwargs['ConditionExpression'] = condition_expression

        resource_id = _render_key(item)
        try:
            response = self.table.put_item(**put_kwargs)
        except ClientError as e:
            if error_code(e) == 'ConditionalCheckFailedException':
                logger.debug(f"Put rejected by condition in {self.table_name}: {resource_id}")
                return False
            raise map_store_error(e, "PutItem", self.table_name, resource_id) from e
        except BotoCoreError as e:
            raise map_store_error(e, "PutItem", self.table_name, resource_id) from e

        accepted = _is_success(response)
        if accepted:
            logger.info(f"Put item in {self.table_name}: {resource_id}")
        return accepted

    def delete_item(self, key: Dict[str, Any], condition_expression=None) -> bool:
        """
        Delete an item by key, returning whether the store removed it.

        A failed ``condition_expression`` is reported as ``False``.
        """
        delete_kwargs = {'Key': key}
        if condition_expression is not None:
            delete_kwargs['ConditionExpression'] = condition_expression

        resource_id = _render_key(key)
        try:
            response = self.table.delete_item(**delete_kwargs)
        except ClientError as e:
            if error_code(e) == 'ConditionalCheckFailedException':
                logger.debug(f"Delete rejected by condition in {self.table_name}: {resource_id}")
                return False
            raise map_store_error(e, "DeleteItem", self.table_name, resource_id) from e
        except BotoCoreError as e:
            raise map_store_error(e, "DeleteItem", self.table_name, resource_id) from e

        deleted = _is_success(response)
        if deleted:
            logger.info(f"Deleted item from {self.table_name}: {resource_id}")
        return deleted


def create_table_gateway(config: TableStoreConfig, table_name: str, dynamodb=None) -> TableGateway:
    """
    Factory function to create a TableGateway instance.

    Args:
        config: Table store configuration
        table_name: Logical table name (prefixed via config.get_table_name())
        dynamodb: Existing boto3 DynamoDB resource to share (optional)

    Returns:
        Configured TableGateway instance
    """
    return TableGateway(config, config.get_table_name(table_name), dynamodb=dynamodb)
