"""
DynamoDB implementation of the item store.

All three operations map to a single DynamoDB call. Failures are wrapped in
StoreError with the operation, table and key so handlers can report them
without exposing the raw botocore exception.
"""

from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from item_gateway.handlers.utils.errors import StoreError
from item_gateway.handlers.utils.observability import logger, tracer


class DynamoDbItemStore:
    """DynamoDB implementation of the ItemStore protocol."""

    def __init__(
        self,
        table_name: str,
        endpoint_url: Optional[str] = None,
        dynamodb_resource: Any = None,
    ) -> None:
        """
        Initialize the DynamoDB item store.

        Args:
            table_name: Name of the DynamoDB table, keyed by "id"
            endpoint_url: Optional endpoint override for local testing
            dynamodb_resource: Pre-built boto3 resource, created when omitted
        """
        self.table_name = table_name
        self.dynamodb = dynamodb_resource or boto3.resource('dynamodb', endpoint_url=endpoint_url)
        self.table = self.dynamodb.Table(table_name)
        logger.debug('DynamoDB item store initialized', extra={'table_name': table_name})

    @tracer.capture_method
    def scan_items(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Scan one page of the table.

        Continuation keys are not followed, so at most one page (1 MB, or
        ``limit`` items) is returned.

        Args:
            limit: Optional maximum number of items to evaluate

        Returns:
            Records in the order DynamoDB returned them

        Raises:
            StoreError: If the DynamoDB call fails
        """
        kwargs: Dict[str, Any] = {}
        if limit is not None:
            kwargs['Limit'] = limit

        try:
            response = self.table.scan(**kwargs)
        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f'DynamoDB error scanning items: {error_code}', extra={'table_name': self.table_name})
            raise StoreError(
                message=f'Failed to scan items: {e.response["Error"].get("Message", error_code)}',
                operation='scan_items',
                table_name=self.table_name,
                store_error_code=error_code,
            ) from e
        except BotoCoreError as e:
            logger.error(f'Unexpected error scanning items: {e}', extra={'table_name': self.table_name})
            raise StoreError(
                message=f'Failed to scan items: {e}',
                operation='scan_items',
                table_name=self.table_name,
            ) from e

        items = response.get('Items', [])
        if 'LastEvaluatedKey' in response:
            logger.warning('Scan returned a partial result, remaining pages are not read', extra={
                'table_name': self.table_name,
                'returned_count': len(items),
            })

        tracer.put_annotation('items_scanned', len(items))
        logger.debug(f'Scanned {len(items)} items', extra={'table_name': self.table_name})
        return items

    @tracer.capture_method
    def put_item(self, item: Dict[str, Any]) -> None:
        """
        Write a full record, unconditionally replacing any existing one.

        Args:
            item: Record to store, must include "id"

        Raises:
            StoreError: If the DynamoDB call fails
        """
        key = {'id': item.get('id')}
        try:
            self.table.put_item(Item=item)
        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f'DynamoDB error putting item: {error_code}', extra={'key': key})
            raise StoreError(
                message=f'Failed to put item: {e.response["Error"].get("Message", error_code)}',
                operation='put_item',
                table_name=self.table_name,
                key=key,
                store_error_code=error_code,
            ) from e
        except BotoCoreError as e:
            logger.error(f'Unexpected error putting item: {e}', extra={'key': key})
            raise StoreError(
                message=f'Failed to put item: {e}',
                operation='put_item',
                table_name=self.table_name,
                key=key,
            ) from e

        tracer.put_annotation('item_put', str(key['id']))
        logger.info('Item added or updated', extra={'key': key})

    @tracer.capture_method
    def delete_item(self, key: Dict[str, Any]) -> None:
        """
        Delete a record by key. Deleting a missing key is not an error.

        Args:
            key: Primary key of the record, {"id": ...}

        Raises:
            StoreError: If the DynamoDB call fails
        """
        try:
            self.table.delete_item(Key=key)
        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f'DynamoDB error deleting item: {error_code}', extra={'key': key})
            raise StoreError(
                message=f'Failed to delete item: {e.response["Error"].get("Message", error_code)}',
                operation='delete_item',
                table_name=self.table_name,
                key=key,
                store_error_code=error_code,
            ) from e
        except BotoCoreError as e:
            logger.error(f'Unexpected error deleting item: {e}', extra={'key': key})
            raise StoreError(
                message=f'Failed to delete item: {e}',
                operation='delete_item',
                table_name=self.table_name,
                key=key,
            ) from e

        tracer.put_annotation('item_deleted', str(key.get('id')))
        logger.info('Item deleted', extra={'key': key})
