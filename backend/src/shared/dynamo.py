"""
DynamoDB utility functions for queries and batch operations.
"""
import boto3
from typing import List, Dict, Any, Optional
from botocore.exceptions import ClientError
from .config import config
from .logging import logger

dynamodb = boto3.resource('dynamodb', region_name=config.AWS_REGION)

# BatchGetItem accepts at most 100 keys per request
BATCH_GET_LIMIT = 100


def put_item(
    table_name: str,
    item: Dict[str, Any],
    condition_expression: Optional[str] = None
) -> bool:
    """
    Put a single item, optionally guarded by a condition expression.

    Returns:
        True if written, False if the condition failed or on error
    """
    try:
        table = dynamodb.Table(table_name)
        params = {'Item': item}
        if condition_expression:
            params['ConditionExpression'] = condition_expression
        table.put_item(**params)
        return True

    except ClientError as e:
        if e.response['Error']['Code'] == 'ConditionalCheckFailedException':
            logger.warning(f"Condition failed writing to {table_name}")
        else:
            logger.error(f"Error writing to {table_name}: {e}")
        return False


def query(
    table_name: str,
    index_name: Optional[str] = None,
    key_condition: Optional[Any] = None,
    filter_expression: Optional[Any] = None,
    limit: Optional[int] = None,
    scan_forward: bool = True
) -> List[Dict[str, Any]]:
    """
    Query DynamoDB table or index, following LastEvaluatedKey.

    Args:
        table_name: Name of the DynamoDB table
        index_name: Optional GSI name
        key_condition: Key condition expression
        filter_expression: Optional filter expression
        limit: Max items to return
        scan_forward: True for ascending, False for descending

    Returns:
        List of items matching the query
    """
    try:
        table = dynamodb.Table(table_name)

        query_params = {
            'ScanIndexForward': scan_forward
        }

        if index_name:
            query_params['IndexName'] = index_name
        if key_condition:
            query_params['KeyConditionExpression'] = key_condition
        if filter_expression:
            query_params['FilterExpression'] = filter_expression
        if limit:
            query_params['Limit'] = limit

        items = []
        while True:
            response = table.query(**query_params)
            items.extend(response.get('Items', []))
            last_key = response.get('LastEvaluatedKey')
            if not last_key or (limit and len(items) >= limit):
                break
            query_params['ExclusiveStartKey'] = last_key

        return items[:limit] if limit else items

    except Exception as e:
        logger.error(f"Error querying {table_name}: {e}")
        return []


def scan_all(
    table_name: str,
    projection: Optional[List[str]] = None,
    filter_expression: Optional[Any] = None
) -> List[Dict[str, Any]]:
    """
    Scan a whole table, following LastEvaluatedKey.

    Args:
        table_name: Name of the DynamoDB table
        projection: Optional attribute names to return
        filter_expression: Optional filter expression

    Returns:
        All items in table order
    """
    try:
        table = dynamodb.Table(table_name)

        scan_params = {}
        if projection:
            # Placeholders avoid clashes with reserved words such as 'status'
            names = {f'#p{i}': name for i, name in enumerate(projection)}
            scan_params['ProjectionExpression'] = ', '.join(names)
            scan_params['ExpressionAttributeNames'] = names
        if filter_expression:
            scan_params['FilterExpression'] = filter_expression

        items = []
        while True:
            response = table.scan(**scan_params)
            items.extend(response.get('Items', []))
            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                break
            scan_params['ExclusiveStartKey'] = last_key

        return items

    except Exception as e:
        logger.error(f"Error scanning {table_name}: {e}")
        return []


def get_item(table_name: str, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Get a single item from DynamoDB."""
    try:
        table = dynamodb.Table(table_name)
        response = table.get_item(Key=key)
        return response.get('Item')
    except Exception as e:
        logger.error(f"Error getting item from {table_name}: {e}")
        return None


def batch_get_items(table_name: str, key_name: str, key_values: List[str]) -> Dict[str, Dict[str, Any]]:
    """
    Fetch many items by their partition key.
    Handles batching (max 100 keys per request) and unprocessed keys.

    Args:
        table_name: Name of the DynamoDB table
        key_name: Partition key attribute name
        key_values: Key values to fetch (duplicates are ignored)

    Returns:
        Dict of key value -> item, missing items are absent
    """
    found = {}
    unique_values = list(dict.fromkeys(v for v in key_values if v))

    try:
        for i in range(0, len(unique_values), BATCH_GET_LIMIT):
            chunk = unique_values[i:i + BATCH_GET_LIMIT]
            request = {table_name: {'Keys': [{key_name: v} for v in chunk]}}

            while request:
                response = dynamodb.batch_get_item(RequestItems=request)
                for item in response.get('Responses', {}).get(table_name, []):
                    found[item[key_name]] = item
                request = response.get('UnprocessedKeys') or None

        return found

    except Exception as e:
        logger.error(f"Error batch reading from {table_name}: {e}")
        return found


def update_item(
    table_name: str,
    key: Dict[str, Any],
    update_expression: str,
    expression_values: Dict[str, Any],
    expression_names: Optional[Dict[str, str]] = None,
    condition_expression: Optional[str] = None
) -> Optional[Dict[str, Any]]:
    """
    Update an item in DynamoDB.

    Returns:
        The updated item, or None if the condition failed or on error
    """
    try:
        table = dynamodb.Table(table_name)

        params = {
            'Key': key,
            'UpdateExpression': update_expression,
            'ExpressionAttributeValues': expression_values,
            'ReturnValues': 'ALL_NEW'
        }

        if expression_names:
            params['ExpressionAttributeNames'] = expression_names
        if condition_expression:
            params['ConditionExpression'] = condition_expression

        response = table.update_item(**params)
        return response.get('Attributes', {})

    except ClientError as e:
        if e.response['Error']['Code'] == 'ConditionalCheckFailedException':
            logger.warning(f"Condition failed updating {key} in {table_name}")
        else:
            logger.error(f"Error updating item in {table_name}: {e}")
        return None
