"""
Tests for DynamoDB helpers and the repository (boto3 resource mocked).
"""
import pytest
from unittest.mock import MagicMock, patch

from botocore.exceptions import ClientError

from shared import dynamo
from shared.repository import LEADERBOARD_PROJECTION, TaskRepository


class TestScanAll:

    def test_follows_pagination_and_projects(self):
        table = MagicMock()
        table.scan.side_effect = [
            {'Items': [{'taskId': '1'}], 'LastEvaluatedKey': {'taskId': '1'}},
            {'Items': [{'taskId': '2'}]},
        ]
        mock_db = MagicMock()
        mock_db.Table.return_value = table

        with patch.object(dynamo, 'dynamodb', mock_db):
            items = dynamo.scan_all('tasks', projection=['taskId', 'status'])

        assert items == [{'taskId': '1'}, {'taskId': '2'}]
        first_call = table.scan.call_args_list[0].kwargs
        assert first_call['ProjectionExpression'] == '#p0, #p1'
        assert first_call['ExpressionAttributeNames'] == {'#p0': 'taskId', '#p1': 'status'}
        assert table.scan.call_args_list[1].kwargs['ExclusiveStartKey'] == {'taskId': '1'}

    def test_error_returns_empty(self):
        mock_db = MagicMock()
        mock_db.Table.return_value.scan.side_effect = RuntimeError('throttled')

        with patch.object(dynamo, 'dynamodb', mock_db):
            assert dynamo.scan_all('tasks') == []


class TestPutItem:

    def test_writes_with_condition(self):
        mock_db = MagicMock()

        with patch.object(dynamo, 'dynamodb', mock_db):
            assert dynamo.put_item('tasks', {'taskId': '1'}, 'attribute_not_exists(taskId)') is True

        mock_db.Table.return_value.put_item.assert_called_once_with(
            Item={'taskId': '1'}, ConditionExpression='attribute_not_exists(taskId)'
        )

    def test_failed_condition_returns_false(self):
        mock_db = MagicMock()
        mock_db.Table.return_value.put_item.side_effect = ClientError(
            {'Error': {'Code': 'ConditionalCheckFailedException', 'Message': 'exists'}}, 'PutItem'
        )

        with patch.object(dynamo, 'dynamodb', mock_db):
            assert dynamo.put_item('tasks', {'taskId': '1'}, 'attribute_not_exists(taskId)') is False


class TestBatchGetItems:

    def test_dedupes_and_retries_unprocessed_keys(self):
        mock_db = MagicMock()
        mock_db.batch_get_item.side_effect = [
            {
                'Responses': {'profiles': [{'userId': 'a', 'username': 'ann'}]},
                'UnprocessedKeys': {'profiles': {'Keys': [{'userId': 'b'}]}},
            },
            {'Responses': {'profiles': [{'userId': 'b', 'username': 'ben'}]}},
        ]

        with patch.object(dynamo, 'dynamodb', mock_db):
            found = dynamo.batch_get_items('profiles', 'userId', ['a', 'b', 'a', None, 'missing'])

        assert set(found) == {'a', 'b'}
        first_request = mock_db.batch_get_item.call_args_list[0].kwargs['RequestItems']
        assert first_request == {'profiles': {'Keys': [{'userId': 'a'}, {'userId': 'b'}, {'userId': 'missing'}]}}

    def test_chunks_of_one_hundred(self):
        mock_db = MagicMock()
        mock_db.batch_get_item.return_value = {'Responses': {}}

        with patch.object(dynamo, 'dynamodb', mock_db):
            dynamo.batch_get_items('profiles', 'userId', [f'u{i}' for i in range(250)])

        assert mock_db.batch_get_item.call_count == 3


class TestTaskRepository:

    def test_all_tasks_uses_leaderboard_projection(self):
        items = [{'taskId': '1', 'creatorId': 'a', 'doerId': 'b', 'status': 'completed'}]
        with patch.object(dynamo, 'scan_all', return_value=items) as mock_scan:
            tasks = TaskRepository(tasks_table='tasks').all_tasks()

        mock_scan.assert_called_once_with('tasks', projection=LEADERBOARD_PROJECTION)
        assert tasks[0].creator_id == 'a'
        assert tasks[0].doer_id == 'b'

    def test_profiles_are_keyed_by_user(self):
        items = {'a': {'userId': 'a', 'username': 'ann', 'avatarUrl': 'x.png'}}
        with patch.object(dynamo, 'batch_get_items', return_value=items):
            profiles = TaskRepository(profiles_table='profiles').get_profiles(['a', 'b'])

        assert list(profiles) == ['a']
        assert profiles['a'].avatar_url == 'x.png'

    def test_missing_rating_record_is_none(self):
        with patch.object(dynamo, 'get_item', return_value=None):
            assert TaskRepository().get_rating_record('nobody') is None


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
