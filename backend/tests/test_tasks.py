"""
Tests for task lifecycle transitions (DynamoDB helpers mocked).
"""
import pytest
from unittest.mock import patch

from shared.models import TaskStatus
from shared.tasks import cancel_task, claim_task, create_task, verify_task

from conftest import make_task


class TestCreateTask:

    def test_creates_open_unverified_task(self):
        with patch('shared.tasks.dynamo.put_item', return_value=True) as mock_put:
            task = create_task('alice', 'Fix the fence', 'Back yard')

        item = mock_put.call_args.args[1]
        assert task.status == TaskStatus.OPEN
        assert item['creatorId'] == 'alice'
        assert item['status'] == TaskStatus.OPEN
        assert 'doerId' not in item
        assert not any(item[f] for f in ('isRequestorVerified', 'isDoerVerified', 'isRequestorRated', 'isDoerRated'))

    def test_failed_write_returns_none(self):
        with patch('shared.tasks.dynamo.put_item', return_value=False):
            assert create_task('alice', 'Fix the fence') is None


class TestClaimTask:

    def test_claim_sets_doer_and_activates(self):
        updated = {'taskId': 't1', 'creatorId': 'alice', 'doerId': 'bob', 'status': TaskStatus.ACTIVE}
        with patch('shared.tasks.dynamo.update_item', return_value=updated) as mock_update:
            task = claim_task('t1', 'bob')

        assert task.doer_id == 'bob'
        assert task.status == TaskStatus.ACTIVE
        kwargs = mock_update.call_args.kwargs
        assert '#status = :open' in kwargs['condition_expression']
        assert 'creatorId <> :doer' in kwargs['condition_expression']

    def test_lost_race_returns_none(self):
        with patch('shared.tasks.dynamo.update_item', return_value=None):
            assert claim_task('t1', 'bob') is None


class TestVerifyTask:

    def test_creator_sets_requestor_flag(self):
        task = make_task('t1', creator_id='alice', doer_id='bob', status=TaskStatus.ACTIVE)
        updated = {'taskId': 't1', 'creatorId': 'alice', 'doerId': 'bob',
                   'status': TaskStatus.ACTIVE, 'isRequestorVerified': True}

        with patch('shared.tasks.dynamo.update_item', return_value=updated) as mock_update:
            result = verify_task(task, 'alice')

        assert mock_update.call_count == 1
        assert mock_update.call_args.kwargs['expression_names']['#flag'] == 'isRequestorVerified'
        assert result.is_requestor_verified
        assert result.status == TaskStatus.ACTIVE

    def test_second_verification_completes_task(self):
        task = make_task('t1', creator_id='alice', doer_id='bob', status=TaskStatus.ACTIVE,
                         is_requestor_verified=True)
        both = {'taskId': 't1', 'creatorId': 'alice', 'doerId': 'bob', 'status': TaskStatus.ACTIVE,
                'isRequestorVerified': True, 'isDoerVerified': True}
        done = dict(both, status=TaskStatus.COMPLETED)

        with patch('shared.tasks.dynamo.update_item', side_effect=[both, done]) as mock_update:
            result = verify_task(task, 'bob')

        assert mock_update.call_count == 2
        assert mock_update.call_args_list[0].kwargs['expression_names']['#flag'] == 'isDoerVerified'
        assert result.status == TaskStatus.COMPLETED
        assert result.is_verified

    @pytest.mark.parametrize('status,user', [
        (TaskStatus.OPEN, 'alice'),
        (TaskStatus.CANCELLED, 'alice'),
        (TaskStatus.ACTIVE, 'stranger'),
    ])
    def test_rejected_without_writing(self, status, user):
        task = make_task('t1', creator_id='alice', doer_id='bob', status=status)

        with patch('shared.tasks.dynamo.update_item') as mock_update:
            assert verify_task(task, user) is None

        mock_update.assert_not_called()


class TestCancelTask:

    def test_only_open_tasks_of_creator(self):
        updated = {'taskId': 't1', 'creatorId': 'alice', 'status': TaskStatus.CANCELLED}
        with patch('shared.tasks.dynamo.update_item', return_value=updated) as mock_update:
            task = cancel_task('t1', 'alice')

        assert task.status == TaskStatus.CANCELLED
        assert mock_update.call_args.kwargs['condition_expression'] == '#status = :open AND creatorId = :creator'


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
