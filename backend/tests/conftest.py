"""
Shared test setup: import path, table names and model factories.
"""
import json
import os
import sys

import pytest

# Tables must be configured before shared.config is imported
os.environ.setdefault('AWS_REGION', 'us-east-1')
os.environ.setdefault('TASKS_TABLE', 'test-tasks')
os.environ.setdefault('RATINGS_TABLE', 'test-ratings')
os.environ.setdefault('PROFILES_TABLE', 'test-profiles')

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))
sys.path.insert(0, os.path.dirname(__file__))

from shared.models import Profile, RatingRecord, Task, TaskStatus  # noqa: E402


def make_task(task_id, creator_id='creator-1', doer_id=None, status=TaskStatus.OPEN, **flags):
    return Task(task_id=task_id, creator_id=creator_id, doer_id=doer_id, status=status, **flags)


def verified_task(task_id, creator_id='creator-1', doer_id='doer-1', **flags):
    """A task both parties confirmed, nobody has rated yet."""
    return make_task(
        task_id,
        creator_id=creator_id,
        doer_id=doer_id,
        status=TaskStatus.COMPLETED,
        is_requestor_verified=True,
        is_doer_verified=True,
        **flags
    )


def api_event(user_id=None, path_params=None, body=None, query=None):
    """Minimal API Gateway proxy event."""
    event = {
        'pathParameters': path_params,
        'queryStringParameters': query,
        'body': json.dumps(body) if body is not None else None,
        'requestContext': {}
    }
    if user_id:
        event['requestContext'] = {'authorizer': {'claims': {'sub': user_id}}}
    return event


@pytest.fixture
def profiles():
    return {
        'alice': Profile(user_id='alice', username='alice', avatar_url='https://cdn/alice.png'),
        'bob': Profile(user_id='bob', username='bob'),
    }


@pytest.fixture
def rating_for():
    def _rating(user_id, creator=None, doer=None, count_creator=0, count_doer=0):
        return RatingRecord(
            user_id=user_id,
            creator_rating=creator,
            doer_rating=doer,
            rating_count_creator=count_creator,
            rating_count_doer=count_doer,
        )
    return _rating
