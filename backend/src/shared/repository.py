"""
DynamoDB-backed implementation of the task, rating and profile ports.
"""
from typing import Dict, Iterable, List, Optional

from boto3.dynamodb.conditions import Attr, Key

from shared import dynamo
from shared.config import config
from shared.models import Profile, RatingRecord, Task
from shared.ports import ProfileStore, TaskQueries

# Attributes the leaderboard needs from every task
LEADERBOARD_PROJECTION = ['taskId', 'creatorId', 'doerId', 'status']


class TaskRepository(TaskQueries, ProfileStore):
    """Queries over the tasks, ratings and profiles tables."""

    def __init__(self, tasks_table=None, ratings_table=None, profiles_table=None):
        self.tasks_table = tasks_table or config.TASKS_TABLE
        self.ratings_table = ratings_table or config.RATINGS_TABLE
        self.profiles_table = profiles_table or config.PROFILES_TABLE

    def _query_tasks(self, index_name: str, key_name: str, value: str, status: Optional[str]) -> List[Task]:
        items = dynamo.query(
            self.tasks_table,
            index_name=index_name,
            key_condition=Key(key_name).eq(value),
            filter_expression=Attr('status').eq(status) if status else None
        )
        return [Task.from_item(item) for item in items]

    def get_task(self, task_id: str) -> Optional[Task]:
        item = dynamo.get_item(self.tasks_table, {'taskId': task_id})
        return Task.from_item(item) if item else None

    def tasks_for_creator(self, user_id: str, status: Optional[str] = None) -> List[Task]:
        return self._query_tasks(config.CREATOR_INDEX, 'creatorId', user_id, status)

    def tasks_for_doer(self, user_id: str, status: Optional[str] = None) -> List[Task]:
        return self._query_tasks(config.DOER_INDEX, 'doerId', user_id, status)

    def tasks_by_status(self, status: str) -> List[Task]:
        items = dynamo.query(
            self.tasks_table,
            index_name=config.STATUS_INDEX,
            key_condition=Key('status').eq(status)
        )
        return [Task.from_item(item) for item in items]

    def all_tasks(self) -> List[Task]:
        items = dynamo.scan_all(self.tasks_table, projection=LEADERBOARD_PROJECTION)
        return [Task.from_item(item) for item in items]

    def all_ratings(self) -> List[RatingRecord]:
        items = dynamo.scan_all(self.ratings_table)
        return [RatingRecord.from_item(item) for item in items]

    def get_rating_record(self, user_id: str) -> Optional[RatingRecord]:
        item = dynamo.get_item(self.ratings_table, {'userId': user_id})
        return RatingRecord.from_item(item) if item else None

    def get_profile(self, user_id: str) -> Optional[Profile]:
        item = dynamo.get_item(self.profiles_table, {'userId': user_id})
        return Profile.from_item(item) if item else None

    def get_profiles(self, user_ids: Iterable[str]) -> Dict[str, Profile]:
        items = dynamo.batch_get_items(self.profiles_table, 'userId', list(user_ids))
        return {user_id: Profile.from_item(item) for user_id, item in items.items()}
