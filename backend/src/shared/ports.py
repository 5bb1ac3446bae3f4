"""
Ports used by the rating and leaderboard logic.

Handlers depend on these Protocols rather than on DynamoDB directly, so tests
can pass in-memory doubles.
"""
from typing import Dict, Iterable, List, Optional, Protocol

from shared.models import Profile, RatingRecord, Task


class TaskQueries(Protocol):
    """Read access to tasks and rating records."""

    def get_task(self, task_id: str) -> Optional[Task]: ...

    def tasks_for_creator(self, user_id: str, status: Optional[str] = None) -> List[Task]: ...

    def tasks_for_doer(self, user_id: str, status: Optional[str] = None) -> List[Task]: ...

    def tasks_by_status(self, status: str) -> List[Task]: ...

    def all_tasks(self) -> List[Task]: ...

    def all_ratings(self) -> List[RatingRecord]: ...

    def get_rating_record(self, user_id: str) -> Optional[RatingRecord]: ...


class ProfileStore(Protocol):
    """Display identity for users."""

    def get_profile(self, user_id: str) -> Optional[Profile]: ...

    def get_profiles(self, user_ids: Iterable[str]) -> Dict[str, Profile]: ...
