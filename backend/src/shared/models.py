"""
Data models and status constants for the task marketplace.
Based on the task lifecycle: Open → Active (claimed) → Verified by both parties → Completed → Rated
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional


class TaskStatus:
    """Task lifecycle statuses."""
    OPEN = 'open'
    ACTIVE = 'active'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


class RatingRole:
    """Role a rating is received in."""
    CREATOR = 'creator'
    DOER = 'doer'


class UserLevel:
    """User levels earned by completing tasks."""
    BEGINNER = 'Beginner'
    BEGINNER_PLUS = 'Beginner+'
    INTERMEDIATE = 'Intermediate'
    ADVANCED = 'Advanced'
    EXPERT = 'Expert'


def to_number(value: Any) -> Optional[float]:
    """Convert a DynamoDB number (Decimal) to float, None for anything non-numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    return None


@dataclass
class Task:
    """A task item as stored in the tasks table."""
    task_id: str
    creator_id: Optional[str] = None
    doer_id: Optional[str] = None
    status: str = TaskStatus.OPEN
    title: str = ''
    description: str = ''
    is_requestor_verified: bool = False
    is_doer_verified: bool = False
    is_requestor_rated: bool = False
    is_doer_rated: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def is_verified(self) -> bool:
        """Both parties confirmed completion."""
        return self.is_requestor_verified and self.is_doer_verified

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> 'Task':
        return cls(
            task_id=item.get('taskId'),
            creator_id=item.get('creatorId'),
            doer_id=item.get('doerId'),
            status=item.get('status', TaskStatus.OPEN),
            title=item.get('title', ''),
            description=item.get('description', ''),
            is_requestor_verified=bool(item.get('isRequestorVerified', False)),
            is_doer_verified=bool(item.get('isDoerVerified', False)),
            is_requestor_rated=bool(item.get('isRequestorRated', False)),
            is_doer_rated=bool(item.get('isDoerRated', False)),
            created_at=item.get('createdAt'),
            updated_at=item.get('updatedAt'),
        )

    def to_dict(self) -> Dict[str, Any]:
        item = {
            'taskId': self.task_id,
            'creatorId': self.creator_id,
            'status': self.status,
            'title': self.title,
            'description': self.description,
            'isRequestorVerified': self.is_requestor_verified,
            'isDoerVerified': self.is_doer_verified,
            'isRequestorRated': self.is_requestor_rated,
            'isDoerRated': self.is_doer_rated,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }
        # Unset until claimed; DynamoDB GSIs cannot index a null key
        if self.doer_id:
            item['doerId'] = self.doer_id
        return item


@dataclass
class RatingRecord:
    """Per-user rating averages, one record per user, updated in place."""
    user_id: str
    creator_rating: Optional[float] = None
    doer_rating: Optional[float] = None
    rating_count_creator: int = 0
    rating_count_doer: int = 0

    def average_for(self, role: str) -> Optional[float]:
        return self.creator_rating if role == RatingRole.CREATOR else self.doer_rating

    def count_for(self, role: str) -> int:
        return self.rating_count_creator if role == RatingRole.CREATOR else self.rating_count_doer

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> 'RatingRecord':
        return cls(
            user_id=item.get('userId'),
            creator_rating=to_number(item.get('creatorRating')),
            doer_rating=to_number(item.get('doerRating')),
            rating_count_creator=int(item.get('ratingCountCreator', 0) or 0),
            rating_count_doer=int(item.get('ratingCountDoer', 0) or 0),
        )


@dataclass
class Profile:
    """Public profile data used for display."""
    user_id: str
    username: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> 'Profile':
        return cls(
            user_id=item.get('userId'),
            username=item.get('username'),
            avatar_url=item.get('avatarUrl'),
            created_at=item.get('createdAt'),
        )


@dataclass
class LeaderboardEntry:
    """Single leaderboard row, recomputed on every request."""
    id: str
    username: str
    avatar_url: Optional[str] = None
    rating: Optional[float] = None
    tasks_count: int = 0
    reward: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'username': self.username,
            'avatarUrl': self.avatar_url,
            'rating': self.rating,
            'tasksCount': self.tasks_count,
            'reward': self.reward,
        }

