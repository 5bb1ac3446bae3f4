"""
User statistics shown on the profile page.
"""
from typing import Any, Dict, List, Optional

from shared.levels import get_level_progress
from shared.models import Profile, RatingRecord, Task, TaskStatus


def _positive(value: Optional[float]) -> Optional[float]:
    if value is None or value <= 0:
        return None
    return round(value, 1)


def build_user_statistics(
    user_id: str,
    created_tasks: List[Task],
    doer_tasks: List[Task],
    rating_record: Optional[RatingRecord],
    profile: Optional[Profile]
) -> Dict[str, Any]:
    """
    Aggregate task counts, level and ratings for one user.

    Args:
        user_id: The user
        created_tasks: Tasks where the user is the creator
        doer_tasks: Tasks where the user is the doer
        rating_record: The user's rating record, if any
        profile: The user's profile, if any

    Returns:
        Statistics dict ready for the API response
    """
    tasks_created = len(created_tasks)
    tasks_closed = len([t for t in created_tasks if t.status == TaskStatus.COMPLETED])
    tasks_completed = len([t for t in doer_tasks if t.status == TaskStatus.COMPLETED])
    tasks_in_progress = len([t for t in doer_tasks if t.status == TaskStatus.ACTIVE])

    completion_rate = round(tasks_closed / tasks_created * 100) if tasks_created > 0 else 0

    record = rating_record or RatingRecord(user_id=user_id)

    return {
        'userId': user_id,
        'username': (profile.username if profile else None) or 'User',
        'joinDate': profile.created_at if profile else None,
        'tasksCreated': tasks_created,
        'tasksClosed': tasks_closed,
        'tasksCompleted': tasks_completed,
        'tasksInProgress': tasks_in_progress,
        'completionRate': completion_rate,
        'level': get_level_progress(tasks_completed),
        'ratings': {
            'creatorRating': _positive(record.creator_rating),
            'doerRating': _positive(record.doer_rating),
            'ratingCountCreator': record.rating_count_creator,
            'ratingCountDoer': record.rating_count_doer,
        },
    }
