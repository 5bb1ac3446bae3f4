"""
Leaderboard aggregation.

Builds the top creators and top doers from raw task and rating records.
Both lists go through the same pipeline, parameterized by a LeaderboardRole:
accumulate completed tasks, attach ratings, resolve profiles, rank, truncate.
"""
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from shared.logging import logger
from shared.models import (
    LeaderboardEntry, Profile, RatingRecord, RatingRole, Task, TaskStatus
)

REWARD_PER_TASK = 100  # Credited per completed task, in currency units
LEADERBOARD_SIZE = 10
UNKNOWN_USERNAME = 'Unknown User'

ProfileLookup = Callable[[str], Optional[Profile]]


@dataclass(frozen=True)
class LeaderboardRole:
    """Selects which side of a task and which rating a leaderboard ranks."""
    name: str
    id_field: str        # Task attribute holding the user id
    rating_role: str     # RatingRole to read from rating records

    def user_id(self, task: Task) -> Optional[str]:
        return getattr(task, self.id_field)

    def is_completed(self, task: Task) -> bool:
        return task.status == TaskStatus.COMPLETED


CREATOR_ROLE = LeaderboardRole(name='creators', id_field='creator_id', rating_role=RatingRole.CREATOR)
DOER_ROLE = LeaderboardRole(name='doers', id_field='doer_id', rating_role=RatingRole.DOER)


class _Totals:
    __slots__ = ('tasks_count', 'reward', 'rating')

    def __init__(self):
        self.tasks_count = 0
        self.reward = 0
        self.rating = None


def accumulate_tasks(tasks: Iterable[Task], role: LeaderboardRole) -> 'OrderedDict[str, _Totals]':
    """Count completed tasks and rewards per user, in first-seen order."""
    totals = OrderedDict()
    for task in tasks:
        user_id = role.user_id(task)
        if not user_id:
            continue
        entry = totals.get(user_id)
        if entry is None:
            entry = totals[user_id] = _Totals()
        if role.is_completed(task):
            entry.tasks_count += 1
            entry.reward += REWARD_PER_TASK
    return totals


def merge_ratings(
    totals: 'OrderedDict[str, _Totals]',
    ratings: Iterable[RatingRecord],
    role: LeaderboardRole
) -> None:
    """Attach positive role averages; users with only a rating get an empty entry."""
    for record in ratings:
        average = record.average_for(role.rating_role)
        if not record.user_id or average is None or average <= 0:
            continue
        entry = totals.get(record.user_id)
        if entry is None:
            entry = totals[record.user_id] = _Totals()
        entry.rating = average


def rank_entries(entries: List[LeaderboardEntry], limit: int = LEADERBOARD_SIZE) -> List[LeaderboardEntry]:
    """
    Sort by reward, then rating, both descending.
    A missing rating ranks as 0. Full ties keep their input order.
    """
    ranked = sorted(
        entries,
        key=lambda e: (-e.reward, -(e.rating if e.rating is not None else 0))
    )
    return ranked[:limit]


def aggregate_role(
    tasks: Iterable[Task],
    ratings: Iterable[RatingRecord],
    role: LeaderboardRole,
    profile_lookup: ProfileLookup,
    limit: int = LEADERBOARD_SIZE
) -> List[LeaderboardEntry]:
    """
    Run the leaderboard pipeline for one role.

    Args:
        tasks: Task records (only the role id and status are used)
        ratings: Rating records
        role: CREATOR_ROLE or DOER_ROLE
        profile_lookup: Returns the Profile for a user id, or None
        limit: Maximum number of entries returned

    Returns:
        Ranked leaderboard entries
    """
    totals = accumulate_tasks(tasks, role)
    merge_ratings(totals, ratings, role)

    entries = []
    for user_id, data in totals.items():
        profile = profile_lookup(user_id)
        if profile is None:
            logger.warning(f"No profile for user {user_id} on {role.name} leaderboard")
        entries.append(LeaderboardEntry(
            id=user_id,
            username=(profile.username if profile else None) or UNKNOWN_USERNAME,
            avatar_url=profile.avatar_url if profile else None,
            rating=data.rating,
            tasks_count=data.tasks_count,
            reward=data.reward,
        ))

    return rank_entries(entries, limit)


def build_leaderboard(
    tasks: List[Task],
    ratings: List[RatingRecord],
    profile_lookup: ProfileLookup,
    limit: int = LEADERBOARD_SIZE
) -> Dict[str, List[LeaderboardEntry]]:
    """Top creators and top doers. The two roles are computed independently."""
    return {
        role.name: aggregate_role(tasks, ratings, role, profile_lookup, limit)
        for role in (CREATOR_ROLE, DOER_ROLE)
    }
