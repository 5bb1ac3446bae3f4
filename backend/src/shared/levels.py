"""
Levels module - User level calculations and constants.
"""
from typing import Optional, Tuple

from shared.models import UserLevel


# Level thresholds configuration (completed tasks), highest first
LEVEL_THRESHOLDS = [
    (UserLevel.EXPERT, 50),
    (UserLevel.ADVANCED, 20),
    (UserLevel.INTERMEDIATE, 10),
    (UserLevel.BEGINNER_PLUS, 5),
    (UserLevel.BEGINNER, 0),
]

# Level hierarchy for comparison (higher = more experienced)
LEVEL_HIERARCHY = {
    UserLevel.BEGINNER: 0,
    UserLevel.BEGINNER_PLUS: 1,
    UserLevel.INTERMEDIATE: 2,
    UserLevel.ADVANCED: 3,
    UserLevel.EXPERT: 4,
}


def calculate_level(tasks_completed: int) -> str:
    """
    Calculate user level based on tasks completed as a doer.

    Rules:
    - EXPERT: 50 or more
    - ADVANCED: 20 or more
    - INTERMEDIATE: 10 or more
    - BEGINNER_PLUS: 5 or more
    - BEGINNER: default

    Args:
        tasks_completed: Number of completed tasks

    Returns:
        UserLevel constant
    """
    for level, min_tasks in LEVEL_THRESHOLDS:
        if tasks_completed >= min_tasks:
            return level
    return UserLevel.BEGINNER


def next_level(current_level: str) -> Tuple[Optional[str], Optional[int]]:
    """Level after current_level and its threshold, or (None, None) at the top."""
    rank = LEVEL_HIERARCHY.get(current_level, 0)
    for level, min_tasks in LEVEL_THRESHOLDS:
        if LEVEL_HIERARCHY[level] == rank + 1:
            return level, min_tasks
    return None, None


def get_level_progress(tasks_completed: int) -> dict:
    """
    Get progress information toward next level.

    Args:
        tasks_completed: Number of completed tasks

    Returns:
        Dict with progress info
    """
    current_level = calculate_level(tasks_completed)
    level_after, target = next_level(current_level)

    if level_after is None:  # Already EXPERT
        return {
            'current_level': current_level,
            'next_level': None,
            'target': None,
            'progress_pct': 100
        }

    progress = min(tasks_completed / target, 1.0) * 100

    return {
        'current_level': current_level,
        'next_level': level_after,
        'target': target,
        'progress_pct': round(progress, 1)
    }
