"""
Authentication and authorization helpers.
Identity comes from the Cognito authorizer; access to a task is limited to its parties.
"""
from typing import Optional

from shared.models import Task, TaskStatus


def get_user_sub(event: dict) -> Optional[str]:
    """
    Extract user sub (unique ID) from Cognito authorizer claims.

    Args:
        event: API Gateway Lambda proxy event

    Returns:
        User sub string or None if not authenticated
    """
    try:
        return event['requestContext']['authorizer']['claims']['sub']
    except (KeyError, TypeError):
        return None


def is_task_party(task: Task, user_id: str) -> bool:
    """Creator or doer of the task."""
    return bool(user_id) and user_id in (task.creator_id, task.doer_id)


def can_view_task(task: Task, user_id: str) -> bool:
    """Open tasks are public; everything else only to its parties."""
    return task.status == TaskStatus.OPEN or is_task_party(task, user_id)
