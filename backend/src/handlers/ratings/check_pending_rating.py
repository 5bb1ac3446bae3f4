"""
Check Pending Rating Handler.
GET /ratings/pending
Tells the client whether it must show the enforced rating prompt, and for which task.
"""
from typing import List

from shared.auth import get_user_sub
from shared.logging import logger, log_event
from shared.models import Task
from shared.ports import TaskQueries
from shared.rating_enforcement import RatingEnforcer
from shared.ratings import submit_rating
from shared.repository import TaskRepository
from shared.utils import error_response, format_response, unauthorized

repository = TaskRepository()


def in_creation_order(tasks: List[Task]) -> List[Task]:
    """Oldest first. GSI queries without a sort key return items in no particular order."""
    return sorted(tasks, key=lambda t: t.created_at or '')


def build_enforcer(queries: TaskQueries, user_id: str) -> RatingEnforcer:
    """Enforcer over the tasks the user created and the tasks they are doing."""
    return RatingEnforcer(
        user_id=user_id,
        tasks=in_creation_order(queries.tasks_for_creator(user_id)),
        applied_tasks=in_creation_order(queries.tasks_for_doer(user_id)),
        submit_rating=lambda task_id, score: submit_rating(task_id, score, user_id)
    )


def handler(event, context):
    log_event(event)

    user_id = get_user_sub(event)
    if not user_id:
        return unauthorized()

    try:
        enforcer = build_enforcer(repository, user_id)
        needs_rating = enforcer.check_for_tasks_needing_rating()

        return format_response(200, {
            'needsRating': needs_rating,
            'enforced': enforcer.is_enforced,
            'task': enforcer.current_task
        })

    except Exception as e:
        logger.error(f"Error checking pending ratings for {user_id}: {e}")
        return error_response(500, 'Internal Server Error')
