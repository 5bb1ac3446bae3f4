"""
Get User Statistics Handler.
GET /users/{userId}/statistics  (userId defaults to the caller)
"""
from shared.auth import get_user_sub
from shared.logging import logger, log_event
from shared.repository import TaskRepository
from shared.statistics import build_user_statistics
from shared.utils import error_response, format_response, get_path_param, unauthorized

repository = TaskRepository()


def handler(event, context):
    log_event(event)

    caller_id = get_user_sub(event)
    user_id = get_path_param(event, 'userId') or caller_id
    if not user_id:
        return unauthorized()

    try:
        stats = build_user_statistics(
            user_id,
            created_tasks=repository.tasks_for_creator(user_id),
            doer_tasks=repository.tasks_for_doer(user_id),
            rating_record=repository.get_rating_record(user_id),
            profile=repository.get_profile(user_id)
        )
        return format_response(200, stats)

    except Exception as e:
        logger.error(f"Error fetching user statistics for {user_id}: {e}")
        return error_response(500, 'Internal Server Error')
