"""
List Tasks Handler.
GET /tasks?status=...
Returns the caller's own tasks, optionally filtered by status.
"""
from shared.auth import get_user_sub
from shared.logging import logger, log_event
from shared.repository import TaskRepository
from shared.utils import error_response, format_response, get_query_param, unauthorized

repository = TaskRepository()


def handler(event, context):
    log_event(event)

    creator_id = get_user_sub(event)
    if not creator_id:
        return unauthorized()

    status = get_query_param(event, 'status')

    try:
        tasks = repository.tasks_for_creator(creator_id, status)
        return format_response(200, {'tasks': tasks, 'totalTasks': len(tasks)})

    except Exception as e:
        logger.error(f"Error listing tasks: {e}")
        return error_response(500, 'Internal Server Error')
