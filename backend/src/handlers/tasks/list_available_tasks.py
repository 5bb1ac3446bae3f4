"""
List Available Tasks Handler.
GET /tasks/available
Returns open tasks the caller can claim (not their own), oldest first.
"""
from shared.auth import get_user_sub
from shared.logging import logger, log_event
from shared.models import TaskStatus
from shared.repository import TaskRepository
from shared.utils import error_response, format_response

repository = TaskRepository()


def handler(event, context):
    log_event(event)

    user_id = get_user_sub(event)

    try:
        tasks = [
            task for task in repository.tasks_by_status(TaskStatus.OPEN)
            if task.creator_id != user_id
        ]
        tasks.sort(key=lambda t: t.created_at or '')

        return format_response(200, {'tasks': tasks, 'totalTasks': len(tasks)})

    except Exception as e:
        logger.error(f"Error listing available tasks: {e}")
        return error_response(500, 'Internal Server Error')
