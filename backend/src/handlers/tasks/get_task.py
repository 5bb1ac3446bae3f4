"""
Get Task Handler.
GET /tasks/{taskId}
"""
from shared.auth import can_view_task, get_user_sub
from shared.logging import logger, log_event
from shared.repository import TaskRepository
from shared.utils import error_response, format_response, get_path_param, unauthorized

repository = TaskRepository()


def handler(event, context):
    log_event(event)

    user_id = get_user_sub(event)
    if not user_id:
        return unauthorized()

    task_id = get_path_param(event, 'taskId')
    if not task_id:
        return error_response(400, 'Missing taskId')

    try:
        task = repository.get_task(task_id)
        # Hide existence of tasks the caller cannot see
        if task is None or not can_view_task(task, user_id):
            return error_response(404, 'Task not found')

        return format_response(200, {'task': task})

    except Exception as e:
        logger.error(f"Error getting task {task_id}: {e}")
        return error_response(500, 'Internal Server Error')
