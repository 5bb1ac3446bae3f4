"""
Cancel Task Handler.
POST /tasks/{taskId}/cancel
Only the creator can cancel, and only while the task is still open.
"""
from shared.auth import get_user_sub
from shared.logging import logger, log_event
from shared.tasks import cancel_task
from shared.utils import error_response, format_response, get_path_param, unauthorized


def handler(event, context):
    log_event(event)

    creator_id = get_user_sub(event)
    if not creator_id:
        return unauthorized()

    task_id = get_path_param(event, 'taskId')
    if not task_id:
        return error_response(400, 'Missing taskId')

    try:
        task = cancel_task(task_id, creator_id)
        if task is None:
            return error_response(409, 'Task cannot be cancelled')

        return format_response(200, {'message': 'Task cancelled', 'task': task})

    except Exception as e:
        logger.error(f"Error cancelling task {task_id}: {e}")
        return error_response(500, 'Internal Server Error')
