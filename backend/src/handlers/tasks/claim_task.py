"""
Claim Task Handler.
POST /tasks/{taskId}/claim
The caller becomes the doer of an open task.
"""
from shared.auth import get_user_sub
from shared.logging import logger, log_event
from shared.tasks import claim_task
from shared.utils import error_response, format_response, get_path_param, unauthorized


def handler(event, context):
    log_event(event)

    doer_id = get_user_sub(event)
    if not doer_id:
        return unauthorized()

    task_id = get_path_param(event, 'taskId')
    if not task_id:
        return error_response(400, 'Missing taskId')

    try:
        task = claim_task(task_id, doer_id)
        if task is None:
            # Another doer won the race, the task is gone, or it is the caller's own task
            return error_response(409, 'Task is no longer available')

        return format_response(200, {'message': 'Task claimed successfully', 'task': task})

    except Exception as e:
        logger.error(f"Error claiming task {task_id}: {e}")
        return error_response(500, 'Internal Server Error')
