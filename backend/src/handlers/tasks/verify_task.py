"""
Verify Task Handler.
POST /tasks/{taskId}/verify
The creator or the doer confirms the task is done. Both confirmations complete it.
"""
from shared.auth import get_user_sub, is_task_party
from shared.logging import logger, log_event
from shared.repository import TaskRepository
from shared.tasks import verify_task
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
        if task is None or not is_task_party(task, user_id):
            return error_response(404, 'Task not found')

        verified = verify_task(task, user_id)
        if verified is None:
            return error_response(409, f'Task cannot be verified while {task.status}')

        return format_response(200, {'task': verified, 'completed': verified.is_verified})

    except Exception as e:
        logger.error(f"Error verifying task {task_id}: {e}")
        return error_response(500, 'Internal Server Error')
