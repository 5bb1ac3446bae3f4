"""
Submit Rating Handler.
POST /tasks/{taskId}/rating
Body: { "score": 1-5 }
"""
from shared.auth import get_user_sub, is_task_party
from shared.logging import logger, log_event
from shared.ratings import is_valid_score
from shared.repository import TaskRepository
from shared.utils import error_response, format_response, get_path_param, parse_body, unauthorized

from handlers.ratings.check_pending_rating import build_enforcer

repository = TaskRepository()


def handler(event, context):
    log_event(event)

    user_id = get_user_sub(event)
    if not user_id:
        return unauthorized()

    task_id = get_path_param(event, 'taskId')
    if not task_id:
        return error_response(400, 'Missing taskId')

    score = parse_body(event).get('score')
    if not is_valid_score(score):
        return error_response(400, 'Score must be a whole number from 1 to 5')
    score = int(score)

    try:
        task = repository.get_task(task_id)
        if task is None or not is_task_party(task, user_id):
            return error_response(404, 'Task not found')

        enforcer = build_enforcer(repository, user_id)
        enforcer.check_for_tasks_needing_rating()

        # The enforced task comes first; rating another task is only allowed
        # when nothing is enforced
        if enforcer.current_task is None or enforcer.current_task.task_id != task_id:
            if not enforcer.open_for_task(task):
                return error_response(409, f'Rate task {enforcer.current_task.task_id} first')

        if not enforcer.on_submit_rating(score):
            return error_response(400, 'Rating could not be submitted')

        return format_response(200, {'message': 'Rating submitted', 'taskId': task_id, 'score': score})

    except Exception as e:
        logger.error(f"Error submitting rating for task {task_id}: {e}")
        return error_response(500, 'Internal Server Error')
