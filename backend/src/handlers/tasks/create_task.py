"""
Create Task Handler.
POST /tasks
Body: { "title": "...", "description": "..." }
"""
from shared.auth import get_user_sub
from shared.logging import logger, log_event
from shared.tasks import create_task
from shared.utils import error_response, format_response, parse_body, unauthorized


def handler(event, context):
    log_event(event)

    creator_id = get_user_sub(event)
    if not creator_id:
        return unauthorized()

    body = parse_body(event)
    title = (body.get('title') or '').strip()
    if not title:
        return error_response(400, 'Missing title')

    try:
        task = create_task(creator_id, title, (body.get('description') or '').strip())
        if task is None:
            return error_response(500, 'Failed to save task')

        return format_response(201, {'task': task})

    except Exception as e:
        logger.error(f"Error creating task: {e}")
        return error_response(500, 'Internal Server Error')
