"""
Task lifecycle operations: create, claim, verify, cancel.
Each transition is a conditional update so concurrent requests cannot skip a state.
"""
import uuid
from datetime import datetime, timezone
from typing import Optional

from shared import dynamo
from shared.config import config
from shared.logging import logger
from shared.models import Task, TaskStatus


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_task(creator_id: str, title: str, description: str = '') -> Optional[Task]:
    """Create an open task. Returns the task, or None if it could not be saved."""
    timestamp = _now()
    task = Task(
        task_id=str(uuid.uuid4()),
        creator_id=creator_id,
        status=TaskStatus.OPEN,
        title=title,
        description=description,
        created_at=timestamp,
        updated_at=timestamp,
    )

    if not dynamo.put_item(config.TASKS_TABLE, task.to_dict(), 'attribute_not_exists(taskId)'):
        return None

    logger.info(f"Created task {task.task_id} for {creator_id}")
    return task


def claim_task(task_id: str, doer_id: str) -> Optional[Task]:
    """
    Claim an open task as its doer (open -> active).
    Creators cannot claim their own tasks.

    Returns:
        The updated task, or None if the task was not claimable
    """
    updated = dynamo.update_item(
        config.TASKS_TABLE,
        key={'taskId': task_id},
        update_expression='SET #status = :active, doerId = :doer, updatedAt = :ts',
        expression_values={
            ':active': TaskStatus.ACTIVE,
            ':open': TaskStatus.OPEN,
            ':doer': doer_id,
            ':ts': _now()
        },
        expression_names={'#status': 'status'},
        condition_expression='attribute_exists(taskId) AND #status = :open AND creatorId <> :doer'
    )
    if updated is None:
        return None

    logger.info(f"Task {task_id} claimed by {doer_id}")
    return Task.from_item(updated)


def verify_task(task: Task, user_id: str) -> Optional[Task]:
    """
    Record one party's confirmation that the task is done.
    The creator sets isRequestorVerified, the doer sets isDoerVerified.
    Once both are set the task becomes completed.

    Returns:
        The updated task, or None if the user cannot verify it
    """
    if task.status not in (TaskStatus.ACTIVE, TaskStatus.COMPLETED):
        return None

    if user_id == task.creator_id:
        flag = 'isRequestorVerified'
    elif user_id == task.doer_id:
        flag = 'isDoerVerified'
    else:
        return None

    updated = dynamo.update_item(
        config.TASKS_TABLE,
        key={'taskId': task.task_id},
        update_expression='SET #flag = :true, updatedAt = :ts',
        expression_values={
            ':true': True,
            ':active': TaskStatus.ACTIVE,
            ':completed': TaskStatus.COMPLETED,
            ':ts': _now()
        },
        expression_names={'#flag': flag, '#status': 'status'},
        condition_expression='#status IN (:active, :completed)'
    )
    if updated is None:
        return None

    verified = Task.from_item(updated)
    if verified.is_verified and verified.status != TaskStatus.COMPLETED:
        completed = dynamo.update_item(
            config.TASKS_TABLE,
            key={'taskId': task.task_id},
            update_expression='SET #status = :completed, updatedAt = :ts',
            expression_values={
                ':completed': TaskStatus.COMPLETED,
                ':active': TaskStatus.ACTIVE,
                ':true': True,
                ':ts': _now()
            },
            expression_names={'#status': 'status'},
            condition_expression=(
                '#status = :active AND isRequestorVerified = :true AND isDoerVerified = :true'
            )
        )
        if completed is not None:
            logger.info(f"Task {task.task_id} completed")
            verified = Task.from_item(completed)

    return verified


def cancel_task(task_id: str, creator_id: str) -> Optional[Task]:
    """Cancel an open task. Only its creator can cancel it."""
    updated = dynamo.update_item(
        config.TASKS_TABLE,
        key={'taskId': task_id},
        update_expression='SET #status = :cancelled, updatedAt = :ts',
        expression_values={
            ':cancelled': TaskStatus.CANCELLED,
            ':open': TaskStatus.OPEN,
            ':creator': creator_id,
            ':ts': _now()
        },
        expression_names={'#status': 'status'},
        condition_expression='#status = :open AND creatorId = :creator'
    )
    if updated is None:
        return None

    logger.info(f"Task {task_id} cancelled by {creator_id}")
    return Task.from_item(updated)
