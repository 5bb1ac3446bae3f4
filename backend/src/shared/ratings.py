"""
Rating submission.

Persists a score given by one party of a verified task to the other party and
flips the rater's flag on the task. Both writes go in one DynamoDB transaction
so the flag flips exactly once and averages never double count.
"""
import time
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple

from botocore.exceptions import ClientError

from shared.config import config
from shared.dynamo import dynamodb, get_item
from shared.logging import logger
from shared.models import RatingRecord, RatingRole, Task

MIN_SCORE = 1
MAX_SCORE = 5

# Rating fields per role received: (average attribute, count attribute)
RATING_FIELDS = {
    RatingRole.CREATOR: ('creatorRating', 'ratingCountCreator'),
    RatingRole.DOER: ('doerRating', 'ratingCountDoer'),
}


def is_valid_score(score) -> bool:
    """Scores are whole numbers between MIN_SCORE and MAX_SCORE; 4.0 counts as 4."""
    if isinstance(score, bool) or not isinstance(score, (int, float, Decimal)):
        return False
    if isinstance(score, float) and not score.is_integer():
        return False
    return score == int(score) and MIN_SCORE <= score <= MAX_SCORE


def resolve_rating_target(task: Task, rater_id: str) -> Optional[Tuple[str, str, str]]:
    """
    Work out who is rated and which task flag the rater flips.

    Returns:
        (rated_user_id, role_received, task_flag) or None if rater is not a party
    """
    if rater_id and rater_id == task.doer_id:
        return task.creator_id, RatingRole.CREATOR, 'isDoerRated'
    if rater_id and rater_id == task.creator_id:
        return task.doer_id, RatingRole.DOER, 'isRequestorRated'
    return None


def compute_new_average(current: Optional[float], count: int, score: int) -> Decimal:
    """Running average after adding one score, rounded to 2 places."""
    total = Decimal(str(current or 0)) * count + Decimal(score)
    return (total / (count + 1)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


def submit_rating(task_id: str, score: int, rater_id: str) -> bool:
    """
    Submit a rating for the other party of a task.

    Args:
        task_id: The rated task
        score: Score between 1 and 5
        rater_id: The user giving the rating

    Returns:
        True if the rating was stored, False otherwise
    """
    if not is_valid_score(score):
        logger.warning(f"Invalid rating score {score!r} for task {task_id}")
        return False

    item = get_item(config.TASKS_TABLE, {'taskId': task_id})
    if not item:
        logger.warning(f"Task {task_id} not found")
        return False
    task = Task.from_item(item)

    if not task.is_verified:
        logger.warning(f"Task {task_id} is not verified by both parties")
        return False

    target = resolve_rating_target(task, rater_id)
    if target is None:
        logger.warning(f"User {rater_id} is not a party to task {task_id}")
        return False
    rated_user_id, role, task_flag = target

    if not rated_user_id:
        logger.warning(f"Task {task_id} has no counterpart to rate")
        return False
    if item.get(task_flag):
        logger.info(f"Task {task_id} already rated ({task_flag})")
        return False

    record_item = get_item(config.RATINGS_TABLE, {'userId': rated_user_id}) or {'userId': rated_user_id}
    record = RatingRecord.from_item(record_item)
    avg_field, count_field = RATING_FIELDS[role]
    old_count = record.count_for(role)
    new_average = compute_new_average(record.average_for(role), old_count, int(score))
    timestamp = str(int(time.time()))

    try:
        dynamodb.meta.client.transact_write_items(
            TransactItems=[
                # Flip the rater's flag once, only on a verified task
                {
                    'Update': {
                        'TableName': config.TASKS_TABLE,
                        'Key': {'taskId': {'S': task_id}},
                        'UpdateExpression': 'SET #flag = :true, updatedAt = :ts',
                        'ConditionExpression': (
                            '(attribute_not_exists(#flag) OR #flag = :false) '
                            'AND isRequestorVerified = :true AND isDoerVerified = :true'
                        ),
                        'ExpressionAttributeNames': {'#flag': task_flag},
                        'ExpressionAttributeValues': {
                            ':true': {'BOOL': True},
                            ':false': {'BOOL': False},
                            ':ts': {'S': timestamp}
                        }
                    }
                },
                # Update the rated user's average, guarded against concurrent raters
                {
                    'Update': {
                        'TableName': config.RATINGS_TABLE,
                        'Key': {'userId': {'S': rated_user_id}},
                        'UpdateExpression': 'SET #avg = :avg, #cnt = :new_count, updatedAt = :ts',
                        'ConditionExpression': 'attribute_not_exists(#cnt) OR #cnt = :old_count',
                        'ExpressionAttributeNames': {'#avg': avg_field, '#cnt': count_field},
                        'ExpressionAttributeValues': {
                            ':avg': {'N': str(new_average)},
                            ':new_count': {'N': str(old_count + 1)},
                            ':old_count': {'N': str(old_count)},
                            ':ts': {'S': timestamp}
                        }
                    }
                }
            ]
        )
        logger.info(
            f"User {rater_id} rated {rated_user_id} {score} as {role} on task {task_id}; "
            f"new average {new_average} over {old_count + 1}"
        )
        return True

    except ClientError as e:
        if e.response['Error']['Code'] == 'TransactionCanceledException':
            logger.warning(f"Rating for task {task_id} rejected: already rated or concurrent update")
        else:
            logger.error(f"Error submitting rating for task {task_id}: {e}")
        return False
