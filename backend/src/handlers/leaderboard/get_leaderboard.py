"""
Get Leaderboard Handler.
GET /leaderboard
Returns the top creators and top doers, recomputed on every request.
"""
from shared.leaderboard import build_leaderboard
from shared.logging import logger, log_event
from shared.repository import TaskRepository
from shared.utils import error_response, format_response

repository = TaskRepository()


def handler(event, context):
    log_event(event)

    try:
        tasks = repository.all_tasks()
        ratings = repository.all_ratings()

        # One batched read for every user that can appear on either board
        user_ids = [t.creator_id for t in tasks] + [t.doer_id for t in tasks] + [r.user_id for r in ratings]
        profiles = repository.get_profiles(user_id for user_id in user_ids if user_id)

        leaderboard = build_leaderboard(tasks, ratings, profiles.get)
        logger.info(
            f"Leaderboard built from {len(tasks)} tasks and {len(ratings)} ratings"
        )

        return format_response(200, leaderboard)

    except Exception as e:
        logger.error(f"Error fetching leaderboard data: {e}")
        return error_response(500, 'Internal Server Error')
