"""
Rating enforcement.

Decides whether a user owes a rating on a verified task and mediates the
submission of that rating. Nothing is persisted here: the prompt state is
re-derived from the task lists on every check.
"""
from typing import Callable, List, Optional

from shared.logging import logger
from shared.models import Task

# (task_id, score) -> success
SubmitRatingFn = Callable[[str, int], bool]


class PromptMode:
    """Rating prompt modes."""
    CLOSED = 'closed'
    OPEN_OPTIONAL = 'open-optional'
    OPEN_ENFORCED = 'open-enforced'


class RatingPrompt:
    """
    Prompt state: a mode plus at most one task.

    Only open() and close() change it, so an open prompt always has a task
    and a closed prompt never has one.
    """

    def __init__(self):
        self._mode = PromptMode.CLOSED
        self._task = None

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def task(self) -> Optional[Task]:
        return self._task

    @property
    def is_open(self) -> bool:
        return self._mode != PromptMode.CLOSED

    @property
    def is_enforced(self) -> bool:
        return self._mode == PromptMode.OPEN_ENFORCED

    def open(self, task: Task, enforced: bool) -> None:
        if task is None:
            raise ValueError("Cannot open a rating prompt without a task")
        self._task = task
        self._mode = PromptMode.OPEN_ENFORCED if enforced else PromptMode.OPEN_OPTIONAL

    def close(self) -> None:
        self._mode = PromptMode.CLOSED
        self._task = None


def doer_owes_rating(task: Task, user_id: str) -> bool:
    """The user did the task, both sides verified it and the doer has not rated yet."""
    return task.doer_id == user_id and task.is_verified and not task.is_doer_rated


def requestor_owes_rating(task: Task) -> bool:
    """Both sides verified the task and the requestor has not rated yet."""
    return task.is_verified and not task.is_requestor_rated


class RatingEnforcer:
    """
    Rating enforcement for one user.

    Args:
        user_id: The current user
        tasks: Tasks visible to the user (checked for requestor obligations)
        applied_tasks: Tasks the user applied to (checked for doer obligations)
        submit_rating: Persists a rating, called with (task_id, score)
    """

    def __init__(
        self,
        user_id: str,
        tasks: List[Task],
        applied_tasks: List[Task],
        submit_rating: SubmitRatingFn
    ):
        self.user_id = user_id
        self.tasks = list(tasks)
        self.applied_tasks = list(applied_tasks)
        self.submit_rating = submit_rating
        self.prompt = RatingPrompt()

    @property
    def current_task(self) -> Optional[Task]:
        return self.prompt.task

    @property
    def is_prompt_open(self) -> bool:
        return self.prompt.is_open

    @property
    def is_enforced(self) -> bool:
        return self.prompt.is_enforced

    def find_task_needing_rating(self) -> Optional[Task]:
        """
        First task the user owes a rating on.
        Doer obligations are checked before requestor obligations.
        """
        for task in self.applied_tasks:
            if doer_owes_rating(task, self.user_id):
                return task

        for task in self.tasks:
            if requestor_owes_rating(task):
                return task

        return None

    def check_for_tasks_needing_rating(self) -> bool:
        """
        Open an enforced prompt for the first task that needs a rating.

        Returns:
            True if a task was found, False otherwise (prompt left untouched)
        """
        task = self.find_task_needing_rating()
        if task is None:
            logger.debug(f"No tasks needing rating for user {self.user_id}")
            return False

        logger.info(f"Task {task.task_id} needs a rating from user {self.user_id}")
        self.prompt.open(task, enforced=True)
        return True

    def request_rating(self) -> bool:
        """User asked to rate pending tasks."""
        return self.check_for_tasks_needing_rating()

    def open_for_task(self, task: Task) -> bool:
        """
        Open an optional prompt for a task the user picked.
        An enforced prompt stays as it is.
        """
        if self.prompt.is_enforced:
            return False
        self.prompt.open(task, enforced=False)
        return True

    def dismiss(self) -> bool:
        """Close an optional prompt. Enforced prompts can only be closed by submitting."""
        if self.prompt.is_enforced:
            return False
        self.prompt.close()
        return True

    def on_submit_rating(self, score: int) -> bool:
        """
        Submit a rating for the current task.

        The prompt is cleared before the submission call so it cannot be
        shown again for the same task while the call is in flight.

        Args:
            score: Rating score (1-5)

        Returns:
            Result of the submission, False if there is no current task or the call failed
        """
        task = self.prompt.task
        if task is None:
            logger.error("No current task for rating")
            return False

        self.prompt.close()

        logger.info(f"Submitting rating {score} for task {task.task_id}")
        try:
            result = bool(self.submit_rating(task.task_id, score))
        except Exception as e:
            logger.error(f"Error submitting rating for task {task.task_id}: {e}")
            return False

        logger.info(f"Rating submission result for task {task.task_id}: {result}")
        return result
