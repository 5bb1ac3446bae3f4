"""
In-memory doubles for the task and profile ports.
"""
from shared.models import TaskStatus


class FakeTaskRepository:
    """Holds tasks, ratings and profiles in lists/dicts, in insertion order."""

    def __init__(self, tasks=None, ratings=None, profiles=None):
        self.tasks = list(tasks or [])
        self.ratings = list(ratings or [])
        self.profiles = dict(profiles or {})
        self.profile_requests = []

    def get_task(self, task_id):
        return next((t for t in self.tasks if t.task_id == task_id), None)

    def tasks_for_creator(self, user_id, status=None):
        return [t for t in self.tasks if t.creator_id == user_id and (status is None or t.status == status)]

    def tasks_for_doer(self, user_id, status=None):
        return [t for t in self.tasks if t.doer_id == user_id and (status is None or t.status == status)]

    def tasks_by_status(self, status=TaskStatus.OPEN):
        return [t for t in self.tasks if t.status == status]

    def all_tasks(self):
        return list(self.tasks)

    def all_ratings(self):
        return list(self.ratings)

    def get_rating_record(self, user_id):
        return next((r for r in self.ratings if r.user_id == user_id), None)

    def get_profile(self, user_id):
        return self.profiles.get(user_id)

    def get_profiles(self, user_ids):
        user_ids = list(user_ids)
        self.profile_requests.append(user_ids)
        return {u: self.profiles[u] for u in user_ids if u in self.profiles}


class RecordingSubmitter:
    """
    Submission double: records calls and what the prompt looked like during them.
    """

    def __init__(self, result=True, error=None):
        self.result = result
        self.error = error
        self.calls = []
        self.prompt_states = []
        self.enforcer = None

    def __call__(self, task_id, score):
        self.calls.append((task_id, score))
        if self.enforcer is not None:
            self.prompt_states.append((
                self.enforcer.is_prompt_open,
                self.enforcer.is_enforced,
                self.enforcer.current_task,
            ))
        if self.error is not None:
            raise self.error
        return self.result
