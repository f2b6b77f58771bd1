from collections import namedtuple


class GroupProgress(namedtuple('GroupProgress', 'group_id total completed')):

    @property
    def increment_completed(self):
        return self._replace(completed=self.completed + 1)

    @property
    def is_complete(self):
        return self.total == self.completed

    @property
    def remaining(self):
        return self.total - self.completed
