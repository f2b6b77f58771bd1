from collections import namedtuple
import numbers
import os

from .errors import InvalidConfiguration


MAX_GROUPS_ENV_VAR = 'CHUNKSTITCH_MAX_GROUPS'
MAX_AGE_ENV_VAR = 'CHUNKSTITCH_MAX_AGE'
MAX_BYTES_ENV_VAR = 'CHUNKSTITCH_MAX_BYTES'


class StitcherSettings(namedtuple('StitcherSettings',
                                  ['max_groups',
                                   'max_age',
                                   'max_bytes'])):
    """Limits for a stitcher. `None` means unbounded.

    max_groups: how many incomplete groups may be pending at once
    max_age: seconds a group may stay incomplete after its first piece
    max_bytes: how large one group's reassembled blob may grow
    """

    __slots__ = ()

    def __new__(cls, max_groups=None, max_age=None, max_bytes=None):
        return super().__new__(cls, max_groups, max_age, max_bytes)

    @classmethod
    def from_env(cls, environ=os.environ):
        return cls(
            max_groups=_parse_limit(environ, MAX_GROUPS_ENV_VAR, int),
            max_age=_parse_limit(environ, MAX_AGE_ENV_VAR, float),
            max_bytes=_parse_limit(environ, MAX_BYTES_ENV_VAR, int)
        ).validated()

    def validated(self):
        _check_limit('max_groups', self.max_groups, numbers.Integral)
        _check_limit('max_age', self.max_age, numbers.Real)
        _check_limit('max_bytes', self.max_bytes, numbers.Integral)
        return self

    @property
    def is_bounded(self):
        return any(limit is not None for limit in self)


StitcherSettings.default = StitcherSettings()


def _check_limit(name, value, kind):
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, kind) or value <= 0:
        raise InvalidConfiguration(
            f'{name} has to be a positive number or None, got {value!r}')


def _parse_limit(environ, var_name, convert):
    raw = environ.get(var_name, '').strip()
    if not raw:
        return None
    try:
        return convert(raw)
    except ValueError:
        raise InvalidConfiguration(
            f'{var_name} has to be a number, got {raw!r}') from None
