import math
import uuid

from cached_property import cached_property

from . import log
from .errors import InvalidConfiguration
from .piece import Piece


logger = log.get_logger(__name__)


def split(data, capacity):
    return list(Splitter(data, split_size=capacity).splits)


class Splitter:

    @classmethod
    def split(cls, *args, **kwargs):
        return cls(*args, **kwargs).splits

    def __init__(self, data, *, split_size):
        # bool is an int, but a capacity of True is surely a mistake
        if (not isinstance(split_size, int) or isinstance(split_size, bool)
                or split_size <= 0):
            raise InvalidConfiguration(
                f'piece capacity has to be a positive int, got {split_size!r}')
        self._data = bytes(data)
        self._split_size = split_size

    @property
    def splits(self):
        logger.debug(f'splitting {len(self._data)} bytes into '
                     f'{self.num_pieces} pieces of group {self.group_id}')
        for index, payload in enumerate(segment(self._data, self._split_size)):
            yield self._new_piece(index, payload)

    @cached_property
    def num_pieces(self):
        return math.ceil(len(self._data) / self._split_size)

    @cached_property
    def group_id(self):
        return uuid.uuid4()

    def _new_piece(self, index, payload):
        return Piece(group_id=self.group_id, index=index,
                     group_size=self.num_pieces, payload=payload)


def segment(data, split_size):
    for starting_index in range(0, len(data), split_size):
        yield data[starting_index:starting_index+split_size]
