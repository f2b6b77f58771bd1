from collections import namedtuple

from .log import maybe_trunc


class Piece(namedtuple('Piece', 'group_id index group_size payload')):
    """One fragment of a blob that was split for transport.

    `group_id` is shared by every piece of one split, `index` is the piece's
    0-based position, and `group_size` is how many pieces the split produced.
    Two pieces with the same `(group_id, index)` are duplicates.
    """

    __slots__ = ()

    # a piece is who it is by group and position, whatever it carries
    def __eq__(self, other):
        if not isinstance(other, Piece):
            return NotImplemented
        return (self.group_id, self.index) == (other.group_id, other.index)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self):
        return hash((self.group_id, self.index))

    @property
    def is_the_first_piece(self):
        return self.index == 0

    @property
    def is_the_last_piece(self):
        return self.index == self.group_size - 1

    def __repr__(self):
        return (f'Piece(group_id={self.group_id}, index={self.index}, '
                f'group_size={self.group_size}, '
                f'payload={maybe_trunc(self.payload)!r})')
