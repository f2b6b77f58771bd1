from collections import namedtuple
import enum

from blinker import signal


# every signal is sent with the stitcher that raised it as the sender, so a
# consumer can listen to a single stitcher with `connect(fn, sender=stitcher)`

# kwargs: event=EvictionEvent
group_evicted = signal('group_evicted')
# kwargs: piece=Piece
duplicate_discarded = signal('duplicate_discarded')
# kwargs: progress=GroupProgress
stitch_progress = signal('stitch_progress')


class EvictionCause(enum.Enum):
    EXPIRED = 'expired'
    CAPACITY = 'capacity'


EvictionEvent = namedtuple('EvictionEvent',
                           'group_id cause expected_count received_count')
