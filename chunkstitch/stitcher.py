import functools
import threading
import time

from . import log
from . import signals
from .errors import InconsistentGroupDescriptor
from .errors import SizeLimitExceeded
from .progress import GroupProgress
from .settings import StitcherSettings
from .signals import EvictionCause
from .signals import EvictionEvent


logger = log.get_logger(__name__)


class Stitcher:
    """Reassembles blobs from their pieces, which may arrive in any order,
    more than once, and interleaved with pieces of other blobs.

    Safe to share between threads. Pieces of one group are applied one at a
    time under that group's own lock; pieces of different groups never wait
    on each other beyond a dict lookup.
    """

    def __init__(self, settings=StitcherSettings.default, *,
                 clock=time.monotonic):
        self.settings = settings.validated()
        self._clock = clock
        # insertion order is creation order, which the evictions rely on
        self._groups = {}
        self._index_lock = threading.Lock()
        logger.debug(f'new stitcher with {log.format_obj(self.settings)}')

    def stitch(self, piece):
        """Add `piece` to its group. Returns the reassembled blob if this
        piece completed the group, None otherwise."""
        logger.debug(f'received: {piece!r}')
        _check_descriptor(piece)
        self.sweep()

        while True:
            group = self._locate_or_create(piece)
            with group.lock:
                # completed or evicted after we looked it up. whatever comes
                # next for this id belongs to a brand new group
                if group.is_retired:
                    continue
                stitched, announce = self._add_to_group(group, piece)
            break

        announce()
        return stitched

    def sweep(self):
        """Evict every group that's been incomplete for longer than
        `settings.max_age`. Also runs at the start of every `stitch`."""
        with self._index_lock:
            expired = self._pop_expired(self._clock())
        self._report_evictions(expired, EvictionCause.EXPIRED)

    def pending_group_ids(self):
        with self._index_lock:
            return list(self._groups)

    def __len__(self):
        with self._index_lock:
            return len(self._groups)

    def _locate_or_create(self, piece):
        with self._index_lock:
            group = self._groups.get(piece.group_id)
            if group is not None:
                return group
            # an oversized first piece mustn't create a group, or push
            # another one out
            self._check_byte_size(piece.group_id, 0, piece)
            group = PartialGroup(piece.group_id, piece.group_size,
                                 created_at=self._clock())
            self._groups[piece.group_id] = group
            overflow = self._pop_overflow()
        self._report_evictions(overflow, EvictionCause.CAPACITY)
        return group

    def _add_to_group(self, group, piece):
        if piece.group_size != group.expected_size:
            logger.warning(f'{piece!r} claims a group size of '
                           f'{piece.group_size}, but group {group.group_id} '
                           f'was started with {group.expected_size}')
            raise InconsistentGroupDescriptor(
                f'group {group.group_id} expects {group.expected_size} '
                f'pieces, piece {piece.index} says {piece.group_size}',
                group_id=group.group_id)

        if piece.index in group.received:
            logger.warning(f'duplicate {piece!r} received and ignored')
            return None, functools.partial(signals.duplicate_discarded.send,
                                           self, piece=piece)

        self._check_byte_size(group.group_id, group.accumulated_bytes, piece)
        group.add(piece)
        announce = functools.partial(signals.stitch_progress.send, self,
                                     progress=group.progress)
        if not group.is_complete:
            return None, announce

        self._retire(group)
        logger.debug(f'stitching all {group.expected_size} pieces in group '
                     f'{group.group_id}')
        return group.stitch_all(), announce

    def _check_byte_size(self, group_id, accumulated_bytes, piece):
        max_bytes = self.settings.max_bytes
        if max_bytes is None:
            return
        attempted = accumulated_bytes + len(piece.payload)
        if attempted > max_bytes:
            logger.warning(f'by adding {piece!r}, group {group_id} '
                           f'would have exceeded the safeguard of '
                           f'{max_bytes} bytes')
            raise SizeLimitExceeded(group_id, max_bytes, attempted)

    def _retire(self, group):
        # caller holds group.lock
        group.is_retired = True
        with self._index_lock:
            if self._groups.get(group.group_id) is group:
                del self._groups[group.group_id]

    # the _pop_* methods run with _index_lock held

    def _pop_expired(self, now):
        max_age = self.settings.max_age
        if max_age is None:
            return []
        expired = []
        for group in self._groups.values():
            if now - group.created_at <= max_age:
                break
            expired.append(group)
        for group in expired:
            del self._groups[group.group_id]
        return expired

    def _pop_overflow(self):
        max_groups = self.settings.max_groups
        if max_groups is None:
            return []
        excess = len(self._groups) - max_groups
        if excess <= 0:
            return []
        overflow = list(self._groups.values())[:excess]
        for group in overflow:
            del self._groups[group.group_id]
        return overflow

    def _report_evictions(self, groups, cause):
        for group in groups:
            with group.lock:
                # it may have completed between being popped and now
                if group.is_retired:
                    continue
                group.is_retired = True
                event = EvictionEvent(group_id=group.group_id, cause=cause,
                                      expected_count=group.expected_size,
                                      received_count=group.received_count)
            self._log_eviction(event)
            signals.group_evicted.send(self, event=event)

    def _log_eviction(self, event):
        if event.cause is EvictionCause.EXPIRED:
            logger.warning(f'group {event.group_id} took too long to stitch '
                           f'and expired after {self.settings.max_age}s, '
                           f'expecting {event.expected_count} pieces but only '
                           f'received {event.received_count}')
        else:
            logger.warning(f'group {event.group_id} was evicted for exceeding '
                           f'the max group count {self.settings.max_groups}, '
                           f'with {event.received_count} of '
                           f'{event.expected_count} pieces received')


class PartialGroup:

    def __init__(self, group_id, expected_size, *, created_at):
        self.group_id = group_id
        self.expected_size = expected_size
        self.created_at = created_at
        self.received = {}
        self.accumulated_bytes = 0
        self.progress = GroupProgress(group_id=group_id, total=expected_size,
                                      completed=0)
        self.lock = threading.Lock()
        # set once the group is completed or evicted. a retired group never
        # takes another piece
        self.is_retired = False

    def add(self, piece):
        self.received[piece.index] = piece.payload
        self.accumulated_bytes += len(piece.payload)
        self.progress = self.progress.increment_completed

    @property
    def received_count(self):
        return len(self.received)

    @property
    def is_complete(self):
        return self.received_count == self.expected_size

    def stitch_all(self):
        # every index in range(expected_size) is present exactly once here
        return b''.join(self.received[index]
                        for index in range(self.expected_size))

    def __repr__(self):
        return (f'<{type(self).__name__}: {self.group_id} '
                f'{self.received_count}/{self.expected_size}>')


def _check_descriptor(piece):
    if piece.group_size < 1 or not 0 <= piece.index < piece.group_size:
        logger.warning(f'{piece!r} has an index outside of its group')
        raise InconsistentGroupDescriptor(
            f'piece index {piece.index} is not within a group of '
            f'{piece.group_size}', group_id=piece.group_id)
