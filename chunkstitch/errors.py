class ChunkstitchError(Exception):
    pass


class InvalidConfiguration(ChunkstitchError, ValueError):
    pass


class InconsistentGroupDescriptor(ChunkstitchError, ValueError):

    def __init__(self, message, group_id=None):
        super().__init__(message)
        self.group_id = group_id


class SizeLimitExceeded(ChunkstitchError):

    def __init__(self, group_id, limit, attempted):
        super().__init__(f'adding to group {group_id} would grow it to '
                         f'{attempted} bytes, over the limit of {limit}')
        self.group_id = group_id
        self.limit = limit
        self.attempted = attempted


# raised when bytes off the wire don't turn back into a piece
class MalformedPiece(ChunkstitchError, ValueError):
    pass
