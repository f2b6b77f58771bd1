import pickle           # only ever used between trusted nodes

from .errors import MalformedPiece
from .piece import Piece


def dumps(piece):
    return pickle.dumps(tuple(piece))


def loads(data):
    try:
        fields = pickle.loads(data)
        piece = Piece(*fields)
    except (pickle.UnpicklingError, EOFError, AttributeError, ImportError,
            IndexError, KeyError, TypeError, ValueError) as e:
        raise MalformedPiece(f'could not decode a piece: {e}') from e

    if not isinstance(piece.payload, bytes):
        raise MalformedPiece(
            f'piece payload has to be bytes, got {type(piece.payload).__name__}')
    return piece
