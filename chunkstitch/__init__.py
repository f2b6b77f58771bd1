from .errors import ChunkstitchError
from .errors import InconsistentGroupDescriptor
from .errors import InvalidConfiguration
from .errors import MalformedPiece
from .errors import SizeLimitExceeded
from .piece import Piece
from .settings import StitcherSettings
from .signals import EvictionCause
from .signals import EvictionEvent
from .splitter import Splitter
from .splitter import split
from .stitcher import Stitcher
