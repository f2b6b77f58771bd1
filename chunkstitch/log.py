import itertools
import logging
import os
import pprint
import sys
import time


LOG_LEVEL_ENV_VAR = 'CHUNKSTITCH_LOG_LEVEL'
DEFAULT_LOG_LEVEL = 'WARNING'


color_codes = {'blue': '0;34',
               'green': '0;32',
               'cyan': '0;36',
               'red': '0;31',
               'purple': '0;35',
               'brown': '0;33',
               'light_blue': '1;34',
               'light_green': '1;32',
               'light_cyan': '1;36',
               'light_red': '1;31',
               'light_purple': '1;35',
               'yellow': '1;33'}


def colorize(color, text):
    return f'\033[{color_codes[color]};1m{text}\033[0m'


class ConsistentColorer:

    def __init__(self):
        self._color_by_term = {}
        self._cycle_through_the_colors = itertools.cycle(color_codes.keys())

    def get_color_for(self, term):
        try:
            return self._color_by_term[term]
        except KeyError:
            next_color = next(self._cycle_through_the_colors)
            self._color_by_term[term] = next_color
            return next_color


class Highlighter(logging.Formatter):
    """Gives every logger name its own color, so the stitcher's lines stand
    out from the splitter's when they're interleaved on one terminal."""

    def __init__(self):
        super().__init__()
        self._consistent_colorer = ConsistentColorer()

    def format(self, record):
        logger_name = record.name
        color = self._consistent_colorer.get_color_for(logger_name)
        return (f'{self._format_time(record)} {record.levelname} '
                f'{colorize(color, logger_name)} {self._format_body(record)}')

    def _format_body(self, record):
        message = record.getMessage()
        if record.exc_info:
            message += ('\nEncountered an exception:\n' +
                        self.formatException(record.exc_info))
        return message

    def _format_time(self, record):
        ct = time.localtime(record.created)
        t = time.strftime('%H:%M:%S', ct)
        return '%s,%03d' % (t, record.msecs)


handler = logging.StreamHandler(stream=sys.stderr)
handler.setFormatter(Highlighter())


def configured_level(environ=os.environ):
    level_name = environ.get(LOG_LEVEL_ENV_VAR) or DEFAULT_LOG_LEVEL
    level = logging.getLevelName(level_name.upper())
    # getLevelName hands back a string for names it doesn't know
    if not isinstance(level, int):
        return logging.getLevelName(DEFAULT_LOG_LEVEL)
    return level


def get_logger(name):
    logger = logging.getLogger(name)
    if handler not in logger.handlers:
        logger.addHandler(handler)
    logger.setLevel(configured_level())
    return logger


getLogger = get_logger


def format_obj(o):
    contents = pprint.pformat(maybe_trunc(o))
    if '\n' not in contents:
        return contents
    # multiline content gets set apart on its own indented block
    output = '\n'
    for line in contents.splitlines():
        output += f'\t{line}\n'
    return output


TRUNC_AT_CHARS = 30


# makes any object decently printable, truncating huge payloads
def maybe_trunc(o):
    if isinstance(o, dict):
        return {k: maybe_trunc(v) for k, v in o.items()}
    # namedtuples, like pieces and events
    if hasattr(o, '_asdict'):
        return maybe_trunc(dict(o._asdict()))
    if isinstance(o, (bytes, bytearray, memoryview, str)):
        length = len(o)
        if length < TRUNC_AT_CHARS:
            return o
        return str(bytes(o[:TRUNC_AT_CHARS]) if not isinstance(o, str)
                   else o[:TRUNC_AT_CHARS]) + f'… ({length} total)'
    return o
