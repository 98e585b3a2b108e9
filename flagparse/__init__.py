"""
Command-line flag parsing with typed values, aliases and callbacks.

Key features:
- String, number and boolean flags with defaults
- Aliases resolving to the same flag
- Inline (``-name=value``) or next-token values, configurable prefix/separator
- Strict or lenient handling of unknown flags
- Per-flag callbacks run after parsing
"""

from .flag_types import FlagType
from .definitions import Flag, FlagData, Options, Result, parse_number
from .errors import COULD_NOT_SET_VALUE, INVALID_FLAG_ID, DuplicateFlagError, FlagValueError
from .registry import FlagRegistry
from .parser import Parser
from .version import __version__

__all__ = [
    'FlagType',
    'Flag',
    'FlagData',
    'Options',
    'Result',
    'parse_number',
    'COULD_NOT_SET_VALUE',
    'INVALID_FLAG_ID',
    'DuplicateFlagError',
    'FlagValueError',
    'FlagRegistry',
    'Parser',
    '__version__',
]
