"""
How to deal with data that can be encoded, but would make for a questionable
pcapng file (eg. a non-repeatable option given twice).

The level is global, and applies to all the blocks written afterwards.
"""

import warnings
from enum import Enum

from pcapng_writer.exceptions import PcapngStrictnessError, PcapngStrictnessWarning


class Strictness(Enum):
    NONE = 0  # Write the data as given, silently
    WARN = 1  # Write the data as given, with a warning
    FIX = 2  # Warn, and repair the data before writing where possible
    FORBID = 3  # Refuse to write the data


strict_level = Strictness.FORBID


def set_strictness(level):
    if not isinstance(level, Strictness):
        raise TypeError("expected a Strictness level, got {!r}".format(level))
    global strict_level
    strict_level = level


def get_strictness():
    return strict_level


def problem(msg):
    "Refuse to write questionable data, or warn about it, depending on the level."
    if strict_level == Strictness.FORBID:
        raise PcapngStrictnessError("Refusing to write: {}".format(msg))
    elif strict_level in (Strictness.WARN, Strictness.FIX):
        warnings.warn(PcapngStrictnessWarning(msg), stacklevel=3)


def warn(msg):
    "Warn about data that is written anyway (unless the level is NONE)."
    if strict_level != Strictness.NONE:
        warnings.warn(PcapngStrictnessWarning(msg), stacklevel=3)


def should_fix():
    "Whether questionable data should be repaired before being written."
    return strict_level == Strictness.FIX
