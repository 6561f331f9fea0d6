"""
Module to build the 32-bit ``epb_flags`` word of enhanced packet blocks.
"""

from collections import OrderedDict, namedtuple
from enum import IntEnum


class PacketDirection(IntEnum):
    NA = 0
    INBOUND = 1
    OUTBOUND = 2


class ReceptionType(IntEnum):
    NA = 0
    UNICAST = 1
    MULTICAST = 2
    BROADCAST = 3
    PROMISCUOUS = 4


# A field stored in some bits of the flags word.
# ``kind``, if set, is the enum its values are converted to.
FlagField = namedtuple("FlagField", ("offset", "nbits", "kind"), defaults=(None,))


class EPBFlags(object):
    """
    Class representing the epb_flags option on an EPB.

    Fields can be set by keyword on creation or as attributes::

        >>> flags = EPBFlags(direction="inbound", reception=ReceptionType.UNICAST)
        >>> flags.err_crc = True
        >>> hex(int(flags))
        '0x1000005'
    """

    __slots__ = ["_value"]

    _schema = OrderedDict(
        [
            ("direction", FlagField(0, 2, PacketDirection)),
            ("reception", FlagField(2, 3, ReceptionType)),
            ("fcslen", FlagField(5, 4)),
            ("reserved", FlagField(9, 7)),
            ("err_16", FlagField(16, 1)),
            ("err_17", FlagField(17, 1)),
            ("err_18", FlagField(18, 1)),
            ("err_19", FlagField(19, 1)),
            ("err_20", FlagField(20, 1)),
            ("err_21", FlagField(21, 1)),
            ("err_22", FlagField(22, 1)),
            ("err_23", FlagField(23, 1)),
            ("err_crc", FlagField(24, 1)),
            ("err_long", FlagField(25, 1)),
            ("err_short", FlagField(26, 1)),
            ("err_frame_gap", FlagField(27, 1)),
            ("err_frame_align", FlagField(28, 1)),
            ("err_frame_delim", FlagField(29, 1)),
            ("err_preamble", FlagField(30, 1)),
            ("err_symbol", FlagField(31, 1)),
        ]
    )

    def __init__(self, value=0, **kwargs):
        if not 0 <= int(value) <= 0xFFFFFFFF:
            raise ValueError("epb_flags must fit in 32 bits")
        self._value = int(value)
        for name, val in kwargs.items():
            setattr(self, name, val)

    def __int__(self):
        return self._value

    def __index__(self):
        return self._value

    def __eq__(self, other):
        if isinstance(other, (EPBFlags, int)):
            return self._value == int(other)
        return NotImplemented

    def __hash__(self):
        return hash(self._value)

    def __repr__(self):
        rv = "<{0} (value=0x{1:08x})".format(self.__class__.__name__, self._value)
        for name in self._schema:
            if name == "reserved":
                continue
            rv += " {0}={1}".format(name, getattr(self, name))
        return rv + ">"

    def __getattr__(self, name):
        try:
            fld = self._schema[name]
        except KeyError:
            raise AttributeError(name)
        bits = (self._value >> fld.offset) & ((1 << fld.nbits) - 1)
        if fld.nbits == 1:
            return bool(bits)
        if fld.kind is not None:
            try:
                return fld.kind(bits)
            except ValueError:
                return bits
        return bits

    def __setattr__(self, name, val):
        try:
            return object.__setattr__(self, name, val)
        except AttributeError:
            pass
        try:
            fld = self._schema[name]
        except KeyError:
            raise AttributeError(name)
        if isinstance(val, str) and fld.kind is not None:
            try:
                val = fld.kind[val.upper()]
            except KeyError:
                raise ValueError(
                    "Invalid value {0!r} for {1}".format(val, name)
                ) from None
        val = int(val)
        if not 0 <= val < (1 << fld.nbits):
            raise ValueError(
                "Value {0} does not fit in {1} ({2} bits)".format(val, name, fld.nbits)
            )
        mask = ((1 << fld.nbits) - 1) << fld.offset
        self._value = (self._value & ~mask) | (val << fld.offset)
