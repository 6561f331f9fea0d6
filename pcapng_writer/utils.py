import socket
import struct
from collections import namedtuple


def pack_ipv4(data):
    # type: (str) -> bytes
    try:
        return socket.inet_pton(socket.AF_INET, data)
    except (OSError, TypeError) as e:
        raise ValueError("Invalid IPv4 address: {0!r}".format(data)) from e


def pack_ipv6(data):
    # type: (str) -> bytes
    try:
        return socket.inet_pton(socket.AF_INET6, data)
    except (OSError, TypeError) as e:
        raise ValueError("Invalid IPv6 address: {0!r}".format(data)) from e


def pack_macaddr(data):
    # type: (str) -> bytes
    parts = data.replace("-", ":").split(":")
    if len(parts) != 6:
        raise ValueError("Invalid MAC address: {0!r}".format(data))
    try:
        return struct.pack("!6B", *[int(x, 16) for x in parts])
    except (ValueError, struct.error) as e:
        raise ValueError("Invalid MAC address: {0!r}".format(data)) from e


def padding_size(length, pad_block_size=4):
    # type: (int, int) -> int
    """Number of zero bytes needed to align ``length`` to the block size"""
    return -length % pad_block_size


def pack_timestamp_resolution(base, exponent):
    # type: (int, int) -> bytes
    """
    Pack a timestamp resolution.

    :param base: 2 or 10
    :param exponent: negative power of the base to be encoded
    """
    exponent = abs(exponent)
    if exponent > 0b01111111:
        raise ValueError("Exponent must be in the 0-127 range")
    if base == 2:
        return struct.pack("B", exponent | 0b10000000)
    if base == 10:
        return struct.pack("B", exponent)
    raise ValueError("Supported bases are: 2, 10")


class TimestampResolution(namedtuple("TimestampResolution", ("base", "exponent"))):
    """
    Resolution of the timestamps written for an interface.

    A resolution of ``base ** -exponent`` seconds; ``base`` is either 10 or
    2, ``exponent`` a number between 0 and 127. This is what gets stored in
    the ``if_tsresol`` option of an interface description block, and what
    the timestamps of the packets captured on that interface are counted in.
    """

    __slots__ = ()

    def __new__(cls, base, exponent):
        if base not in (2, 10):
            raise ValueError("Supported bases are: 2, 10")
        if not 0 <= exponent <= 0b01111111:
            raise ValueError("Exponent must be in the 0-127 range")
        return super(TimestampResolution, cls).__new__(cls, base, exponent)

    @classmethod
    def from_tsresol(cls, value):
        """
        Build a resolution from the raw ``if_tsresol`` value.

        If the most significant bit is zero, the remaining bits are a
        negative power of 10; otherwise a negative power of 2.
        """
        if isinstance(value, (bytes, bytearray)):
            if len(value) != 1:
                raise ValueError("Data must be exactly one byte")
            value = value[0]
        if not 0 <= value <= 0xFF:
            raise ValueError("if_tsresol must fit in one byte")
        base = 2 if (value >> 7 & 1) else 10
        return cls(base, value & 0b01111111)

    def to_tsresol(self):
        # type: () -> int
        return pack_timestamp_resolution(self.base, self.exponent)[0]

    @property
    def multiplier(self):
        # type: () -> float
        """Length of one timestamp unit, in seconds"""
        return float(self.base ** (-self.exponent))

    def ticks_from_nanoseconds(self, nanoseconds):
        # type: (int) -> int
        """
        Convert a number of nanoseconds (usually since the epoch) into
        a number of units of this resolution, rounding down.
        """
        if self.base == 10:
            if self.exponent <= 9:
                return nanoseconds // 10 ** (9 - self.exponent)
            return nanoseconds * 10 ** (self.exponent - 9)
        return (nanoseconds << self.exponent) // 10**9


MICROSECOND_RESOLUTION = TimestampResolution(10, 6)
NANOSECOND_RESOLUTION = TimestampResolution(10, 9)

# Assumed for interfaces with no if_tsresol option
DEFAULT_RESOLUTION = MICROSECOND_RESOLUTION
