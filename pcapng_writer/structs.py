"""
Module providing facilities for encoding struct-like data.
"""

import abc
import struct

from pcapng_writer.exceptions import FieldOverflow
from pcapng_writer.utils import padding_size

INT_FORMATS = {8: "b", 16: "h", 32: "i", 64: "q"}


def pack_int(number, size, signed=False, endianness="="):
    """
    Encode an integer number into bytes.

    :param number: the integer number to encode
    :param size: the size, in bits, of the number to be written.
        Supported sizes are: 8, 16, 32 and 64 bits.
    :param signed: Whether a signed or unsigned number is required.
        Defaults to ``False`` (unsigned int).
    :param endianness: specify the endianness to use to encode the number,
        in the same format used by Python :py:mod:`struct` module.
        Defaults to '=' (native endianness). '!' means "network" endianness
        (big endian), '<' little endian, '>' big endian.
    :raises: :py:exc:`~pcapng_writer.exceptions.FieldOverflow` if the number
        is out of range for the requested size
    """
    if not isinstance(number, int):
        raise TypeError("'{}' is not numeric".format(number))
    fmt = INT_FORMATS.get(size)
    if fmt is None:
        raise ValueError("Unsupported integer size: {}".format(size))
    if signed:
        low, high = -(1 << (size - 1)), (1 << (size - 1)) - 1
    else:
        low, high = 0, (1 << size) - 1
    if not low <= number <= high:
        raise FieldOverflow(
            "{0} does not fit in a {1}-bit {2} field".format(
                number, size, "signed" if signed else "unsigned"
            )
        )
    fmt = fmt.lower() if signed else fmt.upper()
    assert endianness in "<>!="
    return struct.pack(endianness + fmt, number)


def write_int(number, stream, size, signed=False, endianness="="):
    """
    Write (and encode) an integer number to a binary stream.

    Same arguments as :py:func:`pack_int`, plus the stream (an object
    providing a ``write()`` method).
    """
    write_bytes(stream, pack_int(number, size, signed=signed, endianness=endianness))


def write_bytes(stream, data):
    """
    Write the given amount of raw bytes to a stream.

    :param stream: the stream into which to write data
    :param data: the data to write
    """
    stream.write(data)


def write_bytes_padded(stream, data, pad_block_size=4):
    """
    Write the given bytes to a stream, followed by as many zero bytes as
    needed to align up to the next pad_block_size-sized block.

    :param stream: the stream into which to write data
    :param data: the data to write
    """
    write_bytes(stream, data)
    padding = padding_size(len(data), pad_block_size)
    if padding > 0:
        write_bytes(stream, bytes(padding))


class StructField(metaclass=abc.ABCMeta):
    """Abstract base class for struct fields"""

    __slots__ = []

    @abc.abstractmethod
    def encode(self, value, stream, endianness):
        pass

    def __repr__(self):
        return "{0}()".format(self.__class__.__name__)


class IntField(StructField):
    """
    Field containing an integer number.

    :param size: number size, in bits. Currently supported
        are 8, 16, 32 and 64-bit integers
    :param signed: whether the number is a signed or unsigned
        integer. Defaults to False (unsigned)
    """

    __slots__ = ["size", "signed"]

    def __init__(self, size, signed=False):
        self.size = size  # in bits!
        self.signed = signed

    def encode(self, number, stream, endianness):
        write_int(number, stream, self.size, signed=self.signed, endianness=endianness)

    def __repr__(self):
        return "{0}(size={1!r}, signed={2!r})".format(
            self.__class__.__name__, self.size, self.signed
        )


class TimestampField(StructField):
    """
    Field containing a 64-bit timestamp, written as two 32-bit
    integers: the high word first, then the low word.
    """

    __slots__ = []

    def encode(self, timestamp, stream, endianness):
        if not isinstance(timestamp, int):
            raise TypeError("'{}' is not numeric".format(timestamp))
        if not 0 <= timestamp <= 0xFFFFFFFFFFFFFFFF:
            raise FieldOverflow("timestamp {} does not fit in 64 bits".format(timestamp))
        write_int(timestamp >> 32, stream, 32, endianness=endianness)
        write_int(timestamp & 0xFFFFFFFF, stream, 32, endianness=endianness)


class PacketBytes(StructField):
    """
    Field containing some "packet data", as found in the EnhancedPacket
    and SimplePacket blocks. Written as-is, padded to 32 bits; its length
    is carried by a separate field.
    """

    __slots__ = []

    def encode(self, packet, stream, endianness=None):
        if not isinstance(packet, (bytes, bytearray, memoryview)):
            raise TypeError("Packet data must be bytes, got {}".format(type(packet)))
        write_bytes_padded(stream, bytes(packet))
