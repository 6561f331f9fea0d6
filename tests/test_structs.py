"""
Test packing structs
"""

import io

import pytest

from pcapng_writer.exceptions import FieldOverflow
from pcapng_writer.structs import (
    IntField,
    PacketBytes,
    TimestampField,
    pack_int,
    write_bytes_padded,
    write_int,
)


def test_pack_int():
    # 16bit, unsigned
    assert pack_int(0x1234, 16, False, ">") == b"\x12\x34"
    assert pack_int(0x1234, 16, False, "<") == b"\x34\x12"

    # 16bit, signed, negative
    assert pack_int(-0x1234, 16, True, ">") == b"\xed\xcc"
    assert pack_int(-0x1234, 16, True, "<") == b"\xcc\xed"

    # ..do we really need to test other sizes?
    assert pack_int(0x12345678, 32, False, ">") == b"\x12\x34\x56\x78"
    assert pack_int(0x12345678, 32, False, "<") == b"\x78\x56\x34\x12"
    assert pack_int(-1, 64, True, "<") == b"\xff" * 8
    assert pack_int(0xFF, 8, False, "<") == b"\xff"


def test_pack_int_out_of_range():
    with pytest.raises(FieldOverflow, match="16-bit unsigned"):
        pack_int(0x10000, 16, False, "<")
    with pytest.raises(FieldOverflow):
        pack_int(-1, 32, False, "<")
    with pytest.raises(FieldOverflow, match="64-bit signed"):
        pack_int(2**63, 64, True, ">")

    with pytest.raises(ValueError):
        pack_int(1, 24, False, "<")
    with pytest.raises(TypeError):
        pack_int("1", 32, False, "<")


def test_write_int():
    stream = io.BytesIO()
    write_int(0x0102, stream, 16, endianness=">")
    write_int(0x0102, stream, 16, endianness="<")
    assert stream.getvalue() == b"\x01\x02\x02\x01"


@pytest.mark.parametrize(
    "data,expected",
    [
        (b"", b""),
        (b"a", b"a\x00\x00\x00"),
        (b"abc", b"abc\x00"),
        (b"abcd", b"abcd"),
        (b"abcde", b"abcde\x00\x00\x00"),
    ],
)
def test_write_bytes_padded(data, expected):
    stream = io.BytesIO()
    write_bytes_padded(stream, data)
    assert stream.getvalue() == expected


@pytest.mark.parametrize(
    "endianness,expected",
    [
        ("<", b"\x67\x45\x23\x01" b"\xef\xcd\xab\x89"),
        (">", b"\x01\x23\x45\x67" b"\x89\xab\xcd\xef"),
    ],
)
def test_timestamp_field(endianness, expected):
    stream = io.BytesIO()
    TimestampField().encode(0x0123456789ABCDEF, stream, endianness)
    # High word first, then low word
    assert stream.getvalue() == expected


def test_timestamp_field_out_of_range():
    with pytest.raises(FieldOverflow):
        TimestampField().encode(2**64, io.BytesIO(), "<")
    with pytest.raises(FieldOverflow):
        TimestampField().encode(-1, io.BytesIO(), "<")


def test_int_field():
    stream = io.BytesIO()
    IntField(64, True).encode(-1, stream, "<")
    IntField(16, False).encode(1, stream, ">")
    assert stream.getvalue() == b"\xff" * 8 + b"\x00\x01"
    assert repr(IntField(16, False)) == "IntField(size=16, signed=False)"


def test_packet_bytes():
    stream = io.BytesIO()
    PacketBytes().encode(bytearray(b"\x01\x02\x03"), stream, "<")
    assert stream.getvalue() == b"\x01\x02\x03\x00"

    with pytest.raises(TypeError):
        PacketBytes().encode("text", io.BytesIO(), "<")
