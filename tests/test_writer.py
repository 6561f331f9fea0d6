import io
import logging
import struct
import warnings

import pytest

from pcapng_writer import blocks
from pcapng_writer.blocks import InterfaceInfo
from pcapng_writer.exceptions import (
    CapturedLengthExceedsSnapshot,
    FieldOverflow,
    InvalidInterfaceReference,
    PcapngStrictnessWarning,
    SectionNotStarted,
    SinkWriteFailure,
)
from pcapng_writer.utils import MICROSECOND_RESOLUTION, NANOSECOND_RESOLUTION
from pcapng_writer.writer import PcapngWriter


class FlakyStream(io.BytesIO):
    """A stream that can be told to fail, or to accept fewer bytes"""

    def __init__(self):
        super(FlakyStream, self).__init__()
        self.mode = None

    def write(self, data):
        if self.mode == "error":
            raise OSError(28, "No space left on device")
        if self.mode == "short":
            return super(FlakyStream, self).write(data[:-4])
        return super(FlakyStream, self).write(data)


class BlockingRawStream(io.RawIOBase):
    """A non-blocking raw stream that never has room for data"""

    def writable(self):
        return True

    def write(self, data):
        return None


class SilentStream(object):
    """A sink whose write() returns nothing"""

    def __init__(self):
        self.data = b""

    def write(self, data):
        self.data += data


def split_blocks(data, endianness):
    """Split a written stream into its blocks, using the length fields"""
    found = []
    while data:
        (length,) = struct.unpack(endianness + "I", data[4:8])
        found.append(data[:length])
        data = data[length:]
    return found


def make_idb(**kwargs):
    kwargs.setdefault("link_type", 1)
    kwargs.setdefault("snaplen", 65535)
    return blocks.InterfaceDescription(**kwargs)


@pytest.mark.parametrize("endianness", ["<", ">"])
def test_write_scenario(endianness):
    stream = io.BytesIO()
    writer = PcapngWriter(stream, blocks.SectionHeader(endianness=endianness))
    writer.append(make_idb(options={"if_name": "eth0"}))
    writer.append(
        blocks.EnhancedPacket(
            interface_id=0, timestamp=1000, packet_data=b"\x01\x02\x03"
        )
    )

    shb, idb, epb = split_blocks(stream.getvalue(), endianness)
    u32 = struct.Struct(endianness + "I")

    assert len(shb) == 28
    assert len(idb) == 32
    assert idb[16:24] == struct.pack(endianness + "HH", 2, 4) + b"eth0"  # if_name
    assert len(epb) == 36
    assert epb[20:24] == u32.pack(3)  # captured length
    assert epb[24:28] == u32.pack(3)  # original length
    assert epb[28:32] == b"\x01\x02\x03\x00"


def test_writer_accessors():
    writer = PcapngWriter(io.BytesIO())
    assert writer.endianness is None
    assert writer.interface_count == 0

    writer.append(blocks.SectionHeader(endianness=">"))
    assert writer.endianness == ">"

    writer.append(make_idb())
    writer.append(make_idb(link_type=101, snaplen=0, options={"if_tsresol": 9}))

    assert writer.interface_count == 2
    assert writer.interfaces == (
        InterfaceInfo(1, 65535, MICROSECOND_RESOLUTION),
        InterfaceInfo(101, 0, NANOSECOND_RESOLUTION),
    )
    assert writer.interface(1).resolution == NANOSECOND_RESOLUTION

    with pytest.raises(InvalidInterfaceReference):
        writer.interface(2)


def test_interface_references():
    stream = io.BytesIO()
    writer = PcapngWriter(stream, blocks.SectionHeader())
    for _ in range(3):
        writer.append(make_idb())

    writer.append(blocks.EnhancedPacket(interface_id=2))
    writer.append(blocks.InterfaceStatistics(interface_id=2))
    written = len(stream.getvalue())

    with pytest.raises(InvalidInterfaceReference):
        writer.append(blocks.EnhancedPacket(interface_id=3))
    with pytest.raises(InvalidInterfaceReference):
        writer.append(blocks.InterfaceStatistics(interface_id=3))
    with pytest.raises(InvalidInterfaceReference):
        writer.append(blocks.EnhancedPacket(interface_id=-1))

    # Nothing was written for the rejected blocks
    assert len(stream.getvalue()) == written


def test_new_section_resets_interfaces():
    writer = PcapngWriter(io.BytesIO(), blocks.SectionHeader())
    writer.append(make_idb())
    writer.append(blocks.EnhancedPacket(interface_id=0))

    writer.append(blocks.SectionHeader())
    assert writer.interface_count == 0
    with pytest.raises(InvalidInterfaceReference):
        writer.append(blocks.EnhancedPacket(interface_id=0))

    writer.append(make_idb())
    writer.append(blocks.EnhancedPacket(interface_id=0))


def test_byte_order_follows_section():
    stream = io.BytesIO()
    writer = PcapngWriter(stream, blocks.SectionHeader(endianness="<"))
    writer.append(make_idb())
    le_length = len(stream.getvalue())

    writer.append(blocks.SectionHeader(endianness=">"))
    writer.append(make_idb())

    data = stream.getvalue()
    assert writer.endianness == ">"
    assert split_blocks(data[:le_length], "<")[1] == make_idb().encode("<")
    assert split_blocks(data[le_length:], ">") == [
        blocks.SectionHeader(endianness=">").encode(),
        make_idb().encode(">"),
    ]


def test_section_not_started():
    stream = io.BytesIO()
    writer = PcapngWriter(stream)

    with pytest.raises(SectionNotStarted):
        writer.append(make_idb())
    with pytest.raises(SectionNotStarted):
        writer.append(blocks.SimplePacket())

    assert stream.getvalue() == b""


def test_not_a_block():
    with pytest.raises(TypeError):
        PcapngWriter(io.BytesIO(), make_idb())

    writer = PcapngWriter(io.BytesIO(), blocks.SectionHeader())
    with pytest.raises(TypeError):
        writer.append(b"\x0a\x0d\x0d\x0a")


@pytest.mark.parametrize("mode", ["error", "short"])
def test_sink_failure(mode):
    stream = FlakyStream()
    writer = PcapngWriter(stream, blocks.SectionHeader(endianness="<"))

    stream.mode = mode
    with pytest.raises(SinkWriteFailure) as excinfo:
        writer.append(make_idb())
    if mode == "error":
        assert isinstance(excinfo.value.__cause__, OSError)
    # The interface was not registered
    assert writer.interface_count == 0

    with pytest.raises(SinkWriteFailure):
        writer.append(blocks.SectionHeader(endianness=">"))
    # Still in the old section
    assert writer.endianness == "<"

    stream.mode = None
    writer.append(make_idb())
    assert writer.interface_count == 1


def test_sink_failure_before_any_section():
    stream = FlakyStream()
    stream.mode = "error"
    with pytest.raises(SinkWriteFailure):
        PcapngWriter(stream, blocks.SectionHeader())


def test_closed_stream():
    stream = io.BytesIO()
    writer = PcapngWriter(stream, blocks.SectionHeader())
    stream.close()

    with pytest.raises(SinkWriteFailure) as excinfo:
        writer.append(make_idb())
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert writer.interface_count == 0


def test_raw_stream_would_block():
    with pytest.raises(SinkWriteFailure, match="would block"):
        PcapngWriter(BlockingRawStream(), blocks.SectionHeader())


def test_write_without_return_value():
    stream = SilentStream()
    writer = PcapngWriter(stream, blocks.SectionHeader())
    writer.append(make_idb())

    assert writer.interface_count == 1
    assert len(stream.data) == 28 + 20


@pytest.mark.parametrize("tsresol", [300, b"\x01\x02"])
def test_bad_tsresol(tsresol):
    stream = io.BytesIO()
    writer = PcapngWriter(stream, blocks.SectionHeader())

    with pytest.raises(FieldOverflow, match="if_tsresol"):
        writer.append(make_idb(options={"if_tsresol": tsresol}))
    assert writer.interface_count == 0
    assert len(stream.getvalue()) == 28


def test_encoding_failure_writes_nothing():
    stream = io.BytesIO()
    writer = PcapngWriter(stream, blocks.SectionHeader())
    writer.append(make_idb(snaplen=2))
    written = stream.getvalue()

    with pytest.raises(FieldOverflow):
        writer.append(blocks.EnhancedPacket(timestamp=2**64))
    with pytest.raises(CapturedLengthExceedsSnapshot):
        writer.append(blocks.EnhancedPacket(packet_data=b"\x01\x02\x03"))
    with pytest.raises(FieldOverflow):
        writer.append(make_idb(options={"opt_comment": "x" * 70000}))

    assert stream.getvalue() == written
    assert writer.interface_count == 1


def test_timestamps_use_interface_resolution():
    stream = io.BytesIO()
    writer = PcapngWriter(stream, blocks.SectionHeader(endianness="<"))
    writer.append(make_idb(options={"if_tsresol": NANOSECOND_RESOLUTION}))
    writer.append(make_idb())

    writer.append(blocks.EnhancedPacket(interface_id=0, timestamp_ns=123456789012))
    writer.append(blocks.EnhancedPacket(interface_id=1, timestamp_ns=123456789012))

    epb0, epb1 = split_blocks(stream.getvalue(), "<")[3:]
    assert struct.unpack("<II", epb0[12:20]) == (
        123456789012 >> 32,
        123456789012 & 0xFFFFFFFF,
    )
    assert struct.unpack("<II", epb1[12:20]) == (0, 123456789)


def test_simple_packet_interfaces():
    writer = PcapngWriter(io.BytesIO(), blocks.SectionHeader())

    with pytest.warns(PcapngStrictnessWarning, match="0 interfaces"):
        writer.append(blocks.SimplePacket(packet_data=b"abc"))

    writer.append(make_idb(snaplen=4))
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        writer.append(blocks.SimplePacket(packet_data=b"abcd"))

    # Checked against the first interface
    with pytest.raises(CapturedLengthExceedsSnapshot):
        writer.append(blocks.SimplePacket(packet_data=b"abcde"))

    writer.append(make_idb())
    with pytest.warns(PcapngStrictnessWarning, match="2 interfaces"):
        writer.append(blocks.SimplePacket(packet_data=b"abc"))


def test_logging(caplog):
    caplog.set_level(logging.DEBUG, logger="pcapng_writer")

    writer = PcapngWriter(io.BytesIO(), blocks.SectionHeader(endianness=">"))
    writer.append(make_idb())
    writer.append(blocks.EnhancedPacket())

    assert "Started new section" in caplog.text
    assert "Registered interface 0" in caplog.text
    assert "Wrote EnhancedPacket" in caplog.text
