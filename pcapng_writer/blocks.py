"""
Module containing the definition of the "blocks" of the pcap-ng format
that can be written.

Each block is a struct-like object with some fields and possibly
a variable amount of options. Blocks are created by the user and
encoded into their binary form by :py:meth:`Block.encode`, usually
called by :py:class:`~pcapng_writer.writer.PcapngWriter`.
"""

import io
import sys
from collections import namedtuple

from pcapng_writer import strictness as strictness
from pcapng_writer.constants import (
    BYTE_ORDER_MAGIC,
    ENDIAN_BIG,
    ENDIAN_LITTLE,
    SECTION_LENGTH_UNKNOWN,
    VERSION_MAJOR,
    VERSION_MINOR,
    link_types,
)
from pcapng_writer.constants.block_types import (
    BLK_ENHANCED_PACKET,
    BLK_INTERFACE,
    BLK_INTERFACE_STATS,
    BLK_PACKET_SIMPLE,
    BLK_SECTION_HEADER,
)
from pcapng_writer.exceptions import (
    CapturedLengthExceedsSnapshot,
    FieldOverflow,
    UnsupportedOption,
)
from pcapng_writer.options import (
    ENHANCED_PACKET_OPTIONS,
    INTERFACE_DESCRIPTION_OPTIONS,
    INTERFACE_STATISTICS_OPTIONS,
    SECTION_HEADER_OPTIONS,
    Options,
    OptionsField,
)
from pcapng_writer.structs import (
    IntField,
    PacketBytes,
    TimestampField,
    pack_int,
    write_bytes_padded,
    write_int,
)
from pcapng_writer.utils import DEFAULT_RESOLUTION, TimestampResolution, padding_size

# Block type, and the two block total length fields
BLOCK_COMMON_LEN = 12

# What the encoder needs to know about a previously declared interface
InterfaceInfo = namedtuple(
    "InterfaceInfo",
    ("link_type", "snaplen", "resolution"),
    defaults=(0, DEFAULT_RESOLUTION),
)


class Block(object):
    """Base class for blocks"""

    magic_number = None
    schema = []
    readonly_fields = set()
    # Accepted by the constructor, but not part of the encoded schema
    extra_fields = ()
    __slots__ = ["_decoded"]

    def __init__(self, **kwargs):
        known = {x[0] for x in self.schema} | set(self.extra_fields)
        for key in kwargs:
            if key not in known or key in self.readonly_fields:
                raise TypeError(
                    "{cls}() got an unexpected field '{key}'".format(
                        cls=self.__class__.__name__, key=key
                    )
                )
        self._decoded = {}
        for key, packed_type, default in self.schema:
            if key in self.readonly_fields:
                continue
            if key == "options":
                self._decoded[key] = Options(
                    schema=packed_type.options_schema, data=kwargs.get("options")
                )
            else:
                self._decoded[key] = kwargs.get(key, default)
        for key in self.extra_fields:
            self._decoded[key] = kwargs.get(key)

    def __eq__(self, other):
        if self.__class__ != other.__class__:
            return False
        keys = [x[0] for x in self.schema] + list(self.extra_fields)
        # Use `getattr()` so eg. @property calls are used
        return [getattr(self, k) for k in keys] == [getattr(other, k) for k in keys]

    def encode(self, endianness, interface=None):
        """
        Encode this block, framing included.

        :param endianness:
            byte order of the section this block belongs to, ``'<'``
            or ``'>'``.

        :param interface:
            an :py:class:`InterfaceInfo` describing the interface this block
            refers to, if any. Used to check the packet length against the
            snap length, and to convert nanosecond timestamps.

        :return: the complete block, as bytes
        """
        body = io.BytesIO()
        self._encode(body, endianness, interface)
        body = body.getvalue()
        block_length = BLOCK_COMMON_LEN + len(body) + padding_size(len(body))
        try:
            length_field = pack_int(block_length, 32, endianness=endianness)
        except FieldOverflow as e:
            raise FieldOverflow(
                "{cls} is too big: {length} bytes".format(
                    cls=self.__class__.__name__, length=block_length
                )
            ) from e
        outstream = io.BytesIO()
        write_int(self.magic_number, outstream, 32, endianness=endianness)
        outstream.write(length_field)
        write_bytes_padded(outstream, body)
        outstream.write(length_field)
        return outstream.getvalue()

    def _encode(self, outstream, endianness, interface):
        """Encodes the fields of this block into raw data"""
        self._check(interface)
        for name, field, default in self.schema:
            value = self._encoded_value(name, interface)
            try:
                field.encode(value, outstream, endianness=endianness)
            except FieldOverflow as e:
                raise FieldOverflow(
                    "{cls}.{name}: {err}".format(
                        cls=self.__class__.__name__, name=name, err=e
                    )
                ) from e

    def _check(self, interface):
        """Hook to validate the block before encoding"""
        pass

    def _encoded_value(self, name, interface):
        return getattr(self, name)

    def __getattr__(self, name):
        # __getattr__ is only called when getting an attribute that
        # this object doesn't have.
        if name == "_decoded":
            raise AttributeError(name)
        try:
            return self._decoded[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __setattr__(self, name, value):
        # __setattr__ is called for *any* attribute, real or not.
        try:
            # See it if it names an attribute we defined in our __slots__
            return object.__setattr__(self, name, value)
        except AttributeError:
            # It's not an attribute.
            # Proceed with our nice interface to the schema.
            pass
        if name in self.readonly_fields:
            raise AttributeError(
                "'{cls}' object property '{prop}' is read-only".format(
                    prop=name, cls=self.__class__.__name__
                )
            )
        if name not in self._decoded:
            raise AttributeError(
                "'{cls}' object has no field '{prop}'".format(
                    prop=name, cls=self.__class__.__name__
                )
            )
        if name == "options":
            # Always rebuilt, so the options are checked against this block kind
            field = dict((x[0], x[1]) for x in self.schema)["options"]
            value = Options(schema=field.options_schema, data=value)
        self._decoded[name] = value

    def __repr__(self):
        args = []
        for item in self.schema:
            name = item[0]
            value = getattr(self, name)
            try:
                value = repr(value)
            except Exception:
                value = "<{0} (repr failed)>".format(type(value).__name__)
            args.append("{0}={1}".format(name, value))
        return "<{0} {1}>".format(self.__class__.__name__, " ".join(args))


class SectionHeader(Block):
    """
    "The Section Header Block (SHB) is mandatory. It identifies the beginning
    of a section of the capture file. The Section Header Block does not contain
    data but it rather identifies a list of blocks (interfaces, packets) that
    are logically correlated."
    - pcapng draft, section 4.1.

    The byte order of the whole section is chosen here, with the
    ``endianness`` argument: ``'<'`` (little endian, the default) or
    ``'>'`` (big endian); ``'='`` means the native byte order.
    """

    magic_number = BLK_SECTION_HEADER
    __slots__ = ["endianness"]
    schema = [
        ("version_major", IntField(16, False), VERSION_MAJOR),
        ("version_minor", IntField(16, False), VERSION_MINOR),
        ("section_length", IntField(64, True), SECTION_LENGTH_UNKNOWN),
        ("options", OptionsField(SECTION_HEADER_OPTIONS), None),
    ]

    def __init__(self, endianness=ENDIAN_LITTLE, **kwargs):
        if endianness == "=":
            endianness = ENDIAN_LITTLE if sys.byteorder == "little" else ENDIAN_BIG
        elif endianness == "!":
            endianness = ENDIAN_BIG
        if endianness not in (ENDIAN_LITTLE, ENDIAN_BIG):
            raise ValueError("Invalid endianness: {!r}".format(endianness))
        self.endianness = endianness
        super(SectionHeader, self).__init__(**kwargs)

    def encode(self, endianness=None, interface=None):
        """
        Encode this section header. It is always written in its own
        byte order; ``endianness``, if given, must match it.
        """
        if endianness is not None and endianness != self.endianness:
            raise ValueError(
                "SectionHeader byte order is {!r}, not {!r}".format(
                    self.endianness, endianness
                )
            )
        return super(SectionHeader, self).encode(self.endianness)

    def _encode(self, outstream, endianness, interface):
        write_int(BYTE_ORDER_MAGIC, outstream, 32, endianness=endianness)
        super(SectionHeader, self)._encode(outstream, endianness, interface)

    @property
    def version(self):
        return (self.version_major, self.version_minor)

    def __eq__(self, other):
        return (
            super(SectionHeader, self).__eq__(other)
            and self.endianness == other.endianness
        )

    def __repr__(self):
        return (
            "<{name} version={version} endianness={endianness} "
            "length={length} options={options}>"
        ).format(
            name=self.__class__.__name__,
            version=".".join(str(x) for x in self.version),
            endianness=repr(self.endianness),
            length=self.section_length,
            options=repr(self.options),
        )


class InterfaceDescription(Block):
    """
    "An Interface Description Block (IDB) is the container for information
    describing an interface on which packet data is captured."
    - pcapng draft, section 4.2.

    The interface gets its id implicitly: the first interface described in
    a section is number 0, the second number 1, and so on.
    """

    magic_number = BLK_INTERFACE
    __slots__ = []
    readonly_fields = set(("reserved",))
    schema = [
        ("link_type", IntField(16, False), link_types.LINKTYPE_ETHERNET),
        ("reserved", IntField(16, False), 0),
        ("snaplen", IntField(32, False), 0),
        ("options", OptionsField(INTERFACE_DESCRIPTION_OPTIONS), None),
    ]

    @property
    def reserved(self):
        return 0

    @property
    def timestamp_resolution(self):
        # ------------------------------------------------------------
        # If the Most Significant Bit of if_tsresol is equal to zero,
        # the remaining bits indicates the resolution of the timestamp
        # as as a negative power of 10; otherwise as negative power of
        # 2. If this option is not present, a resolution of 10^-6 is
        # assumed.
        # ------------------------------------------------------------
        if "if_tsresol" not in self.options:
            return DEFAULT_RESOLUTION
        value = self.options["if_tsresol"]
        if isinstance(value, TimestampResolution):
            return value
        return TimestampResolution.from_tsresol(value)

    @property
    def link_type_description(self):
        return link_types.describe(self.link_type)

    def interface_info(self):
        """What packet blocks referring to this interface need to know"""
        return InterfaceInfo(
            link_type=self.link_type,
            snaplen=self.snaplen,
            resolution=self.timestamp_resolution,
        )


class BlockWithTimestampMixin(object):
    """
    Block mixin adding a 64-bit ``timestamp`` field, counted in units of
    the resolution of the interface the block refers to.

    As an alternative, the ``timestamp_ns`` field can be set to a number of
    nanoseconds since the epoch: it will be converted to the interface
    resolution when the block is encoded.
    """

    __slots__ = []
    extra_fields = ("timestamp_ns",)

    def __init__(self, **kwargs):
        if kwargs.get("timestamp") is not None and kwargs.get("timestamp_ns") is not None:
            raise ValueError("Only one of timestamp and timestamp_ns can be set")
        super(BlockWithTimestampMixin, self).__init__(**kwargs)

    @property
    def timestamp_high(self):
        return self.timestamp >> 32

    @property
    def timestamp_low(self):
        return self.timestamp & 0xFFFFFFFF

    def _encoded_value(self, name, interface):
        if name == "timestamp" and self.timestamp_ns is not None:
            resolution = interface.resolution if interface else DEFAULT_RESOLUTION
            if self.timestamp_ns < 0:
                raise FieldOverflow("timestamp_ns cannot be negative")
            return resolution.ticks_from_nanoseconds(self.timestamp_ns)
        return super(BlockWithTimestampMixin, self)._encoded_value(name, interface)


class BlockWithInterfaceMixin(object):
    """
    Block mixin for blocks that refer to an interface through their
    ``interface_id`` field. This includes EnhancedPacket as well as
    InterfaceStatistics.
    """

    __slots__ = []


class BasePacketBlock(Block):
    """
    Base class for blocks with packet data.
    They must have these fields in their schema:

    * ``packet_len`` is the original amount of data that was "on the wire"
        (this can differ from ``captured_len``); defaults to the length of
        the packet data
    * ``packet_data`` is the actual binary packet data (of course)

    This class makes the ``captured_len`` a read-only property returning
    the current length of the packet data.
    """

    __slots__ = []
    readonly_fields = set(("captured_len",))

    @property
    def captured_len(self):
        return len(self.packet_data)

    @property
    def packet_len(self):
        plen = self._decoded.get("packet_len")
        if plen is None:
            return self.captured_len
        return plen

    def _check_snaplen(self, interface):
        if interface is None or not interface.snaplen:
            return
        if self.captured_len > interface.snaplen:
            raise CapturedLengthExceedsSnapshot(
                "{cls} has {got} bytes of packet data, interface snap length "
                "is {snaplen}".format(
                    cls=self.__class__.__name__,
                    got=self.captured_len,
                    snaplen=interface.snaplen,
                )
            )


class EnhancedPacket(BlockWithTimestampMixin, BlockWithInterfaceMixin, BasePacketBlock):
    """
    "An Enhanced Packet Block (EPB) is the standard container for storing the
    packets coming from the network."
    - pcapng draft, section 4.3.
    """

    magic_number = BLK_ENHANCED_PACKET
    __slots__ = []
    schema = [
        ("interface_id", IntField(32, False), 0),
        ("timestamp", TimestampField(), 0),
        ("captured_len", IntField(32, False), 0),
        ("packet_len", IntField(32, False), None),
        ("packet_data", PacketBytes(), b""),
        ("options", OptionsField(ENHANCED_PACKET_OPTIONS), None),
    ]

    def _check(self, interface):
        self._check_snaplen(interface)

    def _encoded_value(self, name, interface):
        if name == "packet_len" and self.packet_len < self.captured_len:
            strictness.problem(
                "EnhancedPacket original length {} is smaller than captured "
                "length {}".format(self.packet_len, self.captured_len)
            )
            if strictness.should_fix():
                return self.captured_len
        return super(EnhancedPacket, self)._encoded_value(name, interface)


class SimplePacket(BasePacketBlock):
    """
    "The Simple Packet Block (SPB) is a lightweight container for storing the
    packets coming from the network."
    - pcapng draft, section 4.4.

    It has no interface id (the first interface of the section is implied)
    and no options.
    """

    magic_number = BLK_PACKET_SIMPLE
    __slots__ = []
    schema = [
        # packet_len is NOT the captured length
        ("packet_len", IntField(32, False), None),
        ("packet_data", PacketBytes(), b""),
    ]

    def __init__(self, **kwargs):
        if "options" in kwargs:
            raise UnsupportedOption("SimplePacket blocks cannot have options")
        super(SimplePacket, self).__init__(**kwargs)

    def _check(self, interface):
        """
        "...the SnapLen value MUST be used to determine the size of the Packet
        Data field length."
        """
        self._check_snaplen(interface)
        expected = self.packet_len
        if interface is not None and interface.snaplen:
            expected = min(expected, interface.snaplen)
        if self.captured_len != expected:
            strictness.problem(
                "SimplePacket has {} bytes of packet data, readers will "
                "expect {}".format(self.captured_len, expected)
            )


class InterfaceStatistics(BlockWithTimestampMixin, BlockWithInterfaceMixin, Block):
    """
    "The Interface Statistics Block (ISB) contains the capture statistics for a
    given interface [...]. The statistics are referred to the interface defined
    in the current Section identified by the Interface ID field."
    - pcapng draft, section 4.6.
    """

    magic_number = BLK_INTERFACE_STATS
    __slots__ = []
    schema = [
        ("interface_id", IntField(32, False), 0),
        ("timestamp", TimestampField(), 0),
        ("options", OptionsField(INTERFACE_STATISTICS_OPTIONS), None),
    ]
