"""
Encoding of block "options".

Each option is composed by:

- option_code (uint16)
- value_length (uint16), the length of the value *before* padding
- value (value_length-sized binary data, padded to 32 bits)

A non-empty list of options is terminated by an ``opt_endofopt`` option
(code ``0x0000``, length 0); an empty list is not written at all.

Which options are valid depends on the kind of block they belong to: each
block kind has a schema, a list of :py:class:`Option` definitions, on top
of the ones common to all blocks.
"""

import ipaddress
from collections import namedtuple
from collections.abc import Mapping

from pcapng_writer import strictness as strictness
from pcapng_writer.constants import option_codes as codes
from pcapng_writer.exceptions import FieldOverflow, UnsupportedOption
from pcapng_writer.structs import StructField, pack_int, write_bytes_padded
from pcapng_writer.utils import (
    TimestampResolution,
    pack_ipv4,
    pack_ipv6,
    pack_macaddr,
    padding_size,
)

# Type name constants, to keep a list and prevent typos
TYPE_STRING = "string"
TYPE_IPV4_MASK = "ipv4+mask"
TYPE_IPV6_PREFIX = "ipv6+prefix"
TYPE_MACADDR = "macaddr"
TYPE_TSRESOL = "tsresol"
TYPE_EPBFLAGS = "epb_flags"

MAX_OPTION_LENGTH = 0xFFFF

# Class representing a single option schema for Options.
# require code and name; by default, empty ftype, forbid multiples
Option = namedtuple(
    "Option", ("code", "name", "ftype", "multiple"), defaults=(None, False)
)

# Common to all the blocks supporting options
COMMON_OPTIONS = [
    Option(codes.OPT_ENDOFOPT, "opt_endofopt"),
    Option(codes.OPT_COMMENT, "opt_comment", TYPE_STRING, multiple=True),
]

SECTION_HEADER_OPTIONS = []

INTERFACE_DESCRIPTION_OPTIONS = [
    Option(codes.OPT_IF_NAME, "if_name", TYPE_STRING),
    Option(codes.OPT_IF_DESCRIPTION, "if_description", TYPE_STRING),
    Option(codes.OPT_IF_IPV4ADDR, "if_IPv4addr", TYPE_IPV4_MASK, multiple=True),
    Option(codes.OPT_IF_IPV6ADDR, "if_IPv6addr", TYPE_IPV6_PREFIX, multiple=True),
    Option(codes.OPT_IF_MACADDR, "if_MACaddr", TYPE_MACADDR),
    Option(codes.OPT_IF_TSRESOL, "if_tsresol", TYPE_TSRESOL),
]

ENHANCED_PACKET_OPTIONS = [
    Option(codes.OPT_EPB_FLAGS, "epb_flags", TYPE_EPBFLAGS),
]

INTERFACE_STATISTICS_OPTIONS = []


def make_schema(options_schema):
    """
    Build the ``{code: Option}`` mapping for a block kind, given the
    options specific to that kind.
    """
    schema = {}
    for item in COMMON_OPTIONS + list(options_schema):
        if not isinstance(item, Option):
            raise TypeError("expected option, got '{}'".format(item))
        schema[item.code] = item
    return schema


def _encode_string(value):
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise TypeError("Expected a string, got {!r}".format(value))


def _encode_ipv4_mask(value):
    if isinstance(value, str):
        # "192.0.2.1/24" or "192.0.2.1/255.255.255.0"
        iface = ipaddress.IPv4Interface(value)
        return iface.ip.packed + iface.netmask.packed
    address, netmask = value
    return pack_ipv4(address) + pack_ipv4(netmask)


def _encode_ipv6_prefix(value):
    if isinstance(value, str):
        iface = ipaddress.IPv6Interface(value)
        return iface.ip.packed + bytes((iface.network.prefixlen,))
    address, prefix_len = value
    if not 0 <= prefix_len <= 128:
        raise ValueError("Invalid IPv6 prefix length: {!r}".format(prefix_len))
    return pack_ipv6(address) + bytes((prefix_len,))


def _encode_macaddr(value):
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 6:
            raise ValueError("MAC address must be 6 bytes long")
        return bytes(value)
    return pack_macaddr(value)


def _encode_tsresol(value):
    if isinstance(value, TimestampResolution):
        return bytes((value.to_tsresol(),))
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 1:
            raise FieldOverflow("if_tsresol must be exactly one byte")
        return bytes(value)
    if not 0 <= value <= 0xFF:
        raise FieldOverflow("if_tsresol value {} does not fit in one byte".format(value))
    return bytes((value,))


def encode_value(value, ftype, endianness):
    """
    Encode an option value (unpadded) according to its type.

    :param value: the value, in its "nice" form (eg. a string)
    :param ftype: one of the ``TYPE_*`` constants
    :param endianness: the byte order of the section, used by numeric types
    """
    if ftype == TYPE_STRING:
        return _encode_string(value)

    if ftype == TYPE_IPV4_MASK:
        return _encode_ipv4_mask(value)

    if ftype == TYPE_IPV6_PREFIX:
        return _encode_ipv6_prefix(value)

    if ftype == TYPE_MACADDR:
        return _encode_macaddr(value)

    if ftype == TYPE_TSRESOL:
        return _encode_tsresol(value)

    if ftype == TYPE_EPBFLAGS:
        return pack_int(int(value), 32, False, endianness)

    raise ValueError("Unsupported field type: {0}".format(ftype))


def encode_option(code, value, schema, endianness):
    """
    Encode a single option: code, length, value and padding.

    :param code: the numeric option code
    :param value: the option value
    :param schema: the ``{code: Option}`` mapping of the enclosing block kind
        (see :py:func:`make_schema`)
    :param endianness: the byte order of the section
    :raises: :py:exc:`~pcapng_writer.exceptions.UnsupportedOption` if the
        code is not valid for the block kind
    :raises: :py:exc:`~pcapng_writer.exceptions.FieldOverflow` if the
        encoded value does not fit the 16-bit length field
    """
    if code == codes.OPT_ENDOFOPT or code not in schema:
        raise UnsupportedOption("Option code {} is not supported here".format(code))
    opt = schema[code]
    raw = encode_value(value, opt.ftype, endianness)
    if len(raw) > MAX_OPTION_LENGTH:
        raise FieldOverflow(
            "Option '{}' is {} bytes long (max {})".format(
                opt.name, len(raw), MAX_OPTION_LENGTH
            )
        )
    return (
        pack_int(code, 16, False, endianness)
        + pack_int(len(raw), 16, False, endianness)
        + raw
        + bytes(padding_size(len(raw)))
    )


def encode_options(options, endianness):
    """
    Encode a whole :py:class:`Options` collection, in insertion order,
    followed by the end marker. Returns empty bytes if there are no options.
    """
    entries = options.entries()
    if not entries:
        # Options are optional; if there are none we don't need opt_endofopt
        return b""

    encoded = [
        encode_option(code, value, options.schema, endianness)
        for code, value in entries
    ]
    encoded.append(pack_int(codes.OPT_ENDOFOPT, 16, False, endianness))
    encoded.append(pack_int(0, 16, False, endianness))
    return b"".join(encoded)


class Options(Mapping):
    """
    Wrapper object holding the options of a block.

    Fields can be accessed either by numerical code or by name. Values are
    kept in the order they were added, which is also the order in which
    they will be written.

    .. note::

        When iterating the object (or calling :py:meth:`keys`) option names
        are returned, each only once even if the option is repeated.

    :param schema:
        Definition of the known options: a list of Option objects. Options
        common to all blocks (``opt_comment``) are added automatically.

        The following value types are currently supported:

        - ``string``: an unicode string, written in utf-8 encoding
        - ``ipv4+mask``: a ``(address, netmask)`` pair, or an
          ``"address/netmask"`` string [8 bytes]
        - ``ipv6+prefix``: a ``(address, prefix_length)`` pair, or an
          ``"address/prefix"`` string [17 bytes]
        - ``macaddr``: a ``"aa:bb:cc:dd:ee:ff"`` mac address [6 bytes]
        - ``tsresol``: a :py:class:`~pcapng_writer.utils.TimestampResolution`,
          or the raw one-byte value
        - ``epb_flags``: an :py:class:`~pcapng_writer.flags.EPBFlags` or
          integer [4 bytes]

    :param data:
        Initial data for the options: either a mapping of ``name: value``
        items (where a list value means a repeated option), or a sequence of
        ``(name, value)`` pairs.
    """

    __slots__ = [
        "schema",
        "_field_names",
        "_entries",
    ]

    def __init__(self, schema, data=None):
        self.schema = make_schema(schema)  # {<code>: Option(...)}
        self._field_names = {x.name: x.code for x in self.schema.values()}
        self._entries = []  # [(code, value), ...] in wire order

        if data is None:
            return
        if isinstance(data, Options):
            # Go through names: the same code means different options
            # in different block kinds
            for code, value in data.entries():
                self.add(data.schema[code].name, value)
        elif isinstance(data, Mapping):
            for key, value in data.items():
                self[key] = value
        else:
            for key, value in data:
                self.add(key, value)

    # -------------------- Nice interface :) --------------------

    def __eq__(self, other):
        if not isinstance(other, Options):
            return NotImplemented
        return self._entries == other._entries

    def __getitem__(self, name):
        code = self._resolve_name(name)
        for ecode, value in self._entries:
            if ecode == code:
                return value
        raise KeyError(name)

    def __len__(self):
        return len(self._codes())

    def __iter__(self):
        for code in self._codes():
            yield self.schema[code].name

    def __contains__(self, name):
        try:
            code = self._resolve_name(name)
        except UnsupportedOption:
            return False
        return code in self._codes()

    def __setitem__(self, name, value):
        code = self._resolve_name(name)
        if isinstance(value, list):
            # We're being assigned a list, use its values for our list
            values = value
        else:
            values = [value]
        entries = [x for x in self._entries if x[0] != code]
        entries.extend((code, v) for v in values)
        self._entries = self._check_multiples(code, entries)

    def __delitem__(self, name):
        code = self._resolve_name(name)
        if code not in self._codes():
            raise KeyError(name)
        self._entries = [x for x in self._entries if x[0] != code]

    def get_all(self, name):
        """Get all values for the given option"""
        code = self._resolve_name(name)
        return [value for ecode, value in self._entries if ecode == code]

    def add(self, name, value):
        """Add a value to the given-named option"""
        code = self._resolve_name(name)
        self._entries = self._check_multiples(code, self._entries + [(code, value)])

    def entries(self):
        """All the ``(code, value)`` pairs, in the order they'll be written"""
        return list(self._entries)

    def __repr__(self):
        args = [(self.schema[code].name, value) for code, value in self._entries]
        return "{0}({1!r})".format(self.__class__.__name__, args)

    # -------------------- Internal methods --------------------

    def _codes(self):
        seen = []
        for code, _ in self._entries:
            if code not in seen:
                seen.append(code)
        return seen

    def _check_multiples(self, code, entries):
        """
        Check if a non-repeatable option is repeated in ``entries``;
        returns the entries to keep.
        """
        count = sum(1 for ecode, _ in entries if ecode == code)
        if count < 2 or self.schema[code].multiple:
            return entries
        strictness.problem(
            "repeated option {} '{}' not permitted by the pcapng format".format(
                code, self.schema[code].name
            )
        )
        if not strictness.should_fix():
            return entries
        # Keep the first occurrence only
        fixed, seen = [], False
        for ecode, value in entries:
            if ecode == code:
                if seen:
                    continue
                seen = True
            fixed.append((ecode, value))
        return fixed

    def _resolve_name(self, name):
        code = self._field_names.get(name, name)
        if code == codes.OPT_ENDOFOPT:
            # opt_endofopt is special and should never be touched by the user
            raise UnsupportedOption(
                "opt_endofopt is added automatically and cannot be set"
            )
        if isinstance(code, bool) or not isinstance(code, int) or code not in self.schema:
            raise UnsupportedOption(
                "Option {!r} is not supported for this block".format(name)
            )
        return code


class OptionsField(StructField):
    """
    Field containing some options.

    :param options_schema:
        Same as the ``schema`` parameter to :py:class:`Options` class
        constructor.
    """

    __slots__ = ["options_schema"]

    def __init__(self, options_schema):
        self.options_schema = options_schema

    def encode(self, options, stream, endianness):
        schema = make_schema(self.options_schema)
        for code, _ in options.entries():
            opt = schema.get(code)
            if opt is None or opt.name != options.schema[code].name:
                raise UnsupportedOption(
                    "Option '{}' is not supported here".format(
                        options.schema[code].name
                    )
                )
        write_bytes_padded(stream, encode_options(options, endianness))

    def __repr__(self):
        return "{0}({1!r})".format(self.__class__.__name__, self.options_schema)
