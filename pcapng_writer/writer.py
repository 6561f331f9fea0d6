import io
import logging

import pcapng_writer.blocks as blocks
from pcapng_writer import strictness as strictness
from pcapng_writer.exceptions import (
    InvalidInterfaceReference,
    SectionNotStarted,
    SinkWriteFailure,
)

logger = logging.getLogger(__name__)


class PcapngWriter(object):
    """
    pcap-ng stream writer.

    Blocks are appended one at a time; each one is encoded in the byte order
    of the current section and written to the stream immediately.

    The writer keeps track of the interfaces declared in the current section,
    so that packet and statistics blocks can be checked against (and have
    their timestamps converted for) the interface they refer to.
    """

    __slots__ = [
        "stream",
        "_endianness",
        "_interfaces",
    ]

    def __init__(self, stream, shb=None):
        """
        :param stream:
            a file-like object to which to write the data. Only its
            ``write()`` method is used; it is never flushed nor closed.

        :param shb:
            an optional :py:class:`pcapng_writer.blocks.SectionHeader`,
            appended right away to start the first section.
        """
        self.stream = stream
        self._endianness = None
        self._interfaces = []
        if shb is not None:
            if not isinstance(shb, blocks.SectionHeader):
                raise TypeError("not a SectionHeader")
            self.append(shb)

    @property
    def endianness(self):
        """Byte order of the current section, or None if none was started"""
        return self._endianness

    @property
    def interface_count(self):
        return len(self._interfaces)

    @property
    def interfaces(self):
        return tuple(self._interfaces)

    def interface(self, interface_id):
        """
        Get the :py:class:`~pcapng_writer.blocks.InterfaceInfo` for an
        interface declared in the current section.
        """
        return self._lookup(interface_id)

    def append(self, blk):
        """
        Encode and write the given block to the stream.

        If the block is a :py:class:`pcapng_writer.blocks.SectionHeader`, then
        a new section is started in the same output stream: interfaces
        declared in the previous section are forgotten, and the following
        blocks are written in the byte order of the new section.

        :param blk:
            a :py:class:`pcapng_writer.blocks.Block` to write.
        """
        if not isinstance(blk, blocks.Block):
            raise TypeError("not a pcapng block")

        if isinstance(blk, blocks.SectionHeader):
            self._write(blk.encode())
            # Starting a new section, so re-initialize
            self._endianness = blk.endianness
            self._interfaces = []
            logger.debug("Started new section (byte order %r)", blk.endianness)
            return

        if self._endianness is None:
            raise SectionNotStarted(
                "A SectionHeader must be written before any {}".format(
                    blk.__class__.__name__
                )
            )

        if isinstance(blk, blocks.InterfaceDescription):
            self._write(blk.encode(self._endianness))
            info = blk.interface_info()
            self._interfaces.append(info)
            logger.debug(
                "Registered interface %d (%s, snaplen %d)",
                len(self._interfaces) - 1,
                blk.link_type_description,
                info.snaplen,
            )
            return

        interface = None
        if isinstance(blk, blocks.BlockWithInterfaceMixin):
            interface = self._lookup(blk.interface_id)
        elif isinstance(blk, blocks.SimplePacket):
            # Simple packets implicitly refer to the first interface
            if len(self._interfaces) != 1:
                strictness.warn(
                    "SimplePacket written in a section with {} interfaces".format(
                        len(self._interfaces)
                    )
                )
            if self._interfaces:
                interface = self._interfaces[0]

        self._write(blk.encode(self._endianness, interface))
        logger.debug("Wrote %s", blk.__class__.__name__)

    def _lookup(self, interface_id):
        if (
            isinstance(interface_id, bool)
            or not isinstance(interface_id, int)
            or not 0 <= interface_id < len(self._interfaces)
        ):
            raise InvalidInterfaceReference(
                "Interface {!r} not declared in this section ({} known)".format(
                    interface_id, len(self._interfaces)
                )
            )
        return self._interfaces[interface_id]

    def _write(self, data):
        try:
            written = self.stream.write(data)
        except (OSError, ValueError) as e:
            # ValueError: the stream was closed
            raise SinkWriteFailure("Error writing to stream: {}".format(e)) from e
        if written is None and isinstance(self.stream, io.RawIOBase):
            # Non-blocking raw stream, nothing was written
            raise SinkWriteFailure("Stream would block, nothing written")
        # Other sinks may return None; that's taken as a full write
        if written is not None and written != len(data):
            raise SinkWriteFailure(
                "Short write: {} of {} bytes written".format(written, len(data))
            )
