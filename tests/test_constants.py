from pcapng_writer.constants import link_types
from pcapng_writer.constants.block_types import (
    BLK_ENHANCED_PACKET,
    BLK_INTERFACE,
    BLK_INTERFACE_STATS,
    BLK_PACKET_SIMPLE,
    BLK_SECTION_HEADER,
)


def test_block_types():
    assert BLK_SECTION_HEADER == 0x0A0D0D0A
    assert BLK_INTERFACE == 1
    assert BLK_PACKET_SIMPLE == 3
    assert BLK_INTERFACE_STATS == 5
    assert BLK_ENHANCED_PACKET == 6


def test_describe_link_type():
    assert link_types.LINKTYPE_ETHERNET == 1
    assert link_types.describe(1) == "Ethernet, and Linux loopback devices"
    assert link_types.describe(0xBEEF) == "Unknown link type: 0xbeef"
