#!/usr/bin/env python

import argparse
import logging
import time

import pcapng_writer.blocks as blocks
from pcapng_writer import NANOSECOND_RESOLUTION, EPBFlags, PcapngWriter

parser = argparse.ArgumentParser()
parser.add_argument("outfile", type=argparse.FileType("wb"))
parser.add_argument("--big-endian", action="store_true")
parser.add_argument("--count", type=int, default=3, help="packets to write")
parser.add_argument("--verbose", "-v", action="store_true")
args = parser.parse_args()

if args.verbose:
    logging.basicConfig(level=logging.DEBUG)

shb = blocks.SectionHeader(
    endianness=">" if args.big_endian else "<",
    options={"opt_comment": "generated by python-pcapng-writer"},
)
idb = blocks.InterfaceDescription(
    link_type=1,
    snaplen=65535,
    options={
        "if_name": "eth0",
        "if_description": "Hand-rolled",
        "if_IPv4addr": ("127.0.0.1", "255.0.0.0"),
        "if_MACaddr": "11:22:33:dd:aa:00",
        "if_tsresol": NANOSECOND_RESOLUTION,
    },
)

# PcapngWriter() immediately writes the SHB, if you pass one
writer = PcapngWriter(args.outfile, shb)
writer.append(idb)

# fmt: off
test_pl = (
        0xff, 0xff, 0xff, 0xff, 0xff, 0xff,     # dest MAC
        0x11, 0x22, 0x33, 0xdd, 0xaa, 0x00,     # src MAC
        0x08, 0x00,                             # ethertype (ipv4)
        0x45, 0x00, 0x00, 31,                   # IP start
        0x00, 0x00, 0x00, 0x00,                 # ID+flags
        0xfe, 17,                               # TTL, UDP
        0x00, 0x00,                             # checksum
        127, 0, 0, 1,                           # src IP
        127, 0, 0, 2,                           # dst IP
        0x12, 0x34, 0x56, 0x78,                 # src/dst ports
        0x00, 11,                               # length
        0x00, 0x00,                             # checksum
        0x44, 0x41, 0x50,                       # Payload
)
# fmt: on

for i in range(args.count):
    epb = blocks.EnhancedPacket(
        interface_id=0,
        timestamp_ns=time.time_ns(),
        packet_data=bytes(test_pl),
        options={"epb_flags": EPBFlags(direction="outbound", reception="unicast")},
    )
    if i == 0:
        epb.options["opt_comment"] = "first packet"
    writer.append(epb)

writer.append(
    blocks.InterfaceStatistics(
        interface_id=0,
        timestamp_ns=time.time_ns(),
        options={"opt_comment": "{} packets sent".format(args.count)},
    )
)
