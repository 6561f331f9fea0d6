# Link-layer header types, for the ``link_type`` field of interface
# description blocks. Values from:
# https://www.tcpdump.org/linktypes.html

# BSD loopback encapsulation; a 4-byte host-byte-order AF_ value
# precedes the L3 packet.
LINKTYPE_NULL = 0

# IEEE 802.3 Ethernet
LINKTYPE_ETHERNET = 1

# IEEE 802.5 Token Ring
LINKTYPE_TOKEN_RING = 6

# Point-to-point Protocol
LINKTYPE_PPP = 9

# FDDI
LINKTYPE_FDDI = 10

# PPP in HDLC-like framing
LINKTYPE_PPP_HDLC = 50

# Raw IP; the packet begins with an IPv4 or IPv6 header
LINKTYPE_RAW = 101

# Cisco PPP with HDLC framing
LINKTYPE_C_HDLC = 104

# IEEE 802.11 wireless LAN
LINKTYPE_IEEE802_11 = 105

# OpenBSD loopback encapsulation
LINKTYPE_LOOP = 108

# Linux "cooked" capture encapsulation
LINKTYPE_LINUX_SLL = 113

# Radiotap link-layer information followed by an 802.11 header
LINKTYPE_IEEE802_11_RADIOTAP = 127

# Bluetooth HCI UART transport layer, with pseudo-header
LINKTYPE_BLUETOOTH_HCI_H4_WITH_PHDR = 201

# PPP, with a one-byte direction pseudo-header
LINKTYPE_PPP_WITH_DIR = 204

# IEEE 802.15.4 Low-Rate Wireless Networks, with FCS
LINKTYPE_IEEE802_15_4_WITHFCS = 195

# USB packets, with Linux USB header and padding
LINKTYPE_USB_LINUX_MMAPPED = 220

# Raw IPv4; the packet begins with an IPv4 header
LINKTYPE_IPV4 = 228

# Raw IPv6; the packet begins with an IPv6 header
LINKTYPE_IPV6 = 229

# Bluetooth Low Energy link-layer packets
LINKTYPE_BLUETOOTH_LE_LL = 251

# Upper-protocol layer PDU saves from Wireshark
LINKTYPE_WIRESHARK_UPPER_PDU = 252

# Linux netlink NETLINK NFLOG socket log messages
LINKTYPE_NFLOG = 239

# Linux "cooked" capture encapsulation v2
LINKTYPE_LINUX_SLL2 = 276


LINKTYPE_DESCRIPTIONS = {
    LINKTYPE_NULL: "BSD loopback devices, except for later OpenBSD",
    LINKTYPE_ETHERNET: "Ethernet, and Linux loopback devices",
    LINKTYPE_TOKEN_RING: "802.5 Token Ring",
    LINKTYPE_PPP: "PPP",
    LINKTYPE_FDDI: "FDDI",
    LINKTYPE_PPP_HDLC: "PPP in HDLC-like framing",
    LINKTYPE_RAW: "Raw IP",
    LINKTYPE_C_HDLC: "Cisco HDLC",
    LINKTYPE_IEEE802_11: "IEEE 802.11 (wireless)",
    LINKTYPE_LOOP: "OpenBSD loopback",
    LINKTYPE_LINUX_SLL: "Linux cooked socket capture",
    LINKTYPE_IEEE802_11_RADIOTAP: "802.11 plus radiotap header",
    LINKTYPE_BLUETOOTH_HCI_H4_WITH_PHDR: "Bluetooth HCI UART with direction",
    LINKTYPE_PPP_WITH_DIR: "PPP with direction pseudo-header",
    LINKTYPE_IEEE802_15_4_WITHFCS: "IEEE 802.15.4 with FCS",
    LINKTYPE_USB_LINUX_MMAPPED: "Linux USB (memory-mapped header)",
    LINKTYPE_IPV4: "Raw IPv4",
    LINKTYPE_IPV6: "Raw IPv6",
    LINKTYPE_BLUETOOTH_LE_LL: "Bluetooth Low Energy link layer",
    LINKTYPE_WIRESHARK_UPPER_PDU: "Wireshark upper-protocol PDU",
    LINKTYPE_NFLOG: "Linux NFLOG",
    LINKTYPE_LINUX_SLL2: "Linux cooked socket capture v2",
}


def describe(link_type):
    try:
        return LINKTYPE_DESCRIPTIONS[link_type]
    except KeyError:
        return "Unknown link type: 0x{0:04x}".format(link_type)
