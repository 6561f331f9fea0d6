# PCAPNG Block types supported for writing

BLK_INTERFACE = 0x00000001  # Interface Description Block
BLK_PACKET_SIMPLE = 0x00000003  # Simple Packet Block
BLK_INTERFACE_STATS = 0x00000005  # Interface Statistics Block
BLK_ENHANCED_PACKET = 0x00000006  # Enhanced Packet Block
BLK_SECTION_HEADER = 0x0A0D0D0A  # Section Header Block
