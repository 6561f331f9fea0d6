"""Generic constants"""

# Byte order magic number, as written in the section header
# ----------------------------------------

BYTE_ORDER_MAGIC = 0x1A2B3C4D

# Section length value meaning "not specified"
SECTION_LENGTH_UNKNOWN = -1

# Supported format version
VERSION_MAJOR = 1
VERSION_MINOR = 0

# Endianness markers, in the format used by the ``struct`` module

ENDIAN_LITTLE = "<"
ENDIAN_BIG = ">"
