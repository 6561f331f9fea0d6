# Option codes, per block kind
# ------------------------------------------------------------

# Generic options
# ----------------------------------------

# Delimits the end of the optional fields. Never supplied by the user,
# it is appended automatically after a non-empty list of options.
OPT_ENDOFOPT = 0

# A UTF-8 string containing a comment associated to the current block.
OPT_COMMENT = 1

# Interface description options
# ----------------------------------------

# A UTF-8 string containing the name of the device used to capture data.
OPT_IF_NAME = 2

# A UTF-8 string containing the description of the device used to
# capture data.
OPT_IF_DESCRIPTION = 3

# Interface network address and netmask (4 + 4 octets).
OPT_IF_IPV4ADDR = 4

# Interface network address and prefix length (16 + 1 octets).
OPT_IF_IPV6ADDR = 5

# Interface hardware MAC address (48 bits).
OPT_IF_MACADDR = 6

# Resolution of timestamps (one octet).
OPT_IF_TSRESOL = 9

# Enhanced packet options
# ----------------------------------------

# A 32-bit flags word containing link-layer information.
OPT_EPB_FLAGS = 2
