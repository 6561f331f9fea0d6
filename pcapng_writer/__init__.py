# ----------------------------------------------------------------------
# Library to write pcap-ng files
#
# See: https://tools.ietf.org/html/draft-tuexen-opsawg-pcapng-02
# ----------------------------------------------------------------------

from .blocks import (  # noqa
    EnhancedPacket,
    InterfaceDescription,
    InterfaceInfo,
    InterfaceStatistics,
    SectionHeader,
    SimplePacket,
)
from .exceptions import (  # noqa
    CapturedLengthExceedsSnapshot,
    FieldOverflow,
    InvalidInterfaceReference,
    PcapngDumpError,
    PcapngException,
    SectionNotStarted,
    SinkWriteFailure,
    UnsupportedOption,
)
from .flags import EPBFlags, PacketDirection, ReceptionType  # noqa
from .options import Options  # noqa
from .strictness import Strictness, set_strictness  # noqa
from .utils import (  # noqa
    DEFAULT_RESOLUTION,
    MICROSECOND_RESOLUTION,
    NANOSECOND_RESOLUTION,
    TimestampResolution,
)
from .writer import PcapngWriter  # noqa
