class PcapngException(Exception):
    """Base for all the pcapng exceptions"""

    pass


class PcapngWarning(Warning):
    """Base for all the pcapng warnings"""

    pass


class PcapngDumpError(PcapngException):
    """Indicate an error while writing a pcapng file"""

    pass


class PcapngStrictnessError(PcapngException):
    """Indicate a condition about poorly formed pcapng files"""


class PcapngStrictnessWarning(PcapngWarning):
    """Indicate a condition about poorly formed pcapng files"""


class UnsupportedOption(PcapngDumpError):
    """
    Exception used to indicate an option code (or name) which is not part
    of the vocabulary of the block it was given to.
    """

    pass


class FieldOverflow(PcapngDumpError):
    """
    Exception used to indicate that a value does not fit into the
    wire-sized field it must be written to (eg. a string longer than
    65535 octets in an option, or a negative length).
    """

    pass


class InvalidInterfaceReference(PcapngDumpError):
    """
    Exception used to indicate that a block refers to an interface id
    which has not been declared (yet) in the current section.
    """

    pass


class CapturedLengthExceedsSnapshot(PcapngDumpError):
    """
    Exception used to indicate packet data longer than the snap length
    declared by the capturing interface.
    """

    pass


class SectionNotStarted(PcapngDumpError):
    """
    Exception used to indicate an attempt to write a block before any
    section header was written.
    """

    pass


class SinkWriteFailure(PcapngDumpError):
    """
    Exception indicating that the output stream rejected a write, or
    accepted fewer bytes than it was given. The original error, if any,
    is available as ``__cause__``.
    """

    pass
