"""Exceptions raised by the interpreter.

Nothing in the core is recoverable: every error below either stops construction
before the first cycle or halts execution for good.
"""


class Nibble8Error(Exception):
    """Base class for all interpreter errors."""


class ROMLoadError(Nibble8Error):
    """ROM file could not be read."""


class ROMTooLargeError(Nibble8Error):
    """Program image does not fit between PROGRAM_START and the end of memory."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"ROM is {size} bytes, at most {limit} bytes fit in memory")


class MemoryAccessError(Nibble8Error):
    """Read or write outside of the addressable range."""

    def __init__(self, address: int, length: int = 1):
        self.address = address
        self.length = length
        super().__init__(f"Memory access out of range: 0x{address:04X} (+{length})")


class StackUnderflowError(Nibble8Error):
    """RET executed with an empty call stack."""


class UnknownInstructionError(Nibble8Error):
    """An instruction outside the supported set reached the execute stage."""

    def __init__(self, high: int, low: int):
        self.high = high
        self.low = low
        super().__init__(f"Unknown instruction 0x{high:02X}{low:02X}")
