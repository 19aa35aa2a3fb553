"""Exceptions raised by the filtering core.

Both derive from ValueError so callers that already guard against bad
arguments keep working, while entry points can tell the two apart.
"""


class FilterError(ValueError):
    """Base class for errors raised by the filtering core."""


class InvalidBufferError(FilterError):
    """Pixel buffer is malformed.

    Raised when width or height are not positive integers, or when the
    data length does not equal width * height * 4.
    """


class InvalidKernelError(FilterError):
    """Kernel size is not an odd integer >= 1."""
