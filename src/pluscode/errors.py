"""
Exceptions raised by the pluscode package.

Grammar checks never raise; these are only used when an invalid value is
used to build something or an operation does not apply to a code's shape.
"""


class PlusCodeError(Exception):
    """Base class for all pluscode errors."""


class InvalidCodeError(PlusCodeError, ValueError):
    """A string that is not a valid Open Location Code was used to build one."""


class InvalidCodeLengthError(PlusCodeError, ValueError):
    """The requested number of digits cannot be encoded."""


class ReferenceTooFarError(PlusCodeError, ValueError):
    """The reference location is too far away to shorten the code."""


class IllegalCodeOperationError(PlusCodeError, RuntimeError):
    """The operation is not defined for this kind of code (short or padded)."""


class UnsupportedPlatformError(PlusCodeError, RuntimeError):
    """The integer calculator needs 64-bit native integers."""
