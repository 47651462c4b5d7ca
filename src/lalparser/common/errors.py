# src/lalparser/common/errors.py
"""Errors raised by the LAL codec."""


class LALError(ValueError):
    """Base error for this package."""


class ParseError(LALError):
    """Raised when a caller hands the decoder no line at all."""


class CompileError(LALError):
    """Raised when a record cannot be written back to its line form."""
