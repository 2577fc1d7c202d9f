"""
Debtwise exception hierarchy.

All debtwise exceptions inherit from DebtwiseError, making it easy for consumers
to catch library-level errors while still distinguishing specific failure modes.
"""


class DebtwiseError(Exception):
    """Base exception class for all debtwise errors."""


class ConfigurationError(DebtwiseError):
    """Raised for configuration errors (missing keys, invalid values)."""


class InvalidInputError(DebtwiseError, ValueError):
    """Raised when numeric inputs are rejected before any computation runs."""


class LoanStoreError(DebtwiseError):
    """Raised for loan store errors (duplicate ids, unreadable files)."""


class LoanNotFoundError(LoanStoreError):
    """Raised when a loan id is not present in the store."""


class FileIOError(DebtwiseError):
    """Raised for file I/O errors."""
