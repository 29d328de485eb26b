"""
lswtpy.errors
=============
Exceptions raised by the extraction pipeline.

Missing input files raise the built-in ``FileNotFoundError`` and unwritable
output paths raise ``OSError``; everything specific to gridded LSWT data
derives from ``LSWTError``.
"""


class LSWTError(Exception):
    """Base class for lswtpy errors."""


class FormatError(LSWTError, ValueError):
    """The container cannot be decoded or lacks a required variable/dimension."""


class MetadataError(LSWTError, ValueError):
    """A fill-value or time-units attribute is missing or malformed."""


class ShapeMismatchError(LSWTError, ValueError):
    """Coordinate triples and data values do not line up one-to-one."""
