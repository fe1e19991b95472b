# src/strady/domain/errors.py


class StradyError(Exception):
    """Base class for errors raised by the Strady.imo core."""


class InvalidInputError(StradyError, ValueError):
    """Client-supplied investment model cannot be computed (maps to HTTP 400)."""


class UploadFailedError(StradyError):
    """Rate file could not be written; the cached table is left untouched."""


class RateFileError(StradyError, ValueError):
    """Rate file cannot be read as delimited text (bad encoding, broken quoting)."""
