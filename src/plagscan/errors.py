"""Exceptions raised by PlagScan."""

from __future__ import annotations


class PlagScanError(Exception):
    """Base class for all PlagScan errors."""


class InvalidParameter(PlagScanError, ValueError):
    """Raised when hashing or extraction parameters are out of range."""


class ExtractionError(PlagScanError):
    """Raised when text cannot be extracted from a document."""


class SourceError(PlagScanError):
    """Raised when a remote source cannot be queried."""
