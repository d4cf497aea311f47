"""Exceptions raised by the comparison engine."""
from __future__ import annotations


class DocumentComparisonError(Exception):
    """Base class for comparison engine errors."""


class InvalidDocumentError(DocumentComparisonError, ValueError):
    """A document is missing, of the wrong type, or internally inconsistent."""


class PositionOutOfRangeError(DocumentComparisonError, IndexError):
    """A position index query does not match any location in the document."""
