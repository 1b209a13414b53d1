# viewextract/exceptions.py
"""
Exception hierarchy for viewextract.

A search that finds nothing, or an adjunct that is not attached to a window,
is never an error. These exceptions cover programming mistakes only.
"""
from typing import Any, Dict, Optional


class ViewExtractError(Exception):
    """
    Base exception for all viewextract errors.

    :param message: Human-readable error message.
    :param context: Optional extra details, useful when logging.
    """
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class UnknownNativeType(ViewExtractError):
    """A type tag string did not name any registered native view class."""


class TreeFormatError(ViewExtractError):
    """A serialized native tree description could not be parsed."""


class HostError(ViewExtractError):
    """The host was asked to lay out or update without a mounted root."""
