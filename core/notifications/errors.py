"""
Errors raised while resolving or dispatching notifications.

Zero matching recipients is not an error; it is reported in the result.
"""
from __future__ import annotations


class NotificationError(Exception):
    """Base class for notification failures."""


class InvalidArgument(NotificationError):
    """The request carried a malformed identifier or an unknown audience."""


class CollaboratorUnavailable(NotificationError):
    """A store or queue raised while recipients were being resolved."""


__all__ = ["NotificationError", "InvalidArgument", "CollaboratorUnavailable"]
