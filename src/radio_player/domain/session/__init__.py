"""Session domain - the station list, selection and user notifications."""

from .host import CONNECTION_ERROR, Notification, Notifier, SessionHost, StationSource

__all__ = [
    "CONNECTION_ERROR",
    "Notification",
    "Notifier",
    "SessionHost",
    "StationSource",
]
