from __future__ import annotations


class LayoutRequestError(Exception):
    """Raised when a layout request cannot be served with the supplied events."""


class InvalidEventInterval(LayoutRequestError):
    def __init__(self, event_id: str, message: str | None = None) -> None:
        self.event_id = event_id
        super().__init__(message or f"Event {event_id!r} must end after it starts.")
