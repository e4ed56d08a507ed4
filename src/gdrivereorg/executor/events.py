"""Progress events published while a plan runs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional

logger = logging.getLogger(__name__)

EventType = Literal["folder-create", "file-move", "folder-delete"]


@dataclass(slots=True, frozen=True)
class ProgressEvent:
    """Structured outcome of one operation."""

    type: EventType
    success: bool
    name: str
    id: Optional[str] = None
    file_id: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type, "success": self.success, "name": self.name}
        if self.id is not None:
            out["id"] = self.id
        if self.file_id is not None:
            out["fileId"] = self.file_id
        if self.error is not None:
            out["error"] = self.error
        return out


ProgressObserver = Callable[[str, Optional[ProgressEvent]], None]


class ProgressEmitter:
    """
    Fan-out of progress messages to any number of observers.

    An observer that raises is logged and skipped; the remaining observers
    and the running operation are unaffected.
    """

    def __init__(self) -> None:
        self._observers: list[ProgressObserver] = []

    def subscribe(self, observer: ProgressObserver) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: ProgressObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def emit(self, message: str, event: Optional[ProgressEvent] = None) -> None:
        for observer in list(self._observers):
            try:
                observer(message, event)
            except Exception:
                logger.exception("Progress observer %r failed", observer)


class LoggingObserver:
    """Writes every progress message to a logger."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._log = log or logger

    def __call__(self, message: str, event: Optional[ProgressEvent]) -> None:
        if event is not None and not event.success:
            self._log.warning("%s (%s)", message, event.error)
            return
        self._log.info("%s", message)
