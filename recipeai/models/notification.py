"""User-facing notification models."""

from typing import List, Literal

from pydantic import BaseModel

NotificationLevel = Literal["success", "info", "warning", "error"]


class Notification(BaseModel):
    """Transient message shown to the user alongside a result."""

    level: NotificationLevel
    message: str


class Notifier:
    """Collects notifications raised while serving a single request."""

    def __init__(self) -> None:
        self._items: List[Notification] = []

    def success(self, message: str) -> None:
        self._items.append(Notification(level="success", message=message))

    def info(self, message: str) -> None:
        self._items.append(Notification(level="info", message=message))

    def warning(self, message: str) -> None:
        self._items.append(Notification(level="warning", message=message))

    def error(self, message: str) -> None:
        self._items.append(Notification(level="error", message=message))

    @property
    def items(self) -> List[Notification]:
        return list(self._items)

    def drain(self) -> List[Notification]:
        """Return collected notifications and reset the collector."""
        items, self._items = self._items, []
        return items
