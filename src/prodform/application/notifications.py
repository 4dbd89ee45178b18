"""Notification port.

The controller reports every outcome through a NotificationSink. Sinks
are fire-and-forget: nothing they return feeds back into control flow.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    title: str
    message: str

    @classmethod
    def success(cls, message: str) -> Notification:
        return cls(NotificationKind.SUCCESS, "Success", message)

    @classmethod
    def error(cls, message: str) -> Notification:
        return cls(NotificationKind.ERROR, "Error", message)


class NotificationSink(ABC):

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        """Surface an outcome to the user."""
