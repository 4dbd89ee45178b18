"""Terminal NotificationSink."""

from __future__ import annotations

import click

from prodform.application.notifications import (
    Notification,
    NotificationKind,
    NotificationSink,
)

_COLOURS = {
    NotificationKind.SUCCESS: "green",
    NotificationKind.ERROR: "red",
}


class ClickNotificationSink(NotificationSink):
    """Print notifications with click.

    One-shot commands turn the last error into a ClickException
    themselves, so they build the sink with ``echo_errors=False`` to
    avoid printing the message twice.
    """

    def __init__(self, echo_errors: bool = True) -> None:
        self._echo_errors = echo_errors
        self.last_error: str | None = None

    def notify(self, notification: Notification) -> None:
        if notification.kind is NotificationKind.ERROR:
            self.last_error = notification.message
            if not self._echo_errors:
                return
        click.secho(
            f"{notification.title}: {notification.message}",
            fg=_COLOURS[notification.kind],
            err=notification.kind is NotificationKind.ERROR,
        )
