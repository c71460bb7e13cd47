#!/usr/bin/env python3
"""
notify.py - show volume messages as desktop notifications

Messages go to org.freedesktop.Notifications on the session bus. Menus and
key input still use the terminal. Requires dbus-python (pip install
pavolume[notify]).
"""
import logging

import dbus

from .host import ConsoleHost

logger = logging.getLogger(__name__)

APP_NAME = "pavolume"
TRANSIENT_TIMEOUT_MS = 2000


class NotificationHost(ConsoleHost):
    """ConsoleHost that displays messages as freedesktop notifications"""

    def __init__(self, input_stream=None, output_stream=None, bus=None):
        super().__init__(input_stream, output_stream)
        bus = bus or dbus.SessionBus()
        self.notifications = dbus.Interface(
            bus.get_object("org.freedesktop.Notifications", "/org/freedesktop/Notifications"),
            "org.freedesktop.Notifications")
        # Reused so a new volume bar replaces the previous one
        self._notification_id = 0

    def _notify(self, text: str, timeout_ms: int):
        self._notification_id = int(self.notifications.Notify(
            APP_NAME, dbus.UInt32(self._notification_id), "audio-volume-medium",
            "Volume", text, [], {}, timeout_ms))
        logger.debug(f"Notification {self._notification_id}: {text}")

    def display_message(self, text: str):
        self._notify(text, TRANSIENT_TIMEOUT_MS)

    def display_persistent_message(self, text: str):
        self._notify(text, 0)
