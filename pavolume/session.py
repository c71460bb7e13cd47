#!/usr/bin/env python3
"""
session.py - interactive adjustment mode

An InteractiveSession is either idle or active with a target node. While it
is active the host has the interactive keymap installed, and every handler
bound in that keymap receives the session so it can find the target.
"""
import logging
from typing import Callable, Dict, Optional

from .backend import AudioBackend
from .listing import AudioNode

logger = logging.getLogger(__name__)

Keymap = Dict[str, Callable[["InteractiveSession"], object]]


class InteractiveSession:
    """Idle / Active(target) state owned by the host's dispatch loop"""

    def __init__(self, host, backend: AudioBackend, keymap: Keymap):
        self.host = host
        self.backend = backend
        self.keymap = keymap
        self._target: Optional[AudioNode] = None
        self._keymap_installed = False

    @property
    def active(self) -> bool:
        return self._target is not None

    @property
    def target(self) -> Optional[AudioNode]:
        return self._target

    def enter(self, target: Optional[AudioNode] = None) -> AudioNode:
        """
        Enter interactive mode on target, or on the default sink.

        Entering while already active switches the target. If resolving the
        target fails the keymap is restored and the session stays idle.

        Returns:
            The node now targeted
        """
        if not self._keymap_installed:
            self.host.install_keymap(self.keymap)
            self._keymap_installed = True
        try:
            if target is None:
                target = self.backend.resolve_default()
        except Exception:
            logger.debug("Could not resolve interactive target, leaving interactive mode")
            self._teardown()
            raise
        self._target = target
        logger.debug(f"Interactive mode on {target.label}")
        return target

    def exit(self) -> bool:
        """
        Leave interactive mode and restore the previous keymap.

        Returns:
            False if the session was not active
        """
        if not self.active:
            logger.warning("exit requested but interactive mode is not active")
            self.host.display_message("Not in interactive mode")
            return False
        self._teardown()
        logger.debug("Left interactive mode")
        return True

    def _teardown(self):
        self._target = None
        if self._keymap_installed:
            self._keymap_installed = False
            self.host.restore_keymap()
