#!/usr/bin/env python3
"""
host.py - the collaborator that shows messages, owns key dispatch and menus

pavolume never draws anything itself. Commands talk to a Host, which a window
manager integration can implement. ConsoleHost is the terminal version used
by the pavolume command: it reads one key (or word) per line.
"""
import sys
import logging
from typing import Any, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


class Host:
    """Interface the commands use to reach the user"""

    def display_message(self, text: str):
        raise NotImplementedError

    def display_persistent_message(self, text: str):
        raise NotImplementedError

    def install_keymap(self, keymap):
        raise NotImplementedError

    def restore_keymap(self):
        raise NotImplementedError

    def select_from_menu(self, items: Sequence[Tuple[str, Any]]) -> Optional[Any]:
        """Let the user pick one (label, value) item. Returns the value or None."""
        raise NotImplementedError


class ConsoleHost(Host):
    """Line-based terminal host"""

    def __init__(self, input_stream=None, output_stream=None):
        self.input = input_stream or sys.stdin
        self.output = output_stream or sys.stdout
        self._keymaps: List[dict] = []

    @property
    def keymap(self) -> Optional[dict]:
        return self._keymaps[-1] if self._keymaps else None

    def display_message(self, text: str):
        print(text, file=self.output)

    def display_persistent_message(self, text: str):
        print(text, file=self.output)
        self.output.flush()

    def install_keymap(self, keymap):
        self._keymaps.append(keymap)
        logger.debug(f"Installed keymap with keys: {', '.join(sorted(keymap))}")

    def restore_keymap(self):
        if self._keymaps:
            self._keymaps.pop()
            logger.debug("Restored previous keymap")

    def _readline(self) -> Optional[str]:
        line = self.input.readline()
        if not line:
            return None
        return line.strip()

    def select_from_menu(self, items: Sequence[Tuple[str, Any]]) -> Optional[Any]:
        for number, (label, _) in enumerate(items, start=1):
            print(f"[{number}] {label}", file=self.output)
        print(f"Select [1-{len(items)}]: ", end="", file=self.output)
        self.output.flush()

        choice = self._readline()
        if not choice:
            return None
        try:
            number = int(choice)
        except ValueError:
            number = 0
        if not 1 <= number <= len(items):
            self.display_message(f"Invalid selection: {choice}")
            return None
        return items[number - 1][1]

    def dispatch_loop(self, session):
        """
        Feed keys to the installed keymap until the session goes idle.

        End of input leaves interactive mode. However the loop ends, including
        a handler error or Ctrl-C, the session is exited so the keymap is never
        left installed.
        """
        self.display_message(f"Interactive mode, keys: {', '.join(sorted(session.keymap))}")

        try:
            while session.active:
                key = self._readline()
                if key is None:
                    break
                if not key:
                    continue
                handler = (self.keymap or {}).get(key)
                if handler is None:
                    self.display_message(f"Unbound key: {key}")
                    continue
                handler(session)
        finally:
            if session.active:
                session.exit()
