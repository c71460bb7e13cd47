#!/usr/bin/env python3
"""
pacmd.py - run the PulseAudio pacmd tool and capture its output

All listing and mutation requests go through PacmdRunner.run(). The call is
synchronous and has no timeout: a hanging pacmd hangs the caller.
"""
import subprocess
import logging
from typing import List

from .errors import ExternalToolError

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "pacmd"


class PacmdRunner:
    """Runs pacmd subcommands and returns their stdout as text"""

    def __init__(self, command: str = DEFAULT_COMMAND):
        self.command = command

    def run(self, *args) -> str:
        """
        Run a pacmd subcommand.

        Args:
            *args: Subcommand and its arguments, e.g. ("set-sink-mute", 0, 1)

        Returns:
            The captured stdout

        Raises:
            ExternalToolError: if pacmd is not installed or exits non-zero
        """
        cmd: List[str] = [self.command] + [str(a) for a in args]
        logger.debug(f"Running pacmd command: {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise ExternalToolError(f"Could not run {self.command}: {e}") from e

        logger.debug(f"pacmd return code: {result.returncode}")
        logger.debug(f"pacmd stdout length: {len(result.stdout)}")
        if result.stderr:
            logger.debug(f"pacmd stderr: {repr(result.stderr)}")

        if result.returncode != 0:
            msg = (result.stderr or result.stdout).strip()
            raise ExternalToolError(
                f"{' '.join(cmd)} failed with return code {result.returncode}: {msg}")

        return result.stdout
