#!/usr/bin/env python3
"""
backend.py - observe and change sink / sink input volume

AudioBackend is the capability interface used by the commands. PacmdBackend
implements it by scraping pacmd output. Nothing is cached: every read runs
pacmd again, so nodes are re-resolved by index on each call and a read-modify-
write sequence is not atomic with respect to other mixers.

Mutations are fire-and-forget. The new value is not read back to check that
pacmd applied it.
"""
import logging
from typing import List, Optional

from .errors import NoDefaultSinkError
from .listing import (
    AudioNode, NodeKind, NodeState,
    parse_sinks, parse_sink_inputs, record_block, extract_state, default_sink_index,
)
from .pacmd import PacmdRunner

logger = logging.getLogger(__name__)

# PA_VOLUME_NORM, the native value for 100%
NATIVE_MAX = 65536


def percent_to_native(percent: int, native_max: int = NATIVE_MAX) -> int:
    """Convert a 0-100 percentage to the native scale, truncating"""
    return native_max * percent // 100


def clamp_percent(value: int) -> int:
    return max(0, min(100, value))


def _check_percent(percent: int):
    if not 0 <= percent <= 100:
        raise ValueError(f"Volume must be between 0 and 100, got {percent}")


class AudioBackend:
    """Capability interface for reading and changing sink volumes"""

    def list_sinks(self) -> List[AudioNode]:
        raise NotImplementedError

    def list_sink_inputs(self) -> List[AudioNode]:
        raise NotImplementedError

    def read_state(self, node: AudioNode) -> NodeState:
        raise NotImplementedError

    def set_volume(self, node: AudioNode, percent: int):
        raise NotImplementedError

    def set_mute(self, node: AudioNode, muted: bool):
        raise NotImplementedError

    def resolve_default(self) -> AudioNode:
        raise NotImplementedError

    def step_volume(self, node: AudioNode, delta: int) -> int:
        """
        Change the volume by delta percent, clamped to 0..100.

        Returns:
            The volume that was requested
        """
        current = self.read_state(node).volume
        target = clamp_percent(current + delta)
        logger.debug(f"Stepping {node.label} from {current}% to {target}%")
        self.set_volume(node, target)
        return target

    def toggle_mute(self, node: AudioNode) -> bool:
        """
        Flip the mute flag.

        Returns:
            The mute state that was requested
        """
        muted = not self.read_state(node).muted
        self.set_mute(node, muted)
        return muted


class PacmdBackend(AudioBackend):
    """AudioBackend that drives pacmd and parses its listings"""

    def __init__(self, runner: Optional[PacmdRunner] = None, native_max: int = NATIVE_MAX):
        self.runner = runner or PacmdRunner()
        self.native_max = native_max

    def _listing(self, kind: NodeKind) -> str:
        return self.runner.run(f"list-{kind.value}s")

    def list_sinks(self) -> List[AudioNode]:
        return parse_sinks(self._listing(NodeKind.SINK))

    def list_sink_inputs(self) -> List[AudioNode]:
        return parse_sink_inputs(self._listing(NodeKind.SINK_INPUT))

    def read_state(self, node: AudioNode) -> NodeState:
        """
        Fetch a fresh listing and decode the node's volume and mute flag.

        Raises:
            NodeNotFoundError: if the index disappeared since the node was listed
            FieldNotFoundError: if the record lacks a volume or muted line
        """
        text = self._listing(node.kind)
        block = record_block(text, node.index, allow_marker=node.kind is NodeKind.SINK)
        return extract_state(block, node)

    def set_volume(self, node: AudioNode, percent: int):
        _check_percent(percent)
        native = percent_to_native(percent, self.native_max)
        self.runner.run(f"set-{node.kind.value}-volume", node.index, native)
        logger.info(f"Set {node.label} volume to {percent}% ({native})")

    def set_mute(self, node: AudioNode, muted: bool):
        self.runner.run(f"set-{node.kind.value}-mute", node.index, 1 if muted else 0)
        logger.info(f"{'Muted' if muted else 'Unmuted'} {node.label}")

    def resolve_default(self) -> AudioNode:
        """
        Return the default sink.

        Raises:
            NoDefaultSinkError: if the server has no sinks
        """
        index = default_sink_index(self._listing(NodeKind.SINK))
        if index is None:
            raise NoDefaultSinkError("No sinks available")
        return AudioNode(kind=NodeKind.SINK, index=index)
