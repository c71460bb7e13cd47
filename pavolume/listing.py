#!/usr/bin/env python3
"""
listing.py - parse pacmd list-sinks / list-sink-inputs output

pacmd prints a header line followed by one block per record:

    >>> 2 sink(s) available.
      * index: 0
            name: <alsa_output.pci-0000_00_1f.3.analog-stereo>
            ...
            volume: front-left: 32768 /  50% / -18.06 dB,   front-right: 32768 /  50% / -18.06 dB
            base volume: 65536 / 100% / 0.00 dB
            muted: no
            ...
        index: 1
            ...

Sink records may carry a leading '*' marking the default sink. Sink input
records never do, report channel volumes as "0: 50%" (older pacmd) or
"0: 32768 /  50% / ..." and carry an application.name property.

This text is the only interface to the audio server, so every pattern here
is part of a fragile wire contract. The sample outputs in tests/ pin it.
"""
import re
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .errors import MalformedListingError, FieldNotFoundError, NodeNotFoundError

logger = logging.getLogger(__name__)

_COUNT_RE = re.compile(r'^>>>[ \t]*(\d+)', re.MULTILINE)
_INDEX_LINE = r'^[ \t]*{marker}index:[ \t]*({index})[ \t]*$'
_MARKER = r'(\*[ \t]*)?'
_MUTED_RE = re.compile(r'^[ \t]*muted:[ \t]*(\w+)', re.MULTILINE)
_NAME_RE = re.compile(r'application\.name[ \t]*=[ \t]*"((?:[^"\\]|\\.)*)"')
_ESCAPE_RE = re.compile(r'\\(.)')


class NodeKind(Enum):
    """Which pacmd object a node refers to. The value is the pacmd noun."""
    SINK = "sink"
    SINK_INPUT = "sink-input"


# Channel label that has to precede the percentage on the volume line
_CHANNEL_PATTERNS = {
    NodeKind.SINK: r'front-left',
    NodeKind.SINK_INPUT: r'(?:\d+|[a-z][a-z-]*)',
}


@dataclass(frozen=True)
class AudioNode:
    """A sink or sink input as seen in one listing. Only the index identifies it."""
    kind: NodeKind
    index: int
    name: Optional[str] = None

    @property
    def label(self) -> str:
        if self.kind is NodeKind.SINK:
            return f"Sink {self.index}"
        return self.name or f"Input {self.index}"


@dataclass(frozen=True)
class NodeState:
    """Volume and mute of a node, decoded from a single listing"""
    node: AudioNode
    volume: int
    muted: bool


def _index_re(allow_marker: bool, index: Optional[int] = None) -> re.Pattern:
    pattern = _INDEX_LINE.format(
        marker=_MARKER if allow_marker else '()',
        index=r'\d+' if index is None else re.escape(str(index)))
    return re.compile(pattern, re.MULTILINE)


def parse_count(text: str, required: bool) -> int:
    """
    Read N from the '>>> N ...' header line.

    Args:
        text: pacmd listing output
        required: raise if the header is missing instead of assuming 0

    Returns:
        The announced number of records
    """
    match = _COUNT_RE.search(text)
    if match:
        return int(match.group(1))
    if required:
        raise MalformedListingError("Listing has no '>>> N' count header")
    logger.debug("Listing has no count header, assuming 0 records")
    return 0


def iter_records(text: str, allow_marker: bool) -> Iterator[Tuple[int, bool, str]]:
    """
    Yield (index, marked, block) for every record in document order.

    A block runs from its 'index:' line up to the next 'index:' line or the
    end of the text.
    """
    matches = list(_index_re(allow_marker).finditer(text))
    for pos, match in enumerate(matches):
        end = matches[pos + 1].start() if pos + 1 < len(matches) else len(text)
        yield int(match.group(2)), bool(match.group(1)), text[match.start():end]


def record_block(text: str, index: int, allow_marker: bool = True) -> str:
    """
    Return the raw block of the record with the given index.

    Raises:
        NodeNotFoundError: if no 'index: <index>' line exists
    """
    match = _index_re(allow_marker, index).search(text)
    if not match:
        raise NodeNotFoundError(f"No record with index {index} in listing")
    following = _index_re(allow_marker).search(text, match.end())
    end = following.start() if following else len(text)
    return text[match.start():end]


def extract_volume(block: str, kind: NodeKind) -> int:
    """
    Decode the volume percentage of the first channel.

    Raises:
        FieldNotFoundError: if the block has no matching volume line
    """
    pattern = (r'^[ \t]*volume:[ \t]*' + _CHANNEL_PATTERNS[kind] +
               r':[ \t]*(?:\d+[ \t]*/[ \t]*)?(\d+)%')
    match = re.search(pattern, block, re.MULTILINE)
    if not match:
        raise FieldNotFoundError(f"{kind.value} malformed: no volume in record")
    return int(match.group(1))


def extract_mute(block: str) -> bool:
    """
    Decode the muted flag. Anything but 'no' counts as muted.

    Raises:
        FieldNotFoundError: if the block has no 'muted:' line
    """
    match = _MUTED_RE.search(block)
    if not match:
        raise FieldNotFoundError("record malformed: no muted flag")
    return match.group(1) != "no"


def extract_name(block: str) -> Optional[str]:
    """Return the decoded application.name property, or None"""
    match = _NAME_RE.search(block)
    if not match:
        return None
    return _ESCAPE_RE.sub(r'\1', match.group(1))


def extract_state(block: str, node: AudioNode) -> NodeState:
    return NodeState(node=node,
                     volume=extract_volume(block, node.kind),
                     muted=extract_mute(block))


def parse_nodes(text: str, kind: NodeKind) -> List[AudioNode]:
    """
    Parse every record of a listing into AudioNode objects.

    Sink listings must carry a count header. A sink input listing without one
    is read as empty.

    Raises:
        MalformedListingError: if the number of records differs from the header
    """
    is_sink = kind is NodeKind.SINK
    count = parse_count(text, required=is_sink)
    nodes = []
    for index, _, block in iter_records(text, allow_marker=is_sink):
        name = None if is_sink else extract_name(block)
        nodes.append(AudioNode(kind=kind, index=index, name=name))

    if len(nodes) != count:
        raise MalformedListingError(
            f"Listing announces {count} {kind.value}(s) but contains {len(nodes)}")
    return nodes


def parse_sinks(text: str) -> List[AudioNode]:
    return parse_nodes(text, NodeKind.SINK)


def parse_sink_inputs(text: str) -> List[AudioNode]:
    return parse_nodes(text, NodeKind.SINK_INPUT)


def default_sink_index(text: str) -> Optional[int]:
    """
    Pick the default sink from a list-sinks listing.

    This is a heuristic: the first record marked with '*' wins, and without
    a marker the first record in document order is used (not index 0).

    Returns:
        The sink index, or None if the listing has no records
    """
    first = None
    for index, marked, _ in iter_records(text, allow_marker=True):
        if marked:
            return index
        if first is None:
            first = index
    if first is not None:
        logger.debug(f"No default marker in listing, falling back to sink {first}")
    return first
