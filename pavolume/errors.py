#!/usr/bin/env python3
"""
Exceptions raised while talking to pacmd and parsing its output
"""


class AudioControlError(Exception):
    """Base class for all pavolume errors"""


class ExternalToolError(AudioControlError):
    """pacmd is missing or exited with a non-zero status"""


class MalformedListingError(AudioControlError):
    """A listing does not match its '>>> N' header"""


class FieldNotFoundError(AudioControlError):
    """An expected field (volume, muted) is absent from a record block"""


class NoDefaultSinkError(AudioControlError):
    """The server reports no sinks at all"""


class NodeNotFoundError(AudioControlError):
    """A sink or sink input index is no longer present in the listing"""
