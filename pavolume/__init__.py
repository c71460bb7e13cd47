"""
pavolume - keyboard-driven PulseAudio volume control on top of pacmd
"""

from ._version import __version__

__all__ = ["__version__"]
