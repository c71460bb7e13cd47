#!/usr/bin/env python3
"""
Version information for pavolume
Single source of truth for version number
"""

__version__ = "1.0.0"
