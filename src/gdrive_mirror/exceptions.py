#!/usr/bin/env python3
"""
Exceptions raised by the Google Drive mirror.
"""


class GDriveMirrorError(Exception):
    """Base class for errors the mirror reports to its caller."""


class ConfigurationError(GDriveMirrorError):
    """Raised when OAuth client settings or secret files are missing."""
