#!/usr/bin/env python3
"""
BOOTMETA ERRORS
---------------
Every failure that aborts a manifest build derives from BootMetaError.
The CLI prints the message of whichever error reaches it and exits 1.
"""

from pathlib import Path
from typing import Union


class BootMetaError(Exception):
    """Base class for all errors raised by bootmeta."""


class BootFileError(BootMetaError):
    """A file is missing or cannot be read as text."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class MalformedEntryError(BootMetaError):
    """A boot entry has a structure the parser does not support."""


class ExternalToolError(BootMetaError):
    """A checksum or file-type probe failed or produced unusable output."""


class AutoDetectNotFound(BootMetaError):
    """Auto-detection was requested but the boot root has no loader.conf."""

    def __init__(self, root: Union[str, Path]):
        self.root = str(root)
        super().__init__("Failed to auto-detect boot entries")


class ConfigError(BootMetaError):
    """The YAML build configuration is invalid."""
