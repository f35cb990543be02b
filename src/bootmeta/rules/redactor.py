#!/usr/bin/env python3
"""
BOOTMETA REDACTOR - Secret Scrubbing
------------------------------------
The Redactor is the gate between parsed boot entries and the manifest.
Manifests get checked in and shared, so kernel command-line options that
carry secrets are replaced with fixed placeholders before assembly.

Author: BootMeta Team
Date: 2026-10-19
"""

import dataclasses
from typing import Dict, List, Optional, Tuple

from bootmeta.core.models import BootEntry, BootEntryCollection, OptionValue

# Option name -> placeholder written in its place
DEFAULT_PLACEHOLDERS: Dict[str, str] = {
    "tre-invite": "$TRE_INVITE",
}


class Redactor:
    """
    Replaces sensitive option values. Entries are immutable, so a
    redacted entry is a new BootEntry.
    """

    def __init__(self, placeholders: Optional[Dict[str, str]] = None):
        self.placeholders = dict(DEFAULT_PLACEHOLDERS if placeholders is None else placeholders)

    def redact_entry(self, entry: BootEntry) -> Tuple[BootEntry, List[str]]:
        """Returns the scrubbed entry and the names of the options replaced."""
        if not entry.options:
            return entry, []

        replaced = [key for key in entry.options if key in self.placeholders]
        if not replaced:
            return entry, []

        options = dict(entry.options)
        for key in replaced:
            options[key] = OptionValue(self.placeholders[key])
        return dataclasses.replace(entry, options=options), replaced

    def redact(self, entries: BootEntryCollection) -> Tuple[BootEntryCollection, List[str]]:
        scrubbed = {}
        logs = []
        for name, entry in entries.items():
            scrubbed[name], replaced = self.redact_entry(entry)
            logs.extend(f"Redacted '{key}' in entry {name}" for key in replaced)
        return scrubbed, logs
