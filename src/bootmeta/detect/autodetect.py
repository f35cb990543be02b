#!/usr/bin/env python3
"""
BOOTMETA AUTO-DETECT - The Boot Root Walker
-------------------------------------------
Recognizes a systemd-boot layout under a boot root:

    <root>/loader/loader.conf
    <root>/loader/entries/*

and derives the kernels and initrds the entries reference. Paths inside
entries (`linux /vmlinuz-linux`) are relative to the boot root, even when
they start with `/`.

Author: BootMeta Team
Date: 2026-10-19
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from bootmeta.core.models import AutoDetectResult, BootEntryCollection, flatten
from bootmeta.parsing.bootloader import DEFAULT_MAX_WORKERS, parse_entries

logger = logging.getLogger("bootmeta.detect")

LOADER_DIR = "loader"
LOADER_CONF = "loader.conf"
ENTRIES_DIR = "entries"
KERNEL_KEY = "linux"
INITRD_KEY = "initrd"


class AutoDetectWalker:
    """
    Walks one boot root. `detect()` returns None when the root has no
    loader.conf; that is a negative answer, not a failure.
    """

    def __init__(self, root: Union[str, Path], max_workers: int = DEFAULT_MAX_WORKERS):
        self.root = Path(root).resolve()
        self.max_workers = max_workers

    @property
    def config_path(self) -> Path:
        return self.root / LOADER_DIR / LOADER_CONF

    @property
    def entries_dir(self) -> Path:
        return self.root / LOADER_DIR / ENTRIES_DIR

    def detect(self) -> Optional[AutoDetectResult]:
        if not self.config_path.is_file():
            logger.info(f"No {LOADER_DIR}/{LOADER_CONF} under {self.root}")
            return None

        if not self.entries_dir.is_dir():
            logger.info(f"Found {self.config_path}, but no entries directory")
            return AutoDetectResult(root=self.root, config=self.config_path)

        entry_paths = self.list_entries()
        entries = parse_entries(entry_paths, max_workers=self.max_workers)

        return AutoDetectResult(
            root=self.root,
            config=self.config_path,
            entries=entry_paths,
            parsed=entries,
            kernels=self.referenced_paths(entries, KERNEL_KEY),
            initrds=self.referenced_paths(entries, INITRD_KEY),
        )

    def list_entries(self) -> List[Path]:
        """Regular files directly inside the entries directory, sorted by name."""
        return sorted(p for p in self.entries_dir.iterdir() if p.is_file())

    def referenced_paths(self, entries: BootEntryCollection, key: str) -> List[Path]:
        """Resolved first, so `/vmlinuz` and `vmlinuz` count as one file."""
        values = []
        for name in sorted(entries):
            values.extend(flatten(entries[name].fields.get(key)))
        return _unique(self.resolve(v) for v in values)

    def resolve(self, boot_path: str) -> Path:
        """Maps an entry path (absolute within the ESP) onto the boot root."""
        return self.root / boot_path.lstrip('/')


def _unique(values: Iterable[Path]) -> List[Path]:
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def auto_detect(root: Union[str, Path],
                max_workers: int = DEFAULT_MAX_WORKERS) -> Optional[AutoDetectResult]:
    return AutoDetectWalker(root, max_workers=max_workers).detect()
