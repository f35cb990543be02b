#!/usr/bin/env python3
"""
BOOTMETA BOOTLOADER PARSER
--------------------------
Parses systemd-boot loader.conf and entry files.

Entry files are read with the KeyValueReader; their `options` line (the
kernel command line) is further split into an OptionsMap. A set of entry
files is parsed concurrently and keyed by basename.

Author: BootMeta Team
Date: 2026-10-19
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Sequence, Union

from bootmeta.core.errors import MalformedEntryError
from bootmeta.core.models import (
    BootEntry,
    BootEntryCollection,
    Flag,
    KeyValueMap,
    OptionValue,
    OptionsMap,
    RepeatedValue,
    ScalarValue,
)
from bootmeta.parsing.reader import read_key_values

logger = logging.getLogger("bootmeta.parsing")

OPTIONS_KEY = "options"
DEFAULT_MAX_WORKERS = 4


def parse_config(path: Union[str, Path]) -> KeyValueMap:
    """Parses a loader.conf. No structure beyond the raw key-value map."""
    return read_key_values(path)


def parse_options(command_line: str) -> OptionsMap:
    """
    Splits a kernel command line into options.

    `quiet` and `baz=` both become Flag; `console=ttyS0,115200n8` keeps
    everything after the first `=`. The last occurrence of a key wins.
    """
    options: OptionsMap = {}
    for token in command_line.split():
        key, _, value = token.partition('=')
        options[key] = OptionValue(value) if value else Flag()
    return options


def parse_entry(path: Union[str, Path], name: str) -> BootEntry:
    kvs = read_key_values(path)
    raw_options = kvs.pop(OPTIONS_KEY, None)

    if raw_options is None:
        logger.debug(f"Entry {name} has no options line")
        return BootEntry(name=name, fields=kvs, options=None)

    if isinstance(raw_options, RepeatedValue):
        raise MalformedEntryError(
            f"{path}: 'options' appears {len(raw_options.values)} times, expected once"
        )
    if not isinstance(raw_options, ScalarValue):
        raise MalformedEntryError(f"{path}: unexpected 'options' value")

    return BootEntry(name=name, fields=kvs, options=parse_options(raw_options.value))


def parse_entries(paths: Sequence[Union[str, Path]],
                  max_workers: int = DEFAULT_MAX_WORKERS) -> BootEntryCollection:
    """
    Parses every entry file concurrently, keyed by basename.

    If any entry fails the first failure (in input order) is raised once
    all submitted parses have finished; no partial collection is returned.
    """
    if not paths:
        return {}

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        futures = [
            executor.submit(parse_entry, path, os.path.basename(str(path)))
            for path in paths
        ]

    entries: Dict[str, BootEntry] = {}
    for future in futures:
        entry = future.result()
        entries[entry.name] = entry

    logger.info(f"Parsed {len(entries)} boot entries")
    return entries
