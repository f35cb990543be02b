#!/usr/bin/env python3
"""
BOOTMETA CORE MODELS
--------------------
Defines the fundamental data structures shared by the parsers, the
auto-detect walker and the manifest engine.

Values read from systemd-boot files are tagged: a key is either a
ScalarValue or a RepeatedValue, an option is either a Flag or an
OptionValue. Consumers branch on the variant explicitly.

Author: BootMeta Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union, Any


@dataclass(frozen=True)
class ScalarValue:
    """A key that appeared exactly once in its source file."""
    value: str

    def to_json(self) -> str:
        return self.value


@dataclass(frozen=True)
class RepeatedValue:
    """A key that appeared more than once; values in file order."""
    values: Tuple[str, ...]

    def append(self, value: str) -> "RepeatedValue":
        return RepeatedValue(self.values + (value,))

    def to_json(self) -> List[str]:
        return list(self.values)


KeyValue = Union[ScalarValue, RepeatedValue]
KeyValueMap = Dict[str, KeyValue]


@dataclass(frozen=True)
class Flag:
    """An option given as a bare key (`quiet`) or with an empty value (`baz=`)."""

    def to_json(self) -> bool:
        return True


@dataclass(frozen=True)
class OptionValue:
    value: str

    def to_json(self) -> str:
        return self.value


Option = Union[Flag, OptionValue]
OptionsMap = Dict[str, Option]


def key_values_to_json(kvs: KeyValueMap) -> Dict[str, Any]:
    return {key: value.to_json() for key, value in kvs.items()}


def flatten(value: Optional[KeyValue]) -> List[str]:
    """Returns every string carried by a key, whichever variant it is."""
    if value is None:
        return []
    if isinstance(value, ScalarValue):
        return [value.value]
    if isinstance(value, RepeatedValue):
        return list(value.values)
    raise TypeError(f"Unexpected key value type: {type(value).__name__}")


@dataclass(frozen=True)
class BootEntry:
    """
    A single systemd-boot entry.

    `fields` holds every key of the entry file except `options`, which is
    decomposed into `options`. An entry file without an `options` line
    has `options=None`.
    """
    name: str
    fields: KeyValueMap = field(default_factory=dict)
    options: Optional[OptionsMap] = None

    def to_json(self) -> Dict[str, Any]:
        data = key_values_to_json(self.fields)
        if self.options is not None:
            data["options"] = {key: opt.to_json() for key, opt in self.options.items()}
        return data


BootEntryCollection = Dict[str, BootEntry]


@dataclass(frozen=True)
class AutoDetectResult:
    """Everything discovered under a boot root that hosts a systemd-boot layout."""
    root: Path
    config: Path
    entries: List[Path] = field(default_factory=list)
    parsed: BootEntryCollection = field(default_factory=dict)
    kernels: List[Path] = field(default_factory=list)
    initrds: List[Path] = field(default_factory=list)


@dataclass(frozen=True)
class FileInfo:
    path: str
    size: int
    checksum: str
    description: str

    def to_json(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "size": self.size,
            "checksum": self.checksum,
        }
