#!/usr/bin/env python3
"""
BOOTMETA BUILD CONFIGURATION
----------------------------
A BuildConfig lists the inputs of one manifest build. It can come from
command-line flags alone, or from a YAML build file extended by flags:

    # build.yaml
    kernels: [out/vmlinuz]
    initcpios: [out/initramfs.img]
    disk-images: [out/disk.img]
    boot-config: esp/loader/loader.conf
    boot-entries: [esp/loader/entries/arch.conf]
    shrinkwrap: out/shrinkwrap.txt
    auto-detect: esp
    jobs: 4

Relative paths in a build file are resolved against the file's directory.

Author: BootMeta Team
Date: 2026-10-19
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from bootmeta.core.errors import ConfigError

DEFAULT_JOBS = 4
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVEL_ENV = "BOOTMETA_LOG_LEVEL"

LIST_KEYS = ("kernels", "initcpios", "disk_images", "boot_entries")
PATH_KEYS = ("boot_config", "shrinkwrap", "auto_detect")


@dataclass
class BuildConfig:
    """Inputs and tuning knobs for one manifest build."""
    kernels: List[str] = field(default_factory=list)
    initcpios: List[str] = field(default_factory=list)
    disk_images: List[str] = field(default_factory=list)
    boot_entries: List[str] = field(default_factory=list)
    boot_config: Optional[str] = None
    shrinkwrap: Optional[str] = None
    auto_detect: Optional[str] = None
    jobs: int = DEFAULT_JOBS
    file_command: str = "file"
    log_level: str = field(default_factory=lambda: os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL))

    def validate(self) -> None:
        if self.jobs < 1:
            raise ConfigError(f"jobs must be at least 1, got {self.jobs}")
        if not self.file_command:
            raise ConfigError("file-command must not be empty")

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "BuildConfig":
        config_path = Path(path)
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = YAML(typ='safe').load(f)
        except FileNotFoundError:
            raise ConfigError(f"Build file not found: {config_path}")
        except (OSError, YAMLError) as e:
            raise ConfigError(f"Unable to load build file {config_path}: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"{config_path}: expected a mapping at the top level")

        return cls.from_dict(data, base_dir=config_path.resolve().parent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[Path] = None) -> "BuildConfig":
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}

        for raw_key, value in data.items():
            key = str(raw_key).replace('-', '_')
            if key not in known:
                raise ConfigError(f"Unknown build setting '{raw_key}'")

            if key in LIST_KEYS:
                if isinstance(value, str):
                    value = [value]
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise ConfigError(f"'{raw_key}' must be a path or a list of paths")
                value = [_resolve(v, base_dir) for v in value]
            elif key in PATH_KEYS:
                if value is not None and not isinstance(value, str):
                    raise ConfigError(f"'{raw_key}' must be a path")
                value = _resolve(value, base_dir) if value else None
            elif key == "jobs":
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ConfigError("'jobs' must be an integer")
            elif not isinstance(value, str):
                raise ConfigError(f"'{raw_key}' must be a string")

            values[key] = value

        config = cls(**values)
        config.validate()
        return config

    def extend(self, kernels=(), initcpios=(), disk_images=(), boot_entries=(),
               boot_config=None, shrinkwrap=None, auto_detect=None,
               jobs=None, file_command=None, log_level=None) -> "BuildConfig":
        """Layers command-line values on top: lists append, scalars override."""
        self.kernels.extend(kernels or ())
        self.initcpios.extend(initcpios or ())
        self.disk_images.extend(disk_images or ())
        self.boot_entries.extend(boot_entries or ())
        if boot_config:
            self.boot_config = boot_config
        if shrinkwrap:
            self.shrinkwrap = shrinkwrap
        if auto_detect:
            self.auto_detect = auto_detect
        if jobs is not None:
            self.jobs = jobs
        if file_command:
            self.file_command = file_command
        if log_level:
            self.log_level = log_level
        self.validate()
        return self


def _resolve(value: str, base_dir: Optional[Path]) -> str:
    path = Path(value).expanduser()
    if base_dir is not None and not path.is_absolute():
        path = base_dir / path
    return str(path)
