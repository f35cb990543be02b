#!/usr/bin/env python3
"""
BOOTMETA ENGINE - The Manifest Orchestrator
-------------------------------------------
ManifestEngine runs one manifest build:

1. Auto-detection of the boot root (optional)
2. File probing (size, checksum, type) for kernels, initcpios, images
   and the shrinkwrap file
3. Parsing of the bootloader config, entries and shrinkwrap packages
4. Redaction of secret entry options
5. Assembly of the final manifest document

Any error aborts the whole build; there is no partial manifest.

Author: BootMeta Team
Date: 2026-10-19
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bootmeta.core.config import BuildConfig
from bootmeta.core.errors import AutoDetectNotFound
from bootmeta.core.models import (
    BootEntryCollection,
    FileInfo,
    KeyValueMap,
    key_values_to_json,
)
from bootmeta.detect.autodetect import AutoDetectWalker
from bootmeta.parsing.bootloader import parse_config, parse_entries
from bootmeta.parsing.shrinkwrap import parse_shrinkwrap
from bootmeta.probe.fileinfo import FileProber
from bootmeta.rules.redactor import Redactor

logger = logging.getLogger("bootmeta.engine")


@dataclass
class BuildReport:
    """The manifest plus what the CLI needs to render a summary."""
    manifest: Dict[str, Any]
    files: List[Tuple[str, FileInfo]] = field(default_factory=list)
    entries: BootEntryCollection = field(default_factory=dict)
    redactions: List[str] = field(default_factory=list)
    detected_root: Optional[str] = None


def describe_files(paths: Sequence[str], info: Dict[str, FileInfo]) -> Dict[str, Dict[str, Any]]:
    """basename -> {description, size, checksum}"""
    return {os.path.basename(p): info[p].to_json() for p in paths}


def assemble_manifest(kernels: Dict[str, Dict[str, Any]],
                      initcpios: Dict[str, Dict[str, Any]],
                      disk_images: Dict[str, Dict[str, Any]],
                      shrinkwrap_checksum: Optional[str],
                      packages: Optional[Dict[str, str]],
                      boot_config: Optional[KeyValueMap],
                      entries: BootEntryCollection) -> Dict[str, Any]:
    """Builds the manifest document from its independently computed fragments."""
    manifest: Dict[str, Any] = {
        "kernels": kernels,
        "initcpios": initcpios,
        "diskImages": disk_images,
        "shrinkwrap": shrinkwrap_checksum,
    }
    if packages is not None:
        manifest["packages"] = packages

    bootloader: Dict[str, Any] = {}
    if boot_config is not None:
        bootloader["config"] = key_values_to_json(boot_config)
    bootloader["entries"] = {name: entry.to_json() for name, entry in entries.items()}
    manifest["bootloader"] = bootloader
    return manifest


class ManifestEngine:
    """
    Coordinates the parsers, the file prober and the redactor for a
    single BuildConfig.
    """

    def __init__(self, config: BuildConfig, redactor: Optional[Redactor] = None):
        self.config = config
        self.prober = FileProber(max_workers=config.jobs, file_command=config.file_command)
        self.redactor = redactor or Redactor()

    def _apply_auto_detect(self) -> Tuple[List[str], List[str], List[str],
                                          Optional[str], BootEntryCollection]:
        """
        Merges detected paths into the configured ones (detected paths
        appended). Detected entries come back already parsed; only the
        configured entry paths the walker did not see are left to parse.
        """
        kernels = list(self.config.kernels)
        initcpios = list(self.config.initcpios)
        boot_config = self.config.boot_config

        result = AutoDetectWalker(self.config.auto_detect, max_workers=self.config.jobs).detect()
        if result is None:
            raise AutoDetectNotFound(self.config.auto_detect)

        logger.info(
            f"Auto-detected {len(result.entries)} entries, {len(result.kernels)} kernels, "
            f"{len(result.initrds)} initrds under {result.root}"
        )
        if boot_config is None:
            boot_config = str(result.config)
        kernels.extend(str(p) for p in result.kernels)
        initcpios.extend(str(p) for p in result.initrds)

        detected = {os.path.realpath(p) for p in result.entries}
        entry_paths = [p for p in _unique(self.config.boot_entries)
                       if os.path.realpath(p) not in detected]

        return _unique(kernels), _unique(initcpios), entry_paths, boot_config, result.parsed

    def build(self) -> BuildReport:
        detected_entries: BootEntryCollection = {}
        if self.config.auto_detect:
            kernels, initcpios, entry_paths, boot_config, detected_entries = self._apply_auto_detect()
        else:
            kernels = list(self.config.kernels)
            initcpios = list(self.config.initcpios)
            entry_paths = list(self.config.boot_entries)
            boot_config = self.config.boot_config

        disk_images = list(self.config.disk_images)
        shrinkwrap_file = self.config.shrinkwrap

        probe_targets = kernels + initcpios + disk_images
        if shrinkwrap_file:
            probe_targets.append(shrinkwrap_file)
        info = self.prober.probe_all(probe_targets)

        # detected entries are appended after the configured ones, so they win on equal names
        entries = parse_entries(entry_paths, max_workers=self.config.jobs)
        entries.update(detected_entries)
        entries, redactions = self.redactor.redact(entries)
        for line in redactions:
            logger.info(line)

        config_kvs = parse_config(boot_config) if boot_config else None

        packages = None
        shrinkwrap_checksum = None
        if shrinkwrap_file:
            shrinkwrap_checksum = info[shrinkwrap_file].checksum
            packages = parse_shrinkwrap(shrinkwrap_file)

        manifest = assemble_manifest(
            kernels=describe_files(kernels, info),
            initcpios=describe_files(initcpios, info),
            disk_images=describe_files(disk_images, info),
            shrinkwrap_checksum=shrinkwrap_checksum,
            packages=packages,
            boot_config=config_kvs,
            entries=entries,
        )

        files = (
            [("kernel", info[p]) for p in kernels]
            + [("initcpio", info[p]) for p in initcpios]
            + [("disk image", info[p]) for p in disk_images]
        )
        if shrinkwrap_file:
            files.append(("shrinkwrap", info[shrinkwrap_file]))

        return BuildReport(
            manifest=manifest,
            files=files,
            entries=entries,
            redactions=redactions,
            detected_root=self.config.auto_detect,
        )


def _unique(values: Sequence[str]) -> List[str]:
    return list(dict.fromkeys(values))
