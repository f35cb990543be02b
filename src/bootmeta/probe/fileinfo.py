#!/usr/bin/env python3
"""
BOOTMETA FILE PROBE
-------------------
Collects size, checksum and a human-readable type for every file that
goes into the manifest. Files are probed in a bounded thread pool.

Checksums use the format `<base64 of raw sha256 digest>.sha256`, which
downstream signing tools expect bit-exactly.

Author: BootMeta Team
Date: 2026-10-19
"""

import base64
import hashlib
import logging
import os
import subprocess
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Sequence

from bootmeta.core.errors import BootFileError, ExternalToolError
from bootmeta.core.models import FileInfo

logger = logging.getLogger("bootmeta.probe")

CHUNK_SIZE = 1024 * 1024
CHECKSUM_SUFFIX = ".sha256"
FILE_TOOL_TIMEOUT = 30


def sha256_checksum(path: str) -> str:
    digest = hashlib.sha256()
    try:
        with open(path, 'rb') as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b''):
                digest.update(chunk)
    except OSError as e:
        raise BootFileError(path, e.strerror or str(e))
    return base64.b64encode(digest.digest()).decode('ascii') + CHECKSUM_SUFFIX


def detect_file_type(path: str, file_command: str = "file") -> str:
    """Equivalent of `file --brief <path>`, trimmed."""
    try:
        result = subprocess.run(
            [file_command, '--brief', path],
            capture_output=True,
            text=True,
            timeout=FILE_TOOL_TIMEOUT,
        )
    except FileNotFoundError:
        raise ExternalToolError(f"'{file_command}' is not installed")
    except subprocess.TimeoutExpired:
        raise ExternalToolError(f"'{file_command}' timed out on {path}")

    if result.returncode != 0:
        detail = result.stderr.strip() or f"exit status {result.returncode}"
        raise ExternalToolError(f"'{file_command}' failed on {path}: {detail}")

    description = result.stdout.strip()
    if not description:
        raise ExternalToolError(f"'{file_command}' returned no description for {path}")
    return description


class FileProber:
    """Probes files concurrently; results are keyed by the path as given."""

    def __init__(self, max_workers: int = 4, file_command: str = "file"):
        self.max_workers = max(1, max_workers)
        self.file_command = file_command

    def probe(self, path: str) -> FileInfo:
        try:
            size = os.stat(path).st_size
        except FileNotFoundError:
            raise BootFileError(path, "no such file")
        except OSError as e:
            raise BootFileError(path, e.strerror or str(e))

        checksum = sha256_checksum(path)
        description = detect_file_type(path, self.file_command)
        logger.debug(f"Probed {path}: {size} bytes, {description}")
        return FileInfo(path=path, size=size, checksum=checksum, description=description)

    def probe_all(self, paths: Sequence[str]) -> Dict[str, FileInfo]:
        """
        Probes every distinct path. The first failure in input order is
        raised after in-flight probes have finished.
        """
        unique_paths: List[str] = list(dict.fromkeys(paths))
        if not unique_paths:
            return {}

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [executor.submit(self.probe, p) for p in unique_paths]

        info = {}
        for path, future in zip(unique_paths, futures):
            info[path] = future.result()

        logger.info(f"Probed {len(info)} files")
        return info
