#!/usr/bin/env python3
"""
BOOTMETA SHRINKWRAP PARSER
--------------------------
Reads the package pins of a shrinkwrap file. Each line is a record
`<id> <type> <name> <version> ...`; only `explicit` records are kept.
"""

import logging
from pathlib import Path
from typing import Dict, Union

from bootmeta.core.errors import BootFileError

logger = logging.getLogger("bootmeta.parsing")

EXPLICIT = "explicit"


def parse_shrinkwrap_text(text: str) -> Dict[str, str]:
    packages: Dict[str, str] = {}
    for line_no, line in enumerate(text.splitlines(), 1):
        fields = line.split()
        if len(fields) < 4:
            if fields:
                logger.debug(f"Skipping short shrinkwrap record on line {line_no}")
            continue
        _, kind, name, version = fields[:4]
        if kind != EXPLICIT:
            continue
        packages[name] = version
    return packages


def parse_shrinkwrap(path: Union[str, Path]) -> Dict[str, str]:
    """Returns package name -> version; later records overwrite earlier ones."""
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding='utf-8')
    except FileNotFoundError:
        raise BootFileError(file_path, "no such file")
    except (OSError, UnicodeDecodeError) as e:
        raise BootFileError(file_path, str(e))
    return parse_shrinkwrap_text(text)
