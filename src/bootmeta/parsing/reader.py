#!/usr/bin/env python3
"""
BOOTMETA READER - Key-Value Sharder
-----------------------------------
Decomposes line-oriented systemd-boot files (loader.conf, entry files)
into an ordered KeyValueMap.

Each non-blank line is `key<whitespace>value`. A key that appears again
is promoted from ScalarValue to RepeatedValue; later repeats append.

Author: BootMeta Team
Date: 2026-10-19
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, Tuple, Union

from bootmeta.core.errors import BootFileError
from bootmeta.core.models import KeyValueMap, RepeatedValue, ScalarValue

logger = logging.getLogger("bootmeta.parsing")


class KeyValueReader:
    """
    Turns raw text into (key, value) pairs and folds them into a map.
    Stateless; one instance can be shared between threads.
    """

    COMMENT_PREFIX = "#"

    def _clean_artifacts(self, text: str) -> str:
        """Removes a UTF-8 BOM and normalizes CRLF line endings."""
        text = text.lstrip('\ufeff')
        return text.replace('\r\n', '\n')

    def split_line(self, line: str) -> Tuple[str, str]:
        """
        Splits on the first run of whitespace.
        Example: "title  Arch Linux " -> ("title", "Arch Linux")
        """
        parts = line.strip().split(None, 1)
        key = parts[0]
        value = parts[1].strip() if len(parts) > 1 else ""
        return key, value

    def pairs(self, text: str) -> Iterator[Tuple[str, str]]:
        """
        Yields one pair per data line. Blank lines are dropped, and so are
        lines starting with '#': loader.conf(5) and the Boot Loader
        Specification both define those as comments.
        """
        for line in self._clean_artifacts(text).split('\n'):
            stripped = line.strip()
            if not stripped or stripped.startswith(self.COMMENT_PREFIX):
                continue
            yield self.split_line(stripped)

    def fold(self, pairs: Iterable[Tuple[str, str]]) -> KeyValueMap:
        result: KeyValueMap = {}
        for key, value in pairs:
            current = result.get(key)
            if current is None:
                result[key] = ScalarValue(value)
            elif isinstance(current, ScalarValue):
                result[key] = RepeatedValue((current.value, value))
            else:
                result[key] = current.append(value)
        return result

    def parse_text(self, text: str) -> KeyValueMap:
        return self.fold(self.pairs(text))

    def read(self, path: Union[str, Path]) -> KeyValueMap:
        """Reads and parses a file. Raises BootFileError if it cannot be read."""
        file_path = Path(path)
        try:
            text = file_path.read_text(encoding='utf-8')
        except FileNotFoundError:
            raise BootFileError(file_path, "no such file")
        except (OSError, UnicodeDecodeError) as e:
            raise BootFileError(file_path, str(e))

        kvs = self.parse_text(text)
        logger.debug(f"Read {len(kvs)} keys from {file_path}")
        return kvs


_reader = KeyValueReader()


def read_key_values(path: Union[str, Path]) -> KeyValueMap:
    return _reader.read(path)
