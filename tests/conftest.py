import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding='utf-8')
    return path


@pytest.fixture
def boot_root(tmp_path):
    """
    A minimal ESP: loader.conf, two entries (one referencing a kernel the
    other also uses) and the referenced kernel/initrd files.
    """
    root = tmp_path / "esp"
    write(root / "loader" / "loader.conf", "default arch.conf\ntimeout 3\n")
    write(root / "loader" / "entries" / "arch.conf",
          "title Arch Linux\n"
          "linux /vmlinuz-a\n"
          "initrd /initramfs-a.img\n"
          "options root=PARTUUID=1234 rw quiet tre-invite=secrettoken\n")
    write(root / "loader" / "entries" / "fallback.conf",
          "title Arch Linux (fallback)\n"
          "linux /vmlinuz-b\n"
          "linux /vmlinuz-a\n"
          "initrd /initramfs-a.img\n"
          "options root=PARTUUID=1234 rw\n")
    (root / "vmlinuz-a").write_bytes(b"kernel-a")
    (root / "vmlinuz-b").write_bytes(b"kernel-b")
    (root / "initramfs-a.img").write_bytes(b"initrd-a")
    return root


@pytest.fixture
def fake_file_type(monkeypatch):
    """Replaces the file(1) probe so tests do not depend on the host tool."""
    def detect(path, file_command="file"):
        return f"fake description of {os.path.basename(path)}"

    monkeypatch.setattr("bootmeta.probe.fileinfo.detect_file_type", detect)
    return detect
