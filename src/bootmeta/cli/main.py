#!/usr/bin/env python3
"""
BOOTMETA CLI
------------
Builds the metadata manifest of a bootable image set and prints it as
pretty-printed JSON on stdout. Diagnostics, the optional summary and
error messages go to stderr.

Author: BootMeta Team
Date: 2026-10-19
"""

import argparse
import json
import sys
from typing import List, Optional

from rich.console import Console

from bootmeta.cli.formatter import BootMetaFormatter
from bootmeta.core.config import BuildConfig
from bootmeta.core.engine import ManifestEngine
from bootmeta.core.errors import BootMetaError
from bootmeta.core.logging_config import level_for_verbosity, setup_logging

VERSION = "1.0.0"

# Errors and summaries share one stderr console
console = Console(stderr=True)


class BootMetaCLI:
    """
    Translates command-line flags into a BuildConfig and runs the engine.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="bootmeta",
            description="Describe kernels, initcpios, disk images and systemd-boot entries as a JSON manifest",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = BootMetaFormatter(console)
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags."""
        self.parser.add_argument("--version", action="version", version=f"bootmeta v{VERSION}")

        inputs = self.parser.add_argument_group("inputs")
        inputs.add_argument("--kernel", action="append", default=[], metavar="FILE",
                            help="Kernel binary (repeatable)")
        inputs.add_argument("--initcpio", action="append", default=[], metavar="FILE",
                            help="Initial ramdisk archive (repeatable)")
        inputs.add_argument("--disk-image", action="append", default=[], metavar="FILE",
                            help="Disk image (repeatable)")
        inputs.add_argument("--boot-config", metavar="FILE", help="systemd-boot loader.conf")
        inputs.add_argument("--boot-entry", action="append", default=[], metavar="FILE",
                            help="systemd-boot entry file (repeatable)")
        inputs.add_argument("--shrinkwrap", metavar="FILE", help="Package shrinkwrap file")
        inputs.add_argument("--auto-detect", metavar="BOOT_ROOT",
                            help="Discover loader.conf, entries, kernels and initrds under a boot root")

        tuning = self.parser.add_argument_group("behaviour")
        tuning.add_argument("--config", metavar="YAML", help="YAML build file listing the inputs")
        tuning.add_argument("-j", "--jobs", type=int, help="Concurrent file probes (default: 4)")
        tuning.add_argument("--file-command", help="file(1) binary used for type detection")
        tuning.add_argument("--summary", action="store_true", help="Print a summary table on stderr")
        tuning.add_argument("-v", "--verbose", action="count", default=0,
                            help="Log progress on stderr (-vv for debug)")

    def _build_config(self, args: argparse.Namespace) -> BuildConfig:
        config = BuildConfig.from_yaml(args.config) if args.config else BuildConfig()
        return config.extend(
            kernels=args.kernel,
            initcpios=args.initcpio,
            disk_images=args.disk_image,
            boot_entries=args.boot_entry,
            boot_config=args.boot_config,
            shrinkwrap=args.shrinkwrap,
            auto_detect=args.auto_detect,
            jobs=args.jobs,
            file_command=args.file_command,
            log_level=level_for_verbosity(args.verbose, default=None),
        )

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary entry point. Returns the process exit status."""
        args = self.parser.parse_args(argv)
        setup_logging(level_for_verbosity(args.verbose, default="WARNING"), console)

        try:
            config = self._build_config(args)
            setup_logging(config.log_level, console)
            report = ManifestEngine(config).build()
        except (BootMetaError, OSError) as e:
            self.formatter.print_error(str(e))
            return 1

        sys.stdout.write(json.dumps(report.manifest, indent=2) + "\n")
        sys.stdout.flush()

        if args.summary:
            self.formatter.print_summary(report)
        return 0


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(BootMetaCLI().run())
    except KeyboardInterrupt:
        console.print("\nTerminated by user.", style="bold red")
        sys.exit(1)


if __name__ == "__main__":
    main()
