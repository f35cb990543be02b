# src/bootmeta/cli/formatter.py
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from bootmeta.core.engine import BuildReport
from bootmeta.core.models import flatten


class BootMetaFormatter:
    """
    Renders the human-readable side of a build on stderr.
    Stdout is reserved for the JSON manifest.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)

    def print_error(self, message: str):
        self.console.print("Error:", message, style="bold red", markup=False, highlight=False, soft_wrap=True)

    def print_summary(self, report: BuildReport):
        table = Table(title="BootMeta Manifest Summary", show_header=True, header_style="bold magenta")
        table.add_column("Kind", style="cyan")
        table.add_column("File")
        table.add_column("Size", justify="right")
        table.add_column("Description", style="dim")

        for kind, info in report.files:
            table.add_row(Text(kind), Text(info.path), f"{info.size:,}", Text(info.description))

        self.console.print(table)

        lines = [f"Entries: {len(report.entries)}"]
        for name in sorted(report.entries):
            entry = report.entries[name]
            titles = flatten(entry.fields.get("title"))
            lines.append(f"  {name}" + (f"  ({' / '.join(titles)})" if titles else ""))
        if report.redactions:
            lines.append(f"Redacted options: {len(report.redactions)}")
        if report.detected_root:
            lines.append(f"Auto-detected from: {report.detected_root}")

        self.console.print(Panel(Text("\n".join(lines)), title="Bootloader", border_style="dim"))
