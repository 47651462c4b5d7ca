# src/lalparser/lal/cli.py

import sys
import argparse
import logging
from pathlib import Path
from typing import List

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
import pyfiglet

from lalparser.common.errors import LALError
from lalparser.common.exporter import DataExporter, SUPPORTED_FORMATS
from lalparser.common.models import Entry
from .document import LALDocument, document_tables

# Diagnostics go to stderr so stdout stays clean for pipes
console = Console(stderr=True)

MASK = "••••••"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_logging(log_level: str) -> None:
    """Configure logging with rich handler."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def _base_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("input_file", type=Path, help="Path to the .lal file")
    parser.add_argument(
        "-l",
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    return parser


def _count_content_lines(text: str) -> int:
    return sum(1 for line in text.splitlines() if line.strip())


def _read_document(path: Path):
    """Returns (raw_text, document, dropped_line_count)."""
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    text = path.read_text(encoding="utf-8")
    document = LALDocument()
    document.loads(text)
    return text, document, _count_content_lines(text) - len(document)


def _display_banner() -> str:
    plain_banner = pyfiglet.figlet_format("LAL", font="slant")
    console.print(
        Panel(
            plain_banner,
            title="[bold white] lalparser [/bold white]",
            border_style="cyan",
            expand=False,
        )
    )
    return plain_banner


def _summary(document: LALDocument, dropped: int) -> Panel:
    summary = Text()
    summary.append(f"✓ LOGINS: {len(document.entries)} entries ({len(document.invalid_entries)} invalid)\n")
    summary.append(f"✓ COMMENTS: {len(document.comments)} lines\n")
    if dropped:
        summary.append(f"✗ DROPPED: {dropped} malformed lines\n", style="yellow")
    return Panel(summary, title="Parse Summary", border_style="green" if not dropped else "yellow")


def view_main(argv: List[str] = None):
    parser = _base_parser("Show the logins stored in a LAL file.")
    parser.add_argument("--show-passwords", action="store_true", help="Print passwords in clear text.")
    parser.add_argument("--all", action="store_true", help="Include comment lines in the listing.")
    args = parser.parse_args(sys.argv[2:] if argv is None else argv)
    setup_logging(args.log_level)

    try:
        _, document, dropped = _read_document(args.input_file)
    except (LALError, OSError) as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    table = Table(
        title=f"[bold green]{len(document.entries)}[/bold green] Logins in {args.input_file.name}",
        border_style="cyan",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Login", style="cyan", no_wrap=True)
    table.add_column("Password", style="green")
    table.add_column("Display Name")
    table.add_column("Email")
    table.add_column("Status", style="dim")

    for record in document:
        if not isinstance(record, Entry):
            if args.all:
                table.add_row(Text(record.text, style="dim italic"), "", "", "", "comment")
            continue
        table.add_row(
            record.login or "",
            (record.password or "") if args.show_passwords else MASK,
            record.display_name or "",
            record.email or "",
            "[red]invalid[/red]" if record.invalid else "valid",
        )

    console.print(table)
    console.print(_summary(document, dropped))


def format_main(argv: List[str] = None):
    parser = _base_parser("Rewrite a LAL file in canonical form.")
    parser.add_argument("-o", "--output", type=Path, help="Write to this path instead of in place.")
    parser.add_argument("--check", action="store_true", help="Only report whether the file is canonical.")
    args = parser.parse_args(sys.argv[2:] if argv is None else argv)
    setup_logging(args.log_level)

    try:
        text, document, dropped = _read_document(args.input_file)
        canonical = document.dumps()

        if args.check:
            if canonical == text:
                console.print(f"[bold green]✓[/] {args.input_file} is canonical")
                return
            console.print(f"[bold yellow]✗[/] {args.input_file} would be reformatted")
            sys.exit(1)

        output = args.output or args.input_file
        document.dump(output)
    except (LALError, OSError) as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    if dropped:
        console.print(f"[bold yellow]Warning:[/] dropped {dropped} malformed lines")
    console.print(f"[bold green]✓ Formatted:[/] [magenta]{output}[/] ({len(document)} records)")


def export_main(argv: List[str] = None):
    parser = _base_parser("Export a LAL file as a json, csv, md or txt report.")
    parser.add_argument("-f", "--format", choices=list(SUPPORTED_FORMATS), default="md", help="Output format")
    parser.add_argument("-o", "--output", type=Path, help="Destination path")
    args = parser.parse_args(sys.argv[2:] if argv is None else argv)
    setup_logging(args.log_level)

    if not args.input_file.exists():
        console.print(f"[bold red]Error:[/] File {args.input_file} not found.")
        sys.exit(1)

    if not args.output:
        args.output = args.input_file.with_suffix(f".{args.format}")

    banner = _display_banner()

    try:
        _, document, dropped = _read_document(args.input_file)
        console.print(_summary(document, dropped))
        if not document:
            console.print("[red]No records found, nothing to export.[/red]")
            return

        exporter = DataExporter(banner=banner)
        exporter.export(document_tables(document), args.output, args.format)
        console.print(f"\n[bold green]✓ Export Success:[/] [magenta]{args.output}[/]")
    except (LALError, OSError) as e:
        console.print(f"[bold red]Error:[/] {e}")
        sys.exit(1)
