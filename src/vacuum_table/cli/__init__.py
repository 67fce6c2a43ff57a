"""CLI for backing up Airtable bases.

Lists every table in the config, writes the backup file, then downloads
attachments that are not already in the download directory.  Re-running
against the same download directory only fetches new attachments.

Usage:
    vacuum-table config.json backup.json attachments/
    vacuum-table --quiet config.json backup.json attachments/

Config file:
    {"token": "keyXXXXXXXXXXXXXX",
     "app-tables": {"appXXXXXXXXXXXXXX": ["tblXXXXXXXXXXXXXX"]}}
"""

import argparse
import asyncio
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from vacuum_table.backup.snapshot import backup_bases
from vacuum_table.errors import VacuumTableError

console = Console(stderr=True)


def _configure_logging(quiet: bool) -> None:
    """Send library progress lines to stderr through rich."""
    logging.basicConfig(
        level=logging.WARNING if quiet else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def cmd_backup(args: argparse.Namespace) -> int:
    """Run a full backup.

    Wraps the async pipeline with ``asyncio.run()``.

    Args:
        args: Parsed CLI arguments.

    Returns:
        0 on success, 1 on failure.
    """
    try:
        summary = asyncio.run(
            backup_bases(args.config, args.output, args.download_dir)
        )
    except (VacuumTableError, OSError, ValueError) as e:
        # one line, even for multi-line validation errors
        message = " ".join(str(e).split())
        console.print(f"Error: {message}", markup=False, highlight=False, soft_wrap=True)
        return 1

    if not args.quiet:
        console.print(
            f"[bold green]v[/bold green] Backup complete: "
            f"{summary.downloaded} attachments downloaded, "
            f"{summary.already_present} already present"
        )
    return 0


# ============================================================================
# Main entry point
# ============================================================================


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = argparse.ArgumentParser(
        prog="vacuum-table",
        description="Back up Airtable bases and their attachments",
    )
    parser.add_argument("config", help="Path to config JSON file")
    parser.add_argument("output", help="Backup JSON file to write")
    parser.add_argument(
        "download_dir",
        help="Existing directory for attachment files",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only print errors",
    )

    args = parser.parse_args(argv)
    _configure_logging(args.quiet)
    return cmd_backup(args)


if __name__ == "__main__":
    sys.exit(main())
