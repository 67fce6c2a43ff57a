#!/usr/bin/env python3
"""Backup verification CLI.

Checks an existing backup file against its attachment store without any
network access: the backup must parse, and every attachment it lists must
be present with its declared size.

Usage:
    python -m vacuum_table.cli.verify backup.json attachments/
"""

import argparse
import sys

from rich.console import Console

from vacuum_table.backup.snapshot import validate_backup

console = Console()


def cmd_verify(args: argparse.Namespace) -> int:
    """Handle verify command."""
    result = validate_backup(args.backup_path, args.download_dir)

    console.print(f"Validating: {args.backup_path}", markup=False)

    if result["errors"]:
        console.print(f"\n[red]x INVALID - Found {len(result['errors'])} errors:[/red]")
        for error in result["errors"]:
            console.print(f"   - {error}", markup=False)

    if result["warnings"]:
        console.print(f"\n[yellow]Found {len(result['warnings'])} warnings:[/yellow]")
        for warning in result["warnings"]:
            console.print(f"   - {warning}", markup=False)

    if result["valid"]:
        if result["warnings"]:
            console.print("\n[bold green]v[/bold green] Backup is valid (with warnings)")
        else:
            console.print("\n[bold green]v[/bold green] Backup is valid")
        return 0

    console.print("\n[bold red]x[/bold red] Backup is invalid")
    return 1


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="vacuum-table-verify",
        description="Verify a backup file against its attachment store",
    )
    parser.add_argument("backup_path", help="Path to backup JSON file")
    parser.add_argument("download_dir", help="Directory holding attachment files")

    args = parser.parse_args(argv)
    return cmd_verify(args)


if __name__ == "__main__":
    sys.exit(main())
