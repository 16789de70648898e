"""
Print the parsed contents of a CSV file without touching the database
"""

from pathlib import Path

from iar_uploader.core.exceptions import AppException
from iar_uploader.interfaces.cli.commands.base import BaseCommand
from iar_uploader.processors.csv_processor import decode_csv_bytes, parse_csv


class Command(BaseCommand):
    description = "Preview a CSV file the way the upload will read it"

    def add_arguments(self, parser):
        parser.add_argument("file", help="Path to the CSV file")
        parser.add_argument(
            "--rows",
            type=int,
            default=None,
            help="Show at most this many rows (default: all)",
        )

    def handle(self, **kwargs) -> int:
        path = Path(kwargs["file"])
        limit = kwargs.get("rows")

        try:
            parsed = parse_csv(decode_csv_bytes(path.read_bytes(), file_name=path.name))
        except OSError as e:
            self.print_error(f"Cannot read {path}: {e}")
            return 1
        except AppException as e:
            self.print_error(e.message)
            return 1

        if parsed.is_empty:
            self.print_warning("CSV appears empty.")
            return 1
        if not parsed.has_rows:
            self.print_warning("CSV has headers but no data rows.")
            return 1

        rows = parsed.rows if limit is None else parsed.rows[:limit]
        print(" | ".join(parsed.headers))
        for row in rows:
            print(" | ".join(row.get(header, "") for header in parsed.headers))
        print()
        self.print_info(f"Showing {len(rows)} of {parsed.total_rows} row(s).")
        return 0
