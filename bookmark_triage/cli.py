"""
Command-line interface for Bookmark Triage.

Subcommands:
  import  parse a Chrome export, split keepers from to-categorize bookmarks
  export  write stored keeper records back to Chrome bookmark HTML
  query   print the full-text search query for free text
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from bookmark_triage import __version__
from bookmark_triage.config.pydantic_config import ConfigurationManager, TriageConfig
from bookmark_triage.core.boundary_detector import BoundaryDetector
from bookmark_triage.core.chrome_html_generator import ChromeHTMLGenerator
from bookmark_triage.core.chrome_html_parser import ChromeHTMLParser
from bookmark_triage.core.data_models import KeeperBookmark
from bookmark_triage.core.import_planner import ImportPlanner
from bookmark_triage.core.search_query import build_ts_query
from bookmark_triage.utils.error_handler import BookmarkTriageError, ValidationError
from bookmark_triage.utils.logging_setup import setup_logging
from bookmark_triage.utils.report_generator import ImportReport


class CLIInterface:
    """Command line interface for importing, exporting and searching bookmarks."""

    def __init__(self):
        self.parser = self._create_parser()
        self.logger = logging.getLogger(__name__)

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser with subcommands."""
        parser = argparse.ArgumentParser(
            prog="bookmark-triage",
            description="Bookmark Triage - split, organize and re-export Chrome bookmarks",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  bookmark-triage import bookmarks.html --output annotated.json
  bookmark-triage import bookmarks.html --strategy scan --plan --existing stored_urls.txt
  bookmark-triage export annotated.json --output keepers.html
  bookmark-triage query "react hooks"
  bookmark-triage --create-config toml

Boundary Marker:
  The last bookmark whose URL equals the sentinel URL inside a folder named
  like the sentinel folder (any path level, case-insensitive) ends the keeper
  section. Override with --sentinel-url / --sentinel-folder, a configuration
  file, or BOOKMARK_TRIAGE_SENTINEL_URL / BOOKMARK_TRIAGE_SENTINEL_FOLDER.
            """,
        )

        parser.add_argument(
            "--version", "-V", action="version", version=f"%(prog)s {__version__}"
        )
        parser.add_argument(
            "--config",
            "-c",
            help="Configuration file path (TOML or JSON)",
        )
        parser.add_argument(
            "--verbose",
            "-v",
            action="store_true",
            help="Enable debug logging on stderr",
        )
        parser.add_argument(
            "--log-file",
            help="Also write a debug log to this file",
        )
        parser.add_argument(
            "--create-config",
            choices=["toml", "json"],
            help="Write a sample bookmark_triage.toml/.json to the current directory",
        )

        subparsers = parser.add_subparsers(dest="command")

        import_parser = subparsers.add_parser(
            "import", help="Parse a Chrome bookmark export and detect the keeper boundary"
        )
        import_parser.add_argument("input", help="Chrome HTML bookmark export")
        import_parser.add_argument(
            "--output", "-o", help="Write annotated bookmarks (JSON) to this file"
        )
        import_parser.add_argument(
            "--strategy", choices=["tree", "scan"], help="Parse strategy override"
        )
        import_parser.add_argument("--sentinel-url", help="Boundary marker URL override")
        import_parser.add_argument(
            "--sentinel-folder", help="Boundary marker folder name override"
        )
        import_parser.add_argument(
            "--plan",
            action="store_true",
            help="Write store-ready import rows instead of annotated bookmarks",
        )
        import_parser.add_argument(
            "--existing",
            help="File with URLs already stored (one per line), used with --plan",
        )
        import_parser.add_argument(
            "--no-report",
            action="store_true",
            help="Skip the per-folder summary table",
        )

        export_parser = subparsers.add_parser(
            "export", help="Export keeper records to Chrome bookmark HTML"
        )
        export_parser.add_argument(
            "input", help="JSON file with bookmark records (list or {'bookmarks': [...]})"
        )
        export_parser.add_argument("--output", "-o", help="Output HTML file")
        export_parser.add_argument(
            "--all",
            action="store_true",
            help="Export every record, not only keepers",
        )

        query_parser = subparsers.add_parser(
            "query", help="Print the full-text search query for free text"
        )
        query_parser.add_argument("text", nargs="+", help="Search text")

        return parser

    def parse_args(self, args=None) -> argparse.Namespace:
        """Parse command line arguments."""
        return self.parser.parse_args(args)

    def load_config(self, parsed_args: argparse.Namespace) -> TriageConfig:
        """Load configuration and apply command-line overrides."""
        manager = ConfigurationManager(parsed_args.config)
        manager.update_from_cli_args(
            {
                "strategy": getattr(parsed_args, "strategy", None),
                "sentinel_url": getattr(parsed_args, "sentinel_url", None),
                "sentinel_folder": getattr(parsed_args, "sentinel_folder", None),
            }
        )
        return manager.config

    def run_import(self, parsed_args: argparse.Namespace, config: TriageConfig) -> int:
        """Parse, detect the boundary, and optionally write results."""
        parser = ChromeHTMLParser(strategy=config.parser.strategy)
        bookmarks = parser.parse_file(parsed_args.input)

        result = BoundaryDetector.from_config(config.boundary).detect(bookmarks)

        if result.boundary_found:
            print(
                f"Parsed {len(bookmarks)} bookmarks: {result.keeper_count} keepers, "
                f"{result.to_categorize_count} to categorize"
            )
        else:
            print(
                f"Parsed {len(bookmarks)} bookmarks: no boundary marker found "
                f"({config.boundary.sentinel_url} in a '{config.boundary.sentinel_folder}' "
                f"folder), all {result.to_categorize_count} to categorize"
            )

        if not parsed_args.no_report:
            ImportReport(result, title=f"Bookmark Import: {Path(parsed_args.input).name}").print()

        payload: Dict[str, Any]
        if parsed_args.plan:
            existing = _read_url_list(parsed_args.existing) if parsed_args.existing else []
            plan = ImportPlanner().plan(result.bookmarks, existing)
            summary = plan.summary()
            print(f"Import plan: {summary['imported']} new, {summary['skipped']} already stored")
            payload = {
                **summary,
                "rows": [row.to_dict() for row in plan.rows],
            }
        else:
            payload = result.to_dict()

        if parsed_args.output:
            _write_json(Path(parsed_args.output), payload)
            print(f"Wrote {parsed_args.output}")

        return 0

    def run_export(self, parsed_args: argparse.Namespace, config: TriageConfig) -> int:
        """Export keeper records to Chrome HTML."""
        records = _read_records(Path(parsed_args.input))
        if not parsed_args.all:
            records = [r for r in records if r.get("is_keeper")]

        keepers = [KeeperBookmark.from_record(r) for r in records]
        output_path = Path(parsed_args.output or config.export.filename)

        ChromeHTMLGenerator().write_html(keepers, output_path)
        print(f"Exported {len(keepers)} bookmarks to {output_path}")
        return 0

    def run_query(self, parsed_args: argparse.Namespace) -> int:
        """Print the tsquery string for the given text."""
        print(build_ts_query(" ".join(parsed_args.text)))
        return 0

    def run(self, args=None) -> int:
        """Execute CLI interface."""
        parsed_args = self.parse_args(args)

        try:
            setup_logging(verbose=parsed_args.verbose, log_file=parsed_args.log_file)

            if parsed_args.create_config:
                output_path = Path(f"bookmark_triage.{parsed_args.create_config}")
                ConfigurationManager.create_sample_config(
                    output_path, parsed_args.create_config
                )
                print(f"Created configuration file: {output_path}")
                return 0

            if parsed_args.command is None:
                self.parser.print_help()
                return 1

            if parsed_args.command == "query":
                return self.run_query(parsed_args)

            config = self.load_config(parsed_args)
            if parsed_args.command == "import":
                return self.run_import(parsed_args, config)
            return self.run_export(parsed_args, config)

        except ValidationError as e:
            print(f"Validation Error: {e}", file=sys.stderr)
            return 1
        except (BookmarkTriageError, ValueError, OSError) as e:
            print(f"Error: {e}", file=sys.stderr)
            self.logger.debug("Command failed", exc_info=True)
            return 1


def _read_url_list(path: str) -> List[str]:
    with open(path, "r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]


def _read_records(path: Path) -> List[Dict[str, Any]]:
    """
    Read bookmark records from JSON.

    Accepts a bare list, or an object holding the list under
    ``bookmarks`` (import output) or ``rows`` (import plan output).

    Raises:
        ValidationError: If the file does not hold a list of records
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(f"{path} is not valid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("bookmarks", data.get("rows"))

    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise ValidationError(f"{path} does not contain a list of bookmark records")

    return data


def _write_json(path: Path, payload: Dict[str, Any]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)


def main(args=None):
    """Main entry point for the CLI."""
    cli = CLIInterface()
    return cli.run(args)


if __name__ == "__main__":
    sys.exit(main())
