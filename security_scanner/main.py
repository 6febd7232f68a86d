"""Security scanner command line.

Scans a repository and prints the report in the requested format.  Settings
come from the environment (see ``config.ScannerConfig``); command-line values win.
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from security_scanner.config import OUTPUT_FORMATS, ScannerConfig, parse_category_list
from security_scanner.errors import ScannerError
from security_scanner.formatting import format_scan_result
from security_scanner.orchestrator import CATEGORY_NAMES, scan

EXIT_CRITICAL = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="security-scanner",
        description="Scan a repository for secrets, risky code and hygiene gaps.",
    )
    sub = parser.add_subparsers(dest="command")

    scan_cmd = sub.add_parser("scan", help="Scan a repository for security issues")
    scan_cmd.add_argument("path", nargs="?", help="Repository to scan (default: $SCAN_PATH or cwd)")
    scan_cmd.add_argument("-f", "--format", choices=OUTPUT_FORMATS, help="Output format")
    scan_cmd.add_argument(
        "-c", "--categories", nargs="+", metavar="CATEGORY",
        help=f"Categories to scan: {', '.join(CATEGORY_NAMES)} or all",
    )

    sub.add_parser("serve", help="Run the MCP server on stdio")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        from security_scanner import server
        server.main()
        return 0

    config = ScannerConfig.from_env()
    if args.command == "scan":
        config = config.override(
            scan_path=args.path,
            output_format=args.format,
        )
        if args.categories:
            config = replace(config, categories=parse_category_list(args.categories))

    logging.basicConfig(
        stream=sys.stderr,
        level=config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return run_scan(config)


def run_scan(config: ScannerConfig) -> int:
    try:
        result = scan(config.scan_path, config.categories)
    except ScannerError as e:
        print(f"Error: {e.message}")
        return EXIT_ERROR

    print(format_scan_result(result, config.output_format))

    if config.fail_on_critical and result.summary.critical > 0:
        if config.output_format != "json":
            print(f"\n⛔ {result.summary.critical} critical finding(s) detected!")
        return EXIT_CRITICAL

    return 0


if __name__ == "__main__":
    sys.exit(main())
