#!/usr/bin/env python3
"""
DNS Update Manager - Command Line Interface

Main entry point for the DNS Update Manager CLI.
"""

import argparse
import ipaddress
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from rich.console import Console
from rich.table import Table

from ..errors import DNSUpdateError
from ..parsers.csv import CSVParser
from ..providers.dns_client import DNSClient

console = Console()
logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dns-update",
        description="DNS Update Manager - TSIG-authenticated dynamic DNS updates",
    )

    parser.add_argument(
        "--config",
        "-c",
        default="configs/config.yaml",
        help="Configuration file path (default: configs/config.yaml)",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    get_parser = commands.add_parser("get", help="Show the zone's current records")
    get_parser.add_argument("zone", help="DNS zone to read")

    for name, help_text in (
        ("append", "Add records to the zone"),
        ("set", "Set records in the zone"),
        ("delete", "Delete records from the zone"),
    ):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("zone", help="DNS zone to update")
        sub.add_argument(
            "--txt",
            action="append",
            default=[],
            metavar="NAME=TEXT",
            help="TXT record, may be repeated",
        )
        sub.add_argument(
            "--address",
            action="append",
            default=[],
            metavar="NAME=IP",
            help="A or AAAA record, may be repeated",
        )
        sub.add_argument(
            "--csv", "-f", help="CSV file with Type,Name,Value columns"
        )

    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if not Path(args.config).exists():
        print(f"Error: Configuration file '{args.config}' not found")
        sys.exit(1)

    config = load_config(args.config)
    config_logger(config, args.verbose)

    try:
        client = DNSClient(config)

        if args.command == "get":
            records = client.get_records(args.zone)
            display_records(f"Records in {args.zone}", records)
            sys.exit(0)

        records = collect_records(args)
        if not records:
            print("Error: no records given (use --txt, --address or --csv)")
            sys.exit(1)

        operation = getattr(client, f"{args.command}_records")
        processed = operation(args.zone, records)
        display_records(f"{args.command.capitalize()}: {args.zone}", processed)
        print("DNS update completed successfully")
        sys.exit(0)

    except (DNSUpdateError, OSError, ValueError) as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)


def collect_records(args) -> List[Dict[str, str]]:
    """Gather generic records from --txt, --address and --csv options."""
    records = []

    for item in args.txt:
        name, text = _split_assignment(item, "--txt")
        records.append({"type": "TXT", "name": name, "text": text})

    for item in args.address:
        name, ip = _split_assignment(item, "--address")
        records.append({"type": _address_type(ip), "name": name, "ip": ip})

    if args.csv:
        if not Path(args.csv).exists():
            raise ValueError(f"CSV file '{args.csv}' not found")
        records.extend(CSVParser(args.csv).parse())

    return records


def _split_assignment(item: str, option: str):
    name, sep, value = item.partition("=")
    if not sep:
        raise ValueError(f"{option} expects NAME=VALUE, got '{item}'")
    return name.strip(), value


def _address_type(ip: str) -> str:
    try:
        return "AAAA" if ipaddress.ip_address(ip.strip()).version == 6 else "A"
    except ValueError:
        # the provider rejects the bad address with a proper parse error
        return "A"


def display_records(title: str, records: List[Dict[str, str]]):
    """Display records as a table."""
    table = Table(title=title)
    table.add_column("Type", style="cyan")
    table.add_column("Name", style="magenta")
    table.add_column("Value", style="white")

    for record in records:
        value = record.get("text", record.get("ip", ""))
        table.add_row(record.get("type", ""), record.get("name", ""), str(value))

    console.print(table)
    console.print(f"\n[bold]Total records: {len(records)}[/bold]")


def load_config(config_path: str) -> Dict:
    """Load configuration from YAML file."""
    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}
        logger.info(f"Configuration loaded from {config_path}")
        return config
    except yaml.YAMLError as e:
        logger.error(f"Error parsing config file: {e}")
        sys.exit(1)


def config_logger(config: Dict, verbose: bool = False):
    """Configure logging."""
    logging_config = config.get("logging") or {}
    log_level = "DEBUG" if verbose else logging_config.get("level", "INFO")

    handlers = [logging.StreamHandler(sys.stdout)]
    log_file = logging_config.get("file")
    if log_file:
        handlers.insert(0, logging.FileHandler(log_file))

    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=handlers)


if __name__ == "__main__":
    main()
