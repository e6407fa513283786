from __future__ import annotations

import argparse
import json
import sys

import yaml

from . import __version__
from .utils.io import ConfigFileError, load_file_to_map, write_map_to_file
from .utils.run import log_event


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fileconf",
        description="Load, print and convert JSON/YAML configuration files.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"fileconf {__version__}",
        help="Show version and exit",
    )
    parser.add_argument(
        "--log",
        type=str,
        required=False,
        help="Optional JSONL file to append load/write events to",
    )

    subparsers = parser.add_subparsers(dest="command")

    show_parser = subparsers.add_parser("show", help="Print a JSON/YAML file as parsed data")
    show_parser.add_argument("path", type=str, help="Path to a .json, .yaml or .yml file")
    show_parser.add_argument(
        "--format",
        type=str,
        default="json",
        choices=["json", "yaml"],
        help="Output format",
    )

    convert_parser = subparsers.add_parser(
        "convert", help="Rewrite a file in the format given by the destination extension"
    )
    convert_parser.add_argument("src", type=str, help="Source .json/.yaml/.yml file")
    convert_parser.add_argument("dst", type=str, help="Destination .json/.yaml/.yml file")

    return parser


def _cmd_show(path: str, fmt: str, log: str | None) -> int:
    data = load_file_to_map(path)
    log_event(log, "load", path=path, keys=len(data))
    if fmt == "yaml":
        sys.stdout.write(yaml.safe_dump(data, sort_keys=False, allow_unicode=True))
    else:
        sys.stdout.write(json.dumps(data, ensure_ascii=False, indent=2, default=str) + "\n")
    return 0


def _cmd_convert(src: str, dst: str, log: str | None) -> int:
    data = load_file_to_map(src)
    log_event(log, "load", path=src, keys=len(data))
    write_map_to_file(dst, data)
    log_event(log, "write", path=dst, keys=len(data))
    sys.stdout.write(f"Wrote {dst}\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        if args.command == "show":
            return _cmd_show(args.path, args.format, args.log)
        if args.command == "convert":
            return _cmd_convert(args.src, args.dst, args.log)
    except (ValueError, ConfigFileError) as e:
        log_event(args.log, "error", command=args.command, message=str(e))
        sys.stderr.write(f"Error: {e}\n")
        return 2
    # Default: print help
    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
