"""Command line front-end: compiled LevelData -> editable chart JSON."""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .audit import AuditLog
from .config import TranslatorOptions, config_path, load_config
from .errors import ConfigError, StructuralError
from .offset import Offset
from .translator import Translator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="leveldata-translator",
        description="Reverse-translate compiled Sonolus LevelData into an editable chart",
        epilog=(
            "examples:\n"
            "  leveldata-translator -i input/level1.json -o output/\n"
            "  leveldata-translator -i input/ -o output/"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-i", "--input",
        help="Input level file or directory (default: paths.input from config)",
    )
    parser.add_argument(
        "-o", "--output",
        help="Output directory (default: paths.output from config)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML config merged over the packaged defaults",
    )
    parser.add_argument(
        "--vertical-offset",
        type=float,
        default=None,
        help="Beat offset added to every note (overrides offset.vertical)",
    )
    parser.add_argument(
        "--lane-offset",
        type=int,
        default=None,
        help="Lane offset added to every note (overrides offset.lane)",
    )
    parser.add_argument(
        "--minified",
        action="store_true",
        help="Write compact JSON",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Directory for the audit log (default: paths.logs from config)",
    )
    parser.add_argument(
        "--no-audit",
        action="store_true",
        help="Do not write an audit log file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose console output",
    )
    return parser


def _options(args: argparse.Namespace, cfg: dict) -> TranslatorOptions:
    options = TranslatorOptions.from_config(cfg)
    offset = Offset(
        vertical=(
            args.vertical_offset
            if args.vertical_offset is not None
            else options.offset.vertical
        ),
        lane=args.lane_offset if args.lane_offset is not None else options.offset.lane,
    )
    return dataclasses.replace(
        options, offset=offset, minified=args.minified or options.minified
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )

    try:
        cfg = load_config(args.config)
        options = _options(args, cfg)
        input_path = Path(args.input) if args.input else config_path(cfg, "input")
        output_dir = Path(args.output) if args.output else config_path(cfg, "output")
        log_dir = Path(args.log_dir) if args.log_dir else config_path(cfg, "logs")
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not input_path.exists():
        print(f"Error: input not found: {input_path}", file=sys.stderr)
        return 1

    audit = AuditLog() if args.no_audit else AuditLog.to_file(log_dir)
    with audit:
        translator = Translator(options, audit)
        if input_path.is_file():
            try:
                result = translator.translate_file(input_path, output_dir)
            except (StructuralError, OSError) as e:
                print(f"Error translating {input_path}: {e}", file=sys.stderr)
                return 1
            print(
                f"[done] {input_path.name} -> {result.output} | notes={len(result.notes)}"
                f" errors={len(result.errors)} warnings={len(result.warnings)}"
            )
            return 0

        summary = translator.translate_batch(input_path, output_dir)
        print(
            f"[done] files={summary.files} succeeded={summary.succeeded}"
            f" failed={summary.failed} entities={summary.entities} notes={summary.notes}"
        )
        for name, reason in summary.failures:
            print(f"  failed: {name} -> {reason}", file=sys.stderr)
        if audit.path is not None:
            print(f"Audit log: {audit.path}")
        return 2 if summary.failed else 0
