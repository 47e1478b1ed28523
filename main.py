#!/usr/bin/env python3
"""
apacheconf: Apache httpd.conf parser
CLI Entry Point

Parses Apache configuration files into a nested structure and prints or
writes it as canonical text, JSON, an HTML tree, or flattened keys.

Usage:
    python main.py [--config /etc/apache/httpd.conf] [--format text|json|html|flat] [--output FILE]
    python main.py --config-dir /etc/apache/conf.d [--format json] [--output DIR]
"""

import argparse
import json
import logging
import os
import sys
from typing import Dict, List, Tuple

from apacheconf.emitter import ConfigEmitter  # pyre-ignore
from apacheconf.errors import ParseError  # pyre-ignore
from apacheconf.flattener import Flattener  # pyre-ignore
from apacheconf.input_handler import InputHandler, DEFAULT_CONFIG_PATH  # pyre-ignore
from apacheconf.parser_engine import ParserEngine, ParsedConfig  # pyre-ignore
from apacheconf.report_generator import ReportGenerator  # pyre-ignore


# File extension per output format in --config-dir mode
OUTPUT_EXTENSIONS = {"text": "conf", "json": "json", "html": "html", "flat": "txt"}


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def render(parsed: ParsedConfig, output_format: str, output_path: str = None) -> str:  # pyre-ignore
    """
    Render a parsed configuration in the requested format.

    Writes to output_path when given, and returns the rendered text
    (for html/json with an output path, the path written).
    """
    report_gen = ReportGenerator()

    if output_format == "html":
        if output_path:
            return report_gen.generate_html(parsed, output_path)
        return report_gen.render_html(parsed)

    if output_format == "json":
        if output_path:
            return report_gen.generate_json(parsed, output_path)
        return json.dumps(report_gen.to_dict(parsed), indent=2, default=str)

    if output_format == "flat":
        flat = Flattener().flatten(parsed.document)
        text = "\n".join(
            f"{key} = {' | '.join(' '.join(args) for args in values)}"
            for key, values in flat.flat_keys.items()
        ) + "\n"
    else:
        text = ConfigEmitter().emit(parsed.document)

    if output_path:
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(text)
        return output_path
    return text


def run_parse(
    config_path: str = DEFAULT_CONFIG_PATH,
    output_format: str = "text",
    output_path: str = None,  # pyre-ignore
) -> ParsedConfig:
    """Load, parse and render a single configuration file."""
    logger = logging.getLogger("apacheconf")

    logger.info("Loading configuration file...")
    engine = ParserEngine()
    parsed = engine.parse_file(config_path)

    summary = ReportGenerator().summarize(parsed.document)
    print(f"  [FILE]  {parsed.source.filename} ({parsed.source.file_size} bytes)", file=sys.stderr)
    print(f"  [PARSE] {summary['directives']} directives, {summary['blocks']} blocks", file=sys.stderr)

    result = render(parsed, output_format, output_path)
    if output_path:
        print(f"  [OUT]   {result}", file=sys.stderr)
    else:
        sys.stdout.write(result)

    return parsed


def run_directory(
    dir_path: str,
    output_format: str = "text",
    output_dir: str = None,  # pyre-ignore
) -> Tuple[list, List[Dict[str, str]]]:
    """
    Parse every configuration file in a directory.

    With output_dir, each rendering is written to
    <output_dir>/<filename>.<ext>; otherwise it goes to stdout. Files that
    fail to load or parse are reported and skipped.

    Returns:
        The parsed files, and {file, error} dicts for the files that failed.
    """
    handler = InputHandler()
    engine = ParserEngine(input_handler=handler)
    inputs, failures = handler.load_directory(dir_path)

    for error in failures:
        print(f"  [SKIP]  {error['file']}: {error['error']}", file=sys.stderr)

    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    results = []
    for config_input in inputs:
        try:
            parsed = engine.parse(config_input)
        except ParseError as e:
            print(f"  [FAIL]  {config_input.filename}: {e}", file=sys.stderr)
            failures.append({"file": config_input.path, "error": str(e)})
            continue

        print(f"  [FILE]  {config_input.filename}: {len(parsed.document)} entries", file=sys.stderr)
        if output_dir:
            target = os.path.join(
                output_dir, f"{config_input.filename}.{OUTPUT_EXTENSIONS[output_format]}"
            )
            print(f"  [OUT]   {render(parsed, output_format, target)}", file=sys.stderr)
        else:
            sys.stdout.write(render(parsed, output_format))
        results.append(parsed)

    return results, failures


def main(argv=None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="apacheconf",
        description="apacheconf: parse Apache httpd.conf into a nested structure",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --config datasets/apache/httpd.conf
  python main.py --config datasets/apache/httpd.conf --format json
  python main.py --config datasets/apache/httpd.conf --format html --output tree.html
  python main.py --config-dir datasets/apache --format flat
        """
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--config", "-c",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to the configuration file (default: {DEFAULT_CONFIG_PATH})"
    )
    source.add_argument(
        "--config-dir",
        default=None,
        help="Parse every .conf file in this directory"
    )
    parser.add_argument(
        "--format", "-f",
        choices=["text", "json", "html", "flat"],
        default="text",
        help="Output format (default: text)"
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output file path, or output directory with --config-dir (default: stdout)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose/debug logging"
    )

    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        if args.config_dir:
            _, failures = run_directory(args.config_dir, args.format, args.output)
            if failures:
                return 1
        else:
            run_parse(
                config_path=args.config,
                output_format=args.format,
                output_path=args.output,
            )
    except FileNotFoundError as e:
        print(f"\n  [ERROR] File Error: {e}", file=sys.stderr)
        return 1
    except ParseError as e:
        print(f"\n  [ERROR] Parse Error: {e}", file=sys.stderr)
        return 1
    except (ValueError, PermissionError, NotADirectoryError) as e:
        print(f"\n  [ERROR] Validation Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
