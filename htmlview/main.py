#!/usr/bin/env python3
"""
htmlview - command line entry point.

Parses an HTML file (or stdin) and prints selector matches, links or
serialized HTML.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from htmlview import __version__
from htmlview.dom import Parser, SelectorError
from htmlview.extract import debug_elements, extract_links
from htmlview.utils.config import Config
from htmlview.utils.logging import PerformanceLogger, log_exception, setup_logging

logger = logging.getLogger("htmlview.main")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="htmlview",
        description="Query and serialize HTML documents with simple CSS selectors")

    parser.add_argument("file", nargs="?", default="-", help="HTML file to read ('-' for stdin)")
    parser.add_argument("-s", "--select", help="Selector (#id, .class, tag, tag[attr], tag[attr=\"v\"], or a comma separated union)")
    parser.add_argument("--first", action="store_true", help="Only use the first match")
    parser.add_argument("--links", action="store_true", help="Print the links as JSON")
    parser.add_argument("--html", choices=["inner", "outer"], help="Print serialized HTML of the matches")
    parser.add_argument("--strict", action="store_true", help="Fail on unsupported selector syntax")
    parser.add_argument("--config", help="Path to a JSON configuration file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"htmlview {__version__}")

    return parser.parse_args(argv)


def read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = Config(args.config) if args.config else Config.from_env()
    except (OSError, ValueError) as e:
        setup_logging(console_level="DEBUG" if args.debug else "WARNING")
        log_exception(logger, e, "Cannot load configuration")
        return 1
    if args.strict:
        config.set("selector.strict", True)

    setup_logging(log_file=config.get("logging.file"),
                  console_level="DEBUG" if args.debug else config.get("logging.level", "WARNING"))
    perf = PerformanceLogger(logger, "htmlview")

    try:
        parser = Parser(config)
    except ValueError as e:
        log_exception(logger, e, "Invalid selector configuration")
        return 1

    try:
        content = read_input(args.file)
    except OSError as e:
        log_exception(logger, e, f"Cannot read {args.file}")
        return 1

    perf.start("parse")
    result = parser.parse(content)
    perf.end("parse")

    scope = result.document
    if scope is None:
        logger.warning("Input is empty")
        print("[]")
        return 0

    if args.select:
        perf.start("query")
        try:
            if args.first:
                match = scope.query_selector(args.select)
                elements = [match] if match is not None else []
            else:
                elements = scope.query_selector_all(args.select)
        except SelectorError as e:
            logger.error(f"Unsupported selector {args.select!r}: {e}")
            return 1
        perf.end("query")
    else:
        elements = [result.root] if result.root is not None else []

    if args.links:
        links = []
        for element in elements:
            links.extend(extract_links(element))
        print(json.dumps(links, indent=2, ensure_ascii=False))
    elif args.html:
        for element in elements:
            print(element.outer_html() if args.html == "outer" else element.inner_html())
    else:
        summary = debug_elements(
            elements,
            max_elements=config.get("debug.max_elements", 10),
            show_content=config.get("debug.show_content", True),
            show_attributes=config.get("debug.show_attributes", True))
        print(json.dumps(summary, indent=2, ensure_ascii=False))

    return 0


if __name__ == "__main__":
    sys.exit(main())
