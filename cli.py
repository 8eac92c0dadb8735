#!/usr/bin/env python3
"""Command-line entry point: minify class/id names across a directory tree.

    python cli.py site/ dist/ --attr class --attr id --alias-map map.json
"""

from __future__ import annotations

import argparse
import sys

from minifier.config import load_config
from minifier.corpus import minify_tree
from minifier.errors import ConfigError
from minifier.log import configure_logging


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Replace class/id names in HTML and CSS files with short aliases"
    )
    ap.add_argument("input", help="input directory")
    ap.add_argument(
        "output",
        nargs="?",
        help="output directory (default: rewrite the input directory in place)",
    )
    ap.add_argument(
        "--attr",
        dest="attributes",
        action="append",
        metavar="NAME",
        help="attribute kind to minify; repeatable (default: class, id)",
    )
    ap.add_argument("--workers", type=int, help="threads used for both passes")
    ap.add_argument(
        "--alias-map", dest="alias_map_path", help="write the alias map as JSON"
    )
    ap.add_argument("--log-level", default="INFO", help="logging level (default: INFO)")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logger = configure_logging(args.log_level.upper())

    try:
        config = load_config(
            attributes=args.attributes,
            workers=args.workers,
            alias_map_path=args.alias_map_path,
        )
    except ConfigError as exc:
        print(f"[MINIFY] invalid configuration: {exc}", file=sys.stderr)
        return 2

    result = minify_tree(args.input, args.output, config)

    total = sum(len(aliases) for aliases in result.alias_map.values())
    logger.info(
        "minified %d files, %d aliases, %d passthrough",
        len(result.outputs),
        total,
        len(result.skipped),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
