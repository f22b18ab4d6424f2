#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
docstyle command line.

Commands:
    render    Markdown -> styled HTML fragment
    paginate  Markdown -> printable paginated HTML document
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from config.constants import LOG_FILE
from config.logging_config import setup_logger
from . import __version__
from .exceptions import DocstyleError
from .formatting.profile import get_default_profile, load_overrides, load_profile
from .pagination.measurer import create_measurer
from .pagination.print_layout import layout_document
from .rendering.document_renderer import DocumentRenderer


def _load_inputs(args):
    markdown = Path(args.input).read_text(encoding="utf-8")
    profile = load_profile(args.profile) if args.profile else get_default_profile()
    overrides = load_overrides(args.overrides) if args.overrides else {}
    return markdown, profile, overrides


def _write_output(text: str, output: Optional[str]) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
        print(f"✅ Written: {output}")
    else:
        sys.stdout.write(text)


def cmd_render(args) -> int:
    markdown, profile, overrides = _load_inputs(args)
    result = DocumentRenderer(profile=profile).render(
        markdown,
        overrides=overrides,
        selectable=args.selectable,
        auth_token=args.token,
    )
    for key in result.orphaned_overrides:
        print(f"⚠️  Override matches no element: {key}", file=sys.stderr)
    _write_output(result.html, args.output)
    return 0


def cmd_paginate(args) -> int:
    markdown, profile, overrides = _load_inputs(args)

    async def run():
        measurer = create_measurer(args.backend)
        try:
            return await layout_document(
                markdown,
                profile=profile,
                overrides=overrides,
                measurer=measurer,
                include_toc=args.toc,
                auth_token=args.token,
                title=Path(args.input).stem,
            )
        finally:
            await measurer.close()

    layout = asyncio.run(run())
    print(f"📄 {layout.page_count} page(s)", file=sys.stderr)
    _write_output(layout.html, args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docstyle",
        description="Render Markdown into styled, paginated HTML",
        epilog="""
Examples:
  %(prog)s render report.md --profile gost.json -o report.html
  %(prog)s paginate report.md --toc --backend browser -o print.html
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("input", help="Input Markdown file")
    common.add_argument("--profile", help="Style profile JSON (default: built-in GOST profile)")
    common.add_argument("--overrides", help="Per-element overrides JSON")
    common.add_argument("--token", help="Auth token appended to asset image URLs")
    common.add_argument("-o", "--output", help="Output file (default: stdout)")
    common.add_argument(
        "--log-file",
        nargs="?",
        const=LOG_FILE,
        help=f"Write a DEBUG log file (default path: {LOG_FILE})",
    )

    render = subparsers.add_parser("render", parents=[common], help="Render styled HTML")
    render.add_argument(
        "--selectable",
        action="store_true",
        help="Mark styled elements for click-to-select editing",
    )
    render.set_defaults(func=cmd_render)

    paginate = subparsers.add_parser("paginate", parents=[common], help="Render a paginated print document")
    paginate.add_argument(
        "--backend",
        choices=["heuristic", "browser"],
        help="Measurement backend (default: DOCSTYLE_MEASURE_BACKEND or heuristic)",
    )
    paginate.add_argument("--toc", action="store_true", help="Prepend a table of contents")
    paginate.set_defaults(func=cmd_paginate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = setup_logger("docstyle", log_file=args.log_file)
    try:
        return args.func(args)
    except FileNotFoundError as e:
        print(f"\n❌ Error: {e}", file=sys.stderr)
        return 1
    except DocstyleError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"\n❌ Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
