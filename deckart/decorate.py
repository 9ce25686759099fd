#!/usr/bin/env python3
"""
Decorate an HTML slide deck with seeded background artwork.

Examples:
    python -m deckart.decorate --in deck.html --url /deck/index.html#intro --out out.html
    python -m deckart.decorate --in deck.html --url /deck/index.html \\
        --fragment '#intro' --fragment '#outro' --out-dir build/
"""

import argparse
import logging
import sys
from pathlib import Path

from deckart.core import get_logger, set_level, set_stream
from deckart.seeded.render import decorate_html, render_fragments
from deckart.utils.config import load_decor_config

log = get_logger("deckart.decorate")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Add seeded SVG decorations to slide containers")
    parser.add_argument("--in", dest="input_file", required=True, help="Input HTML deck")
    parser.add_argument("--url", default=None, help="Page location used for seeding")
    parser.add_argument("--out", default=None, help="Output HTML file (stdout when omitted)")
    parser.add_argument("--out-dir", default=None, help="Output directory for --fragment renders")
    parser.add_argument("--config", default=None, help="YAML config file")
    parser.add_argument(
        "--seed-mode",
        choices=["hash", "path", "full", "hash+path", "hash+slide"],
        default=None,
        help="Seed mode override",
    )
    parser.add_argument("--density", type=int, default=None, help="Shapes per container")
    parser.add_argument("--layers", type=int, default=None, help="Layer count")
    parser.add_argument(
        "--fragment",
        action="append",
        default=[],
        help="Render once per location fragment (repeatable)",
    )
    parser.add_argument("--no-env", action="store_true", help="Ignore DECKART_* environment overrides")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def _cli_overrides(args) -> dict:
    overrides = {}
    if args.seed_mode:
        overrides["seed_mode"] = args.seed_mode
    if args.density is not None:
        overrides["density"] = args.density
    if args.layers is not None:
        overrides["layers"] = args.layers
    return overrides


def _fragment_filename(input_path: Path, fragment: str) -> str:
    name = fragment.lstrip("#") or "index"
    return f"{input_path.stem}.{name}{input_path.suffix or '.html'}"


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_level(logging.DEBUG)
    if not args.out and not args.fragment:
        # stdout carries the document itself.
        set_stream(sys.stderr)

    input_path = Path(args.input_file)
    if not input_path.exists():
        print(f"Error: Input file not found: {input_path}", file=sys.stderr)
        return 1

    try:
        cfg = load_decor_config(
            args.config, cli_overrides=_cli_overrides(args), use_env=not args.no_env
        )
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    html = input_path.read_text(encoding="utf-8")

    if args.fragment:
        out_dir = Path(args.out_dir or input_path.parent)
        out_dir.mkdir(parents=True, exist_ok=True)
        rendered = render_fragments(html, args.url, args.fragment, cfg)
        for fragment, document in rendered.items():
            target = out_dir / _fragment_filename(input_path, fragment)
            target.write_text(document, encoding="utf-8")
            log.info(f"Wrote {target}")
        return 0

    document = decorate_html(html, args.url, cfg)
    if args.out:
        Path(args.out).parent.mkdir(parents=True, exist_ok=True)
        Path(args.out).write_text(document, encoding="utf-8")
        log.info(f"Wrote {args.out}")
    else:
        sys.stdout.write(document)
    return 0


if __name__ == "__main__":
    sys.exit(main())
