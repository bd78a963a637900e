"""
Command line entry point: compose up to nine PDFs onto one A4 sheet.

Example:
    pdfgrid a.pdf b.pdf c.pdf -o out --name handout --gap 10
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from . import __version__
from .composer import GenerationError
from .layout import MAX_SLOTS, SheetConfig
from .session import DEFAULT_EXPORT_NAME, GridSession
from .sources import SourceItem, is_pdf_name

logger = logging.getLogger("pdfgrid")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdfgrid",
        description=(
            f"Place the first page of up to {MAX_SLOTS} PDFs into a 3x3 grid "
            "on a single A4 page (left-to-right, top-to-bottom)."
        ),
    )
    parser.add_argument("inputs", nargs="+", type=Path, help="Source PDF files, in layout order")
    parser.add_argument("--output-dir", "-o", type=Path, default=Path("."),
                        help="Directory for the generated PDF (default: current directory)")
    parser.add_argument("--name", "-n", default=DEFAULT_EXPORT_NAME,
                        help=f"Export file name without extension (default: {DEFAULT_EXPORT_NAME})")
    parser.add_argument("--margin", type=float, default=20, help="Sheet margin in points (default: 20)")
    parser.add_argument("--gap", type=float, default=15, help="Gap between cells in points (default: 15)")
    parser.add_argument("--no-borders", action="store_true", help="Do not outline the cells")
    parser.add_argument("--rasterize", action="store_true",
                        help="Draw source pages as images instead of embedding them as vector content")
    parser.add_argument("--dpi", type=int, default=200, help="Rasterisation DPI with --rasterize (default: 200)")
    parser.add_argument("--preview", action="store_true", help="Print the slot order and exit")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _load_sources(paths: Sequence[Path]) -> List[SourceItem]:
    """Read the PDF inputs, skipping files without a .pdf extension."""
    items = []
    for path in paths:
        if not is_pdf_name(path.name):
            logger.warning(f"Skipping {path}: only PDF files are accepted")
            continue
        items.append(SourceItem.from_path(path))
    return items


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        config = SheetConfig(
            margin=args.margin,
            gap=args.gap,
            show_borders=not args.no_borders,
            rasterize=args.rasterize,
            render_dpi=args.dpi,
        )
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    try:
        items = _load_sources(args.inputs)
    except OSError as e:
        logger.error(f"Cannot read input: {e}")
        return 1

    session = GridSession(config, export_name=args.name)
    session.add(items)

    if args.preview:
        for line in session.slot_summary():
            print(line)
        return 0

    if not session.items:
        logger.error("No PDF files to place")
        return 1

    try:
        result = session.generate()
    except GenerationError as e:
        logger.error(f"Failed to generate PDF: {e}")
        return 1

    for warning in result.warnings:
        logger.warning(warning)

    try:
        path = session.save_artifact(args.output_dir)
    except OSError as e:
        logger.error(f"Cannot write output: {e}")
        return 1

    print(path)
    return 0
