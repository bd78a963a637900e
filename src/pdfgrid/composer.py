"""
Module: pdfgrid.composer

Purpose:
    Orchestrate one generation request.
    Decode → Fit → Render → Serialize

    Every source item is turned into a per-slot result (placed or
    failed) before anything is drawn, so a corrupt input only ever
    affects its own cell.

Key Functions:
    - plan_sheet(): Decode sources and compute per-slot results
    - generate(): Main entry point, returns the finished PDF

Key Classes:
    - GenerationResult: PDF bytes plus the plan that produced them
    - GenerationError: Exception for request-level failures

Dependencies:
    - pdfgrid.layout: Grid geometry
    - pdfgrid.sources: Decoding
    - pdfgrid.plan: Slot results
    - pdfgrid.output: PDF rendering

Used By:
    - pdfgrid.session: Caller-side state
    - pdfgrid.cli: Command line
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Sequence, Tuple

from .layout import (
    MAX_SLOTS,
    CellGeometry,
    SheetConfig,
    compute_grid,
    degenerate_reason,
    fit_to_cell,
)
from .output.renderer import RenderError, render_sheet
from .plan import FailedSlot, PlacedSlot, SheetPlan, SlotResult
from .sources import DecodeError, SourceItem, open_first_page, render_page_image

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """The output sheet could not be produced."""
    pass


@dataclass(frozen=True)
class GenerationResult:
    """
    Finished generation request (immutable).

    Attributes:
        pdf_bytes: Serialized single-page PDF
        plan: Slot results the sheet was drawn from
        warnings: One message per failed slot

    Example:
        >>> result = generate(items, SheetConfig())
        >>> print(f"{len(result.plan.placed)} placed, {len(result.warnings)} failed")
    """
    pdf_bytes: bytes = field(repr=False)
    plan: SheetPlan
    warnings: Tuple[str, ...] = ()


def plan_sheet(items: Sequence[SourceItem], config: SheetConfig) -> SheetPlan:
    """
    Decode every source and compute its slot result.

    Items beyond the ninth are ignored. A source that cannot be
    decoded, has no pages, has a zero-size page or lands in a
    degenerate cell becomes a FailedSlot; nothing is raised.

    Args:
        items: Sources in layout order
        config: Sheet configuration

    Returns:
        SheetPlan with one result per used item
    """
    if len(items) > MAX_SLOTS:
        logger.warning(f"Received {len(items)} items, only the first {MAX_SLOTS} are used")
        items = items[:MAX_SLOTS]

    cells = compute_grid(len(items), config.page_width, config.page_height, config)

    slots = tuple(
        _plan_slot(item, cell, config)
        for item, cell in zip(items, cells)
    )
    return SheetPlan(cells=cells, slots=slots)


def generate(items: Sequence[SourceItem], config: SheetConfig) -> GenerationResult:
    """
    Compose up to nine sources onto one sheet.

    Pipeline:
    1. Decode each source and take its first page
    2. Fit the page into its slot's cell
    3. Draw pages, error outlines and optional borders
    4. Serialize the sheet

    Args:
        items: Sources in layout order (0..9, extras ignored)
        config: Sheet configuration

    Returns:
        GenerationResult with the PDF bytes

    Raises:
        GenerationError: If the sheet cannot be drawn or serialized
    """
    start_time = time.perf_counter()
    plan = plan_sheet(items, config)

    warnings = tuple(f"Slot {s.cell.slot + 1} ({s.name}): {s.reason}" for s in plan.failed)

    try:
        pdf_bytes = render_sheet(plan, config)
    except RenderError as e:
        raise GenerationError(f"Failed to produce PDF: {e}") from e

    elapsed = time.perf_counter() - start_time
    logger.info(
        f"Generated sheet with {len(plan.placed)} page(s), "
        f"{len(plan.failed)} failed slot(s) in {elapsed:.2f}s"
    )
    return GenerationResult(pdf_bytes=pdf_bytes, plan=plan, warnings=warnings)


def _plan_slot(item: SourceItem, cell: CellGeometry, config: SheetConfig) -> SlotResult:
    """Decode one source and fit it into its cell."""
    try:
        with open_first_page(item.data) as page:
            width, height = page.rect.width, page.rect.height

            reason = degenerate_reason(cell, width, height)
            if reason is not None:
                return _failed(item, cell, reason)

            placement = fit_to_cell(cell, width, height)
            image = None
            if config.rasterize:
                zoom = placement.scale * config.render_dpi / 72.0
                image = render_page_image(page, zoom)
    except (DecodeError, ValueError) as e:
        return _failed(item, cell, str(e))

    return PlacedSlot(name=item.name, placement=placement, data=item.data, image=image)


def _failed(item: SourceItem, cell: CellGeometry, reason: str) -> FailedSlot:
    logger.warning(f"Error processing file {item.name} (slot {cell.slot + 1}): {reason}")
    return FailedSlot(name=item.name, cell=cell, reason=reason)
