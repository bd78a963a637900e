"""
Module: pdfgrid.layout.engine

Purpose:
    Pure geometry for the 3x3 sheet. Partitions the content area into
    nine equal cells and fits each source page inside its cell with a
    uniform, centred scale-to-fit. No I/O.

Key Functions:
    - slot_position(): Slot index to (row, col)
    - to_bottom_origin(): Top-down Y to PDF bottom-up Y
    - cell_size(): Width and height shared by every cell
    - compute_grid(): Nine CellGeometry entries for a sheet
    - degenerate_reason(): Why a page cannot be placed, if it cannot
    - fit_to_cell(): Placement of a page inside a cell

Dependencies:
    - pdfgrid.layout.config: SheetConfig
    - pdfgrid.layout.models: CellGeometry, Placement

Used By:
    - pdfgrid.composer: Sheet planning
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Tuple

from .config import SheetConfig
from .models import CellGeometry, Placement

logger = logging.getLogger(__name__)

GRID_ROWS = 3
GRID_COLUMNS = 3
MAX_SLOTS = GRID_ROWS * GRID_COLUMNS


def slot_position(index: int) -> Tuple[int, int]:
    """
    Map a slot index to its grid position.

    Slots run left to right, then top to bottom.

    Args:
        index: Slot index 0..8

    Returns:
        (row, col) where row 0 is the top row and col 0 the left column

    Raises:
        ValueError: If index is outside 0..8

    Example:
        >>> slot_position(5)
        (1, 2)
    """
    if not 0 <= index < MAX_SLOTS:
        raise ValueError(f"slot index must be in 0..{MAX_SLOTS - 1}: {index}")
    return index // GRID_COLUMNS, index % GRID_COLUMNS


def to_bottom_origin(top: float, height: float, sheet_height: float) -> float:
    """
    Convert a top-down Y coordinate to bottom-up PDF Y.

    A box whose top edge sits ``top`` points below the sheet top has
    its bottom edge at ``sheet_height - top - height`` in PDF space.

    Args:
        top: Distance from the sheet top to the box's top edge
        height: Box height
        sheet_height: Sheet height

    Returns:
        Y of the box's bottom edge, measured up from the sheet bottom
    """
    return sheet_height - top - height


def cell_size(config: SheetConfig) -> Tuple[float, float]:
    """
    Width and height of every grid cell.

    The gap only separates cells; the outer edge is covered by the margin.
    Either value may be zero or negative for extreme margin/gap.
    """
    cell_width = (config.content_width - (GRID_COLUMNS - 1) * config.gap) / GRID_COLUMNS
    cell_height = (config.content_height - (GRID_ROWS - 1) * config.gap) / GRID_ROWS
    return cell_width, cell_height


def compute_grid(
    item_count: int,
    sheet_width: float,
    sheet_height: float,
    config: SheetConfig,
) -> Tuple[CellGeometry, ...]:
    """
    Compute the nine cells of a sheet.

    Slots below ``item_count`` are marked occupied. Counts above nine
    are clamped to nine.

    Args:
        item_count: Number of source items (0..9)
        sheet_width: Sheet width in points
        sheet_height: Sheet height in points
        config: Sheet configuration (margin, gap)

    Returns:
        Tuple of exactly nine CellGeometry entries in slot order

    Raises:
        ValueError: If item_count is negative

    Example:
        >>> cells = compute_grid(4, 595.28, 841.89, SheetConfig())
        >>> [c.occupied for c in cells].count(True)
        4
    """
    if item_count < 0:
        raise ValueError(f"item_count must be non-negative: {item_count}")
    if item_count > MAX_SLOTS:
        logger.debug(f"Clamping item count {item_count} to {MAX_SLOTS}")
        item_count = MAX_SLOTS

    if (sheet_width, sheet_height) != (config.page_width, config.page_height):
        config = _with_page_size(config, sheet_width, sheet_height)

    cell_width, cell_height = cell_size(config)
    margin, gap = config.margin, config.gap

    cells = []
    for index in range(MAX_SLOTS):
        row, col = slot_position(index)
        top = margin + row * (cell_height + gap)
        cells.append(
            CellGeometry(
                slot=index,
                row=row,
                col=col,
                occupied=index < item_count,
                x=margin + col * (cell_width + gap),
                y=to_bottom_origin(top, cell_height, sheet_height),
                width=cell_width,
                height=cell_height,
                sheet_height=sheet_height,
            )
        )

    return tuple(cells)


def degenerate_reason(
    cell: CellGeometry,
    source_width: float,
    source_height: float,
) -> Optional[str]:
    """
    Explain why a page cannot be fitted into a cell.

    Returns:
        A human-readable reason, or None if the page can be placed
    """
    if cell.is_degenerate:
        return (
            f"cell {cell.slot + 1} has no drawable area "
            f"({cell.width:.2f} x {cell.height:.2f} pt); margin or gap too large"
        )
    if source_width <= 0 or source_height <= 0:
        return f"source page has zero size ({source_width} x {source_height} pt)"
    return None


def fit_to_cell(
    cell: CellGeometry,
    source_width: float,
    source_height: float,
) -> Placement:
    """
    Scale a page uniformly to fit its cell and centre it.

    ``scale = min(cell.width / source_width, cell.height / source_height)``.
    The drawn rectangle never exceeds the cell on either axis.

    Args:
        cell: Target cell
        source_width: Intrinsic page width (pt)
        source_height: Intrinsic page height (pt)

    Returns:
        Placement with scale, drawn size and centring offsets

    Raises:
        ValueError: If the cell or the page is degenerate
            (check with degenerate_reason() first)

    Example:
        >>> placement = fit_to_cell(cell, 595.28, 841.89)
        >>> placement.width <= cell.width
        True
    """
    reason = degenerate_reason(cell, source_width, source_height)
    if reason is not None:
        raise ValueError(reason)

    scale = min(cell.width / source_width, cell.height / source_height)

    # Clamp float rounding so the page never spills past the cell edge
    width = min(source_width * scale, cell.width)
    height = min(source_height * scale, cell.height)

    placement = Placement(
        cell=cell,
        source_width=source_width,
        source_height=source_height,
        scale=scale,
        width=width,
        height=height,
        x_offset=(cell.width - width) / 2,
        y_offset=(cell.height - height) / 2,
    )
    logger.debug(
        f"Slot {cell.slot}: {source_width:.1f}x{source_height:.1f} pt "
        f"scaled {scale:.4f} to {width:.1f}x{height:.1f} pt"
    )
    return placement


def _with_page_size(config: SheetConfig, width: float, height: float) -> SheetConfig:
    return replace(config, page_width=width, page_height=height)
