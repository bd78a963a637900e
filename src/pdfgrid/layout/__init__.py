"""
Module: pdfgrid.layout

Purpose:
    Sheet geometry for the 3x3 grid. Converts an item count and a
    sheet configuration into cell rectangles, and a source page size
    into a centred scale-to-fit placement inside its cell.

Key Functions:
    - compute_grid(): Nine cell rectangles for a sheet
    - fit_to_cell(): Scale-to-fit placement of one page
    - to_bottom_origin(): Top-down to bottom-up Y conversion

Key Classes:
    - SheetConfig: Sheet configuration
    - CellGeometry: One grid cell
    - Placement: Scaled page rectangle inside a cell

Dependencies:
    - dataclasses (std)

Used By:
    - pdfgrid.composer: Sheet planning
    - pdfgrid.output.renderer: Drawing
"""

from .config import SheetConfig, A4_WIDTH_PT, A4_HEIGHT_PT
from .models import CellGeometry, Placement
from .engine import (
    GRID_COLUMNS,
    GRID_ROWS,
    MAX_SLOTS,
    cell_size,
    compute_grid,
    degenerate_reason,
    fit_to_cell,
    slot_position,
    to_bottom_origin,
)

__all__ = [
    # Config
    "SheetConfig",
    "A4_WIDTH_PT",
    "A4_HEIGHT_PT",
    # Models
    "CellGeometry",
    "Placement",
    # Engine
    "GRID_COLUMNS",
    "GRID_ROWS",
    "MAX_SLOTS",
    "cell_size",
    "compute_grid",
    "degenerate_reason",
    "fit_to_cell",
    "slot_position",
    "to_bottom_origin",
]
