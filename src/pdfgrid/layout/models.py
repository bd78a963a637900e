"""
Module: pdfgrid.layout.models

Purpose:
    Data models for sheet layout.
    Immutable dataclasses representing grid cells and page placements.

Key Classes:
    - CellGeometry: One cell of the 3x3 grid
    - Placement: Scaled, centred page rectangle within a cell

Dependencies:
    - dataclasses (std)

Used By:
    - pdfgrid.layout.engine: Creates cells and placements
    - pdfgrid.composer: Slot results
    - pdfgrid.output.renderer: Drawing coordinates
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CellGeometry:
    """
    One cell of the sheet grid (immutable).

    Coordinates use the PDF convention: origin at the bottom-left of
    the sheet, Y growing upwards. Row 0 is the visual top row, so it
    has the highest ``y``.

    Attributes:
        slot: Slot index 0..8 in row-major order
        row: Grid row (0 = top)
        col: Grid column (0 = left)
        occupied: Whether a source item is assigned to this slot
        x: Left edge (pt)
        y: Bottom edge (pt, bottom-origin)
        width: Cell width (pt)
        height: Cell height (pt)
        sheet_height: Height of the sheet the cell belongs to (pt)

    Example:
        >>> cell = CellGeometry(0, 0, 0, True, 20, 600, 100, 200, 841.89)
        >>> cell.right
        120
    """

    slot: int
    row: int
    col: int
    occupied: bool
    x: float
    y: float
    width: float
    height: float
    sheet_height: float

    @property
    def right(self) -> float:
        """Right edge (pt)."""
        return self.x + self.width

    @property
    def top(self) -> float:
        """Top edge measured down from the sheet top (pt)."""
        return self.sheet_height - self.y - self.height

    @property
    def is_degenerate(self) -> bool:
        """True when the margin/gap leave no positive area for the cell."""
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class Placement:
    """
    A source page scaled to fit and centred inside its cell.

    Attributes:
        cell: The cell the page is placed in
        source_width: Intrinsic page width (pt)
        source_height: Intrinsic page height (pt)
        scale: Uniform scale factor applied to the page
        width: Drawn width (pt)
        height: Drawn height (pt)
        x_offset: Horizontal inset from the cell's left edge (pt)
        y_offset: Vertical inset from the cell's bottom edge (pt)
    """

    cell: CellGeometry
    source_width: float
    source_height: float
    scale: float
    width: float
    height: float
    x_offset: float
    y_offset: float

    @property
    def x(self) -> float:
        """Left edge of the drawn page (pt)."""
        return self.cell.x + self.x_offset

    @property
    def y(self) -> float:
        """Bottom edge of the drawn page (pt, bottom-origin)."""
        return self.cell.y + self.y_offset

    @property
    def top(self) -> float:
        """Top edge of the drawn page measured down from the sheet top (pt)."""
        return self.cell.top + (self.cell.height - self.y_offset - self.height)
