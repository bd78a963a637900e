"""
Module: pdfgrid.layout.config

Purpose:
    Configuration for the grid sheet.
    Defines page dimensions, margin, gap and rendering settings.
    Source pages are embedded as vector content unless rasterize is set.

Key Classes:
    - SheetConfig: Immutable sheet configuration

Dependencies:
    - dataclasses (std)

Used By:
    - pdfgrid.layout.engine: Cell geometry
    - pdfgrid.output.renderer: Page size and borders
"""

from __future__ import annotations

from dataclasses import dataclass


# A4 page dimensions in PDF points (1/72 inch)
A4_WIDTH_PT = 595.28
A4_HEIGHT_PT = 841.89
DEFAULT_DPI = 200


@dataclass(frozen=True)
class SheetConfig:
    """
    Configuration for the output sheet (immutable).
    
    Cell size is derived from the page size, margin and gap, never
    supplied directly. A margin or gap large enough to leave no room
    for the cells is accepted here; the layout engine reports those
    cells as degenerate instead.
    
    Attributes:
        margin: Uniform inset from every sheet edge (pt)
        gap: Spacing between adjacent cells (pt)
        show_borders: Whether to outline each occupied cell
        page_width: Sheet width (pt)
        page_height: Sheet height (pt)
        rasterize: Draw source pages as images instead of embedding them
        render_dpi: Resolution used when rasterize is set
        
    Example:
        >>> config = SheetConfig(margin=20, gap=15, page_width=600)
        >>> config.content_width
        560
    """
    
    margin: float = 20
    gap: float = 15
    show_borders: bool = True
    
    # Page
    page_width: float = A4_WIDTH_PT
    page_height: float = A4_HEIGHT_PT
    
    # Rendering
    rasterize: bool = False
    render_dpi: int = DEFAULT_DPI
    
    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.margin < 0:
            raise ValueError(f"margin must be non-negative: {self.margin}")
        if self.gap < 0:
            raise ValueError(f"gap must be non-negative: {self.gap}")
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.render_dpi <= 0:
            raise ValueError(f"render_dpi must be positive: {self.render_dpi}")
    
    @property
    def content_width(self) -> float:
        """Width inside the margins."""
        return self.page_width - 2 * self.margin
    
    @property
    def content_height(self) -> float:
        """Height inside the margins."""
        return self.page_height - 2 * self.margin
