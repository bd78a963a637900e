"""
Module: pdfgrid.plan

Purpose:
    Per-slot results for one sheet. Each occupied slot is either a
    PlacedSlot (page decoded and fitted) or a FailedSlot (source
    rejected, with a reason). The composer collects them; the
    renderer draws them.

Key Classes:
    - PlacedSlot: Slot with a decoded page and its placement
    - FailedSlot: Slot whose source could not be placed
    - SheetPlan: Ordered slot results for one sheet

Dependencies:
    - PIL: Image type
    - pdfgrid.layout.models: CellGeometry, Placement

Used By:
    - pdfgrid.composer: Builds plans
    - pdfgrid.output.renderer: Draws plans
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from PIL import Image

from pdfgrid.layout.models import CellGeometry, Placement


@dataclass(frozen=True)
class PlacedSlot:
    """
    A slot whose source page was decoded and fitted.

    Attributes:
        name: Source display name
        placement: Where and how large the page is drawn
        data: Source document the page is embedded from
        image: First page rasterised at the drawn size, None when the
            page is embedded as vector content
    """
    name: str
    placement: Placement
    data: bytes = field(repr=False, compare=False)
    image: Optional[Image.Image] = field(default=None, repr=False, compare=False)

    @property
    def cell(self) -> CellGeometry:
        return self.placement.cell


@dataclass(frozen=True)
class FailedSlot:
    """
    A slot whose source could not be placed.

    Attributes:
        name: Source display name
        cell: Cell to outline as an error
        reason: Why the source was rejected
    """
    name: str
    cell: CellGeometry
    reason: str


SlotResult = Union[PlacedSlot, FailedSlot]


@dataclass(frozen=True)
class SheetPlan:
    """
    Per-slot results for one sheet, in slot order.

    Attributes:
        cells: All nine grid cells (occupied or not)
        slots: Results for the occupied cells, index i is slot i

    Example:
        >>> plan = plan_sheet(items, SheetConfig())
        >>> len(plan.cells)
        9
    """
    cells: Tuple[CellGeometry, ...]
    slots: Tuple[SlotResult, ...]

    @property
    def placed(self) -> Tuple[PlacedSlot, ...]:
        return tuple(s for s in self.slots if isinstance(s, PlacedSlot))

    @property
    def failed(self) -> Tuple[FailedSlot, ...]:
        return tuple(s for s in self.slots if isinstance(s, FailedSlot))

    @property
    def placements(self) -> Tuple[Optional[Placement], ...]:
        """Placement per occupied slot, None where the slot failed."""
        return tuple(
            s.placement if isinstance(s, PlacedSlot) else None
            for s in self.slots
        )
