"""
Module: pdfgrid.output.renderer

Purpose:
    Render a SheetPlan to a single-page PDF.
    ReportLab draws the sheet: failed slots become red cell outlines,
    occupied cells optionally get a light gray border, and rasterised
    slots become images. PyMuPDF then embeds the remaining placed
    pages as vector content beneath those strokes.

Key Functions:
    - render_sheet(): Main rendering function

Dependencies:
    - reportlab: PDF generation
    - fitz (PyMuPDF): Vector page embedding
    - PIL: Image handling
    - pdfgrid.layout.models: CellGeometry, Placement
    - pdfgrid.sources: First-page access

Used By:
    - pdfgrid.composer: Generation pipeline
"""

from __future__ import annotations

import io
import logging
from typing import Sequence, Tuple

import fitz
from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from pdfgrid.layout.config import SheetConfig
from pdfgrid.layout.models import CellGeometry, Placement
from pdfgrid.plan import PlacedSlot, SheetPlan
from pdfgrid.sources import open_first_page

logger = logging.getLogger(__name__)

# Stroke styles (RGB 0..1, width in pt)
BORDER_COLOR: Tuple[float, float, float] = (0.8, 0.8, 0.8)
ERROR_COLOR: Tuple[float, float, float] = (1.0, 0.0, 0.0)
STROKE_WIDTH = 1


class RenderError(Exception):
    """The sheet could not be drawn or serialized to PDF."""
    pass


def render_sheet(plan: SheetPlan, config: SheetConfig) -> bytes:
    """
    Render a sheet plan to PDF bytes.

    Slot results are drawn in slot order onto one page of the
    configured size. The canvas is written in invariant mode so the
    same plan always yields the same layout.

    Args:
        plan: Slot results from the composer
        config: Sheet configuration (page size, borders)

    Returns:
        Serialized PDF

    Raises:
        RenderError: If the sheet cannot be drawn or written
    """
    try:
        pdf_bytes = _draw_canvas(plan, config)
        embedded = [slot for slot in plan.placed if slot.image is None]
        if embedded:
            pdf_bytes = _embed_pages(pdf_bytes, embedded)
    except Exception as e:
        raise RenderError(str(e)) from e

    logger.debug(f"Rendered {len(plan.slots)} slot(s), {len(pdf_bytes)} bytes")
    return pdf_bytes


def _draw_canvas(plan: SheetPlan, config: SheetConfig) -> bytes:
    """Draw strokes and rasterised pages with ReportLab."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=(config.page_width, config.page_height), invariant=1)

    for slot in plan.slots:
        if isinstance(slot, PlacedSlot):
            if slot.image is not None:
                _draw_image(c, slot)
            if config.show_borders:
                _stroke_cell(c, slot.cell, BORDER_COLOR)
        else:
            # Error outline replaces the neutral border
            _stroke_cell(c, slot.cell, ERROR_COLOR)

    c.showPage()
    c.save()
    return buf.getvalue()


def _embed_pages(sheet_bytes: bytes, slots: Sequence[PlacedSlot]) -> bytes:
    """Place each slot's first page as vector content under the strokes."""
    with fitz.open(stream=sheet_bytes, filetype="pdf") as sheet:
        page = sheet[0]
        for slot in slots:
            with open_first_page(slot.data) as source:
                page.show_pdf_page(
                    _placement_rect(slot.placement),
                    source.parent,
                    source.number,
                    overlay=False,
                )
        return sheet.tobytes(garbage=4, deflate=True)


def _placement_rect(placement: Placement) -> fitz.Rect:
    """Placement as a PyMuPDF rectangle (top-left origin)."""
    return fitz.Rect(
        placement.x,
        placement.top,
        placement.x + placement.width,
        placement.top + placement.height,
    )


def _draw_image(c: canvas.Canvas, slot: PlacedSlot) -> None:
    """Draw a rasterised page at its placement rectangle."""
    placement = slot.placement
    c.drawImage(
        _pil_to_reader(slot.image),
        placement.x,
        placement.y,
        width=placement.width,
        height=placement.height,
    )


def _stroke_cell(
    c: canvas.Canvas,
    cell: CellGeometry,
    color: Tuple[float, float, float],
) -> None:
    """Outline the full cell bounds."""
    c.saveState()
    c.setStrokeColorRGB(*color)
    c.setLineWidth(STROKE_WIDTH)
    c.rect(cell.x, cell.y, cell.width, cell.height, stroke=1, fill=0)
    c.restoreState()


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.
    
    Args:
        img: PIL Image object
        
    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    img.save(buf, format='PNG')
    buf.seek(0)
    return ImageReader(buf)
