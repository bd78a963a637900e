"""
Module: pdfgrid.sources.decoder

Purpose:
    Decode source blobs with PyMuPDF. Only the first page of a
    document is ever exposed; the document is closed as soon as the
    caller leaves the context, so no handle outlives one slot.

Key Functions:
    - open_first_page(): Context manager yielding page 0
    - render_page_image(): Rasterise a page to an RGB Pillow image

Key Classes:
    - DecodeError: Unreadable data or a document without pages

Dependencies:
    - fitz (PyMuPDF): PDF parsing and rendering
    - PIL.Image: Image handling

Used By:
    - pdfgrid.composer: Per-slot decoding
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import fitz
from PIL import Image

logger = logging.getLogger(__name__)


class DecodeError(Exception):
    """Source data is not a readable document with at least one page."""
    pass


@contextmanager
def open_first_page(data: bytes) -> Iterator[fitz.Page]:
    """
    Open a PDF blob and yield its first page.

    Any further pages are ignored. The document is closed on exit.

    Args:
        data: Raw PDF bytes

    Yields:
        PyMuPDF page 0

    Raises:
        DecodeError: If the bytes cannot be parsed or hold no pages

    Example:
        >>> with open_first_page(pdf_bytes) as page:
        ...     page.rect.width
        595.0
    """
    if not data:
        raise DecodeError("empty document")

    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except (RuntimeError, ValueError) as e:
        raise DecodeError(f"cannot open document: {e}") from e

    try:
        if doc.page_count < 1:
            raise DecodeError("document has no pages")
        logger.debug(f"Opened document with {doc.page_count} page(s); using page 1")
        yield doc[0]
    finally:
        doc.close()


def render_page_image(page: fitz.Page, zoom: float) -> Image.Image:
    """
    Rasterise a page to an RGB image.

    Args:
        page: PyMuPDF page
        zoom: Pixels per PDF point (dpi / 72 times any layout scale)

    Returns:
        Pillow image of the whole page

    Raises:
        DecodeError: If the page cannot be rendered or has no pixels
            at this zoom
    """
    if zoom <= 0:
        raise DecodeError(f"invalid render zoom: {zoom}")

    matrix = fitz.Matrix(zoom, zoom)
    try:
        pix = page.get_pixmap(matrix=matrix, alpha=False, colorspace=fitz.csRGB)
    except (RuntimeError, ValueError) as e:
        raise DecodeError(f"cannot render page: {e}") from e

    if pix.width == 0 or pix.height == 0:
        raise DecodeError(f"page renders to an empty image ({pix.width} x {pix.height} px)")

    return Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
