"""
Module: pdfgrid.sources

Purpose:
    Caller-supplied source documents and the PyMuPDF decode boundary.

Key Functions:
    - open_first_page(): Open a PDF blob and yield its first page
    - render_page_image(): Rasterise a page to a Pillow image
    - is_pdf_name(): Intake filter on file names

Key Classes:
    - SourceItem: One caller-supplied document
    - DecodeError: Source could not be read as a PDF with pages

Dependencies:
    - fitz (PyMuPDF): PDF decoding and rasterising
    - PIL: Image handling

Used By:
    - pdfgrid.composer: Sheet planning
    - pdfgrid.session: Pending item set
    - pdfgrid.output.renderer: Vector page embedding
"""

from .models import SourceItem, is_pdf_name
from .decoder import DecodeError, open_first_page, render_page_image

__all__ = [
    "SourceItem",
    "is_pdf_name",
    "DecodeError",
    "open_first_page",
    "render_page_image",
]
