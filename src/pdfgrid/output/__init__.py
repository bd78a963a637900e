"""
Module: pdfgrid.output

Purpose:
    PDF rendering for the grid sheet.
    Converts a SheetPlan into PDF bytes using ReportLab.

Key Functions:
    - render_sheet(): Render a plan to PDF bytes

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling

Used By:
    - pdfgrid.composer: Generation pipeline
"""

from .renderer import RenderError, render_sheet

__all__ = [
    "RenderError",
    "render_sheet",
]
