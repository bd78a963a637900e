import pytest
import sys
from pathlib import Path
from typing import Callable, Tuple

import fitz

# Add src to sys.path so we can import pdfgrid
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from pdfgrid.sources import SourceItem

# Fill colour of the rectangle make_pdf draws on each page
SOURCE_FILL = (0.2, 0.4, 0.8)


def make_pdf(*sizes: Tuple[float, float]) -> bytes:
    """Build an in-memory PDF with one filled page per (width, height).

    Pages of 20pt or less on a side are left blank.
    """
    doc = fitz.open()
    for width, height in sizes:
        page = doc.new_page(width=width, height=height)
        if width <= 20 or height <= 20:
            continue
        page.draw_rect(
            fitz.Rect(10, 10, width - 10, height - 10),
            color=(0, 0, 1),
            fill=SOURCE_FILL,
        )
    data = doc.tobytes()
    doc.close()
    return data


# Common test fixtures
@pytest.fixture
def pdf_factory() -> Callable[..., bytes]:
    """Return the make_pdf helper."""
    return make_pdf


@pytest.fixture
def source_factory() -> Callable[..., SourceItem]:
    """Create SourceItems from page sizes (A4 portrait by default)."""
    def _create(name: str = "page.pdf", *sizes: Tuple[float, float]) -> SourceItem:
        return SourceItem.from_bytes(make_pdf(*(sizes or ((595, 842),))), name)
    return _create


@pytest.fixture
def broken_source() -> SourceItem:
    """A source whose bytes are not a PDF."""
    return SourceItem.from_bytes(b"this is not a pdf document", "broken.pdf")


@pytest.fixture
def sample_pdf_path(tmp_path: Path) -> Path:
    """Write a single-page PDF to disk."""
    path = tmp_path / "sample.pdf"
    path.write_bytes(make_pdf((300, 400)))
    return path


@pytest.fixture
def read_sheet() -> Callable[[bytes], Tuple[list, list, list]]:
    """
    Read a generated sheet back with PyMuPDF.

    Returns (image bboxes, embedded source page boxes, stroke-only colours),
    colours rounded to two places.
    """
    def _read(pdf_bytes: bytes) -> Tuple[list, list, list]:
        with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
            assert doc.page_count == 1
            page = doc[0]
            images = [fitz.Rect(info["bbox"]) for info in page.get_image_info()]
            drawings = page.get_drawings()
        pages = [d["rect"] for d in drawings if _rounded(d.get("fill")) == SOURCE_FILL]
        strokes = [_rounded(d["color"]) for d in drawings if d["type"] == "s" and d.get("color")]
        return images, pages, strokes
    return _read


def _rounded(color):
    return tuple(round(c, 2) for c in color) if color else None
