"""
Module: pdfgrid.sources.models

Purpose:
    The SourceItem dataclass - one caller-supplied document blob with
    its display name. The bytes are opaque here; only the decoder
    interprets them.

Key Classes:
    - SourceItem: Immutable source document

Key Functions:
    - is_pdf_name(): Accept only .pdf file names at intake

Dependencies:
    - dataclasses (std)
    - pathlib (std)
    - uuid (std)

Used By:
    - pdfgrid.composer
    - pdfgrid.session
    - pdfgrid.cli
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


PDF_SUFFIX = ".pdf"


def _new_token() -> str:
    return uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class SourceItem:
    """
    One source document contributing its first page to a slot.

    The token identifies the item in a caller's pending set (for
    removal); the layout never looks at it.

    Attributes:
        name: Display name, used in logs and previews
        data: Raw document bytes
        size: Byte size of ``data``
        token: Caller-side unique id

    Example:
        >>> item = SourceItem.from_bytes(b"%PDF-1.7 ...", "scan.pdf")
        >>> item.size
        12
    """

    name: str
    data: bytes = field(repr=False)
    size: int
    token: str = field(default_factory=_new_token)

    def __post_init__(self) -> None:
        """Validate item on construction."""
        if self.size < 0:
            raise ValueError(f"size must be non-negative: {self.size}")

    @classmethod
    def from_bytes(cls, data: bytes, name: str, token: Optional[str] = None) -> SourceItem:
        """Create an item from in-memory bytes."""
        data = bytes(data)
        if token is None:
            return cls(name=name, data=data, size=len(data))
        return cls(name=name, data=data, size=len(data), token=token)

    @classmethod
    def from_path(cls, path: Path) -> SourceItem:
        """
        Read a file into a SourceItem.

        Raises:
            OSError: If the file cannot be read
        """
        path = Path(path)
        return cls.from_bytes(path.read_bytes(), path.name)

    @property
    def size_kb(self) -> int:
        """Size in whole kilobytes, as shown in previews."""
        return round(self.size / 1024)


def is_pdf_name(name: str) -> bool:
    """True if the file name carries a .pdf extension (case-insensitive)."""
    return Path(name).suffix.lower() == PDF_SUFFIX
