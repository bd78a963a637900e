"""
Module: pdfgrid.session

Purpose:
    Caller-side state around the stateless composer: the pending item
    set, the processing status and the last generated artifact. Any
    change to the pending set resets the status to IDLE and releases
    the artifact, so a stale PDF is never handed out.

Key Classes:
    - ProcessingStatus: IDLE → PROCESSING → COMPLETE | ERROR
    - GridSession: Pending items plus generation state

Dependencies:
    - pdfgrid.composer: generate()
    - pdfgrid.sources: SourceItem

Used By:
    - pdfgrid.cli: Command line
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .composer import GenerationResult, generate
from .layout import MAX_SLOTS, SheetConfig
from .sources import SourceItem

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "grid-layout"
EXPORT_EXTENSION = ".pdf"


class ProcessingStatus(str, Enum):
    """Status of the latest generation request."""
    IDLE = "IDLE"
    PROCESSING = "PROCESSING"
    COMPLETE = "COMPLETE"
    ERROR = "ERROR"


class GridSession:
    """
    Pending sources and generation state for one caller.

    Items keep their insertion order, which is the layout order.
    At most nine items are held.

    Example:
        >>> session = GridSession()
        >>> session.add([SourceItem.from_path(Path("a.pdf"))])
        >>> session.generate()
        >>> session.status
        <ProcessingStatus.COMPLETE: 'COMPLETE'>
    """

    def __init__(
        self,
        config: Optional[SheetConfig] = None,
        export_name: str = DEFAULT_EXPORT_NAME,
    ) -> None:
        self.config = config or SheetConfig()
        self.export_name = export_name
        self._items: List[SourceItem] = []
        self._status = ProcessingStatus.IDLE
        self._result: Optional[GenerationResult] = None

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def items(self) -> Tuple[SourceItem, ...]:
        return tuple(self._items)

    @property
    def status(self) -> ProcessingStatus:
        return self._status

    @property
    def free_slots(self) -> int:
        return MAX_SLOTS - len(self._items)

    @property
    def result(self) -> Optional[GenerationResult]:
        """Last successful result, None unless status is COMPLETE."""
        return self._result

    @property
    def artifact(self) -> Optional[bytes]:
        """PDF bytes of the last successful generation."""
        return self._result.pdf_bytes if self._result is not None else None

    @property
    def export_filename(self) -> str:
        """Download name: trimmed export name (or the default) plus .pdf."""
        return f"{self.export_name.strip() or DEFAULT_EXPORT_NAME}{EXPORT_EXTENSION}"

    # ─────────────────────────────────────────────────────────────────────────
    # Pending set
    # ─────────────────────────────────────────────────────────────────────────

    def add(self, sources: Iterable[SourceItem]) -> Tuple[SourceItem, ...]:
        """
        Append sources to the pending set.

        Only the free slots are filled; the rest are dropped. When the
        set is already full nothing is added.

        Returns:
            The items actually added
        """
        self._check_idle_mutation()
        sources = list(sources)

        if self.free_slots == 0:
            logger.warning(
                f"Maximum {MAX_SLOTS} files allowed; remove some files to add new ones"
            )
            return ()

        accepted = tuple(sources[:self.free_slots])
        if len(accepted) < len(sources):
            logger.warning(
                f"Only {len(accepted)} of {len(sources)} file(s) added; "
                f"{MAX_SLOTS} slots maximum"
            )

        self._items.extend(accepted)
        self._invalidate()
        return accepted

    def remove(self, token: str) -> bool:
        """Remove the item with ``token``. Returns False if it was not present."""
        self._check_idle_mutation()
        before = len(self._items)
        self._items = [item for item in self._items if item.token != token]
        removed = len(self._items) != before
        self._invalidate()
        return removed

    def clear(self) -> None:
        """Remove all pending items."""
        self._check_idle_mutation()
        self._items = []
        self._invalidate()

    def slot_summary(self) -> List[str]:
        """
        One preview line per slot in layout order.

        Example:
            >>> session.slot_summary()[:2]
            ['#1 report.pdf (12 KB)', '#2 Empty']
        """
        lines = []
        for index in range(MAX_SLOTS):
            if index < len(self._items):
                item = self._items[index]
                lines.append(f"#{index + 1} {item.name} ({item.size_kb} KB)")
            else:
                lines.append(f"#{index + 1} Empty")
        return lines

    # ─────────────────────────────────────────────────────────────────────────
    # Generation
    # ─────────────────────────────────────────────────────────────────────────

    def generate(self) -> Optional[GenerationResult]:
        """
        Generate the sheet from a snapshot of the pending items.

        Does nothing and returns None when no items are pending.

        Raises:
            GenerationError: If the sheet cannot be produced. Any exception
                leaves the status at ERROR.
        """
        if not self._items:
            return None

        snapshot = tuple(self._items)
        self._status = ProcessingStatus.PROCESSING
        self._result = None
        try:
            result = generate(snapshot, self.config)
        except Exception:
            self._status = ProcessingStatus.ERROR
            raise

        self._result = result
        self._status = ProcessingStatus.COMPLETE
        return result

    def save_artifact(self, directory: Path) -> Path:
        """
        Write the last artifact to ``directory / export_filename``.

        Raises:
            RuntimeError: If there is no artifact to save
        """
        if self.artifact is None:
            raise RuntimeError("No generated PDF available")
        path = Path(directory) / self.export_filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.artifact)
        logger.info(f"Saved {path}")
        return path

    def _check_idle_mutation(self) -> None:
        if self._status is ProcessingStatus.PROCESSING:
            raise RuntimeError("Cannot change files while a PDF is being generated")

    def _invalidate(self) -> None:
        """Drop any artifact and return to IDLE after the pending set changed."""
        self._result = None
        self._status = ProcessingStatus.IDLE
