from __future__ import annotations

import enum
import logging
from typing import IO, Iterable, Iterator, Optional

from .parser import VariantRecord, VcfHeaderInfo, parse_variant_line, read_vcf_header

logger = logging.getLogger(__name__)


class CursorState(str, enum.Enum):
    IDLE = "idle"
    BUFFERED = "buffered"
    PARSED = "parsed"
    EXHAUSTED = "exhausted"


class StreamCursor:
    """
    Bounded lookahead over one VCF stream: at most one raw data line and
    one parsed record are held at any time.

    State transitions::

        IDLE --ensure_buffered--> BUFFERED | EXHAUSTED
        BUFFERED --ensure_parsed--> PARSED
        BUFFERED, PARSED --advance--> IDLE
    """

    def __init__(
        self,
        header: VcfHeaderInfo,
        lines: Iterator[str],
        *,
        index: int = 0,
        name: Optional[str] = None,
        source: Optional[IO[str]] = None,
    ):
        self.header = header
        self.index = index
        self.name = name or f"stream{index}"
        self._lines = lines
        self._source = source
        self._raw: Optional[str] = header.first_record
        self._record: Optional[VariantRecord] = None
        self._state = CursorState.BUFFERED if self._raw is not None else CursorState.IDLE
        self.lines_read = 1 if self._raw is not None else 0

    @classmethod
    def open(
        cls,
        lines: Iterable[str],
        *,
        index: int = 0,
        name: Optional[str] = None,
        source: Optional[IO[str]] = None,
    ) -> "StreamCursor":
        """Parse the header of ``lines`` and position the cursor on its first record."""
        header, remaining = read_vcf_header(lines)
        logger.info("Opened %s with %d samples", name or f"stream{index}", len(header.samples))
        return cls(header, remaining, index=index, name=name, source=source)

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def has_more(self) -> bool:
        return self._state is not CursorState.EXHAUSTED

    @property
    def raw_line(self) -> Optional[str]:
        return self._raw

    @property
    def record(self) -> Optional[VariantRecord]:
        return self._record

    def ensure_buffered(self) -> bool:
        if self._state in (CursorState.BUFFERED, CursorState.PARSED):
            return True
        if self._state is CursorState.EXHAUSTED:
            return False

        for raw in self._lines:
            line = raw.rstrip("\r\n")
            if not line or line.startswith("#"):
                continue
            self._raw = line
            self._state = CursorState.BUFFERED
            self.lines_read += 1
            return True

        self._state = CursorState.EXHAUSTED
        logger.debug("%s exhausted after %d records", self.name, self.lines_read)
        return False

    def ensure_parsed(self) -> Optional[VariantRecord]:
        if self._state is CursorState.BUFFERED:
            self._record = parse_variant_line(self._raw, sample_count=len(self.header.samples))
            self._state = CursorState.PARSED
        return self._record

    def advance(self) -> None:
        if self._state is CursorState.EXHAUSTED:
            return
        self._raw = None
        self._record = None
        self._state = CursorState.IDLE

    def close(self) -> None:
        if self._source is not None:
            self._source.close()
            self._source = None

    def __repr__(self) -> str:
        return f"StreamCursor(name={self.name!r}, state={self._state.value})"
