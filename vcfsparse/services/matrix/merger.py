from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from vcfsparse.services.vcf.cursor import StreamCursor
from vcfsparse.services.vcf.parser import Coordinate, Ordering, VariantRecord, compare_coordinates

from .emitter import SparseRowEmitter
from .registry import SampleRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeRound:
    coordinate: Coordinate
    selected: Tuple[Tuple[int, VariantRecord], ...]


@dataclass
class MergeStats:
    rounds: int = 0
    rows_written: int = 0
    pairs_written: int = 0
    records_per_stream: List[int] = field(default_factory=list)


class CoordinateMerger:
    """
    k-way merge of coordinate-sorted streams.

    Each round every cursor is topped up to one parsed record, the
    smallest coordinate is found, and every cursor sitting on it is handed
    to the emitter and then advanced.
    """

    def __init__(
        self,
        cursors: Sequence[StreamCursor],
        emitter: Optional[SparseRowEmitter] = None,
        *,
        registry: Optional[SampleRegistry] = None,
    ):
        self.cursors = list(cursors)
        self.registry = registry if registry is not None else SampleRegistry.from_headers(
            c.header for c in self.cursors
        )
        self.emitter = emitter
        self.stats = MergeStats(records_per_stream=[0] * len(self.cursors))

    def __enter__(self) -> "CoordinateMerger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        for cursor in self.cursors:
            cursor.close()

    @property
    def finished(self) -> bool:
        return not any(c.has_more for c in self.cursors)

    def _fill(self) -> List[Tuple[int, VariantRecord]]:
        ready: List[Tuple[int, VariantRecord]] = []
        for i, cursor in enumerate(self.cursors):
            if cursor.ensure_buffered():
                rec = cursor.ensure_parsed()
                if rec is not None:
                    ready.append((i, rec))
        return ready

    def next_round(self) -> Optional[MergeRound]:
        """Select the cursors at the minimum coordinate without consuming them."""
        ready = self._fill()
        if not ready:
            return None

        minimum: Optional[Coordinate] = None
        for _, rec in ready:
            if minimum is None or compare_coordinates(rec.coordinate, minimum) is Ordering.LESS:
                minimum = rec.coordinate

        selected = tuple(
            (i, rec) for i, rec in ready if compare_coordinates(rec.coordinate, minimum) is Ordering.EQUAL
        )
        return MergeRound(coordinate=minimum, selected=selected)

    def iter_rounds(self) -> Iterator[MergeRound]:
        while not self.finished:
            merge_round = self.next_round()
            if merge_round is None:
                break
            yield merge_round
            for i, _ in merge_round.selected:
                self.cursors[i].advance()
                self.stats.records_per_stream[i] += 1
            self.stats.rounds += 1

    def run(self) -> MergeStats:
        if self.emitter is None:
            raise ValueError("CoordinateMerger.run() requires an emitter")

        for merge_round in self.iter_rounds():
            written = self.emitter.emit(merge_round.selected)
            if not written:
                logger.debug(
                    "No non-zero dosages at %s:%d", merge_round.coordinate[0], merge_round.coordinate[1]
                )

        self.stats.rows_written = self.emitter.rows_written
        self.stats.pairs_written = self.emitter.pairs_written
        logger.info(
            "Merged %d coordinates from %d streams into %d rows",
            self.stats.rounds, len(self.cursors), self.stats.rows_written,
        )
        return self.stats
