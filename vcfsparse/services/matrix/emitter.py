from __future__ import annotations

import logging
from typing import List, Optional, Sequence, TextIO, Tuple

from vcfsparse.config import OUTPUT_FORMATS
from vcfsparse.errors import NotImplementedSinkError, UnsupportedFormatError
from vcfsparse.services.vcf.parser import VariantRecord

from .registry import SampleRegistry

logger = logging.getLogger(__name__)

Selection = Sequence[Tuple[int, VariantRecord]]


class VariantInfoSink:
    """
    Writes one provenance line per output row:
    ``CHROM  POS  ID  REF  ALT  STREAM`` (tab separated).

    A row built from several records has no single provenance, so that
    case is rejected.
    """

    def __init__(self, sink: TextIO):
        self.sink = sink
        self.lines_written = 0

    def write(self, selected: Selection) -> None:
        if len(selected) > 1:
            where = f"{selected[0][1].chrom}:{selected[0][1].pos}"
            raise NotImplementedSinkError(
                f"Variant info for {len(selected)} records at {where} is not implemented"
            )
        stream, rec = selected[0]
        self.sink.write(f"{rec.chrom}\t{rec.pos}\t{rec.id}\t{rec.ref}\t{rec.alt}\t{stream}\n")
        self.lines_written += 1


class SparseRowEmitter:
    """Serialize merged records as ``column dosage`` pair rows (1-based columns)."""

    def __init__(
        self,
        sink: TextIO,
        registry: SampleRegistry,
        *,
        variant_info: Optional[VariantInfoSink] = None,
    ):
        self.sink = sink
        self.registry = registry
        self.variant_info = variant_info
        self.rows_written = 0
        self.pairs_written = 0

    def collect_pairs(self, selected: Selection) -> List[Tuple[int, int]]:
        pairs: List[Tuple[int, int]] = []
        for stream, rec in selected:
            columns = self.registry.column_map(stream)
            for local, dosage in enumerate(rec.dosages):
                if dosage > 0:
                    pairs.append((columns[local] + 1, dosage))
        return pairs

    def emit(self, selected: Selection) -> bool:
        """Write one row for records sharing a coordinate. Returns whether a row was written."""
        pairs = self.collect_pairs(selected)
        if not pairs:
            return False

        if self.variant_info is not None:
            self.variant_info.write(selected)

        self.sink.write(" ".join(f"{col} {val}" for col, val in pairs))
        self.sink.write("\n")
        self.rows_written += 1
        self.pairs_written += len(pairs)
        return True


def ensure_supported_format(output_format: str) -> str:
    fmt = output_format.lower()
    if fmt == "cluto":
        return fmt
    if fmt in OUTPUT_FORMATS:
        raise UnsupportedFormatError(f"Output format {output_format!r} is not implemented")
    raise UnsupportedFormatError(
        f"Unknown output format {output_format!r} (expected one of: {', '.join(OUTPUT_FORMATS)})"
    )


def create_emitter(
    output_format: str,
    sink: TextIO,
    registry: SampleRegistry,
    *,
    variant_info: Optional[VariantInfoSink] = None,
) -> SparseRowEmitter:
    ensure_supported_format(output_format)
    return SparseRowEmitter(sink, registry, variant_info=variant_info)
