from .cursor import CursorState, StreamCursor
from .parser import (
    Ordering,
    VariantRecord,
    VcfHeaderInfo,
    compare_chromosomes,
    compare_coordinates,
    compute_dosage,
    coordinate_key,
    parse_variant_line,
    read_vcf_header,
)

__all__ = [
    "CursorState",
    "StreamCursor",
    "Ordering",
    "VariantRecord",
    "VcfHeaderInfo",
    "compare_chromosomes",
    "compare_coordinates",
    "compute_dosage",
    "coordinate_key",
    "parse_variant_line",
    "read_vcf_header",
]
