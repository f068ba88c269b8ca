"""
Sparse genotype matrix assembly.

Merges coordinate-sorted VCF streams into rows of ``column dosage`` pairs
over a shared, sorted sample column space.
"""

from .emitter import OUTPUT_FORMATS, SparseRowEmitter, VariantInfoSink, create_emitter, ensure_supported_format
from .merger import CoordinateMerger, MergeRound, MergeStats
from .registry import SampleRegistry

__all__ = [
    "OUTPUT_FORMATS",
    "SparseRowEmitter",
    "VariantInfoSink",
    "create_emitter",
    "ensure_supported_format",
    "CoordinateMerger",
    "MergeRound",
    "MergeStats",
    "SampleRegistry",
]
