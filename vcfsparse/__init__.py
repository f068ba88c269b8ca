"""
vcfsparse

Streams one or more coordinate-sorted VCF files into a single sparse
genotype matrix over the pooled, sorted sample columns.
"""

__version__ = "1.0.0"
