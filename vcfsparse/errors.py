"""
Exception hierarchy for vcfsparse.

Every error raised here is fatal for a merge run; the CLI reports the
message and exits non-zero.
"""


class VcfSparseError(Exception):
    pass


class VcfParseError(VcfSparseError, ValueError):
    """Malformed VCF header or data line."""


class HeaderFormatError(VcfParseError):
    """Column header missing or declaring fewer than 9 fields."""


class ConfigError(VcfSparseError, ValueError):
    pass


class UnsupportedFormatError(VcfSparseError):
    """Output dialect is recognised but has no serializer."""


class NotImplementedSinkError(VcfSparseError, NotImplementedError):
    """Variant info cannot describe more than one record per output row."""
