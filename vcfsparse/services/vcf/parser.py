from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from vcfsparse.errors import HeaderFormatError, VcfParseError

logger = logging.getLogger(__name__)

FIXED_FIELDS: Tuple[str, ...] = ("CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO", "FORMAT")
SAMPLE_OFFSET = len(FIXED_FIELDS)
GENOTYPE_KEY = "GT"
ALT_ALLELE = "1"
# Allele codes sit at fixed offsets of the GT subfield ("0/1", "1|1", ...).
ALLELE_OFFSETS: Tuple[int, ...] = (0, 2)

_ASCII_NUMBER = re.compile(r"[0-9]+")
_SUBFIELD_SPLIT = re.compile(r"[:;]")
_STRUCTURED_META = re.compile(r"^<(?P<body>.*)>$")

MetaValue = Union[List[str], Dict[str, Dict[str, str]]]
Coordinate = Tuple[Optional[str], int]


class Ordering(enum.IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


@dataclass(frozen=True)
class VcfHeaderInfo:
    vcf_version: Optional[str]
    fields: Tuple[str, ...]
    field_index: Mapping[str, int]
    samples: Tuple[str, ...]
    sample_index: Mapping[str, int]
    meta: Mapping[str, MetaValue] = field(default_factory=dict)
    first_record: Optional[str] = None


@dataclass(frozen=True)
class VariantRecord:
    chrom: str
    pos: int
    id: str
    ref: str
    alt: str
    qual: str
    filter: str
    info: str
    format: Tuple[str, ...]
    dosages: Tuple[int, ...]

    @property
    def coordinate(self) -> Coordinate:
        return (self.chrom, self.pos)


def _parse_meta_payload(body: str) -> Dict[str, str]:
    """
    Split a structured meta payload (``ID=DP,Number=1,Description="a, b"``)
    into its key/value tokens. Commas inside double quotes are kept.
    """
    out: Dict[str, str] = {}
    token: List[str] = []
    quoted = False
    tokens: List[str] = []
    for ch in body:
        if ch == '"':
            quoted = not quoted
        if ch == "," and not quoted:
            tokens.append("".join(token))
            token = []
            continue
        token.append(ch)
    tokens.append("".join(token))

    for tok in tokens:
        if not tok:
            continue
        if "=" in tok:
            k, v = tok.split("=", 1)
            out[k.strip()] = v.strip().strip('"')
        else:
            out[tok.strip()] = ""
    return out


def _add_meta_line(meta: Dict[str, MetaValue], line: str) -> None:
    body = line[2:]
    if "=" not in body:
        bucket = meta.setdefault(body, [])
        if isinstance(bucket, list):
            bucket.append("")
        return

    key, value = body.split("=", 1)
    m = _STRUCTURED_META.match(value)
    if m:
        payload = _parse_meta_payload(m.group("body"))
        ident = payload.get("ID")
        if ident is not None:
            entries = meta.setdefault(key, {})
            if isinstance(entries, dict):
                entries[ident] = payload
                return
            logger.debug("Meta key %s mixes structured and plain values", key)

    bucket = meta.setdefault(key, [])
    if isinstance(bucket, list):
        bucket.append(value)
    else:
        logger.debug("Dropping plain value for structured meta key %s", key)


def read_vcf_header(lines: Iterable[str]) -> Tuple[VcfHeaderInfo, Iterator[str]]:
    """
    Consume an iterable of VCF lines up to the column header.

    Returns (header_info, remaining_lines_iterator). The first data line is
    not part of the iterator; it is kept as ``header_info.first_record``.
    """
    it = iter(lines)
    meta: Dict[str, MetaValue] = {}
    vcf_version: Optional[str] = None
    fields: Optional[Tuple[str, ...]] = None
    first_record: Optional[str] = None

    for raw in it:
        line = raw.rstrip("\r\n")
        if not line:
            continue
        if line.startswith("##"):
            if line.lower().startswith("##fileformat="):
                vcf_version = line.split("=", 1)[1].strip()
            _add_meta_line(meta, line)
            continue
        if line.startswith("#"):
            if fields is not None:
                logger.debug("Ignoring extra header line: %s", line[:80])
                continue
            cols = tuple(line[1:].split("\t"))
            if len(cols) < SAMPLE_OFFSET:
                raise HeaderFormatError(
                    f"Invalid VCF header (expected at least {SAMPLE_OFFSET} columns, got {len(cols)}): {line[:80]}"
                )
            fields = cols
            continue

        first_record = line
        break

    if fields is None:
        raise HeaderFormatError("Invalid VCF: missing #CHROM header line.")

    samples = fields[SAMPLE_OFFSET:]
    header = VcfHeaderInfo(
        vcf_version=vcf_version,
        fields=fields,
        field_index={name: i for i, name in enumerate(fields)},
        samples=samples,
        sample_index={name: i for i, name in enumerate(samples)},
        meta=meta,
        first_record=first_record,
    )
    logger.debug("Parsed VCF header: %d fields, %d samples", len(fields), len(samples))
    return header, it


def is_ascii_number(value: str) -> bool:
    return _ASCII_NUMBER.fullmatch(value) is not None


def split_subfields(value: str) -> List[str]:
    return _SUBFIELD_SPLIT.split(value)


def locate_genotype(format_keys: Sequence[str]) -> Optional[int]:
    for i, key in enumerate(format_keys):
        if key == GENOTYPE_KEY:
            return i
    return None


def compute_dosage(gt: Optional[str]) -> int:
    """
    Count alternate alleles in a GT subfield.

    Only the characters at offsets 0 and 2 are inspected, and only the
    literal code ``1`` counts, so ``0/1`` -> 1, ``1|1`` -> 2, ``./.`` -> 0.
    """
    if not gt:
        return 0
    return sum(1 for i in ALLELE_OFFSETS if i < len(gt) and gt[i] == ALT_ALLELE)


def parse_variant_line(line: str, *, sample_count: int) -> VariantRecord:
    cols = line.rstrip("\r\n").split("\t")
    if len(cols) < SAMPLE_OFFSET:
        raise VcfParseError(f"Invalid VCF record (expected {SAMPLE_OFFSET}+ columns): {line[:80]}")

    chrom, pos_s, vid, ref, alt, qual, flt, info, fmt = cols[:SAMPLE_OFFSET]
    if not is_ascii_number(pos_s):
        raise VcfParseError(f"Invalid POS value {pos_s!r} at {chrom}: {line[:80]}")
    pos = int(pos_s)

    format_keys = tuple(split_subfields(fmt))
    sample_fields = cols[SAMPLE_OFFSET:]
    if len(sample_fields) > sample_count:
        logger.debug(
            "Record %s:%d has %d sample columns, header declares %d; ignoring the surplus",
            chrom, pos, len(sample_fields), sample_count,
        )
        sample_fields = sample_fields[:sample_count]

    gt_index = locate_genotype(format_keys)
    dosages = [0] * sample_count
    if gt_index is not None:
        for i, value in enumerate(sample_fields):
            parts = split_subfields(value)
            if gt_index < len(parts):
                dosages[i] = compute_dosage(parts[gt_index])

    return VariantRecord(
        chrom=chrom,
        pos=pos,
        id=vid,
        ref=ref,
        alt=alt,
        qual=qual,
        filter=flt,
        info=info,
        format=format_keys,
        dosages=tuple(dosages),
    )


def _ordering(a, b) -> Ordering:
    if a < b:
        return Ordering.LESS
    if a > b:
        return Ordering.GREATER
    return Ordering.EQUAL


def compare_chromosomes(a: Optional[str], b: Optional[str]) -> Ordering:
    """
    Order chromosome names: numeric names numerically and before any
    non-numeric name, the rest as text. ``None`` sorts last.
    """
    if a is None or b is None:
        if a is None and b is None:
            return Ordering.EQUAL
        return Ordering.GREATER if a is None else Ordering.LESS

    a_num = is_ascii_number(a)
    b_num = is_ascii_number(b)
    if a_num and b_num:
        return _ordering(int(a), int(b))
    if a_num:
        return Ordering.LESS
    if b_num:
        return Ordering.GREATER
    return _ordering(a, b)


def compare_coordinates(a: Optional[Coordinate], b: Optional[Coordinate]) -> Ordering:
    if a is None or b is None:
        return compare_chromosomes(None if a is None else a[0], None if b is None else b[0])
    chrom_order = compare_chromosomes(a[0], b[0])
    if chrom_order is not Ordering.EQUAL:
        return chrom_order
    return _ordering(a[1], b[1])


def coordinate_key(coord: Optional[Coordinate]) -> Tuple:
    """Sort key equivalent to ``compare_coordinates``."""
    if coord is None or coord[0] is None:
        return (3,)
    chrom, pos = coord
    if is_ascii_number(chrom):
        return (0, int(chrom), "", pos)
    return (1, 0, chrom, pos)
