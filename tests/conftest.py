import io
from typing import List, Sequence, Tuple

import pytest

from vcfsparse.services.vcf.cursor import StreamCursor


def make_vcf(samples: Sequence[str], records: Sequence[Tuple], fmt: str = "GT") -> str:
    """
    Build VCF text. Each record is (chrom, pos, genotypes...) with one
    genotype string per sample.
    """
    lines: List[str] = [
        "##fileformat=VCFv4.2",
        '##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">',
        "##contig=<ID=1,length=248956422>",
        "#" + "\t".join(["CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO", "FORMAT", *samples]),
    ]
    for chrom, pos, *gts in records:
        lines.append("\t".join([str(chrom), str(pos), ".", "A", "G", "50", "PASS", ".", fmt, *gts]))
    return "\n".join(lines) + "\n"


@pytest.fixture
def vcf_text():
    return make_vcf


@pytest.fixture
def open_cursor():
    def _open(text: str, index: int = 0) -> StreamCursor:
        return StreamCursor.open(io.StringIO(text), index=index, name=f"test{index}")
    return _open
