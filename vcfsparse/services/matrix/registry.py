"""
Global sample column registry.

Sample names from every stream are pooled into one sorted, de-duplicated
column list. A name present in several streams owns a single column, and
dosages for it from every stream land in that column.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Sequence, TextIO, Tuple

from vcfsparse.services.vcf.parser import VcfHeaderInfo

logger = logging.getLogger(__name__)


class SampleRegistry:
    def __init__(self, sample_lists: Iterable[Sequence[str]]):
        self._streams: Tuple[Tuple[str, ...], ...] = tuple(tuple(s) for s in sample_lists)
        self._samples: Tuple[str, ...] = tuple(sorted({name for names in self._streams for name in names}))
        self._index: Dict[str, int] = {name: i for i, name in enumerate(self._samples)}
        self._column_maps: Tuple[Tuple[int, ...], ...] = tuple(
            tuple(self._index[name] for name in names) for names in self._streams
        )

        shared = sum(len(names) for names in self._streams) - len(self._samples)
        logger.info(
            "Registered %d global samples from %d streams (%d shared)",
            len(self._samples), len(self._streams), shared,
        )

    @classmethod
    def from_headers(cls, headers: Iterable[VcfHeaderInfo]) -> "SampleRegistry":
        return cls(h.samples for h in headers)

    @property
    def samples(self) -> Tuple[str, ...]:
        return self._samples

    @property
    def sample_index(self) -> Mapping[str, int]:
        return dict(self._index)

    @property
    def stream_count(self) -> int:
        return len(self._streams)

    def __len__(self) -> int:
        return len(self._samples)

    def stream_samples(self, stream: int) -> Tuple[str, ...]:
        return self._streams[stream]

    def sample_name(self, stream: int, local_index: int) -> str:
        return self._streams[stream][local_index]

    def global_index(self, stream: int, local_index: int) -> int:
        """0-based global column of sample ``local_index`` of ``stream``."""
        return self._column_maps[stream][local_index]

    def column_map(self, stream: int) -> Tuple[int, ...]:
        return self._column_maps[stream]

    def write_samples(self, sink: TextIO) -> int:
        for name in self._samples:
            sink.write(f"{name}\n")
        return len(self._samples)

