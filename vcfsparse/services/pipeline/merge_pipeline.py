"""
Merge Pipeline: orchestrates VCF streams → sample registry → sparse matrix.

Opens every input, parses the headers, builds the global sample columns,
then drives the coordinate merge into the configured sinks.
"""
import contextlib
import gzip
import io
import logging
import sys
import time
from pathlib import Path
from typing import IO, List, Optional

from vcfsparse.config import STDIO_PATH, MergeConfig
from vcfsparse.errors import ConfigError
from vcfsparse.services.matrix.emitter import VariantInfoSink, create_emitter, ensure_supported_format
from vcfsparse.services.matrix.merger import CoordinateMerger, MergeStats
from vcfsparse.services.matrix.registry import SampleRegistry
from vcfsparse.services.vcf.cursor import StreamCursor

logger = logging.getLogger(__name__)


# ── Input / output opening ────────────────────────────────────────────────

def open_input(path: str, encoding: str = "utf-8") -> IO[str]:
    """Open a VCF for line reading; ``-`` is stdin and ``.gz`` is decompressed."""
    if path == STDIO_PATH:
        return io.TextIOWrapper(sys.stdin.buffer, encoding=encoding, errors="replace", newline="")
    p = Path(path)
    if p.suffix == ".gz":
        return gzip.open(p, mode="rt", encoding=encoding, errors="replace")
    return p.open("r", encoding=encoding, errors="replace", newline="")


def open_output(path: Optional[str], stack: contextlib.ExitStack) -> IO[str]:
    if path is None or path == STDIO_PATH:
        return sys.stdout
    return stack.enter_context(open(path, "w", encoding="utf-8"))


def open_cursors(paths: List[str], stack: contextlib.ExitStack) -> List[StreamCursor]:
    cursors: List[StreamCursor] = []
    for i, path in enumerate(paths):
        handle = open_input(path)
        if path == STDIO_PATH:
            # Leave the process stdin open once the wrapper is dropped.
            stack.callback(handle.detach)
            source = None
        else:
            source = handle
        try:
            cursor = StreamCursor.open(handle, index=i, name=path, source=source)
        except BaseException:
            if source is not None:
                source.close()
            raise
        stack.callback(cursor.close)
        cursors.append(cursor)
    return cursors


# ── Pipeline entry point ──────────────────────────────────────────────────

def run_merge(config: MergeConfig) -> MergeStats:
    """
    Run one merge as described by ``config``.

    Fatal conditions (unreadable inputs, malformed headers or records,
    unsupported dialects, multi-record variant info) propagate to the caller.
    """
    if not config.inputs:
        raise ConfigError("At least one input VCF is required")
    if config.inputs.count(STDIO_PATH) > 1:
        raise ConfigError("Standard input can only be used for one input stream")
    ensure_supported_format(config.format)

    start = time.perf_counter()
    with contextlib.ExitStack() as stack:
        cursors = open_cursors(config.inputs, stack)
        registry = SampleRegistry.from_headers(c.header for c in cursors)

        if config.sample_info_output is not None:
            sample_sink = open_output(config.sample_info_output, stack)
            registry.write_samples(sample_sink)
            sample_sink.flush()

        variant_info = None
        if config.variant_info_output is not None:
            variant_info = VariantInfoSink(open_output(config.variant_info_output, stack))

        out = open_output(config.output, stack)
        emitter = create_emitter(config.format, out, registry, variant_info=variant_info)

        with CoordinateMerger(cursors, emitter, registry=registry) as merger:
            stats = merger.run()
        out.flush()

    logger.info(
        "Wrote %d rows (%d pairs, %d samples) in %.2fs",
        stats.rows_written, stats.pairs_written, len(registry), time.perf_counter() - start,
    )
    return stats
