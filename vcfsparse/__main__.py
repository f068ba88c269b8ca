from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from vcfsparse import __version__
from vcfsparse.config import OUTPUT_FORMATS, build_config, set_config
from vcfsparse.core.logging import setup_logging
from vcfsparse.errors import VcfSparseError
from vcfsparse.services.pipeline.merge_pipeline import run_merge

logger = logging.getLogger("vcfsparse.cli")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="vcfsparse",
        description="Merge coordinate-sorted VCF files into one sparse genotype matrix.",
    )
    ap.add_argument("inputs", nargs="+", metavar="VCF", help="Sorted VCF inputs ('-' for stdin, .gz accepted)")
    ap.add_argument(
        "-f", "--format", default="cluto",
        help=f"Output matrix dialect, one of: {', '.join(OUTPUT_FORMATS)} (default: cluto)",
    )
    ap.add_argument("-o", "--output", default=None, help="Sparse matrix destination (default: stdout)")
    ap.add_argument("--sample-info-output", default=None, help="Write global sample names here, one per line")
    ap.add_argument("--variant-info-output", default=None, help="Write per-row variant provenance here")
    ap.add_argument("-d", "--debug", action="count", default=0, help="Increase diagnostic verbosity (repeatable)")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.debug)

    try:
        config = build_config(
            inputs=args.inputs,
            format=args.format,
            output=args.output,
            sample_info_output=args.sample_info_output,
            variant_info_output=args.variant_info_output,
            debug=args.debug,
        )
        set_config(config)
        run_merge(config)
    except (VcfSparseError, OSError, EOFError) as e:
        logger.debug("Merge aborted", exc_info=True)
        print(f"vcfsparse: error: {e}", file=sys.stderr)
        return 1
    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
