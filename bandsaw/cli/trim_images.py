import argparse
import json
import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from ..models.crop_result import TrimFailure
from ..pipeline.batch_trim import MAX_WORKERS
from ..pipeline.trim import RECURSIVE, trim
from ..pipeline.trim_image import LEGACY_CLIP

DEFAULT_PADDING = os.getenv("BANDSAW_DEFAULT_PADDING", "0")
LOG_LEVEL = os.getenv("BANDSAW_LOG_LEVEL", "INFO").upper()


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bandsaw",
        description="Crop PNG images to their non-transparent pixels, rewriting the files in place.",
    )
    p.add_argument("paths", nargs="+", help="PNG files and/or folders containing PNG files")
    p.add_argument("--padding", default=DEFAULT_PADDING,
                   help="pixels of margin to keep around the opaque region (default: %(default)s)")
    p.add_argument("--recursive", action=argparse.BooleanOptionalAction, default=RECURSIVE,
                   help="descend into sub-folders (default: %(default)s)")
    p.add_argument("--workers", type=positive_int, default=MAX_WORKERS,
                   help="number of images processed in parallel (default: executor default)")
    p.add_argument("--legacy-clip", action=argparse.BooleanOptionalAction, default=LEGACY_CLIP,
                   help="treat right/bottom extrema as exclusive, dropping the last opaque column and row "
                        "(default: %(default)s)")
    p.add_argument("--json", action="store_true", help="print results as a JSON array")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )

    results = trim(
        args.paths,
        args.padding,
        recursive=args.recursive,
        max_workers=args.workers,
        exclusive_bounds=not args.legacy_clip,
    )

    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2))
    else:
        for r in results:
            if isinstance(r, TrimFailure):
                print(f"FAILED  {r.path}: {r.error}: {r.message}")
            else:
                print(f"trimmed {r.path}: {r.natural_width}x{r.natural_height} -> {r.width}x{r.height} "
                      f"(l={r.left} t={r.top} r={r.right} b={r.bottom})")

    return 1 if any(isinstance(r, TrimFailure) for r in results) else 0


if __name__ == "__main__":
    sys.exit(main())
