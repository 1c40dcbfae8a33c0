"""
Entry point: resolve paths, then trim everything that survives.
"""

import logging
import os
from typing import Iterable, List, Union

from dotenv import load_dotenv

from ..models.crop_result import CropResult, TrimFailure
from ..services.padding_service import PaddingService
from ..services.path_service import PathService
from .batch_trim import MAX_WORKERS, trim_all

# Load environment variables
load_dotenv()
RECURSIVE = os.getenv("BANDSAW_RECURSIVE", "false").lower() == "true"

logger = logging.getLogger(__name__)


def trim(
    inputs: Union[str, os.PathLike, Iterable[Union[str, os.PathLike]]],
    padding=0,
    *,
    recursive: bool = RECURSIVE,
    max_workers: int | None = MAX_WORKERS,
    path_service: PathService = PathService(),
    padding_service: PaddingService = PaddingService(),
    **trim_kwargs,
) -> List[CropResult | TrimFailure]:
    """
    Autotrim PNG images, rewrite the original files and return crop data.

    Args:
        inputs: A PNG file or folder, or a list of them. Folders are
            expanded to the PNGs they contain; missing paths and non-PNG
            files are dropped silently.
        padding: Margin in pixels added around the opaque region on every
            side, clamped to the canvas. Strings are coerced; anything
            non-numeric is treated as 0 with a warning.
        recursive: Expand folders recursively.
        max_workers: Worker pool size, None for the executor default.

    Returns:
        One CropResult (or TrimFailure) per resolved file, in input order.
    """
    padding = padding_service.coerce_padding(padding)

    paths = path_service.resolve_inputs(inputs, recursive=recursive)
    if not paths:
        logger.info("No PNG files to trim")
        return []

    logger.debug("Trimming %d file(s) with padding %s", len(paths), padding)
    return trim_all(paths, padding, max_workers=max_workers, **trim_kwargs)
