import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Sequence, Union

from dotenv import load_dotenv

from ..models.crop_result import CropResult, TrimFailure
from .trim_image import trim_image_safe

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def max_workers_from_env() -> int | None:
    """BANDSAW_MAX_WORKERS as a pool size; unset or below 1 means the executor default."""
    raw = os.getenv("BANDSAW_MAX_WORKERS", "").strip()
    if not raw:
        return None
    workers = int(raw)
    if workers < 1:
        logger.warning("BANDSAW_MAX_WORKERS=%s is not a valid pool size, using the executor default", raw)
        return None
    return workers


MAX_WORKERS = max_workers_from_env()


def trim_all(
    paths: Sequence[Union[str, Path]],
    padding: float = 0,
    *,
    max_workers: int | None = MAX_WORKERS,
    **trim_kwargs,
) -> List[CropResult | TrimFailure]:
    """
    Run trim_image on every path concurrently.

    Images share nothing, so each one gets its own worker; results are
    collected in the order the paths were given, not completion order.
    Every input yields exactly one CropResult or TrimFailure.
    """
    if not paths:
        return []

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="bandsaw") as executor:
        futures = [executor.submit(trim_image_safe, path, padding, **trim_kwargs) for path in paths]
        results = [future.result() for future in futures]

    failed = sum(isinstance(r, TrimFailure) for r in results)
    logger.info("Trimmed %d/%d image(s)", len(results) - failed, len(results))
    return results
