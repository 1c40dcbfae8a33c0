import logging
import os
from pathlib import Path
from typing import Iterable, List, Union

from ..repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class PathService:
    """
    Turns whatever the caller handed us (one path, a folder, a list of
    both) into a flat, de-duplicated list of absolute PNG paths.
    """

    def __init__(self, image_repository: ImageRepository | None = None):
        self.image_repository = image_repository or ImageRepository()

    @staticmethod
    def normalize(inputs: Union[PathLike, Iterable[PathLike]]) -> List[Path]:
        if isinstance(inputs, (str, bytes, os.PathLike)):
            inputs = [inputs]
        return [Path(os.fsdecode(item)) for item in inputs]

    def resolve_inputs(
        self,
        inputs: Union[PathLike, Iterable[PathLike]],
        *,
        recursive: bool = False,
    ) -> List[Path]:
        """
        Args:
            inputs: A file or folder path, or an iterable of them.
            recursive: Walk sub-folders when expanding a folder.

        Returns:
            Absolute paths of existing PNG files, first-seen order,
            no duplicates. Missing and non-PNG entries are dropped.
        """
        resolved: List[Path] = []
        seen = set()

        for item in self.normalize(inputs):
            if not item.exists():
                logger.debug("Skipping %s: does not exist", item)
                continue

            if item.is_dir():
                candidates = self.image_repository.iter_dir(item, recursive=recursive)
            elif self.image_repository.is_valid_image_path(item):
                candidates = [item]
            else:
                logger.debug("Skipping %s: not a PNG file", item)
                continue

            for path in candidates:
                path = path.resolve()
                if path in seen:
                    continue
                seen.add(path)
                resolved.append(path)

        return resolved
