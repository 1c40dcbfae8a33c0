import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, Iterator, Union

import numpy as np
from dotenv import load_dotenv

from ..errors import ReadError, WriteError
from ..models.image import Image
from .png_codec import PngCodec

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class ImageRepository:
    """
    Handles file I/O and pixel updates for Image entities.
    """
    def __init__(self, codec: PngCodec | None = None):
        self.codec = codec or PngCodec()
        self.VALID_EXTS = {
            ext.strip().lower()
            for ext in os.getenv("VALID_IMAGE_EXTENSIONS", ".png").split(",")
            if ext.strip()
        }

    @staticmethod
    def create_image(pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        if path is None:
            return Image(pixels)
        return Image(pixels=pixels, path=Path(path))

    def retrieve_image_dimensions(self, img: Image):
        return img.pixels.shape[:2]

    def load(self, path: Union[str, Path]) -> Image:
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as err:
            raise ReadError(f"Could not read {path}: {err}") from err
        img = self.codec.decode(data)
        img.path = path
        return img

    def save(self, image: Image) -> None:
        """
        Encode first, then swap the file in with a same-directory rename so a
        failed encode or a full disk never leaves a truncated PNG behind.
        """
        data = self.codec.encode(image)
        self.write_atomic(image.path, data)

    @staticmethod
    def write_atomic(path: Union[str, Path], data: bytes) -> None:
        path = Path(path)
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            if path.exists():
                shutil.copymode(path, tmp_name)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as err:
            raise WriteError(f"Could not write {path}: {err}") from err
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def is_valid_image_path(self, path: Path, exts: Iterable[str] | None = None) -> bool:
        allowed = {e.lower() for e in (exts or self.VALID_EXTS)}
        return path.suffix.lower() in allowed and path.is_file()

    def iter_dir(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Path]:
        """
        Yield image paths one at a time, in sorted order.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise NotADirectoryError(folder)

        pattern = "**/*" if recursive else "*"

        for p in sorted(folder.glob(pattern)):
            if not self.is_valid_image_path(p, exts):
                logger.debug("Skipping %s: not a %s file", p, "/".join(sorted(exts or self.VALID_EXTS)))
                continue
            yield p
