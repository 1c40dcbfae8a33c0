import os
import struct
import zlib
from io import BytesIO
from typing import Iterator, Tuple

import numpy as np
from PIL import Image as PILImage
from dotenv import load_dotenv

from ..errors import DecodeError, EncodeError
from ..models.image import Image

# Load environment variables
load_dotenv()
COMPRESS_LEVEL = int(os.getenv("BANDSAW_PNG_COMPRESS_LEVEL", "6"))

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_CHUNK_HEAD = struct.Struct(">I4s")  # length, type
_CRC = struct.Struct(">I")
_IHDR_SIZE = struct.Struct(">II")    # width, height
_IHDR_BIT_DEPTH = 24                 # file offset: signature + chunk head + width + height


class PngCodec:
    """
    Thin wrapper around Pillow's PNG plugin.

    The container (signature, chunk framing, CRCs, IHDR) is checked here so
    that a corrupt file fails loudly instead of half-decoding; scanline
    inflate/defilter and palette/tRNS expansion are left to Pillow.
    """

    def __init__(self, compress_level: int = COMPRESS_LEVEL):
        self.compress_level = compress_level

    @staticmethod
    def read_dimensions(data: bytes) -> Tuple[int, int]:
        """
        Read (width, height) straight from the IHDR chunk, which must be
        the first chunk after the 8-byte signature.
        """
        if len(data) < 33 or data[:8] != PNG_SIGNATURE:
            raise DecodeError("Not a PNG: bad or missing signature")

        length, chunk_type = _CHUNK_HEAD.unpack_from(data, 8)
        if chunk_type != b"IHDR" or length != 13:
            raise DecodeError(f"First chunk must be a 13-byte IHDR, got {chunk_type!r} ({length} bytes)")

        width, height = _IHDR_SIZE.unpack_from(data, 16)
        if width == 0 or height == 0:
            raise DecodeError(f"Invalid PNG dimensions {width}x{height}")
        return width, height

    @staticmethod
    def iter_chunks(data: bytes) -> Iterator[Tuple[bytes, bytes]]:
        """Yield (type, payload) for each CRC-checked chunk up to and including IEND."""
        offset = len(PNG_SIGNATURE)
        while offset < len(data):
            if offset + _CHUNK_HEAD.size > len(data):
                raise DecodeError(f"Truncated chunk header at offset {offset}")
            length, chunk_type = _CHUNK_HEAD.unpack_from(data, offset)
            payload_start = offset + _CHUNK_HEAD.size
            end = payload_start + length + _CRC.size
            if end > len(data):
                raise DecodeError(f"Truncated {chunk_type!r} chunk at offset {offset}")

            payload = data[payload_start:payload_start + length]
            (crc,) = _CRC.unpack_from(data, end - _CRC.size)
            if zlib.crc32(chunk_type + payload) & 0xFFFFFFFF != crc:
                raise DecodeError(f"CRC mismatch in {chunk_type!r} chunk at offset {offset}")

            yield chunk_type, payload
            if chunk_type == b"IEND":
                return
            offset = end
        raise DecodeError("Chunk stream ended without IEND")

    def validate(self, data: bytes) -> Tuple[int, int]:
        width, height = self.read_dimensions(data)
        # RGBA8 output would clip 16-bit samples, and the file gets overwritten.
        bit_depth = data[_IHDR_BIT_DEPTH]
        if bit_depth == 16:
            raise DecodeError("16-bit PNG is not supported")
        for chunk_type, _ in self.iter_chunks(data):
            if chunk_type == b"acTL":
                raise DecodeError("Animated PNG is not supported")
        return width, height

    def decode(self, data: bytes) -> Image:
        """
        Args:
            data (bytes): A complete PNG file.

        Returns:
            Image: RGBA8 pixels. RGB gets alpha 255, palette images are
            expanded through PLTE (+ tRNS when present).
        """
        width, height = self.validate(data)

        try:
            with PILImage.open(BytesIO(data), formats=["PNG"]) as pil_img:
                pil_img.load()
                rgba = pil_img.convert("RGBA")
        except PILImage.DecompressionBombError as err:
            raise DecodeError(f"Image exceeds the {PILImage.MAX_IMAGE_PIXELS} pixel size limit: {err}") from err
        except (OSError, SyntaxError, ValueError) as err:
            raise DecodeError(f"Corrupt PNG data: {err}") from err

        if rgba.size != (width, height):
            raise DecodeError(f"IHDR says {width}x{height} but decoded {rgba.size[0]}x{rgba.size[1]}")

        return Image(pixels=np.array(rgba, dtype=np.uint8))

    def encode(self, image: Image) -> bytes:
        """Serialize an RGBA8 buffer. Nothing is returned unless the whole stream was written."""
        if image.width == 0 or image.height == 0:
            raise EncodeError(f"Cannot encode a {image.width}x{image.height} image")

        np_img = image.pixels
        if not np_img.flags['C_CONTIGUOUS']:
            np_img = np.ascontiguousarray(np_img)

        buffer = BytesIO()
        try:
            PILImage.fromarray(np_img).save(buffer, format="PNG", compress_level=self.compress_level)
        except (OSError, ValueError, TypeError) as err:
            raise EncodeError(f"PNG encode failed: {err}") from err
        return buffer.getvalue()
