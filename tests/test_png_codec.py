from io import BytesIO

import numpy as np
import pytest
from PIL import Image as PILImage

from bandsaw.errors import DecodeError, EncodeError
from bandsaw.models.image import Image
from bandsaw.repositories.png_codec import PngCodec

from conftest import rgba_canvas


def png_bytes(pil_img, **save_kwargs):
    buf = BytesIO()
    pil_img.save(buf, format="PNG", **save_kwargs)
    return buf.getvalue()


@pytest.fixture
def codec():
    return PngCodec()


def test_decode_rgba_keeps_every_sample(codec):
    pixels = np.random.default_rng(7).integers(0, 256, size=(5, 7, 4), dtype=np.uint8)
    img = codec.decode(png_bytes(PILImage.fromarray(pixels)))

    assert (img.width, img.height) == (7, 5)
    assert np.array_equal(img.pixels, pixels)


def test_decode_rgb_gets_opaque_alpha(codec):
    img = codec.decode(png_bytes(PILImage.new("RGB", (3, 2), (10, 20, 30))))

    assert img.pixels.shape == (2, 3, 4)
    assert np.all(img.pixels[:, :, 3] == 255)
    assert tuple(img.pixels[0, 0]) == (10, 20, 30, 255)


def test_decode_palette_uses_transparency_chunk(codec):
    pal = PILImage.new("P", (4, 4), 0)
    pal.putpalette([0, 0, 0, 200, 100, 50] + [0] * (256 * 3 - 6))
    pal.putpixel((2, 1), 1)
    data = png_bytes(pal, transparency=0)
    assert b"tRNS" in data

    img = codec.decode(data)

    assert img.pixels[0, 0, 3] == 0
    assert tuple(img.pixels[1, 2]) == (200, 100, 50, 255)


def test_decode_grayscale_alpha(codec):
    la = PILImage.new("LA", (2, 2), (128, 0))
    la.putpixel((1, 1), (64, 77))

    img = codec.decode(png_bytes(la))

    assert tuple(img.pixels[1, 1]) == (64, 64, 64, 77)
    assert img.pixels[0, 0, 3] == 0


def test_read_dimensions_reads_ihdr(codec):
    data = png_bytes(PILImage.new("RGBA", (640, 3)))
    assert codec.read_dimensions(data) == (640, 3)


def test_rejects_non_png(codec):
    with pytest.raises(DecodeError, match="signature"):
        codec.decode(b"GIF89a" + b"\x00" * 40)


def test_rejects_crc_mismatch(codec):
    data = bytearray(png_bytes(PILImage.new("RGBA", (4, 4), (1, 2, 3, 4))))
    idat = data.find(b"IDAT")
    data[idat + 5] ^= 0xFF

    with pytest.raises(DecodeError, match="CRC"):
        codec.decode(bytes(data))


def test_rejects_truncated_stream(codec):
    data = png_bytes(PILImage.new("RGBA", (4, 4)))
    with pytest.raises(DecodeError):
        codec.decode(data[:-6])


def test_rejects_animated_png(codec):
    first = PILImage.new("RGBA", (4, 4), (255, 0, 0, 255))
    second = PILImage.new("RGBA", (4, 4), (0, 0, 255, 255))
    data = png_bytes(first, save_all=True, append_images=[second])
    assert b"acTL" in data

    with pytest.raises(DecodeError, match="Animated"):
        codec.decode(data)


def test_encode_round_trips(codec):
    pixels = rgba_canvas(6, 3)
    pixels[1, 2] = (9, 8, 7, 6)

    decoded = codec.decode(codec.encode(Image(pixels)))

    assert np.array_equal(decoded.pixels, pixels)


def test_encode_handles_non_contiguous_views(codec):
    pixels = np.arange(8 * 8 * 4, dtype=np.uint8).reshape(8, 8, 4)
    view = pixels[1:5, 2:7]

    decoded = codec.decode(codec.encode(Image(view)))

    assert np.array_equal(decoded.pixels, view)


def test_encode_rejects_empty_image(codec):
    with pytest.raises(EncodeError):
        codec.encode(Image(np.zeros((0, 5, 4), dtype=np.uint8)))


def test_image_rejects_non_rgba_buffer():
    with pytest.raises(ValueError):
        Image(np.zeros((4, 4, 3), dtype=np.uint8))
    with pytest.raises(ValueError):
        Image(np.zeros((4, 4, 4), dtype=np.float32))


def test_rejects_16_bit_png(codec):
    samples = np.array([[40000, 1000], [0, 65535]], dtype=np.uint16)
    data = png_bytes(PILImage.fromarray(samples))
    assert data[24] == 16

    with pytest.raises(DecodeError, match="16-bit"):
        codec.decode(data)


def test_oversized_image_reports_size_limit(codec, monkeypatch):
    data = png_bytes(PILImage.new("RGBA", (10, 10)))
    monkeypatch.setattr(PILImage, "MAX_IMAGE_PIXELS", 10)

    with pytest.raises(DecodeError, match="size limit"):
        codec.decode(data)
