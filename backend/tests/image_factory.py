"""
In-memory test image builders.

Produces small encoded rasters with exactly known pixel values so scoring
results can be asserted precisely.
"""
import base64
import io
from typing import Tuple

from PIL import Image


def encode_image(image: Image.Image, fmt: str = "PNG") -> bytes:
    """Encode a Pillow image to bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def solid_image(color: Tuple[int, ...], size: Tuple[int, int] = (8, 8), mode: str = "RGBA") -> Image.Image:
    """Single-color image; ``color`` must match ``mode``'s channel count."""
    return Image.new(mode, size, color)


def solid_png(color: Tuple[int, ...], size: Tuple[int, int] = (8, 8), mode: str = "RGBA") -> bytes:
    return encode_image(solid_image(color, size, mode), "PNG")


def split_png(left: Tuple[int, int, int, int], right: Tuple[int, int, int, int],
              size: Tuple[int, int] = (8, 4)) -> bytes:
    """RGBA PNG with the left half one color and the right half another."""
    width, height = size
    image = Image.new("RGBA", size, right)
    image.paste(Image.new("RGBA", (width // 2, height), left), (0, 0))
    return encode_image(image, "PNG")


def to_b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def to_urlsafe_b64(data: bytes, padded: bool = True) -> str:
    text = base64.urlsafe_b64encode(data).decode("ascii")
    return text if padded else text.rstrip("=")
