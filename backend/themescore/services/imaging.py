"""
ThemeScore Imaging Utilities
Raster decoding, per-pixel channel reads and content sniffing.
"""
import io
from typing import Iterable, Optional, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import DecodeError

DEFAULT_FORMATS = ("PNG", "JPEG", "GIF")

# Signature prefixes checked by sniff_mime_type, in order
MAGIC_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
    (b"\x00\x00\x01\x00", "image/x-icon"),
    (b"%PDF-", "application/pdf"),
)

# Integer grayscale modes read at full 16-bit depth
GRAY16_MODES = ("I;16", "I;16L", "I;16B", "I")

# Control bytes that mark content as binary rather than text
_BINARY_BYTES = frozenset(range(0x00, 0x09)) | {0x0B} | frozenset(range(0x0E, 0x1C)) | {0x7F}


class Raster:
    """
    Decoded bitmap with a rectangular bounds and 4-channel pixel reads.

    ``rgba(x, y)`` returns red, green, blue and alpha as 16-bit values
    (0-65535) with color channels premultiplied by alpha. Adapters must
    implement ``bounds`` and ``rgba``; ``sample_grid`` has a generic
    implementation that adapters may replace with a faster one.
    """

    format: str = ""

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        """Bounds as ``(min_x, min_y, max_x, max_y)``, max exclusive."""
        raise NotImplementedError

    @property
    def width(self) -> int:
        min_x, _, max_x, _ = self.bounds
        return max_x - min_x

    @property
    def height(self) -> int:
        _, min_y, _, max_y = self.bounds
        return max_y - min_y

    def rgba(self, x: int, y: int) -> Tuple[int, int, int, int]:
        raise NotImplementedError

    def grid_coordinates(self, step: int) -> Iterable[Tuple[int, int]]:
        """Yield (x, y) from the origin with the given stride, row by row."""
        min_x, min_y, max_x, max_y = self.bounds
        for y in range(min_y, max_y, step):
            for x in range(min_x, max_x, step):
                yield x, y

    def sample_grid(self, step: int) -> np.ndarray:
        """
        Read every pixel on a regular grid with the given stride.

        Returns:
            ``(n, 4)`` uint32 array of premultiplied 16-bit RGBA samples
        """
        samples = [self.rgba(x, y) for x, y in self.grid_coordinates(step)]
        if not samples:
            return np.zeros((0, 4), dtype=np.uint32)
        return np.asarray(samples, dtype=np.uint32)


def _gray16_pixels(image: Image.Image) -> np.ndarray:
    """Opaque RGBA16 pixels from a 16-bit (or 32-bit integer) grayscale image."""
    # convert("RGBA") clips these modes to 8 bits instead of scaling
    gray = np.clip(np.asarray(image, dtype=np.int64), 0, 65535).astype(np.uint32)
    pixels = np.empty(gray.shape + (4,), dtype=np.uint32)
    pixels[..., :3] = gray[..., np.newaxis]
    pixels[..., 3] = 65535
    return pixels


class PillowRaster(Raster):
    """Raster backed by a Pillow image, normalized to premultiplied RGBA16."""

    def __init__(self, image: Image.Image, format: Optional[str] = None):
        self.format = format or image.format or ""
        self.mode = image.mode
        if image.mode in GRAY16_MODES:
            self._pixels = _gray16_pixels(image)
            return
        if image.mode != "RGBA":
            image = image.convert("RGBA")

        rgba8 = np.asarray(image, dtype=np.uint32)

        # Widen 8-bit to 16-bit by byte replication, then premultiply
        rgba16 = rgba8 * 257
        alpha = rgba16[..., 3:4]
        pixels = np.empty_like(rgba16)
        pixels[..., :3] = rgba16[..., :3] * alpha // 65535
        pixels[..., 3:4] = alpha
        self._pixels = pixels

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        h, w = self._pixels.shape[:2]
        return 0, 0, w, h

    def rgba(self, x: int, y: int) -> Tuple[int, int, int, int]:
        r, g, b, a = self._pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def sample_grid(self, step: int) -> np.ndarray:
        return self._pixels[::step, ::step].reshape(-1, 4)


def decode_raster(image_bytes: bytes, formats: Iterable[str] = DEFAULT_FORMATS) -> PillowRaster:
    """
    Decode raw bytes into a raster.

    Only the first frame of multi-frame images is read.

    Args:
        image_bytes: Encoded image
        formats: Pillow format names to try

    Raises:
        DecodeError: bytes are empty or not a supported raster format
    """
    if not image_bytes:
        raise DecodeError("image: unknown format")

    formats = tuple(formats)
    try:
        with Image.open(io.BytesIO(image_bytes), formats=formats) as image:
            image.load()
            return PillowRaster(image, format=image.format)
    except UnidentifiedImageError:
        raise DecodeError("image: unknown format")
    except Image.DecompressionBombError as e:
        raise DecodeError(f"image too large: {e}")
    except Exception as e:
        # truncated or corrupt data inside a recognized container
        raise DecodeError(f"{_formats_label(formats)}: {e}")


def _formats_label(formats: Iterable[str]) -> str:
    return "/".join(f.lower() for f in formats)


def sniff_mime_type(data: bytes) -> str:
    """
    Guess a MIME type from the leading bytes of ``data``.

    Recognizes common image signatures; anything else is reported as
    text when it has no binary control bytes in its first 512 bytes.
    """
    head = data[:512]
    for signature, mime in MAGIC_SIGNATURES:
        if head.startswith(signature):
            return mime
    if len(head) >= 12 and head[:4] == b"RIFF" and head[8:12] == b"WEBP":
        return "image/webp"
    if any(byte in _BINARY_BYTES for byte in head):
        return "application/octet-stream"
    return "text/plain; charset=utf-8"
