"""
Image payload normalization.

Accepts base64 text the way browsers and CLI tools tend to produce it: with
or without a ``data:`` URI prefix, line-wrapped, URL-safe or standard
alphabet, padded or not.
"""
import base64
import binascii
from typing import Callable, Tuple

from .errors import EncodingError
from ..utils.logging import get_logger

DATA_URI_SCHEME = "data:"
URLSAFE_TABLE = str.maketrans("-_", "+/")


def strip_data_uri(text: str) -> str:
    """Drop a ``data:...,`` prefix if present (scheme matched case-insensitively)."""
    if text.lower().startswith(DATA_URI_SCHEME) and "," in text:
        return text.split(",", 1)[1]
    return text


def _standard(text: str) -> bytes:
    return base64.b64decode(text, validate=True)


def _urlsafe(text: str) -> bytes:
    return base64.b64decode(text.translate(URLSAFE_TABLE), validate=True)


def _urlsafe_unpadded(text: str) -> bytes:
    text = text.translate(URLSAFE_TABLE).rstrip("=")
    return base64.b64decode(text + "=" * (-len(text) % 4), validate=True)


# Tried in order; the first that decodes wins
DECODE_STRATEGIES: Tuple[Tuple[str, Callable[[str], bytes]], ...] = (
    ("standard", _standard),
    ("urlsafe", _urlsafe),
    ("urlsafe-unpadded", _urlsafe_unpadded),
)


def decode_image_payload(text: str) -> bytes:
    """
    Decode a loosely formatted base64 image payload to raw bytes.

    Raises:
        EncodingError: no decoding strategy accepted the payload
    """
    text = strip_data_uri(text.strip())
    text = text.replace("\n", "").replace("\r", "").replace(" ", "")

    for name, strategy in DECODE_STRATEGIES:
        try:
            data = strategy(text)
        except (binascii.Error, ValueError):
            continue
        get_logger().debug("Decoded image payload", extra={"strategy": name, "bytes": len(data)})
        return data

    raise EncodingError("base64 decode failed")
