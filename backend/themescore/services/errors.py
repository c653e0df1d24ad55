"""
ThemeScore pipeline errors.

Each stage of the scoring pipeline fails with its own exception type so the
HTTP layer can report which stage rejected the request. All of them are
terminal: the computation is deterministic, so nothing is retried.
"""


class ColorScoreError(ValueError):
    """Base class for scoring pipeline failures."""

    stage = "pipeline"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EncodingError(ColorScoreError):
    """Image payload is not valid base64 under any accepted alphabet."""

    stage = "payload"


class DecodeError(ColorScoreError):
    """Bytes are not a recognizable raster image."""

    stage = "decode"


class InvalidColorLiteral(ColorScoreError):
    """Theme color is not a #RRGGBB literal."""

    stage = "theme_hex"
