"""
ThemeScore Configuration
Reads environment variables and defaults for the scoring service.
"""
import os
from typing import Iterable, List, Mapping, Optional

from PIL import Image


class Config:
    """Configuration for one ThemeScore server process."""

    LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        env = os.environ if environ is None else environ

        # Server
        self.HOST: str = env.get("THEMESCORE_HOST", "0.0.0.0")
        self.PORT: int = int(env.get("PORT", "8080"))

        # Request limits
        self.MAX_BODY_MB: int = int(env.get("THEMESCORE_MAX_BODY_MB", "10"))

        # Logging
        self.LOG_LEVEL: str = env.get("THEMESCORE_LOG_LEVEL", "INFO").upper()

        # CORS
        self.ALLOWED_ORIGINS: str = env.get("THEMESCORE_ALLOWED_ORIGINS", "*")

        # Raster formats accepted by the decoder (Pillow format names)
        self.SUPPORTED_FORMATS: str = env.get("THEMESCORE_SUPPORTED_FORMATS", "PNG,JPEG,GIF")

        if not self.validate_port(self.PORT):
            raise ValueError(f"Invalid PORT: {self.PORT}")
        if not self.validate_log_level(self.LOG_LEVEL):
            raise ValueError(f"Invalid THEMESCORE_LOG_LEVEL: {self.LOG_LEVEL}")
        if self.MAX_BODY_MB <= 0:
            raise ValueError("THEMESCORE_MAX_BODY_MB must be positive")
        if not self.validate_formats(self.supported_formats):
            raise ValueError(f"Invalid THEMESCORE_SUPPORTED_FORMATS: {self.SUPPORTED_FORMATS}")

    @property
    def max_body_bytes(self) -> int:
        return self.MAX_BODY_MB * 1024 * 1024

    @property
    def allowed_origins(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def supported_formats(self) -> List[str]:
        return [f.strip().upper() for f in self.SUPPORTED_FORMATS.split(",") if f.strip()]

    @classmethod
    def validate_port(cls, port: int) -> bool:
        """Validate listening port."""
        return 0 < port < 65536

    @classmethod
    def validate_log_level(cls, level: str) -> bool:
        """Validate loguru level name."""
        return level in cls.LOG_LEVELS

    @classmethod
    def validate_formats(cls, formats: Iterable[str]) -> bool:
        """Validate decoder format names against the formats Pillow has registered."""
        formats = list(formats)
        registered = set(Image.registered_extensions().values())
        return bool(formats) and all(f in registered for f in formats)
