"""
ThemeScore API Schemas
Pydantic models for score and debug request/response validation.
"""
from typing import Optional
from pydantic import BaseModel, Field


class ScoreRequest(BaseModel):
    """Score an image against a theme color."""
    image_base64: str = Field(
        ...,
        description="Base64-encoded PNG, JPEG or GIF; data URI prefix and URL-safe alphabet accepted"
    )
    theme_hex: str = Field(
        ...,
        description="Theme color as #RRGGBB (leading # optional)"
    )


class ScoreResponse(BaseModel):
    """Similarity of the image's average color to the theme color."""
    score: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        description="Similarity in percent, rounded to one decimal"
    )
    avg_color_hex: str = Field(
        ...,
        pattern=r"^#[0-9a-f]{6}$",
        description="Alpha-weighted average color of the image as lowercase #rrggbb"
    )
    method: str = Field(..., description="Scoring method identifier")


class DebugRequest(BaseModel):
    """Inspect an image payload without scoring it."""
    image_base64: str = Field(..., description="Base64-encoded image payload")


class DebugResponse(BaseModel):
    """Decode diagnostics for an image payload."""
    decoded_len: int = Field(..., ge=0, description="Length of the decoded payload in bytes")
    first8_hex: str = Field(..., description="First 8 decoded bytes as lowercase hex")
    mime_guess: str = Field(..., description="MIME type guessed from the leading bytes")
    decode_ok: bool = Field(..., description="Whether the bytes decoded as a raster image")
    decode_err: str = Field("", description="Decoder error message when decode_ok is false")
    width: int = Field(0, ge=0, description="Image width in pixels")
    height: int = Field(0, ge=0, description="Image height in pixels")
    format: Optional[str] = Field(None, description="Decoded image format")
    note: str = Field("", description="Hint for interpreting the result")


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("themescore", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")
