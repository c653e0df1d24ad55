"""
ThemeScore API Routes
Implements the /score and /debug endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, Request

from ..config import Config
from ..schemas import DebugRequest, DebugResponse, ErrorResponse, ScoreRequest, ScoreResponse
from ..services.colors.pipeline import handle_debug, handle_score
from ..services.errors import ColorScoreError, DecodeError, EncodingError, InvalidColorLiteral

router = APIRouter(tags=["Theme Score"])

# Detail prefixes naming the stage that rejected a score request
SCORE_ERROR_PREFIXES = {
    EncodingError: "bad image",
    DecodeError: "decode fail",
    InvalidColorLiteral: "bad theme_hex",
}


def get_config(request: Request) -> Config:
    return request.app.state.config


def _error_detail(error: ColorScoreError) -> str:
    prefix = SCORE_ERROR_PREFIXES.get(type(error), "bad request")
    return f"{prefix}: {error.message}"


@router.post("/score",
             response_model=ScoreResponse,
             responses={400: {"model": ErrorResponse}},
             summary="Theme Color Score",
             description="Score how close an image's average color is to a theme color")
def score(body: ScoreRequest, config: Config = Depends(get_config)) -> ScoreResponse:
    """
    Score an image against a theme color.

    - **image_base64**: PNG, JPEG or GIF as base64 (data URI, URL-safe and
      unpadded forms accepted)
    - **theme_hex**: theme color as #RRGGBB

    Returns the similarity score (0-100, one decimal), the image's
    alpha-weighted average color and the scoring method tag.
    """
    try:
        return handle_score(body, config)
    except ColorScoreError as e:
        raise HTTPException(status_code=400, detail=_error_detail(e))


@router.post("/debug",
             response_model=DebugResponse,
             responses={400: {"model": ErrorResponse}},
             summary="Image Payload Diagnostics")
def debug(body: DebugRequest, config: Config = Depends(get_config)) -> DebugResponse:
    """Report decoded length, leading bytes, sniffed MIME type and decode status."""
    try:
        return handle_debug(body, config)
    except EncodingError as e:
        raise HTTPException(status_code=400, detail=f"bad base64: {e.message}")
