"""
Theme Score Orchestrator

Runs the scoring pipeline: payload decoding, raster decoding, theme color
parsing, alpha-weighted sampling and similarity scoring. Also builds the
diagnostic report served by the debug endpoint.
"""

import time
from typing import Iterable

from ...config import Config
from ...schemas import DebugRequest, DebugResponse, ScoreRequest, ScoreResponse
from ...utils.ids import generate_request_id
from ...utils.logging import get_logger
from ..errors import ColorScoreError, DecodeError
from ..imaging import DEFAULT_FORMATS, decode_raster, sniff_mime_type
from ..payload import decode_image_payload
from .literals import parse_color_literal
from .sampler import sample_linear_average
from .similarity import ScoreResult, score_similarity

DEBUG_NOTE = "Data produced by canvas.toDataURL('image/png') should report decode_ok=true"


def score_image(image_bytes: bytes, reference_hex: str,
                formats: Iterable[str] = DEFAULT_FORMATS) -> ScoreResult:
    """
    Score the average color of an encoded image against a theme color.

    Args:
        image_bytes: Encoded raster (PNG, JPEG or GIF by default)
        reference_hex: Theme color as ``#RRGGBB``

    Returns:
        ScoreResult with score, average color hex and method tag

    Raises:
        DecodeError: image_bytes is not a supported raster
        InvalidColorLiteral: reference_hex is malformed
    """
    raster = decode_raster(image_bytes, formats)
    reference = parse_color_literal(reference_hex)
    sampled = sample_linear_average(raster)
    return score_similarity(sampled.color, reference)


def handle_score(request: ScoreRequest, config: Config) -> ScoreResponse:
    """
    Handle one score request end to end.

    Raises:
        EncodingError, DecodeError, InvalidColorLiteral: from the failing stage
    """
    log = get_logger()
    request_id = generate_request_id("score")
    start_time = time.time()

    log.info("Starting theme score", extra={"request_id": request_id})

    try:
        image_bytes = decode_image_payload(request.image_base64)
        raster = decode_raster(image_bytes, config.supported_formats)
        decode_time = time.time() - start_time
        log.info(f"Decoded {raster.format} image {raster.width}x{raster.height}",
                 extra={"request_id": request_id, "ms_decode": decode_time * 1000})

        reference = parse_color_literal(request.theme_hex)

        sample_start = time.time()
        sampled = sample_linear_average(raster)
        sample_time = time.time() - sample_start
        log.info(f"Sampling complete: {sampled.samples} pixels",
                 extra={"request_id": request_id, "step": sampled.step,
                        "ms_sample": sample_time * 1000})

        result = score_similarity(sampled.color, reference)
    except ColorScoreError as e:
        log.warning(f"Theme score rejected: {e.message}",
                    extra={"request_id": request_id, "stage": e.stage})
        raise

    total_time = time.time() - start_time
    log.info(f"Theme score complete: {result.score}",
             extra={"request_id": request_id, "avg_color_hex": result.avg_color_hex,
                    "ms_total": total_time * 1000})

    return ScoreResponse(
        score=result.score,
        avg_color_hex=result.avg_color_hex,
        method=result.method,
    )


def handle_debug(request: DebugRequest, config: Config) -> DebugResponse:
    """
    Describe an image payload: decoded size, leading bytes, sniffed type and
    whether it decodes as a raster.

    Raises:
        EncodingError: payload is not base64
    """
    log = get_logger()
    request_id = generate_request_id("debug")

    try:
        data = decode_image_payload(request.image_base64)
    except ColorScoreError as e:
        log.warning(f"Debug payload rejected: {e.message}",
                    extra={"request_id": request_id, "stage": e.stage})
        raise

    report = DebugResponse(
        decoded_len=len(data),
        first8_hex=data[:8].hex(),
        mime_guess=sniff_mime_type(data),
        decode_ok=False,
        note=DEBUG_NOTE,
    )

    try:
        raster = decode_raster(data, config.supported_formats)
    except DecodeError as e:
        report.decode_err = e.message
    else:
        report.decode_ok = True
        report.width = raster.width
        report.height = raster.height
        report.format = raster.format

    log.info("Debug report built",
             extra={"request_id": request_id, "decoded_len": report.decoded_len,
                    "mime_guess": report.mime_guess, "decode_ok": report.decode_ok})
    return report
