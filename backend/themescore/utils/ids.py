"""
ThemeScore Request ID Utilities
Generate unique request IDs for log correlation.
"""
import uuid
from datetime import datetime


def generate_request_id(prefix: str = "score") -> str:
    """
    Generate a unique request ID for tracking.

    Args:
        prefix: Short tag naming the endpoint ("score", "debug")

    Returns:
        Request ID of the form ``<prefix>-<YYYYmmddHHMMSS>-<uuid8>``
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    short_uuid = str(uuid.uuid4())[:8]
    return f"{prefix}-{timestamp}-{short_uuid}"
