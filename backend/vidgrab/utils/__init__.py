"""Utils package"""
from .url_utils import (
    extract_video_id,
    is_valid_url,
    safe_attachment_name
)

__all__ = [
    "extract_video_id",
    "is_valid_url",
    "safe_attachment_name"
]
