"""Models package"""
from .schemas import (
    ResolveRequest,
    VideoDetails,
    FormatDescriptor,
    ResolveResult,
    ErrorResponse
)

__all__ = [
    "ResolveRequest",
    "VideoDetails",
    "FormatDescriptor",
    "ResolveResult",
    "ErrorResponse"
]
