"""Services package"""
from .stream_service import StreamService, MediaStream, RelayState
from .video_info_service import VideoInfoService

__all__ = [
    "StreamService",
    "MediaStream",
    "RelayState",
    "VideoInfoService"
]
