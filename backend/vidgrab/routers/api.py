"""API routes"""
from fastapi import APIRouter
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask
from typing import Optional

from ..models.schemas import ResolveRequest, ResolveResult, ErrorResponse
from ..services.stream_service import StreamService
from ..services.video_info_service import VideoInfoService
from ..config import DEFAULT_FILENAME
from ..utils.url_utils import safe_attachment_name

# Initialize services
video_info_service = VideoInfoService()
stream_service = StreamService()

router = APIRouter(prefix="/api", tags=["api"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post("/download", response_model=ResolveResult, responses=ERROR_RESPONSES)
def get_video_info(request: ResolveRequest):
    """Get video details and the top quality options for a format class"""
    return video_info_service.resolve(request.url, request.format)


@router.get("/download", response_class=StreamingResponse, responses=ERROR_RESPONSES)
def download_video(
    url: Optional[str] = None,
    itag: Optional[str] = None,
    filename: Optional[str] = None
):
    """Stream the chosen format back as an attachment"""
    stream = stream_service.open_stream(url, itag)
    name = safe_attachment_name(filename, DEFAULT_FILENAME)

    return StreamingResponse(
        stream.iter_chunks(),
        media_type='application/octet-stream',
        headers={'Content-Disposition': f'attachment; filename="{name}"'},
        # Also closes the upstream when iteration never started
        background=BackgroundTask(stream.close)
    )
