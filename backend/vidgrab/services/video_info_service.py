"""Service for fetching video information"""
import logging
import re
import yt_dlp
from typing import Dict, List, Optional

from ..config import YDL_OPTS, MAX_FORMATS
from ..errors import UpstreamError, ValidationError
from ..models.schemas import FormatDescriptor, ResolveResult, VideoDetails
from ..utils.url_utils import is_valid_url

logger = logging.getLogger(__name__)

RESOLUTION_PATTERN = re.compile(r'^(\d+)')


def has_video(f: Dict) -> bool:
    vcodec = f.get('vcodec')
    return bool(vcodec) and vcodec != 'none'


def has_audio(f: Dict) -> bool:
    acodec = f.get('acodec')
    return bool(acodec) and acodec != 'none'


def quality_label(f: Dict) -> Optional[str]:
    """Resolution label such as ``720p`` or ``1080p60``; None for audio-only formats"""
    height = f.get('height')
    if not has_video(f) or not height:
        return None
    label = f"{height}p"
    fps = f.get('fps')
    if fps and fps > 30:
        label += str(int(round(fps)))
    return label


def parse_resolution(label: Optional[str]) -> Optional[int]:
    if not label:
        return None
    match = RESOLUTION_PATTERN.match(label)
    return int(match.group(1)) if match else None


def audio_bitrate(f: Dict) -> Optional[float]:
    abr = f.get('abr')
    return float(abr) if abr is not None else None


def filter_formats(formats: List[Dict], media_class: Optional[str]) -> List[Dict]:
    """Keep muxed formats for ``video`` and sound-only formats for ``audio``"""
    if media_class == 'video':
        return [f for f in formats if has_video(f) and has_audio(f)]
    if media_class == 'audio':
        return [f for f in formats if has_audio(f) and not has_video(f)]
    return []


def rank_formats(formats: List[Dict], media_class: Optional[str]) -> List[Dict]:
    """Sort best first; formats without the metric go last, ties keep upstream order"""
    if media_class == 'video':
        def metric(f):
            return parse_resolution(quality_label(f))
    else:
        metric = audio_bitrate

    def key(f):
        value = metric(f)
        return (value is not None, value or 0)

    # reverse=True keeps the sort stable
    return sorted(formats, key=key, reverse=True)


def to_descriptor(f: Dict) -> FormatDescriptor:
    label = quality_label(f)
    if label is None:
        bitrate = audio_bitrate(f)
        label = f"{int(round(bitrate))}kbps" if bitrate is not None else 'unknown'

    if has_video(f):
        codecs = f"{f.get('vcodec')}, {f.get('acodec')}"
    else:
        codecs = f.get('acodec') or ''

    return FormatDescriptor(
        itag=str(f.get('format_id')),
        quality=label,
        container=f.get('ext') or 'unknown',
        codecs=codecs,
        url=f.get('url') or '',
    )


def select_formats(
    formats: List[Dict],
    media_class: Optional[str],
    limit: int = MAX_FORMATS
) -> List[FormatDescriptor]:
    """Filter, rank and truncate raw format records into public descriptors"""
    candidates = rank_formats(filter_formats(formats, media_class), media_class)
    return [to_descriptor(f) for f in candidates[:limit]]


def build_video_details(info: Dict) -> VideoDetails:
    thumbnail = info.get('thumbnail')
    if not thumbnail and info.get('thumbnails'):
        thumbnail = info['thumbnails'][-1].get('url')

    return VideoDetails(
        title=info.get('title') or 'Unknown',
        author=info.get('uploader') or info.get('channel') or 'Unknown',
        length_seconds=str(int(info.get('duration') or 0)),
        view_count=str(int(info.get('view_count') or 0)),
        thumbnail=thumbnail or '',
    )


class VideoInfoService:
    """Service for retrieving video metadata and download options"""

    def __init__(self, ydl_opts: Optional[Dict] = None):
        self.ydl_opts = dict(ydl_opts if ydl_opts is not None else YDL_OPTS)

    def fetch_info(self, url: str) -> Dict:
        """Ask yt-dlp for the full metadata of a single video"""
        with yt_dlp.YoutubeDL(self.ydl_opts) as ydl:
            return ydl.extract_info(url, download=False)

    def resolve(self, url: Optional[str], media_class: Optional[str]) -> ResolveResult:
        """Get video details and the top download options for a media class"""
        if not url:
            raise ValidationError('YouTube URL is required')

        if not is_valid_url(url):
            raise ValidationError('Invalid YouTube URL')

        logger.info("Fetching video info for %s (format=%s)", url, media_class)
        try:
            info = self.fetch_info(url)
            details = build_video_details(info)
            formats = select_formats(info.get('formats') or [], media_class)
        except Exception as e:
            logger.exception("Error fetching video: %s", url)
            raise UpstreamError('Failed to fetch video information') from e

        logger.info("Returning %d %s formats for %s", len(formats), media_class, url)
        return ResolveResult(video_details=details, formats=formats)
