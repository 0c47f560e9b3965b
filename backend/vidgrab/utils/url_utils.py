"""URL and filename helpers"""
import re
from typing import Optional
from urllib.parse import urlparse, parse_qs

# Hosts that carry the video id in the ``v`` query parameter
QUERY_HOSTS = {
    'youtube.com',
    'www.youtube.com',
    'm.youtube.com',
    'music.youtube.com',
    'gaming.youtube.com',
}

# Path prefixes that carry the video id as the next path segment
PATH_PREFIXES = {'embed', 'v', 'shorts', 'live'}

VIDEO_ID_PATTERN = re.compile(r'^[a-zA-Z0-9_-]{11}$')


def extract_video_id(url: str) -> Optional[str]:
    """Return the 11-character video id of a recognized URL, else None"""
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return None

    if parsed.scheme not in ('http', 'https'):
        return None

    host = (parsed.hostname or '').lower()
    segments = [s for s in parsed.path.split('/') if s]
    video_id = None

    if host in QUERY_HOSTS:
        query_id = parse_qs(parsed.query).get('v')
        if query_id:
            video_id = query_id[0]
        elif len(segments) >= 2 and segments[0] in PATH_PREFIXES:
            video_id = segments[1]
    elif host == 'youtu.be' and segments:
        video_id = segments[0]

    if video_id and VIDEO_ID_PATTERN.match(video_id):
        return video_id
    return None


def is_valid_url(url: str) -> bool:
    """Check that a URL points at a single video the extractor understands"""
    return extract_video_id(url) is not None


def safe_attachment_name(filename: Optional[str], default: str) -> str:
    """Make a filename safe to place inside a quoted Content-Disposition value"""
    if not filename:
        return default
    # Header values are latin-1; keep printable ASCII minus quote and backslash
    cleaned = "".join(
        c if 32 <= ord(c) < 127 and c not in ('"', '\\') else '_'
        for c in filename
    ).strip()
    return cleaned or default
