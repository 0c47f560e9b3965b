"""Stream service relaying upstream media bytes to the client"""
import logging
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

import requests
import yt_dlp

from ..config import YDL_OPTS, STREAM_CHUNK_SIZE, UPSTREAM_TIMEOUT
from ..errors import UpstreamError, ValidationError

logger = logging.getLogger(__name__)


class RelayState(str, Enum):
    IDLE = 'idle'
    OPENING = 'opening'
    STREAMING = 'streaming'
    COMPLETED = 'completed'
    ABORTED = 'aborted'


# Allowed moves; there is no way back and no retry
TRANSITIONS = {
    RelayState.IDLE: {RelayState.OPENING},
    RelayState.OPENING: {RelayState.STREAMING, RelayState.ABORTED},
    RelayState.STREAMING: {RelayState.COMPLETED, RelayState.ABORTED},
    RelayState.COMPLETED: set(),
    RelayState.ABORTED: set(),
}


class MediaStream:
    """One upstream media response, relayed chunk by chunk in arrival order"""

    def __init__(self, url: str, format_id: str, chunk_size: int = STREAM_CHUNK_SIZE):
        self.url = url
        self.format_id = format_id
        self.chunk_size = chunk_size
        self.state = RelayState.IDLE
        self.bytes_sent = 0
        self._response: Optional[requests.Response] = None

    def _transition(self, new_state: RelayState) -> None:
        if new_state not in TRANSITIONS[self.state]:
            raise RuntimeError(f"Invalid relay transition {self.state.value} -> {new_state.value}")
        logger.debug("Relay %s/%s: %s -> %s", self.url, self.format_id, self.state.value, new_state.value)
        self.state = new_state

    def open(self, ydl_opts: Dict, timeout: int) -> None:
        """Resolve the format's media URL and connect to it"""
        self._transition(RelayState.OPENING)
        try:
            media_url, headers = resolve_media_url(self.url, self.format_id, ydl_opts)
            response = requests.get(media_url, headers=headers, stream=True, timeout=timeout)
            response.raise_for_status()
        except Exception as e:
            self._transition(RelayState.ABORTED)
            logger.exception("Error opening stream for %s (itag=%s)", self.url, self.format_id)
            raise UpstreamError('Failed to download video') from e

        self._response = response
        logger.info("Connected to media stream for %s (itag=%s): %s", self.url, self.format_id, response.status_code)

    def iter_chunks(self) -> Iterator[bytes]:
        """Yield upstream bytes; an upstream error is re-raised to abort the response"""
        if self._response is None:
            raise RuntimeError("Stream has not been opened")

        self._transition(RelayState.STREAMING)
        try:
            for chunk in self._response.iter_content(chunk_size=self.chunk_size):
                if chunk:
                    self.bytes_sent += len(chunk)
                    yield chunk
        except Exception:
            self._transition(RelayState.ABORTED)
            logger.exception("Error streaming video %s (itag=%s) after %d bytes", self.url, self.format_id, self.bytes_sent)
            raise
        else:
            self._transition(RelayState.COMPLETED)
            logger.info("Finished streaming %s (itag=%s): %d bytes", self.url, self.format_id, self.bytes_sent)
        finally:
            self.close()

    def close(self) -> None:
        """Release the upstream connection; safe to call more than once"""
        if self._response is not None:
            self._response.close()


def resolve_media_url(url: str, format_id: str, ydl_opts: Dict) -> Tuple[str, Dict]:
    """Get the direct media URL and request headers for one format of a video"""
    opts = dict(ydl_opts)
    opts['format'] = format_id

    with yt_dlp.YoutubeDL(opts) as ydl:
        info = ydl.extract_info(url, download=False)

    media_url = info.get('url')
    if not media_url:
        raise ValueError("Could not get direct link")

    return media_url, info.get('http_headers') or {}


class StreamService:
    """Service for opening media streams of a chosen format"""

    def __init__(
        self,
        ydl_opts: Optional[Dict] = None,
        chunk_size: int = STREAM_CHUNK_SIZE,
        timeout: int = UPSTREAM_TIMEOUT
    ):
        self.ydl_opts = dict(ydl_opts if ydl_opts is not None else YDL_OPTS)
        self.chunk_size = chunk_size
        self.timeout = timeout

    def open_stream(self, url: Optional[str], format_id: Optional[str]) -> MediaStream:
        """Validate input and open the upstream stream; nothing is sent to the client yet"""
        if not url or not format_id:
            raise ValidationError('URL and itag are required')

        stream = MediaStream(url, format_id, self.chunk_size)
        stream.open(self.ydl_opts, self.timeout)
        return stream
