"""Shared fixtures: fake yt-dlp and media host so no test touches the network"""
import pytest
import requests
import yt_dlp
from fastapi.testclient import TestClient

from vidgrab.main import app

VIDEO_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
MEDIA_URL = "https://media.example.com/videoplayback?itag=18"


def make_info(formats):
    return {
        'id': 'dQw4w9WgXcQ',
        'title': 'Never Gonna Give You Up',
        'uploader': 'Rick Astley',
        'duration': 213,
        'view_count': 1500000000,
        'thumbnail': 'https://i.ytimg.com/vi/dQw4w9WgXcQ/maxresdefault.jpg',
        'formats': formats,
    }


SAMPLE_FORMATS = [
    {'format_id': '249', 'ext': 'webm', 'vcodec': 'none', 'acodec': 'opus', 'abr': 50.2, 'url': 'https://media.example.com/249'},
    {'format_id': '18', 'ext': 'mp4', 'vcodec': 'avc1.42001E', 'acodec': 'mp4a.40.2', 'height': 360, 'fps': 30, 'abr': 96, 'url': 'https://media.example.com/18'},
    {'format_id': '140', 'ext': 'm4a', 'vcodec': 'none', 'acodec': 'mp4a.40.2', 'abr': 129.48, 'url': 'https://media.example.com/140'},
    {'format_id': '137', 'ext': 'mp4', 'vcodec': 'avc1.640028', 'acodec': 'none', 'height': 1080, 'fps': 30, 'url': 'https://media.example.com/137'},
    {'format_id': '43', 'ext': 'webm', 'vcodec': 'vp8.0', 'acodec': 'vorbis', 'height': 360, 'fps': 30, 'url': 'https://media.example.com/43'},
    {'format_id': '22', 'ext': 'mp4', 'vcodec': 'avc1.64001F', 'acodec': 'mp4a.40.2', 'height': 720, 'fps': 30, 'abr': 192, 'url': 'https://media.example.com/22'},
    {'format_id': '251', 'ext': 'webm', 'vcodec': 'none', 'acodec': 'opus', 'abr': 160, 'url': 'https://media.example.com/251'},
    {'format_id': '250', 'ext': 'webm', 'vcodec': 'none', 'acodec': 'opus', 'abr': 70, 'url': 'https://media.example.com/250'},
    {'format_id': 'sb0', 'ext': 'mhtml', 'vcodec': 'none', 'acodec': 'none', 'url': 'https://media.example.com/sb0'},
]


class FakeYoutubeDL:
    """Stands in for yt_dlp.YoutubeDL; behaviour is set through class attributes"""

    info = make_info(SAMPLE_FORMATS)
    error = None
    calls = []

    def __init__(self, opts=None):
        self.opts = opts or {}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False

    def extract_info(self, url, download=True):
        FakeYoutubeDL.calls.append((url, self.opts.get('format')))
        if FakeYoutubeDL.error is not None:
            raise FakeYoutubeDL.error
        if 'format' in self.opts:
            return {
                'format_id': self.opts['format'],
                'url': MEDIA_URL,
                'http_headers': {'User-Agent': 'test-agent'},
            }
        return FakeYoutubeDL.info


class FakeMediaResponse:
    def __init__(self, chunks, status_code=200, fail_after=None):
        self.chunks = chunks
        self.status_code = status_code
        self.fail_after = fail_after
        self.closed = False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")

    def iter_content(self, chunk_size=1):
        for index, chunk in enumerate(self.chunks):
            if self.fail_after is not None and index == self.fail_after:
                raise requests.exceptions.ChunkedEncodingError("Connection broken")
            yield chunk

    def close(self):
        self.closed = True


class FakeMediaHost:
    """Records requests.get calls and hands out a configurable response"""

    def __init__(self):
        self.response = FakeMediaResponse([b'first-chunk', b'', b'second-chunk'])
        self.requests = []

    def get(self, url, headers=None, stream=False, timeout=None):
        self.requests.append({'url': url, 'headers': headers, 'stream': stream, 'timeout': timeout})
        return self.response


@pytest.fixture
def fake_ydl(monkeypatch):
    FakeYoutubeDL.info = make_info(SAMPLE_FORMATS)
    FakeYoutubeDL.error = None
    FakeYoutubeDL.calls = []
    monkeypatch.setattr(yt_dlp, "YoutubeDL", FakeYoutubeDL)
    return FakeYoutubeDL


@pytest.fixture
def media_host(monkeypatch):
    host = FakeMediaHost()
    monkeypatch.setattr(requests, "get", host.get)
    return host


@pytest.fixture
def client():
    return TestClient(app)
