"""Application configuration"""
import os

# CORS settings
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

# API settings
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Number of quality options returned per lookup
MAX_FORMATS = int(os.getenv("MAX_FORMATS", "3"))

# Attachment name used when the client does not send one
DEFAULT_FILENAME = os.getenv("DEFAULT_FILENAME", "video.mp4")

# Relay settings
STREAM_CHUNK_SIZE = int(os.getenv("STREAM_CHUNK_SIZE", "8192"))
UPSTREAM_TIMEOUT = int(os.getenv("UPSTREAM_TIMEOUT", "30"))

# Base yt-dlp options shared by metadata lookups and stream opening
YDL_OPTS = {
    'quiet': True,
    'no_warnings': True,
    'noplaylist': True,
    # Only the YouTube extractors; the generic one would fetch arbitrary hosts
    'allowed_extractors': ['youtube'],
    # Add headers to avoid 403 errors
    'http_headers': {
        'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
        'Accept-Language': 'en-us,en;q=0.5',
        'Referer': 'https://www.youtube.com/',
    },
}
