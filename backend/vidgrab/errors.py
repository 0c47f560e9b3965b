"""Error types returned to API clients"""


class VidgrabError(Exception):
    """Base error carrying the HTTP status it maps to"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(VidgrabError):
    """Missing or malformed client input"""

    status_code = 400


class UpstreamError(VidgrabError):
    """The extraction library or media host failed; details are only logged"""

    status_code = 500
