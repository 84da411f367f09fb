# ABOUTME: Exception hierarchy for the WordPress source connector
# ABOUTME: Separates fatal transport/decoding failures from recoverable asset failures


class WordPressSourceError(Exception):
    """Base exception for all connector errors."""

    pass


class SourceConfigError(WordPressSourceError):
    """Raised when the source is constructed with unusable options."""

    pass


class TransportError(WordPressSourceError):
    """Raised when a request produced no response at all."""

    def __init__(self, url: str, code: str):
        self.url = url
        self.code = code
        super().__init__(f"{code} - {url}")


class ApiStatusError(WordPressSourceError):
    """Raised when the API answers with an error status other than 401/403."""

    def __init__(self, status: int, url: str):
        self.status = status
        self.url = url
        super().__init__(f"{status} - {url}")


class ResponseDecodeError(WordPressSourceError):
    """Raised when a collection response cannot be read as a list of records."""

    def __init__(self, path: str, preview: str):
        self.path = path
        self.preview = preview
        super().__init__(
            f"Failed to fetch {path}\nExpected JSON response but received:\n{preview}...\n"
        )


class AssetDownloadError(WordPressSourceError):
    """Raised when a single remote asset could not be staged and stored."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to download {url}: {reason}")
