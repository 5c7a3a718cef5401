"""Custom exceptions for pagetrail."""


class InvalidCapacityError(ValueError):
    """Raised when a history bound is not a positive integer."""

    def __init__(self, max_size):
        self.max_size = max_size
        super().__init__(f"max_size must be a positive integer or None, got {max_size!r}")


class HttpFetchError(Exception):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")
