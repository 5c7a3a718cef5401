from typing import Optional, Tuple


class Page:
    """A fetched page. Fields are read-only so equality and hash stay stable."""

    def __init__(self, uri: str, body: Optional[str] = None, status_code: Optional[int] = None, content_type: Optional[str] = None, requested_uri: Optional[str] = None, redirects: Tuple["Page", ...] = (), link_extractor=None):
        self._uri = uri
        self._body = body
        self._status_code = status_code
        self._content_type = content_type
        # URL asked for before any redirect; same as uri when there was none
        self._requested_uri = requested_uri or uri
        self._redirects = tuple(redirects)
        self._link_extractor = link_extractor

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def body(self) -> Optional[str]:
        return self._body

    @property
    def status_code(self) -> Optional[int]:
        return self._status_code

    @property
    def content_type(self) -> Optional[str]:
        return self._content_type

    @property
    def requested_uri(self) -> str:
        return self._requested_uri

    @property
    def redirects(self) -> Tuple["Page", ...]:
        """Pages for the 3xx hops followed to reach this one, oldest first."""
        return self._redirects

    def _key(self):
        return (self._uri, self._body, self._status_code, self._content_type)

    def __eq__(self, other):
        if not isinstance(other, Page):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    @property
    def redirected(self) -> bool:
        return self._requested_uri != self._uri

    def _extractor(self):
        if self._link_extractor is None:
            from pagetrail.services.link_extractor import LinkExtractor
            self._link_extractor = LinkExtractor()
        return self._link_extractor

    def links(self):
        """Links found in the body, resolved against this page's uri."""
        return self._extractor().extract_links(self._uri, self._body)

    @property
    def title(self) -> Optional[str]:
        return self._extractor().extract_title(self._body)

    def __repr__(self):
        return f"<Page url={self._uri} status={self._status_code}>"
