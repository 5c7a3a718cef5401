import requests
from typing import Callable

from pagetrail.domain.http_response import HttpResponse
from pagetrail.exceptions import HttpFetchError


class HttpService:
    """
    HTTP client wrapper for fetching web pages.

    Requires http_client callable for dependency injection, so tests can pass
    a Mock and callers can swap in a `requests.Session().get`.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: int = 10):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def fetch(self, url: str) -> HttpResponse:
        """Fetch URL and return status, body, Content-Type, final URL and redirect hops."""
        headers = {"User-Agent": self.user_agent}
        try:
            resp = self.http_client(url, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e

        # requests keeps the followed 3xx responses on resp.history
        hops = getattr(resp, 'history', None)
        redirects = ()
        if isinstance(hops, (list, tuple)):
            redirects = tuple(self._to_response(hop, url) for hop in hops)

        return self._to_response(resp, url, redirects)

    def _to_response(self, resp, fallback_url: str, redirects=()) -> HttpResponse:
        # Extract Content-Type if response has headers; let real exceptions bubble up.
        ct = None
        if hasattr(resp, 'headers'):
            ct = resp.headers.get('Content-Type')

        final_url = getattr(resp, 'url', None)
        if not isinstance(final_url, str) or not final_url:
            final_url = fallback_url

        return HttpResponse(resp.status_code, resp.text, ct, final_url, redirects)
