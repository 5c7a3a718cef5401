import logging
from typing import Optional
from urllib.parse import urljoin

from pagetrail.domain.history import History
from pagetrail.domain.page import Page
from pagetrail.services.link_extractor import LinkExtractor

logger = logging.getLogger(__name__)


class BrowsingSession:
    """Fetches pages and records each one in a bounded `History`.

    Each 3xx hop of a redirect is recorded as its own page under its own URL,
    followed by the final page, so every page in the history keeps its index
    entry until it is evicted or popped by `back()`.
    """

    def __init__(self, http_service, history: Optional[History] = None, max_history: Optional[int] = None, link_extractor: Optional[LinkExtractor] = None):
        self.http_service = http_service
        self.history = history if history is not None else History(max_history)
        if history is not None and max_history is not None:
            self.history.max_size = max_history
        self.link_extractor = link_extractor or LinkExtractor()

    @property
    def current_page(self) -> Optional[Page]:
        return self.history.last

    @property
    def max_history(self) -> Optional[int]:
        return self.history.max_size

    @max_history.setter
    def max_history(self, value: Optional[int]) -> None:
        self.history.max_size = value

    def resolve(self, url) -> str:
        """Absolute URL for a string, Link or Page, relative to the current page."""
        raw = str(url.uri if hasattr(url, "uri") else url)
        current = self.current_page
        if current is None:
            return raw
        return urljoin(str(current.uri), raw)

    def get(self, url) -> Page:
        requested = self.resolve(url)
        logger.info("Fetching %s", requested)
        resp = self.http_service.fetch(requested)
        final_uri = resp.url or requested

        hops = [
            Page(
                uri=hop.url or requested,
                body=hop.text,
                status_code=hop.status_code,
                content_type=hop.content_type,
                link_extractor=self.link_extractor,
            )
            for hop in resp.redirects
        ]
        if not hops and final_uri != requested:
            # client followed a redirect without reporting the hop
            hops.append(Page(uri=requested, link_extractor=self.link_extractor))

        page = Page(
            uri=final_uri,
            body=resp.text,
            status_code=resp.status_code,
            content_type=resp.content_type,
            requested_uri=requested,
            redirects=hops,
            link_extractor=self.link_extractor,
        )
        for hop in hops:
            logger.debug("Redirected %s (status=%s) on the way to %s", hop.uri, hop.status_code, page.uri)
            self.history.push(hop)
        self.history.push(page)
        return page

    def click(self, link) -> Page:
        return self.get(link)

    def back(self) -> Optional[Page]:
        """Drop the current page from history and return it.

        Redirect hops recorded by the same `get` go with it.
        """
        page = self.history.pop()
        if page is None:
            return None
        for hop in reversed(page.redirects):
            if self.history.last is not hop:
                break
            self.history.pop()
        return page

    def visited_page(self, url) -> Optional[Page]:
        return self.history.visited_page(self.resolve(url))

    def is_visited(self, url) -> bool:
        return self.visited_page(url) is not None

    def reset(self) -> None:
        self.history.clear()
