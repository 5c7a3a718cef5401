import logging
from typing import Callable, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from pagetrail.domain.link import Link

logger = logging.getLogger(__name__)


class LinkExtractor:
    def __init__(
        self,
        soup_factory: Optional[Callable[[str], BeautifulSoup]] = None,
    ):
        self._soup_factory = soup_factory or (lambda html: BeautifulSoup(html, "html.parser"))

    def extract_links(self, base_url: str, html: Optional[str]) -> List[Link]:
        if not html:
            return []
        soup = self._soup_factory(html)
        links = []
        for a in soup.find_all("a", href=True):
            abs_url = urljoin(base_url, a.get("href"))
            links.append(Link(abs_url, a.get_text(strip=True)))
        logger.debug("Extracted %d link(s) from %s", len(links), base_url)
        return links

    def extract_title(self, html: Optional[str]) -> Optional[str]:
        if not html:
            return None
        soup = self._soup_factory(html)
        if soup.title is None or soup.title.string is None:
            return None
        return soup.title.string.strip()
