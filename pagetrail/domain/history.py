import logging
import threading
from typing import Any, Dict, Iterator, List, Optional

from pagetrail.exceptions import InvalidCapacityError

logger = logging.getLogger(__name__)


def _validate_max_size(max_size: Optional[int]) -> Optional[int]:
    if max_size is None:
        return None
    if isinstance(max_size, bool) or not isinstance(max_size, int) or max_size <= 0:
        raise InvalidCapacityError(max_size)
    return max_size


def _key_for(identifier: Any) -> str:
    return str(identifier.uri if hasattr(identifier, "uri") else identifier)


class History:
    """
    Bounded, insertion-ordered history of visited pages with a lookup index by URL.

    The ordered list is the source of truth for first/last; the index maps a
    key (explicit uri or the page's own uri) to the page most recently pushed
    under it. Removing a page from either end drops every index key whose
    page compares equal to it, so a page recorded under several URLs
    (e.g. before and after a redirect) disappears from all of them at once.

    Only push/shift/pop/clear mutate; the rest of the surface is read-only.
    """

    def __init__(self, max_size: Optional[int] = None):
        """Create a history.

        `max_size` bounds the number of pages kept (oldest evicted first).
        None means unbounded; anything else must be a positive int.
        """
        self._max_size = _validate_max_size(max_size)
        self._lock = threading.RLock()
        self._entries: List[Any] = []
        self._index: Dict[str, Any] = {}

    @property
    def max_size(self) -> Optional[int]:
        return self._max_size

    @max_size.setter
    def max_size(self, value: Optional[int]) -> None:
        value = _validate_max_size(value)
        with self._lock:
            self._max_size = value
            self._trim()

    def push(self, page, uri=None) -> "History":
        """Append `page`, index it under `uri` (or `page.uri`) and trim to `max_size`."""
        key = str(uri if uri is not None else page.uri)
        with self._lock:
            self._entries.append(page)
            self._index[key] = page
            self._trim()
        return self

    append = push

    def __lshift__(self, page) -> "History":
        return self.push(page)

    def is_visited(self, url) -> bool:
        return self.visited_page(url) is not None

    def visited_page(self, url):
        """Return the page last pushed under `url` (a string, Page or Link), or None."""
        key = _key_for(url)
        with self._lock:
            return self._index.get(key)

    def clear(self) -> "History":
        with self._lock:
            self._index.clear()
            self._entries.clear()
        return self

    def shift(self):
        """Remove and return the oldest page, or None when empty."""
        with self._lock:
            if not self._entries:
                return None
            page = self._entries.pop(0)
            self._remove_from_index(page)
            return page

    def pop(self):
        """Remove and return the newest page, or None when empty."""
        with self._lock:
            if not self._entries:
                return None
            page = self._entries.pop()
            self._remove_from_index(page)
            return page

    def _trim(self) -> None:
        if self._max_size is None:
            return
        while len(self._entries) > self._max_size:
            evicted = self.shift()
            logger.debug("Evicted %r from history (max_size=%s)", evicted, self._max_size)

    def _remove_from_index(self, page) -> None:
        stale = [key for key, indexed in self._index.items() if indexed == page]
        for key in stale:
            del self._index[key]
        if stale:
            logger.debug("Purged %d index key(s) for %r", len(stale), page)

    # Read-only container surface

    @property
    def first(self):
        with self._lock:
            return self._entries[0] if self._entries else None

    @property
    def last(self):
        with self._lock:
            return self._entries[-1] if self._entries else None

    def to_list(self) -> List[Any]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __iter__(self) -> Iterator[Any]:
        return iter(self.to_list())

    def __reversed__(self) -> Iterator[Any]:
        return reversed(self.to_list())

    def __getitem__(self, item):
        # slices come back as plain lists
        with self._lock:
            return self._entries[item]

    def __contains__(self, page) -> bool:
        with self._lock:
            return page in self._entries

    def copy(self) -> "History":
        """Shallow copy: new list, new index, new lock; pages are shared."""
        with self._lock:
            clone = type(self)(self._max_size)
            clone._entries = list(self._entries)
            clone._index = dict(self._index)
        return clone

    __copy__ = copy

    def __repr__(self):
        return f"<History size={len(self)} max_size={self._max_size}>"
