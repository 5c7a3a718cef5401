from typing import NamedTuple, Optional, Tuple


class HttpResponse(NamedTuple):
    """Response from HTTP fetch operation."""
    status_code: int
    text: str
    content_type: Optional[str] = None
    # final URL after redirects
    url: Optional[str] = None
    # 3xx responses followed to get here, oldest first
    redirects: Tuple["HttpResponse", ...] = ()
