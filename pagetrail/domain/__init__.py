"""Domain objects for pagetrail - explicit re-exports to satisfy linters."""
from .page import Page as Page
from .link import Link as Link
from .history import History as History
from .http_response import HttpResponse as HttpResponse

__all__ = ["Page", "Link", "History", "HttpResponse"]
