"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from pagetrail.domain.history import History
from pagetrail.services.browsing_session import BrowsingSession
from pagetrail.services.http_service import HttpService
from pagetrail.services.link_extractor import LinkExtractor
from pagetrail import config as env


# Environment variables used by the container (read via `pagetrail.config` helpers).
#
# USER_AGENT (str, default: "pagetrail/0.1")
#   User-Agent header for outbound HTTP requests.
#
# HTTP_TIMEOUT (int seconds, default: 10)
#   Timeout for outbound HTTP requests.
#
# PAGETRAIL_MAX_HISTORY (int | optional)
#   Number of pages a browsing session keeps in its history; oldest pages are
#   evicted first. Unset means unbounded. Non-positive values are rejected
#   when the history is built.
ENV = {
    "USER_AGENT": env.user_agent(),
    "HTTP_TIMEOUT": env.http_timeout(),
    "PAGETRAIL_MAX_HISTORY": env.max_history(),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for pagetrail."""

    config = providers.Configuration(default=ENV)

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=config.HTTP_TIMEOUT.as_(int)
    )

    link_extractor = providers.Singleton(
        LinkExtractor
    )

    # Each session gets its own history
    history = providers.Factory(
        History,
        max_size=config.PAGETRAIL_MAX_HISTORY,
    )

    browsing_session = providers.Factory(
        BrowsingSession,
        http_service=http_service,
        history=history,
        link_extractor=link_extractor,
    )
