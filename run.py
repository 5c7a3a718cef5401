import logging
import sys

from pagetrail.container import Container
from pagetrail.exceptions import HttpFetchError


def browse(session, urls):
    """Visit each URL in turn, skipping ones that fail to fetch."""
    for url in urls:
        if session.is_visited(url):
            print(f"Already visited: {url}")
            continue
        try:
            page = session.get(url)
        except HttpFetchError as e:
            print(f"Warning: {e}")
            continue
        print(f"Fetched {page.uri} status={page.status_code} title={page.title!r}")
    return session


def main(argv=None, container=None):
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        print("usage: run.py URL [URL ...]")
        return 2

    logging.basicConfig(level=logging.INFO)
    container = container or Container()
    session = container.browsing_session()
    browse(session, argv)

    print(f"History ({len(session.history)} page(s), max={session.max_history}):")
    for page in session.history:
        print(f"  {page.uri}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
