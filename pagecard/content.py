"""
Page retrieval and metatag extraction.

Fetches a webpage and turns the <meta> elements of its <head> into an
ordered list of name/value pairs, which is what the Open Graph and
Twitter card builders consume.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

import requests
from bs4 import BeautifulSoup, Comment, Doctype, NavigableString, Tag

from pagecard.constants import DEFAULT_REQUEST_TIMEOUT, DEFAULT_USER_AGENT
from pagecard.errors import FetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Meta:
    """A key-value metatag on the webpage."""
    name: str
    value: str


# Elements an HTML parser places in an implied <head> when it is omitted
_HEAD_CONTENT = {"base", "link", "meta", "noscript", "script", "style", "template", "title"}


def _head_meta_tags(soup: BeautifulSoup) -> List[Tag]:
    head = soup.find("head")
    if head is not None:
        return head.find_all("meta", recursive=False)

    # No <head> tag: take the metatags before the first body content
    root = soup.find("html") or soup
    tags = []
    for child in root.children:
        if isinstance(child, (Comment, Doctype)):
            continue
        if isinstance(child, NavigableString):
            if child.strip():
                break
            continue
        if child.name not in _HEAD_CONTENT:
            break
        if child.name == "meta":
            tags.append(child)
    return tags


def extract_meta(html) -> List[Meta]:
    """
    Extract the metatags declared in the head of an HTML document.

    Only <meta> elements that are direct children of <head> are used. When
    the document has no <head> tag, the <meta> elements that open the
    document (or its <html> element) before any body content are used
    instead, as a browser would place them in an implied head. The name
    comes from the ``property`` attribute, falling back to ``name``, and
    the value from ``content``. Tags with an empty name or value are
    dropped, so consumers can assume both are non-empty.

    Args:
        html: Document as str or bytes

    Returns:
        Metatags in document order
    """
    soup = BeautifulSoup(html, "html.parser")

    result = []
    for tag in _head_meta_tags(soup):
        name = tag.get("property") or tag.get("name") or ""
        value = tag.get("content") or ""
        if name and value:
            result.append(Meta(name, value))
    return result


class ContentReader:
    """Fetch webpages and read their metatags."""

    def __init__(self, timeout: int = DEFAULT_REQUEST_TIMEOUT,
                 user_agent: Optional[str] = None, verify_ssl: bool = True):
        """
        Initialize the content reader.

        Args:
            timeout: Request timeout in seconds
            user_agent: Custom user agent string
            verify_ssl: Verify TLS certificates
        """
        self.timeout = timeout
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.verify_ssl = verify_ssl
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": self.user_agent})

    def fetch_html(self, url: str) -> bytes:
        """
        Fetch the raw document at the given URL.

        Raises:
            FetchError: On connection errors, timeouts and non-2xx responses
        """
        logger.debug(f"Fetching {url}")
        try:
            response = self.session.get(
                url, timeout=self.timeout, allow_redirects=True, verify=self.verify_ssl
            )
            response.raise_for_status()
        except requests.Timeout as e:
            logger.warning(f"Timed out fetching {url}")
            raise FetchError(url, "request timeout") from e
        except requests.ConnectionError as e:
            logger.warning(f"Connection error fetching {url}: {e}")
            raise FetchError(url, "connection error") from e
        except requests.RequestException as e:
            logger.warning(f"Failed to fetch {url}: {e}")
            raise FetchError(url, str(e)) from e

        return response.content

    def read(self, url: str) -> List[Meta]:
        """Scan the page at the given URL and return its metatags."""
        meta = extract_meta(self.fetch_html(url))
        logger.debug(f"Found {len(meta)} metatags in {url}")
        return meta


def create_reader(**kwargs) -> ContentReader:
    """
    Create a ContentReader from the active configuration.

    Keyword arguments override the configured timeout, user agent and
    SSL verification.
    """
    from pagecard.config import get_config

    config = get_config()
    options = {
        "timeout": config.timeout,
        "user_agent": config.user_agent,
        "verify_ssl": config.verify_ssl,
    }
    options.update({k: v for k, v in kwargs.items() if v is not None})
    return ContentReader(**options)


def read(url: str, **kwargs) -> List[Meta]:
    """Read the metatags of the page at the given URL."""
    return create_reader(**kwargs).read(url)
