"""
Combined Open Graph and Twitter card data of a webpage.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pagecard import opengraph, twitter
from pagecard.content import ContentReader, Meta, create_reader, extract_meta

logger = logging.getLogger(__name__)


@dataclass
class Info:
    """All the data retrieved from the Open Graph and Twitter card metatags."""
    open_graph: opengraph.Object
    twitter: twitter.Card

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "open_graph": self.open_graph.to_dict(),
            "twitter": self.twitter.to_dict(),
        }


def from_meta(meta: List[Meta]) -> Info:
    """
    Build both cards from a list of metatags.

    Raises:
        MetadataError: If either card cannot be built
    """
    obj = opengraph.build(meta)
    card = twitter.build(meta)
    return Info(obj, card)


def from_html(html) -> Info:
    """Build both cards from an HTML document (str or bytes)."""
    return from_meta(extract_meta(html))


def get(url: str, reader: Optional[ContentReader] = None) -> Info:
    """
    Retrieve the Info of the webpage at the given URL.

    Args:
        url: Page to fetch
        reader: Reader to use (defaults to one built from the config)

    Raises:
        FetchError: If the page cannot be retrieved
        MetadataError: If either card cannot be built
    """
    if reader is None:
        reader = create_reader()
    meta = reader.read(url)
    info = from_meta(meta)
    logger.info(f"Read {len(info.open_graph.images)} og:image(s) and "
                f"{info.twitter.type.value if info.twitter.type else 'no'} twitter card from {url}")
    return info
