"""
pagecard - Open Graph and Twitter card metadata for webpages.

Fetches a page, reads the <meta> tags of its head and maps them to a
structured Open Graph object and Twitter card.

Example Usage:
    >>> import pagecard
    >>> info = pagecard.get("https://example.com")
    >>> info.open_graph.title
    >>> [img.media.url for img in info.open_graph.images]
    >>> info.twitter.type
"""

__version__ = "1.0.0"
__author__ = "pagecard Contributors"

# Core API
from pagecard.info import Info, from_html, from_meta, get

# Metatags
from pagecard.content import ContentReader, Meta, extract_meta, read

# Configuration
from pagecard.config import PagecardConfig, get_config, init_config

# Errors
from pagecard.errors import (
    PagecardError,
    FetchError,
    ConfigError,
    MetadataError,
    MediaNotInitializedError,
    InvalidCardTypeError,
    NumericFieldError,
)

__all__ = [
    # Core
    "Info",
    "get",
    "from_html",
    "from_meta",
    # Metatags
    "ContentReader",
    "Meta",
    "extract_meta",
    "read",
    # Config
    "PagecardConfig",
    "get_config",
    "init_config",
    # Errors
    "PagecardError",
    "FetchError",
    "ConfigError",
    "MetadataError",
    "MediaNotInitializedError",
    "InvalidCardTypeError",
    "NumericFieldError",
]
