"""
Exceptions raised by pagecard.

Builder failures derive from MetadataError, retrieval failures from
FetchError. Both share PagecardError as a common base.
"""


class PagecardError(Exception):
    """Base exception for pagecard errors."""
    pass


class FetchError(PagecardError):
    """Raised when a page cannot be retrieved."""

    def __init__(self, url: str, message: str):
        super().__init__(f"failed to fetch {url}: {message}")
        self.url = url


class MetadataError(PagecardError):
    """Raised when the metatags of a page cannot be mapped to a card."""
    pass


class MediaNotInitializedError(MetadataError):
    """Raised when a media property appears before its og:<kind> tag."""

    def __init__(self, kind: str):
        super().__init__(f"invalid field: requires og:{kind} declared before")
        self.kind = kind


class InvalidCardTypeError(MetadataError):
    """Raised when twitter:card holds an unknown card type."""

    def __init__(self, value: str):
        super().__init__(f"invalid card type: {value}")
        self.value = value


class NumericFieldError(MetadataError, ValueError):
    """Raised when a width or height is not a base-10 integer."""

    def __init__(self, name: str, value: str):
        super().__init__(f"invalid integer for {name}: {value!r}")
        self.name = name
        self.value = value


class ConfigError(PagecardError):
    """Raised when a config file or PAGECARD_* variable is invalid."""
    pass
