"""
Twitter card builder.

Maps the twitter:* metatags of a page to a Card. The twitter:card tag picks
the card type, and only the tags that belong to that type are used: app
tags for app cards, player tags for player cards.
"""
import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pagecard.constants import TWITTER_PREFIX
from pagecard.content import Meta
from pagecard.errors import InvalidCardTypeError
from pagecard.utils import parse_int

logger = logging.getLogger(__name__)


class CardType(Enum):
    """The kind of content the card will have."""
    # Preview of a blog post, news article, product, etc.
    SUMMARY = "summary"
    # Like SUMMARY, with a large full-width image
    SUMMARY_LARGE_IMAGE = "summary_large_image"
    # A mobile application with install links per platform
    APP = "app"
    # Inline audio or video
    PLAYER = "player"


@dataclass
class Identity:
    """A twitter account: numeric id and @username."""
    id: str = ""
    user: str = ""


@dataclass
class Image:
    """The representative image of the card."""
    url: str = ""
    alt: str = ""


@dataclass
class AppInfo:
    """Information of an app for a specific platform."""
    name: str = ""
    id: str = ""
    url: str = ""


@dataclass
class App:
    """All the platforms of an "app" card."""
    iphone: AppInfo = field(default_factory=AppInfo)
    ipad: AppInfo = field(default_factory=AppInfo)
    googleplay: AppInfo = field(default_factory=AppInfo)
    country: str = ""


@dataclass
class Player:
    """The data for a "player" card."""
    url: str = ""
    width: int = 0
    height: int = 0
    stream: str = ""
    stream_content_type: str = ""


@dataclass
class Card:
    """All the data used to build a twitter card."""
    type: Optional[CardType] = None
    title: str = ""
    description: str = ""
    site: Identity = field(default_factory=Identity)
    creator: Identity = field(default_factory=Identity)
    image: Image = field(default_factory=Image)
    player: Optional[Player] = None
    app: Optional[App] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.type.value if self.type else None,
            "title": self.title,
            "description": self.description,
            "site": {"id": self.site.id, "user": self.site.user},
            "creator": {"id": self.creator.id, "user": self.creator.user},
            "image": {"url": self.image.url, "alt": self.image.alt},
            "player": asdict(self.player) if self.player else None,
            "app": asdict(self.app) if self.app else None,
        }


CARD = "card"
APP_PREFIX = "app:"
PLAYER = "player"
PLAYER_PREFIX = "player:"

# app:* tag -> (platform attribute or None for the App itself, field)
_APP_FIELDS: Dict[str, Tuple[Optional[str], str]] = {
    "app:id:iphone": ("iphone", "id"),
    "app:id:ipad": ("ipad", "id"),
    "app:id:googleplay": ("googleplay", "id"),
    "app:name:iphone": ("iphone", "name"),
    "app:name:ipad": ("ipad", "name"),
    "app:name:googleplay": ("googleplay", "name"),
    "app:url:iphone": ("iphone", "url"),
    "app:url:ipad": ("ipad", "url"),
    "app:url:googleplay": ("googleplay", "url"),
    "app:country": (None, "country"),
}

_PLAYER_FIELDS = {
    "player": "url",
    "player:stream": "stream",
    "player:stream:content_type": "stream_content_type",
}

_PLAYER_SIZE_FIELDS = {
    "player:width": "width",
    "player:height": "height",
}


def card_type(value: str) -> CardType:
    """
    Map a twitter:card value to its CardType.

    Raises:
        InvalidCardTypeError: If the value is not a known card type
    """
    try:
        return CardType(value)
    except ValueError:
        raise InvalidCardTypeError(value) from None


def filter_twitter_meta(meta: Iterable[Meta]) -> Tuple[Optional[CardType], List[Meta]]:
    """
    Select the twitter:* metatags and find the card type.

    Returns new Meta values with the twitter: prefix stripped; the caller's
    metatags are left untouched. The twitter:card tag is consumed and not
    part of the returned list.

    Returns:
        Tuple of (card type or None, stripped metatags)

    Raises:
        InvalidCardTypeError: If any twitter:card tag has an unknown value
    """
    typ = None
    result = []

    for m in meta:
        if not m.name.startswith(TWITTER_PREFIX):
            continue

        name = m.name[len(TWITTER_PREFIX):]
        if name == CARD:
            typ = card_type(m.value)
        else:
            result.append(Meta(name, m.value))

    return typ, result


def build(meta: Iterable[Meta]) -> Card:
    """
    Build the twitter card from the metatags of a webpage.

    The player and app sections are only present when the card has that
    type and at least one of its tags was found.

    Args:
        meta: Metatags in document order

    Returns:
        The twitter card. Pages without twitter:* tags yield an empty one.

    Raises:
        InvalidCardTypeError: If twitter:card has an unknown value
        NumericFieldError: If the player width or height is not an integer
    """
    card = Card()
    player: Optional[Player] = None
    app: Optional[App] = None

    card.type, twitter_meta = filter_twitter_meta(meta)
    type_name = card.type.value if card.type else "untyped"

    for m in twitter_meta:
        if m.name.startswith(APP_PREFIX):
            if card.type != CardType.APP:
                logger.debug(f"Ignoring twitter:{m.name} on a {type_name} card")
                continue

            if app is None:
                app = App()

            if m.name in _APP_FIELDS:
                platform, attr = _APP_FIELDS[m.name]
                target = getattr(app, platform) if platform else app
                setattr(target, attr, m.value)
            continue

        if m.name.startswith(PLAYER_PREFIX) or m.name == PLAYER:
            if card.type != CardType.PLAYER:
                logger.debug(f"Ignoring twitter:{m.name} on a {type_name} card")
                continue

            if player is None:
                player = Player()

            if m.name in _PLAYER_FIELDS:
                setattr(player, _PLAYER_FIELDS[m.name], m.value)
            elif m.name in _PLAYER_SIZE_FIELDS:
                setattr(player, _PLAYER_SIZE_FIELDS[m.name],
                        parse_int(f"twitter:{m.name}", m.value))
            continue

        if m.name == "site":
            card.site.user = m.value
        elif m.name == "site:id":
            card.site.id = m.value
        elif m.name == "creator":
            card.creator.user = m.value
        elif m.name == "creator:id":
            card.creator.id = m.value
        elif m.name == "title":
            card.title = m.value
        elif m.name == "description":
            card.description = m.value
        elif m.name == "image":
            card.image.url = m.value
        elif m.name == "image:alt":
            card.image.alt = m.value
        else:
            logger.debug(f"Ignoring unknown property twitter:{m.name}")

    if player is not None:
        card.player = player
    if app is not None:
        card.app = app

    return card
