"""
Open Graph object builder.

Maps the og:* metatags of a page to an Object, following the structured
property rules of the Open Graph protocol: og:image, og:video and og:audio
start a new media record, and the og:image:*, og:video:* and og:audio:*
tags that follow describe the most recently started one.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from pagecard.constants import OPEN_GRAPH_PREFIX
from pagecard.content import Meta
from pagecard.errors import MediaNotInitializedError
from pagecard.utils import parse_int

logger = logging.getLogger(__name__)

IMAGE = "image"
VIDEO = "video"
AUDIO = "audio"

SECURE_URL = "secure_url"
TYPE = "type"
WIDTH = "width"
HEIGHT = "height"


@dataclass
class MediaRef:
    """Properties shared by images, videos and audios."""
    url: str = ""
    secure_url: str = ""
    type: str = ""


@dataclass
class Size:
    """Width and height of an image or video."""
    width: int = 0
    height: int = 0


def _media_dict(media: MediaRef, size: Optional[Size] = None) -> Dict[str, Any]:
    data: Dict[str, Any] = {"url": media.url, "secure_url": media.secure_url, "type": media.type}
    if size is not None:
        data["width"] = size.width
        data["height"] = size.height
    return data


@dataclass
class Image:
    """An image to represent the object within the graph."""
    media: MediaRef = field(default_factory=MediaRef)
    size: Size = field(default_factory=Size)

    def to_dict(self) -> Dict[str, Any]:
        return _media_dict(self.media, self.size)


@dataclass
class Video:
    """A video file to complement the object."""
    media: MediaRef = field(default_factory=MediaRef)
    size: Size = field(default_factory=Size)

    def to_dict(self) -> Dict[str, Any]:
        return _media_dict(self.media, self.size)


@dataclass
class Audio:
    """An audio file to accompany the object."""
    media: MediaRef = field(default_factory=MediaRef)

    def to_dict(self) -> Dict[str, Any]:
        return _media_dict(self.media)


@dataclass
class Object:
    """The representation of a webpage as an object within the graph."""
    title: str = ""
    type: str = ""
    url: str = ""
    description: str = ""
    locale: str = ""
    alternate_locales: List[str] = field(default_factory=list)
    determiners: List[str] = field(default_factory=list)
    site_name: str = ""
    images: List[Image] = field(default_factory=list)
    videos: List[Video] = field(default_factory=list)
    audios: List[Audio] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "title": self.title,
            "type": self.type,
            "url": self.url,
            "description": self.description,
            "locale": self.locale,
            "alternate_locales": list(self.alternate_locales),
            "determiners": list(self.determiners),
            "site_name": self.site_name,
            "images": [i.to_dict() for i in self.images],
            "videos": [v.to_dict() for v in self.videos],
            "audios": [a.to_dict() for a in self.audios],
        }


# Exact-match og:* properties stored as plain strings on the Object
_SCALAR_FIELDS = {
    "title": "title",
    "type": "type",
    "url": "url",
    "description": "description",
    "locale": "locale",
    "site_name": "site_name",
}


def _set_media_field(media: Union[Image, Video, Audio], kind: str, name: str, value: str):
    """Apply an og:<kind>:<name> property to the open media record."""
    if name == SECURE_URL:
        media.media.secure_url = value
    elif name == TYPE:
        media.media.type = value
    elif name in (WIDTH, HEIGHT) and kind != AUDIO:
        size = parse_int(f"og:{kind}:{name}", value)
        if name == HEIGHT:
            media.size.height = size
        else:
            media.size.width = size
    else:
        logger.debug(f"Ignoring unknown property og:{kind}:{name}")


def build(meta: Iterable[Meta]) -> Object:
    """
    Build the Open Graph object from the metatags of a webpage.

    Args:
        meta: Metatags in document order

    Returns:
        The Open Graph object. Pages without og:* tags yield an empty one.

    Raises:
        MediaNotInitializedError: If an og:image:*, og:video:* or og:audio:*
            property appears before its og:image, og:video or og:audio tag
        NumericFieldError: If a width or height is not an integer
    """
    obj = Object()
    img: Optional[Image] = None
    vid: Optional[Video] = None
    aud: Optional[Audio] = None

    for m in meta:
        if not m.name.startswith(OPEN_GRAPH_PREFIX):
            continue

        name = m.name[len(OPEN_GRAPH_PREFIX):]

        if name.startswith(IMAGE + ":"):
            if img is None:
                raise MediaNotInitializedError(IMAGE)
            _set_media_field(img, IMAGE, name[len(IMAGE) + 1:], m.value)
            continue

        if name.startswith(VIDEO + ":"):
            if vid is None:
                raise MediaNotInitializedError(VIDEO)
            _set_media_field(vid, VIDEO, name[len(VIDEO) + 1:], m.value)
            continue

        if name.startswith(AUDIO + ":"):
            if aud is None:
                raise MediaNotInitializedError(AUDIO)
            _set_media_field(aud, AUDIO, name[len(AUDIO) + 1:], m.value)
            continue

        if name in _SCALAR_FIELDS:
            setattr(obj, _SCALAR_FIELDS[name], m.value)
        elif name == IMAGE:
            if img is not None:
                obj.images.append(img)
            img = Image(media=MediaRef(url=m.value))
        elif name == VIDEO:
            if vid is not None:
                obj.videos.append(vid)
            vid = Video(media=MediaRef(url=m.value))
        elif name == AUDIO:
            if aud is not None:
                obj.audios.append(aud)
            aud = Audio(media=MediaRef(url=m.value))
        elif name == "determiner":
            obj.determiners.append(m.value)
        elif name == "locale:alternate":
            obj.alternate_locales.append(m.value)
        else:
            logger.debug(f"Ignoring unknown property {m.name}")

    if img is not None:
        obj.images.append(img)
    if vid is not None:
        obj.videos.append(vid)
    if aud is not None:
        obj.audios.append(aud)

    return obj
