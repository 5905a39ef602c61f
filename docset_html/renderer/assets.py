"""Classify page resources so the head can reference each one correctly.

Examples
--------
>>> classify_resource("styles/style.css?v=2")
<ResourceKind.STYLESHEET: 'stylesheet'>
>>> classify_resource("<meta name='x'>")
<ResourceKind.RAW: 'raw'>
>>> is_absolute("https://example.com/a.js"), is_absolute("scripts/a.js")
(True, False)
"""

from __future__ import annotations

import enum
from urllib.parse import urlsplit

from docset_html._constants import IMAGE_EXTENSIONS


class ResourceKind(enum.StrEnum):
    STYLESHEET = "stylesheet"
    SCRIPT = "script"
    IMAGE = "image"
    RAW = "raw"


def resource_extension(address: str) -> str:
    """Return the lower-cased extension of ``address``, ignoring any query."""
    path = address.split("?", 1)[0]
    return path.rsplit(".", 1)[-1].lower() if "." in path else ""


def is_image(address: str) -> bool:
    return resource_extension(address) in IMAGE_EXTENSIONS


def is_absolute(address: str) -> bool:
    """Return whether ``address`` carries a URL scheme."""
    return bool(urlsplit(address).scheme)


def classify_resource(address: str) -> ResourceKind:
    """Return how a head resource should be emitted.

    Anything that is not a stylesheet, script or image is inserted verbatim.
    """
    match resource_extension(address):
        case "css":
            return ResourceKind.STYLESHEET
        case "js":
            return ResourceKind.SCRIPT
        case extension if extension in IMAGE_EXTENSIONS:
            return ResourceKind.IMAGE
        case _:
            return ResourceKind.RAW


__all__ = [
    "ResourceKind",
    "classify_resource",
    "is_absolute",
    "is_image",
    "resource_extension",
]
