"""Expose record models."""

from .architecture import Architecture
from .package import BinaryPackage
from .release import Release
from .source import Source
from .stanza import Stanza

# closed set of record kinds a stanza stream can decode
STANZA_KINDS: dict[str, type[Stanza]] = {kind.kind: kind for kind in (Source, BinaryPackage, Release)}

__all__ = [
    "STANZA_KINDS",
    "Architecture",
    "BinaryPackage",
    "Release",
    "Source",
    "Stanza",
]
