"""Typed access to Debian-style archive indices."""

from .archive import Archive, Binaries, Suite
from .config import SuiteFeatures
from .errors import (
    ArchiveError,
    MalformedFieldError,
    NoSuchArchError,
    StanzaDecodeError,
    StanzaEncodeError,
    UnsupportedAlgorithmError,
)
from .fields import (
    FileHash,
    SourceName,
    decode_file_hash_lines,
    decode_versioned_reference,
    encode_versioned_reference,
)
from .hashing import Hasher, HashingWriter, new_hasher_writers
from .models import Architecture, BinaryPackage, Release, Source
from .stanzas import StanzaStream, load_packages, load_packages_file, load_sources, load_sources_file

__all__ = [
    "Archive",
    "ArchiveError",
    "Architecture",
    "BinaryPackage",
    "Binaries",
    "FileHash",
    "Hasher",
    "HashingWriter",
    "MalformedFieldError",
    "NoSuchArchError",
    "Release",
    "Source",
    "SourceName",
    "StanzaDecodeError",
    "StanzaEncodeError",
    "StanzaStream",
    "Suite",
    "SuiteFeatures",
    "UnsupportedAlgorithmError",
    "decode_file_hash_lines",
    "decode_versioned_reference",
    "encode_versioned_reference",
    "load_packages",
    "load_packages_file",
    "load_sources",
    "load_sources_file",
    "new_hasher_writers",
]
