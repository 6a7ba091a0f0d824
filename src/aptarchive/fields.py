"""Parsers for the compound values found inside control stanzas.

Two grammars live here:

- a versioned reference, ``name`` or ``name (version)``, as used by the
  ``Source`` field of a binary package;
- per-file hash records, one ``<digest> <size> <path>`` triple per line, as
  used by ``Files``, ``Checksums-Sha1`` and ``Checksums-Sha256``.
"""

import hashlib
from typing import Annotated, ClassVar, Self

from debian.debian_support import Version
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer

from aptarchive.constants import LINE_STRIP
from aptarchive.errors import MalformedFieldError


def _coerce_version(value):
    if value is None or isinstance(value, Version):
        return value
    return Version(str(value))


VersionField = Annotated[Version, BeforeValidator(_coerce_version), PlainSerializer(str, return_type=str)]
OptionalVersion = Annotated[
    Version | None,
    BeforeValidator(_coerce_version),
    PlainSerializer(str, return_type=str, when_used="unless-none"),
]


def decode_multiline(text: str) -> list[str]:
    """Split a folded multi-line value into its stripped, non-empty lines."""
    lines = (line.strip(LINE_STRIP) for line in text.split("\n"))
    return [line for line in lines if line]


def encode_multiline(lines: list[str]) -> str:
    """Fold lines into a value that deb822 dumps as continuation lines."""
    return "".join(f"\n {line}" for line in lines)


class SourceName(BaseModel):
    """A package name with an optional version, e.g. ``hello (2.10-3)``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(min_length=1)
    version: OptionalVersion = None

    @classmethod
    def parse(cls, text: str) -> Self:
        return decode_versioned_reference(text)

    def __str__(self) -> str:
        return encode_versioned_reference(self)


def decode_versioned_reference(text: str) -> SourceName:
    """Parse ``name`` or ``name (version)``.

    The value is split on single spaces; anything other than one or two tokens
    is rejected. Errors from the version parser are raised unchanged.
    """
    hunks = text.split(" ")
    match hunks:
        case [name] if name:
            return SourceName(name=name)
        case [name, version] if name and len(version) > 2 and version[0] == "(" and version[-1] == ")":
            return SourceName(name=name, version=Version(version[1:-1]))
        case _:
            raise MalformedFieldError(text, "expected 'name' or 'name (version)'")


def encode_versioned_reference(ref: SourceName) -> str:
    if ref.version is None:
        return ref.name
    return f"{ref.name} ({ref.version})"


class FileHash(BaseModel):
    """One ``<digest> <size> <path>`` entry of a checksum list."""

    model_config = ConfigDict(frozen=True)

    algorithm: ClassVar[str | None] = None

    digest: bytes
    size: int = Field(ge=0)
    path: str = Field(min_length=1)

    @property
    def hexdigest(self) -> str:
        return self.digest.hex()

    @classmethod
    def parse_line(cls, line: str) -> Self:
        hunks = line.split()
        if len(hunks) != 3:
            raise MalformedFieldError(line, f"expected 3 fields, got {len(hunks)}")
        digest_hex, size, path = hunks

        try:
            digest = bytes.fromhex(digest_hex)
        except ValueError:
            raise MalformedFieldError(line, "digest is not hexadecimal") from None
        if cls.algorithm is not None and len(digest) != hashlib.new(cls.algorithm).digest_size:
            raise MalformedFieldError(line, f"wrong digest length for {cls.algorithm}")

        if not (size.isascii() and size.isdigit()):
            raise MalformedFieldError(line, "size is not a decimal integer")

        return cls(digest=digest, size=int(size), path=path)

    def to_line(self) -> str:
        return f"{self.hexdigest} {self.size} {self.path}"


class MD5FileHash(FileHash):
    algorithm = "md5"


class SHA1FileHash(FileHash):
    algorithm = "sha1"


class SHA256FileHash(FileHash):
    algorithm = "sha256"


class SHA512FileHash(FileHash):
    algorithm = "sha512"


FILE_HASH_TYPES: dict[str, type[FileHash]] = {
    kind.algorithm: kind for kind in (MD5FileHash, SHA1FileHash, SHA256FileHash, SHA512FileHash)
}


def decode_file_hash_lines[T: FileHash](text: str, kind: type[T] = FileHash) -> list[T]:
    """Parse a multi-line checksum list, one record per non-blank line.

    The first bad line aborts the whole field.
    """
    return [kind.parse_line(line) for line in decode_multiline(text)]


def encode_file_hash_lines(records: list[FileHash]) -> str:
    return encode_multiline([record.to_line() for record in records])
