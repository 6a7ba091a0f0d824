"""Shared mapping between control paragraphs and typed records.

Every record kind (source, binary package, release) is a ``Stanza``
subclass whose fields carry the control-file name as their alias. Decoding
and encoding go through the same two methods for every kind; adding a
kind means adding a subclass, nothing else.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Annotated, Any, ClassVar, Self

from debian import deb822
from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer, ValidationError
from pydantic_core import PydanticSerializationError

from aptarchive.errors import StanzaDecodeError, StanzaEncodeError
from aptarchive.fields import (
    FileHash,
    MD5FileHash,
    SHA1FileHash,
    SHA256FileHash,
    SHA512FileHash,
    SourceName,
    decode_file_hash_lines,
    decode_multiline,
    encode_file_hash_lines,
    encode_multiline,
)
from aptarchive.models.architecture import Architecture, parse_architectures
from aptarchive.utils import format_date, try_parse_date


def _split_on(delimiter: str | None):
    def split(value):
        if isinstance(value, str):
            return [item.strip() for item in value.split(delimiter) if item.strip()]
        return value

    return split


def _when_str(parser):
    def parse(value):
        return parser(value) if isinstance(value, str) else value

    return parse


def _parse_bool(value):
    if isinstance(value, str):
        return value.strip().lower() == "yes"
    return value


CommaList = Annotated[list[str], BeforeValidator(_split_on(",")), PlainSerializer(", ".join, return_type=str)]
SpaceList = Annotated[list[str], BeforeValidator(_split_on(None)), PlainSerializer(" ".join, return_type=str)]
LineList = Annotated[list[str], BeforeValidator(_when_str(decode_multiline)), PlainSerializer(encode_multiline)]

ArchField = Annotated[Architecture, BeforeValidator(_when_str(Architecture.parse)), PlainSerializer(str)]
ArchList = Annotated[
    list[Architecture],
    BeforeValidator(_when_str(parse_architectures)),
    PlainSerializer(lambda arches: " ".join(str(arch) for arch in arches), return_type=str),
]
SourceNameField = Annotated[
    SourceName | None,
    BeforeValidator(_when_str(SourceName.parse)),
    PlainSerializer(str, when_used="unless-none"),
]
DateField = Annotated[
    datetime | None,
    BeforeValidator(_when_str(try_parse_date)),
    PlainSerializer(format_date, when_used="unless-none"),
]
YesNo = Annotated[
    bool | None,
    BeforeValidator(_parse_bool),
    PlainSerializer(lambda flag: "yes" if flag else "no", when_used="unless-none"),
]


def file_hash_list[T: FileHash](kind: type[T]):
    """Annotated list type for a multi-line checksum field of ``kind`` records."""
    return Annotated[
        list[kind],
        BeforeValidator(_when_str(lambda text: decode_file_hash_lines(text, kind))),
        PlainSerializer(encode_file_hash_lines, return_type=str),
    ]


class Stanza(BaseModel):
    """Base class for records decoded from a control paragraph.

    Unknown fields are kept under their control names so a record survives
    a decode/encode cycle.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", arbitrary_types_allowed=True)

    kind: ClassVar[str] = "stanza"

    @classmethod
    def _canonical_names(cls) -> dict[str, str]:
        return {(info.alias or name).lower(): info.alias or name for name, info in cls.model_fields.items()}

    @classmethod
    def from_paragraph(cls, paragraph: Mapping[str, str]) -> Self:
        """Build a record from a key/value paragraph.

        Field names are matched case-insensitively, as in control files.
        """
        names = cls._canonical_names()
        data = {names.get(key.lower(), key): value for key, value in paragraph.items()}
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            label = data.get("Package") or data.get("Suite") or data.get("Codename") or "?"
            raise StanzaDecodeError(f"Invalid {cls.kind} stanza '{label}': {e}") from e

    def to_paragraph(self) -> deb822.Deb822:
        try:
            data: dict[str, Any] = self.model_dump(by_alias=True, exclude_none=True)
        except PydanticSerializationError as e:
            raise StanzaEncodeError(f"Cannot encode {self.kind} stanza: {e}") from e

        paragraph = deb822.Deb822()
        for key, value in data.items():
            if isinstance(value, (list, dict)):
                raise StanzaEncodeError(f"Cannot encode field {key!r} of {self.kind} stanza")
            value = str(value)
            if value:
                paragraph[key] = value
        return paragraph

    def dump(self) -> str:
        """Render the record as one stanza, without the separating blank line."""
        return self.to_paragraph().dump()


MD5List = file_hash_list(MD5FileHash)
SHA1List = file_hash_list(SHA1FileHash)
SHA256List = file_hash_list(SHA256FileHash)
SHA512List = file_hash_list(SHA512FileHash)


def parse_relations(value: str | None) -> list:
    """Parse a dependency field with python-debian, empty when unset."""
    if not value or not value.strip():
        return []
    return deb822.PkgRelation.parse_relations(value)
