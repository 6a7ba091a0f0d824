"""Pull-based decoding of Sources, Packages and Release streams.

Index files can be large, so nothing here reads a whole file: each call
pulls exactly one paragraph from python-debian's tokenizer and maps it onto
a typed record.

None of these files carry a signature of their own. A ``Sources`` or
``Packages`` stream must be checked against the checksums of an already
verified ``InRelease`` before any record read from it is trusted.
"""

import logging
from collections.abc import Iterator
from os import PathLike
from pathlib import Path
from types import TracebackType
from typing import IO, Self

from debian import deb822

from aptarchive.errors import StanzaDecodeError
from aptarchive.models import STANZA_KINDS, BinaryPackage, Source, Stanza
from aptarchive.utils import open_text_stream

logger = logging.getLogger(__name__)


class StanzaStream[T: Stanza]:
    """Iterator over the records of one control-file stream.

    The stream owns the decode cursor, not necessarily the handle: a stream
    built with ``load_path`` closes its file on ``close()`` or when used as a
    context manager, one built with ``load_reader`` leaves the caller's handle
    alone.
    """

    def __init__(self, handle: IO, record_type: type[T], owns_handle: bool = False):
        self.record_type = record_type
        self._handle = handle
        self._owns_handle = owns_handle
        self._paragraphs = deb822.Deb822.iter_paragraphs(handle, use_apt_pkg=False)
        self.position = 0

    @classmethod
    def load_path(cls, path: str | PathLike, record_type: type[T]) -> "StanzaStream[T]":
        """Open ``path`` (plain or ``.gz``) read-only and stream its records.

        Errors opening the file are raised as-is.
        """
        path = Path(path)
        handle = open_text_stream(path)
        try:
            stream = cls(handle, record_type, owns_handle=True)
        except BaseException:
            handle.close()
            raise
        logger.debug(f"Opened {record_type.kind} stream at {path}")
        return stream

    @classmethod
    def load_reader(cls, reader: IO, record_type: type[T]) -> "StanzaStream[T]":
        """Stream records from an already open text or binary handle."""
        return cls(reader, record_type)

    @classmethod
    def for_kind(cls, kind: str, reader: IO) -> "StanzaStream":
        """Stream records of a named kind (``source``, ``package``, ``release``)."""
        try:
            record_type = STANZA_KINDS[kind]
        except KeyError:
            raise ValueError(f"Unknown stanza kind: {kind!r}") from None
        return cls(reader, record_type)

    def next_record(self) -> T | None:
        """Decode the next stanza, or return None once the stream is exhausted.

        Raises:
            StanzaDecodeError: if the stanza cannot be tokenized or does not
                fit the record type. The cursor is left where the error
                occurred.
        """
        try:
            paragraph = next(self._paragraphs)
        except StopIteration:
            return None
        except ValueError as e:
            raise StanzaDecodeError(f"Failed to read stanza {self.position + 1}: {e}") from e

        self.position += 1
        return self.record_type.from_paragraph(paragraph)

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        record = self.next_record()
        if record is None:
            raise StopIteration
        return record

    def close(self) -> None:
        if self._owns_handle and not self._handle.closed:
            self._handle.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def load_sources_file(path: str | PathLike) -> StanzaStream[Source]:
    return StanzaStream.load_path(path, Source)


def load_sources(reader: IO) -> StanzaStream[Source]:
    return StanzaStream.load_reader(reader, Source)


def load_packages_file(path: str | PathLike) -> StanzaStream[BinaryPackage]:
    return StanzaStream.load_path(path, BinaryPackage)


def load_packages(reader: IO) -> StanzaStream[BinaryPackage]:
    return StanzaStream.load_reader(reader, BinaryPackage)
