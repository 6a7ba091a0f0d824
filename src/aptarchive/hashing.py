"""Single-pass checksumming of index files while they are written."""

import hashlib
import logging
from collections.abc import Buffer, Iterable
from typing import IO

from aptarchive.constants import SUPPORTED_HASHES
from aptarchive.errors import UnsupportedAlgorithmError
from aptarchive.fields import FILE_HASH_TYPES, FileHash

logger = logging.getLogger(__name__)


class Hasher:
    """Running digest of one algorithm, plus the number of bytes fed to it."""

    def __init__(self, name: str):
        self.name = name
        self.size = 0
        self._hash = hashlib.new(name)

    def update(self, data: Buffer) -> None:
        self._hash.update(data)
        self.size += memoryview(data).nbytes

    def digest(self) -> bytes:
        """Digest of everything written so far.

        Only meaningful once the caller has finished writing; calling it
        earlier gives the digest of the prefix seen up to that point.
        """
        return self._hash.digest()

    def hexdigest(self) -> str:
        return self._hash.hexdigest()

    def file_hash(self, path: str) -> FileHash:
        """Build the checksum-list entry describing the written bytes as ``path``."""
        return FILE_HASH_TYPES[self.name](digest=self.digest(), size=self.size, path=path)

    def __repr__(self) -> str:
        return f"Hasher({self.name!r}, size={self.size})"


class HashingWriter:
    """Writer that forwards bytes to a sink and feeds them to every hasher."""

    def __init__(self, sink: IO[bytes], hashers: list[Hasher]):
        self._sink = sink
        self.hashers = hashers

    def write(self, data: Buffer) -> int:
        view = memoryview(data).cast("B")
        written = self._sink.write(view)
        if written is None:
            written = view.nbytes
        chunk = view[:written]
        for hasher in self.hashers:
            hasher.update(chunk)
        return written

    def writable(self) -> bool:
        return True

    def flush(self) -> None:
        self._sink.flush()


def validate_algorithms(names: Iterable[str]) -> list[str]:
    """Normalize digest family names, rejecting any outside the supported set."""
    normalized = []
    for name in names:
        key = name.strip().lower()
        if key not in SUPPORTED_HASHES:
            raise UnsupportedAlgorithmError(name)
        normalized.append(key)
    return normalized


def new_hasher_writers(names: Iterable[str], sink: IO[bytes]) -> tuple[HashingWriter, list[Hasher]]:
    """Wrap ``sink`` so every byte written through it is also hashed.

    All names are validated before anything is constructed.

    Raises:
        UnsupportedAlgorithmError: if any name is not a supported digest family
    """
    hashers = [Hasher(name) for name in validate_algorithms(names)]
    logger.debug(f"Hashing output with {', '.join(h.name for h in hashers) or 'no digests'}")
    return HashingWriter(sink, hashers), hashers
