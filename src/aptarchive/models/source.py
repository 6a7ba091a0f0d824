import logging
from os import PathLike
from pathlib import Path
from typing import ClassVar, Self

from debian import deb822
from pydantic import Field

from aptarchive.errors import MalformedFieldError
from aptarchive.fields import FileHash, OptionalVersion
from aptarchive.models.stanza import (
    ArchList,
    CommaList,
    LineList,
    MD5List,
    SHA1List,
    SHA256List,
    Stanza,
    parse_relations,
)

logger = logging.getLogger(__name__)


class Source(Stanza):
    """One paragraph of a ``Sources`` index.

    The format is that of a ``.dsc`` file (Debian Policy 5.4) with ``Source``
    renamed to ``Package`` and a mandatory ``Directory`` field added.
    ``Priority`` and ``Section`` are optional; any other ``.dsc`` field is
    carried along untyped.
    """

    kind: ClassVar[str] = "source"

    package: str = Field(alias="Package", min_length=1)
    directory: str = Field(alias="Directory")
    priority: str | None = Field(default=None, alias="Priority")
    section: str | None = Field(default=None, alias="Section")

    format: str | None = Field(default=None, alias="Format")
    binaries: CommaList = Field(default_factory=list, alias="Binary")
    architectures: ArchList = Field(default_factory=list, alias="Architecture")
    version: OptionalVersion = Field(default=None, alias="Version")
    origin: str | None = Field(default=None, alias="Origin")
    maintainer: str | None = Field(default=None, alias="Maintainer")
    uploaders: CommaList = Field(default_factory=list, alias="Uploaders")
    homepage: str | None = Field(default=None, alias="Homepage")
    standards_version: str | None = Field(default=None, alias="Standards-Version")
    package_list: LineList = Field(default_factory=list, alias="Package-List")

    checksums_sha1: SHA1List = Field(default_factory=list, alias="Checksums-Sha1")
    checksums_sha256: SHA256List = Field(default_factory=list, alias="Checksums-Sha256")
    files: MD5List = Field(default_factory=list, alias="Files")

    def build_depends(self) -> list:
        """Parse ``Build-Depends`` into a list of alternatives, empty when absent."""
        extra = self.model_extra or {}
        return parse_relations(extra.get("Build-Depends"))

    def files_by_path(self) -> dict[str, list[FileHash]]:
        """Group the hash records of every digest family by relative path."""
        grouped: dict[str, list[FileHash]] = {}
        for record in (*self.files, *self.checksums_sha1, *self.checksums_sha256):
            grouped.setdefault(record.path, []).append(record)
        return grouped

    def check_consistency(self) -> None:
        """Check that the populated checksum lists all describe the same files.

        Raises:
            MalformedFieldError: if one list names a file another does not,
                or if two lists disagree about a file's size.
        """
        collections = [c for c in (self.files, self.checksums_sha1, self.checksums_sha256) if c]
        if not collections:
            return

        expected = {record.path: record.size for record in collections[0]}
        for collection in collections[1:]:
            seen = {record.path: record.size for record in collection}
            if seen.keys() != expected.keys():
                mismatch = " ".join(sorted(seen.keys() ^ expected.keys()))
                raise MalformedFieldError(mismatch, f"checksum lists of {self.package} name different files")
            for path, size in seen.items():
                if size != expected[path]:
                    raise MalformedFieldError(path, f"checksum lists of {self.package} disagree on size")

    @classmethod
    def from_dsc(cls, dsc: str | PathLike, directory: str) -> Self:
        """Build a Sources entry from a ``.dsc`` control file.

        Args:
            dsc: Path to the ``.dsc`` file, or its text
            directory: Pool directory the source lives in, relative to the archive root
        """
        if isinstance(dsc, PathLike):
            with Path(dsc).open("rt", encoding="utf-8") as handle:
                paragraph = deb822.Deb822(handle)
        else:
            paragraph = deb822.Deb822(dsc)

        data = dict(paragraph)
        if "Source" in data:
            data["Package"] = data.pop("Source")
        data["Directory"] = directory
        logger.debug(f"Converted dsc for {data.get('Package')} into a Sources entry under {directory}")
        return cls.from_paragraph(data)
