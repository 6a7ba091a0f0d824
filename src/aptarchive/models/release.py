from typing import ClassVar

from pydantic import Field

from aptarchive.fields import FileHash
from aptarchive.models.stanza import (
    ArchList,
    DateField,
    MD5List,
    SHA1List,
    SHA256List,
    SHA512List,
    SpaceList,
    Stanza,
    YesNo,
)

type OptionalStr = str | None


class Release(Stanza):
    """The top-level paragraph of a ``Release`` or ``InRelease`` file."""

    kind: ClassVar[str] = "release"

    origin: OptionalStr = Field(default=None, alias="Origin")
    label: OptionalStr = Field(default=None, alias="Label")
    suite: OptionalStr = Field(default=None, alias="Suite")
    version: OptionalStr = Field(default=None, alias="Version")
    codename: OptionalStr = Field(default=None, alias="Codename")
    date: DateField = Field(default=None, alias="Date")
    valid_until: DateField = Field(default=None, alias="Valid-Until")
    acquire_by_hash: YesNo = Field(default=None, alias="Acquire-By-Hash")
    architectures: ArchList = Field(default_factory=list, alias="Architectures")
    components: SpaceList = Field(default_factory=list, alias="Components")
    description: OptionalStr = Field(default=None, alias="Description")

    md5sum: MD5List = Field(default_factory=list, alias="MD5Sum")
    sha1: SHA1List = Field(default_factory=list, alias="SHA1")
    sha256: SHA256List = Field(default_factory=list, alias="SHA256")
    sha512: SHA512List = Field(default_factory=list, alias="SHA512")

    def checksums(self, algorithm: str) -> list[FileHash]:
        """Return the checksum list for a digest family name, e.g. ``sha256``."""
        return {
            "md5": self.md5sum,
            "sha1": self.sha1,
            "sha256": self.sha256,
            "sha512": self.sha512,
        }.get(algorithm, [])

    def find_file(self, path: str, algorithm: str = "sha256") -> FileHash | None:
        """Look up the record for an index file by its path relative to the suite directory."""
        for record in self.checksums(algorithm):
            if record.path == path:
                return record
        return None
