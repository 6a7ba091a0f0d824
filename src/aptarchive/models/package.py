from typing import ClassVar

from pydantic import Field

from aptarchive.fields import SourceName, VersionField
from aptarchive.models.stanza import ArchField, SourceNameField, Stanza, parse_relations

type OptionalStr = str | None


class BinaryPackage(Stanza):
    """Represents one paragraph of a ``Packages`` index."""

    kind: ClassVar[str] = "package"

    package: str = Field(alias="Package", min_length=1)
    source: SourceNameField = Field(default=None, alias="Source")
    version: VersionField = Field(alias="Version")
    architecture: ArchField = Field(alias="Architecture")
    maintainer: OptionalStr = Field(default=None, alias="Maintainer")
    installed_size: int | None = Field(default=None, ge=0, alias="Installed-Size")
    pre_depends: OptionalStr = Field(default=None, alias="Pre-Depends")
    depends: OptionalStr = Field(default=None, alias="Depends")
    recommends: OptionalStr = Field(default=None, alias="Recommends")
    suggests: OptionalStr = Field(default=None, alias="Suggests")
    conflicts: OptionalStr = Field(default=None, alias="Conflicts")
    breaks: OptionalStr = Field(default=None, alias="Breaks")
    provides: OptionalStr = Field(default=None, alias="Provides")
    section: OptionalStr = Field(default=None, alias="Section")
    priority: OptionalStr = Field(default=None, alias="Priority")
    homepage: OptionalStr = Field(default=None, alias="Homepage")
    description: OptionalStr = Field(default=None, alias="Description")
    filename: OptionalStr = Field(default=None, alias="Filename")
    size: int | None = Field(default=None, ge=0, alias="Size")
    md5sum: OptionalStr = Field(default=None, alias="MD5sum")
    sha1: OptionalStr = Field(default=None, alias="SHA1")
    sha256: OptionalStr = Field(default=None, alias="SHA256")
    sha512: OptionalStr = Field(default=None, alias="SHA512")

    @property
    def source_name(self) -> SourceName:
        """The source package this binary was built from.

        A missing ``Source`` field means the source has the binary's name and
        version; a bare source name means the binary's version.
        """
        if self.source is None:
            return SourceName(name=self.package, version=self.version)
        if self.source.version is None:
            return SourceName(name=self.source.name, version=self.version)
        return self.source

    def relations(self, field: str) -> list:
        """Parse a dependency field (``depends``, ``breaks``...) into alternatives."""
        return parse_relations(getattr(self, field))

    def __str__(self) -> str:
        return f"{self.package}_{self.version}_{self.architecture}"
