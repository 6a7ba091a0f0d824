"""In-memory model of an archive suite and its binary package indices."""

import logging
from collections.abc import Iterator
from os import PathLike
from pathlib import Path
from typing import IO

from debian import deb822

from aptarchive.config import SuiteFeatures
from aptarchive.constants import INRELEASE, PACKAGES_INDEX, SOURCES_INDEX
from aptarchive.errors import NoSuchArchError, StanzaDecodeError
from aptarchive.hashing import Hasher, HashingWriter, new_hasher_writers
from aptarchive.models import Architecture, BinaryPackage, Release, Source
from aptarchive.stanzas import StanzaStream

logger = logging.getLogger(__name__)

type ArchLike = Architecture | str


def as_arch(arch: ArchLike) -> Architecture:
    return arch if isinstance(arch, Architecture) else Architecture.parse(arch)


class Binaries:
    """The binary packages of one component, bucketed by architecture.

    Buckets are created when the first package for an architecture is added
    and never on lookup, so ``has``/``get`` never change what ``arches``
    reports. Within a bucket, packages keep their insertion order.
    """

    def __init__(self):
        self._arches: dict[Architecture, list[BinaryPackage]] = {}

    def add(self, package: BinaryPackage) -> None:
        self._arches.setdefault(package.architecture, []).append(package)

    def get(self, arch: ArchLike) -> list[BinaryPackage]:
        return list(self._arches.get(as_arch(arch), ()))

    def has(self, arch: ArchLike) -> bool:
        return as_arch(arch) in self._arches

    def arches(self) -> set[Architecture]:
        return set(self._arches)

    def write_arch_to(self, arch: ArchLike, sink: IO[bytes], component: str = "") -> None:
        """Serialize every package of ``arch``, in insertion order, to ``sink``.

        Stanzas are separated by one blank line. An encoding failure stops the
        write; whatever was already written stays in the sink.

        Raises:
            NoSuchArchError: if no package was ever added for ``arch``
            StanzaEncodeError: if a package cannot be serialized
        """
        arch = as_arch(arch)
        packages = self._arches.get(arch)
        if packages is None:
            raise NoSuchArchError(component, arch)

        for i, package in enumerate(packages):
            text = package.dump()
            if i:
                text = "\n" + text
            sink.write(text.encode("utf-8"))

    def __len__(self) -> int:
        return sum(len(packages) for packages in self._arches.values())


class Suite:
    """One release of an archive, e.g. ``bookworm``.

    Holds the release metadata read from ``InRelease`` and, per component, the
    binary packages being published.
    """

    def __init__(self, release: Release, features: SuiteFeatures | None = None, name: str | None = None):
        self.release = release
        self.name = name or release.suite or release.codename
        self.features = features or SuiteFeatures()
        self.binaries: dict[str, Binaries] = {}

    @classmethod
    def load(cls, path: str | PathLike, features: SuiteFeatures | None = None) -> "Suite":
        """Read the release paragraph of an ``InRelease`` (or ``Release``) file.

        The OpenPGP armour of a clearsigned file is stripped, not verified.

        Raises:
            OSError: if the file cannot be opened or read
            StanzaDecodeError: if the file holds no paragraph or it is malformed
        """
        path = Path(path)
        with path.open("rt", encoding="utf-8") as handle:
            try:
                paragraph = deb822.Deb822(handle)
            except ValueError as e:
                raise StanzaDecodeError(f"Failed to read {path}: {e}") from e
        if not paragraph:
            raise StanzaDecodeError(f"No release paragraph in {path}")

        suite = cls(Release.from_paragraph(paragraph), features, name=path.parent.name)
        logger.debug(f"Loaded suite {suite.name} from {path}")
        return suite

    @property
    def description(self) -> str | None:
        return self.release.description

    @property
    def origin(self) -> str | None:
        return self.release.origin

    @property
    def label(self) -> str | None:
        return self.release.label

    @property
    def version(self) -> str | None:
        return self.release.version

    @property
    def suite(self) -> str | None:
        return self.release.suite

    @property
    def codename(self) -> str | None:
        return self.release.codename

    def components(self) -> set[str]:
        return set(self.binaries)

    def add_package_to(self, component: str, package: BinaryPackage) -> None:
        if component not in self.binaries:
            logger.debug(f"Adding component {component} to suite {self.name}")
            self.binaries[component] = Binaries()
        self.binaries[component].add(package)

    def get(self, component: str, arch: ArchLike) -> list[BinaryPackage]:
        binaries = self.binaries.get(component)
        return binaries.get(arch) if binaries is not None else []

    def has(self, component: str, arch: ArchLike) -> bool:
        binaries = self.binaries.get(component)
        return binaries is not None and binaries.has(arch)

    def arches(self, component: str) -> set[Architecture]:
        binaries = self.binaries.get(component)
        return binaries.arches() if binaries is not None else set()

    def write_arch_to(self, component: str, arch: ArchLike, sink: IO[bytes]) -> None:
        """Write the ``Packages`` index of one component and architecture.

        Raises:
            NoSuchArchError: if nothing was added for that pair
            StanzaEncodeError: if a package cannot be serialized
        """
        binaries = self.binaries.get(component)
        if binaries is None:
            raise NoSuchArchError(component, as_arch(arch))
        binaries.write_arch_to(arch, sink, component=component)

    def new_hashers(
        self, sink: IO[bytes], features: SuiteFeatures | None = None
    ) -> tuple[HashingWriter, list[Hasher]]:
        """Wrap ``sink`` with the digests enabled by ``features`` (default: the suite's)."""
        features = features or self.features
        return new_hasher_writers(features.hashes, sink)

    def write_hashed_arch_to(
        self,
        component: str,
        arch: ArchLike,
        sink: IO[bytes],
        features: SuiteFeatures | None = None,
    ) -> list[Hasher]:
        """Like ``write_arch_to``, returning the digests of the written bytes."""
        writer, hashers = self.new_hashers(sink, features)
        self.write_arch_to(component, arch, writer)
        logger.debug(
            f"Wrote {component}/binary-{as_arch(arch)}: "
            + ", ".join(f"{h.name}={h.hexdigest()}" for h in hashers)
        )
        return hashers

    def load_packages(self, archive: "Archive", component: str, arch: ArchLike) -> int:
        """Add every package of an on-disk ``Packages`` index to ``component``.

        Returns:
            The number of packages added
        """
        count = 0
        for package in archive.iter_packages(self.name, component, arch):
            self.add_package_to(component, package)
            count += 1
        logger.info(f"Loaded {count} packages into {component}/binary-{as_arch(arch)}")
        return count


class Archive:
    """A package archive laid out under ``root``.

    Args:
        root: Directory containing ``dists/``
        features: Publishing options handed to every suite loaded from here
    """

    def __init__(self, root: str | PathLike, features: SuiteFeatures | None = None):
        self.root = Path(root)
        self.features = features

    def suite_path(self, suite: str) -> Path:
        return self.root / "dists" / suite

    def sources_path(self, suite: str, component: str) -> Path:
        return self.suite_path(suite) / component / "source" / SOURCES_INDEX

    def packages_path(self, suite: str, component: str, arch: ArchLike) -> Path:
        return self.suite_path(suite) / component / f"binary-{as_arch(arch)}" / PACKAGES_INDEX

    def suite(self, name: str) -> Suite:
        return Suite.load(self.suite_path(name) / INRELEASE, self.features)

    def _find_index(self, path: Path) -> Path:
        # prefer the uncompressed index, fall back to .gz
        if path.is_file():
            return path
        compressed = path.with_name(f"{path.name}.gz")
        if compressed.is_file():
            return compressed
        return path

    def iter_sources(self, suite: str, component: str) -> Iterator[Source]:
        """Stream the ``Sources`` index of a component; the file is closed when iteration ends."""
        with StanzaStream.load_path(self._find_index(self.sources_path(suite, component)), Source) as stream:
            yield from stream

    def iter_packages(self, suite: str, component: str, arch: ArchLike) -> Iterator[BinaryPackage]:
        """Stream the ``Packages`` index of a component and architecture."""
        path = self._find_index(self.packages_path(suite, component, arch))
        with StanzaStream.load_path(path, BinaryPackage) as stream:
            yield from stream
