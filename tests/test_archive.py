import hashlib
import io

import pytest
from conftest import PACKAGES, SHA256_DSC

from aptarchive.archive import Archive, Suite
from aptarchive.config import SuiteFeatures
from aptarchive.errors import NoSuchArchError, StanzaDecodeError, StanzaEncodeError
from aptarchive.models import Architecture, BinaryPackage, Release
from aptarchive.stanzas import load_packages


def make_package(name: str, arch: str = "amd64", **extra) -> BinaryPackage:
    return BinaryPackage.model_validate({"Package": name, "Version": "1.0-1", "Architecture": arch, **extra})


@pytest.fixture
def suite() -> Suite:
    return Suite(Release(suite="unstable", codename="sid"))


def test_insertion_order_is_preserved(suite):
    p1, p2, p3 = make_package("a"), make_package("b"), make_package("c")
    for package in (p1, p2, p3):
        suite.add_package_to("main", package)
    suite.add_package_to("main", make_package("d", "arm64"))

    assert suite.get("main", "amd64") == [p1, p2, p3]
    assert suite.get("main", Architecture(cpu="amd64")) == [p1, p2, p3]
    assert [p.package for p in suite.get("main", "arm64")] == ["d"]


def test_get_returns_a_copy(suite):
    suite.add_package_to("main", make_package("a"))
    suite.get("main", "amd64").clear()
    assert len(suite.get("main", "amd64")) == 1


def test_absence_is_not_failure(suite):
    assert suite.get("main", "amd64") == []
    assert suite.has("main", "amd64") is False
    assert suite.arches("main") == set()
    assert suite.components() == set()
    with pytest.raises(NoSuchArchError) as excinfo:
        suite.write_arch_to("main", "amd64", io.BytesIO())
    assert excinfo.value.component == "main"
    assert str(excinfo.value.arch) == "amd64"


def test_lookups_do_not_create_buckets(suite):
    suite.add_package_to("main", make_package("a"))
    suite.get("main", "arm64")
    suite.has("contrib", "amd64")
    assert suite.arches("main") == {Architecture(cpu="amd64")}
    assert suite.components() == {"main"}
    with pytest.raises(NoSuchArchError):
        suite.write_arch_to("main", "arm64", io.BytesIO())


def test_components_and_arches(suite):
    suite.add_package_to("main", make_package("a"))
    suite.add_package_to("main", make_package("b", "all"))
    suite.add_package_to("contrib", make_package("c", "musl-linux-arm64"))
    assert suite.components() == {"main", "contrib"}
    assert suite.arches("main") == {Architecture.parse("amd64"), Architecture.parse("all")}
    assert suite.arches("contrib") == {Architecture(abi="musl", cpu="arm64")}
    assert suite.has("contrib", "musl-linux-arm64")
    assert len(suite.binaries["main"]) == 2


def test_write_arch_to_round_trips(suite):
    for package in load_packages(io.StringIO(PACKAGES)):
        suite.add_package_to("main", package)

    sink = io.BytesIO()
    suite.write_arch_to("main", "amd64", sink)
    text = sink.getvalue().decode("utf-8")
    assert text.count("\n\n") == 2
    assert not text.endswith("\n\n")

    rewritten = list(load_packages(io.StringIO(text)))
    assert rewritten == suite.get("main", "amd64")
    assert [p.package for p in rewritten] == ["hello", "zlib1g", "zlib1g-dev"]


def test_write_arch_to_stops_at_encode_failure(suite):
    suite.add_package_to("main", make_package("good"))
    suite.add_package_to("main", make_package("bad", **{"X-Broken": ["a", "b"]}))
    suite.add_package_to("main", make_package("never"))

    sink = io.BytesIO()
    with pytest.raises(StanzaEncodeError):
        suite.write_arch_to("main", "amd64", sink)
    written = sink.getvalue().decode("utf-8")
    assert written.startswith("Package: good\n")
    assert "never" not in written


def test_write_hashed_arch_to(suite):
    suite.add_package_to("main", make_package("a"))
    suite.add_package_to("main", make_package("b"))

    sink = io.BytesIO()
    hashers = suite.write_hashed_arch_to("main", "amd64", sink)
    data = sink.getvalue()
    assert [h.name for h in hashers] == ["sha256", "sha512"]
    assert hashers[0].digest() == hashlib.sha256(data).digest()
    assert hashers[1].digest() == hashlib.sha512(data).digest()

    hashers = suite.write_hashed_arch_to("main", "amd64", io.BytesIO(), SuiteFeatures(hashes=["md5"]))
    assert [h.name for h in hashers] == ["md5"]
    assert hashers[0].file_hash("main/binary-amd64/Packages").size == len(data)


def test_load_suite(archive_root):
    suite = Archive(archive_root).suite("bookworm")
    assert suite.name == "bookworm"
    assert (suite.origin, suite.label, suite.suite, suite.codename, suite.version) == (
        "Debian",
        "Debian",
        "stable",
        "bookworm",
        "12.5",
    )
    assert suite.description.startswith("Debian 12.5")
    assert suite.features.hashes == ["sha256", "sha512"]
    assert suite.components() == set()
    assert suite.release.find_file("main/binary-amd64/Packages").hexdigest == SHA256_DSC


def test_load_suite_with_features(archive_root):
    suite = Archive(archive_root, SuiteFeatures(hashes=["sha1"])).suite("bookworm")
    assert suite.features.hashes == ["sha1"]


def test_load_suite_missing(archive_root):
    with pytest.raises(FileNotFoundError):
        Archive(archive_root).suite("trixie")


def test_load_suite_empty(archive_root):
    path = archive_root / "dists" / "bookworm" / "InRelease"
    path.write_text("", encoding="utf-8")
    with pytest.raises(StanzaDecodeError):
        Suite.load(path)


def test_archive_paths(archive_root):
    archive = Archive(archive_root)
    assert archive.sources_path("bookworm", "main") == archive_root / "dists/bookworm/main/source/Sources"
    assert archive.packages_path("bookworm", "main", "amd64") == (
        archive_root / "dists/bookworm/main/binary-amd64/Packages"
    )


def test_iter_sources(archive_root):
    sources = list(Archive(archive_root).iter_sources("bookworm", "main"))
    assert [source.package for source in sources] == ["hello", "zlib", "tzdata"]


def test_load_packages_from_compressed_index(archive_root):
    archive = Archive(archive_root)
    suite = archive.suite("bookworm")
    assert suite.load_packages(archive, "main", "amd64") == 4
    assert [p.package for p in suite.get("main", "amd64")] == ["hello", "zlib1g", "zlib1g-dev"]
    assert [p.package for p in suite.get("main", "all")] == ["tzdata"]
    assert suite.arches("main") == {Architecture.parse("amd64"), Architecture.parse("all")}


def test_iter_packages_missing_index(archive_root):
    with pytest.raises(FileNotFoundError):
        list(Archive(archive_root).iter_packages("bookworm", "main", "arm64"))
