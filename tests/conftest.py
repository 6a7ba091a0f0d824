import gzip
from pathlib import Path

import pytest

MD5_DSC = "1" * 32
MD5_ORIG = "2" * 32
SHA1_DSC = "3" * 40
SHA1_ORIG = "4" * 40
SHA256_DSC = "5" * 64
SHA256_ORIG = "6" * 64

SOURCES = f"""\
Package: hello
Binary: hello
Version: 2.10-3
Maintainer: Santiago Vila <sanvila@debian.org>
Build-Depends: debhelper-compat (= 13), help2man, texinfo
Architecture: any
Standards-Version: 4.6.2
Format: 3.0 (quilt)
Files:
 {MD5_DSC} 1847 hello_2.10-3.dsc
 {MD5_ORIG} 725946 hello_2.10.orig.tar.gz
Checksums-Sha1:
 {SHA1_DSC} 1847 hello_2.10-3.dsc
 {SHA1_ORIG} 725946 hello_2.10.orig.tar.gz
Checksums-Sha256:
 {SHA256_DSC} 1847 hello_2.10-3.dsc
 {SHA256_ORIG} 725946 hello_2.10.orig.tar.gz
Homepage: https://www.gnu.org/software/hello/
Package-List:
 hello deb devel optional arch=any
Directory: pool/main/h/hello
Priority: source
Section: devel

Package: zlib
Binary: zlib1g, zlib1g-dev, lib32z1
Version: 1:1.2.13.dfsg-1
Maintainer: Mark Brown <broonie@debian.org>
Uploaders: Alice <alice@example.org>, Bob <bob@example.org>
Architecture: any all
Format: 3.0 (quilt)
Directory: pool/main/z/zlib
Section: libs

Package: tzdata
Binary: tzdata
Version: 2024a-0+deb12u1
Architecture: all
Directory: pool/main/t/tzdata
"""

PACKAGES = """\
Package: hello
Version: 2.10-3
Installed-Size: 280
Maintainer: Santiago Vila <sanvila@debian.org>
Architecture: amd64
Depends: libc6 (>= 2.34)
Description: example package based on GNU hello
 The GNU hello program produces a familiar, friendly greeting.
Multi-Arch: foreign
Section: devel
Priority: optional
Filename: pool/main/h/hello/hello_2.10-3_amd64.deb
Size: 53068

Package: zlib1g
Source: zlib (1:1.2.13.dfsg-1)
Version: 1:1.2.13.dfsg-1
Architecture: amd64
Depends: libc6 (>= 2.14)
Filename: pool/main/z/zlib/zlib1g_1.2.13.dfsg-1_amd64.deb
Size: 89424

Package: tzdata
Version: 2024a-0+deb12u1
Architecture: all
Filename: pool/main/t/tzdata/tzdata_2024a-0+deb12u1_all.deb
Size: 256204

Package: zlib1g-dev
Source: zlib
Version: 1:1.2.13.dfsg-1
Architecture: amd64
Depends: zlib1g (= 1:1.2.13.dfsg-1), libc6-dev | libc-dev
Filename: pool/main/z/zlib/zlib1g-dev_1.2.13.dfsg-1_amd64.deb
Size: 916220
"""

INRELEASE = f"""\
-----BEGIN PGP SIGNED MESSAGE-----
Hash: SHA512

Origin: Debian
Label: Debian
Suite: stable
Version: 12.5
Codename: bookworm
Date: Sat, 10 Feb 2024 09:32:11 UTC
Acquire-By-Hash: yes
Architectures: all amd64 arm64
Components: main contrib
Description: Debian 12.5 Released 10 February 2024
SHA256:
 {SHA256_DSC} 1234 main/binary-amd64/Packages
 {SHA256_ORIG} 567 main/source/Sources
-----BEGIN PGP SIGNATURE-----

iHUEARYKAB0WIQQ0example0signature0only0for0tests0AAoJEAAAAAAAAAAA
=abcd
-----END PGP SIGNATURE-----
"""


@pytest.fixture
def archive_root(tmp_path: Path) -> Path:
    """An archive tree with one suite, a Sources index and a gzipped Packages index."""
    suite_dir = tmp_path / "dists" / "bookworm"
    (suite_dir / "main" / "source").mkdir(parents=True)
    (suite_dir / "main" / "binary-amd64").mkdir(parents=True)

    (suite_dir / "InRelease").write_text(INRELEASE, encoding="utf-8")
    (suite_dir / "main" / "source" / "Sources").write_text(SOURCES, encoding="utf-8")
    with gzip.open(suite_dir / "main" / "binary-amd64" / "Packages.gz", "wt", encoding="utf-8") as handle:
        handle.write(PACKAGES)
    return tmp_path
