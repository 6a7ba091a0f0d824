from os import getenv

# digest families the fan-out writer knows how to compute
SUPPORTED_HASHES = ("md5", "sha1", "sha256", "sha512")

# digests computed for published indices unless configured otherwise
DEFAULT_HASHES = ("sha256", "sha512")

LOG_LEVEL = getenv("APTARCHIVE_LOG_LEVEL", "INFO").upper()

# characters stripped from each line of a multi-line field
LINE_STRIP = " \t\n\r"

INRELEASE = "InRelease"
SOURCES_INDEX = "Sources"
PACKAGES_INDEX = "Packages"
