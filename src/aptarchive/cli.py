"""Command line entry point: inspect and re-serialize archive indices."""

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from aptarchive.archive import Archive, Suite
from aptarchive.config import SuiteFeatures
from aptarchive.constants import LOG_LEVEL
from aptarchive.errors import ArchiveError
from aptarchive.models import Release
from aptarchive.stanzas import load_packages_file, load_sources_file

logger = logging.getLogger("aptarchive")


def setup_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def show_suite(args) -> None:
    suite = Archive(args.root).suite(args.name)
    release = suite.release
    for label, value in (
        ("Suite", suite.suite),
        ("Codename", suite.codename),
        ("Origin", suite.origin),
        ("Label", suite.label),
        ("Version", suite.version),
        ("Date", release.date),
        ("Components", " ".join(release.components)),
        ("Architectures", " ".join(str(arch) for arch in release.architectures)),
        ("Hashes", " ".join(suite.features.hashes)),
    ):
        if value:
            print(f"{label}: {value}")


def list_sources(args) -> None:
    with load_sources_file(args.path) as stream:
        for source in stream:
            print(f"{source.package} {source.version} {source.directory}")


def list_packages(args) -> None:
    with load_packages_file(args.path) as stream:
        for package in stream:
            print(f"{package.package} {package.version} {package.architecture}")


def reindex(args) -> None:
    suite = Suite(Release(), SuiteFeatures(hashes=args.hashes) if args.hashes else None)
    with load_packages_file(args.path) as stream:
        for package in stream:
            suite.add_package_to(args.component, package)

    out = sys.stdout.buffer
    hashers = suite.write_hashed_arch_to(args.component, args.arch, out)
    out.flush()
    for hasher in hashers:
        print(f"{hasher.name}: {hasher.hexdigest()} {hasher.size}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="aptarchive", description="Read and write archive index files.")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    parser_suite = subparsers.add_parser("suite", help="show the release metadata of a suite")
    parser_suite.add_argument("root", help="archive root, the directory holding dists/")
    parser_suite.add_argument("name", help="suite directory name under dists/")
    parser_suite.set_defaults(func=show_suite)

    parser_sources = subparsers.add_parser("sources", help="list the entries of a Sources file")
    parser_sources.add_argument("path")
    parser_sources.set_defaults(func=list_sources)

    parser_packages = subparsers.add_parser("packages", help="list the entries of a Packages file")
    parser_packages.add_argument("path")
    parser_packages.set_defaults(func=list_packages)

    parser_reindex = subparsers.add_parser("reindex", help="rewrite one architecture of a Packages file")
    parser_reindex.add_argument("path")
    parser_reindex.add_argument("arch")
    parser_reindex.add_argument("--component", default="main")
    parser_reindex.add_argument("--hash", dest="hashes", action="append", metavar="ALGORITHM")
    parser_reindex.set_defaults(func=reindex)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else LOG_LEVEL)

    try:
        args.func(args)
    except (ArchiveError, OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    return 0
