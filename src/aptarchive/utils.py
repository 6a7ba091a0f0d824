import datetime
import gzip
import logging
from pathlib import Path
from typing import IO

from dateutil.parser import parse as parse_date

logger = logging.getLogger(__name__)


def try_parse_date(date_str: str | None) -> datetime.datetime | None:
    """Try to parse a date string into a timestamp.

    Args:
        date_str: The date string to parse (e.g., the Date field of a Release file)

    Returns:
        The parsed timestamp, or None if parsing failed or date_str is None
    """

    try:
        return parse_date(date_str) if date_str else None
    except (ValueError, OverflowError) as e:
        logger.warning(f"Failed to parse date '{date_str}': {e}")
        return None


def format_date(value: datetime.datetime) -> str:
    """Format a timestamp the way Release files spell it (RFC 2822, named zone)."""
    return f"{value.strftime('%a, %d %b %Y %H:%M:%S')} {value.tzname() or 'UTC'}"


def open_text_stream(path: Path) -> IO[str]:
    """Open an index file for reading as text, transparently handling ``.gz``."""
    if path.suffix == ".gz":
        return gzip.open(path, "rt", encoding="utf-8")
    return path.open("rt", encoding="utf-8")
