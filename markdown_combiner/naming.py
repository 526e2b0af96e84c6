"""
Output file naming.

A combined document is named ``<base>_<suffix>.md`` where the suffix is
either a timestamp or a random string, depending on the settings. Names are
unique enough for interactive use but collisions are not ruled out.
"""
import random
import re
from datetime import datetime
from typing import Optional

import ascii_colors as logging

from markdown_combiner.errors import InvalidFormatPattern
from markdown_combiner.settings import DEFAULT_TIMESTAMP_FORMAT, SUFFIX_RANDOM, Settings

logger = logging.getLogger(__name__)

RANDOM_FALLBACK = "fallback"
EMPTY_BASE_NAME = "folder"
OUTPUT_EXTENSION = ".md"

# strftime directives accepted in a timestamp pattern
STRFTIME_DIRECTIVES = set("aAbBcCdDeFgGhHIjmMpPrRsSTuUVwWxXyYzZf%")
STRFTIME_FLAGS = set("-_0^#")
ILLEGAL_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')

_rng = random.SystemRandom()


def _check_pattern(pattern: str) -> None:
    has_field = False
    i = 0
    while i < len(pattern):
        if pattern[i] == "%":
            i += 1
            while i < len(pattern) and pattern[i] in STRFTIME_FLAGS:
                i += 1
            if i >= len(pattern):
                raise InvalidFormatPattern(f"Dangling '%' in timestamp pattern {pattern!r}")
            if pattern[i] not in STRFTIME_DIRECTIVES:
                raise InvalidFormatPattern(f"Unknown directive '%{pattern[i]}' in timestamp pattern {pattern!r}")
            has_field = has_field or pattern[i] != "%"
        i += 1
    if not has_field:
        raise InvalidFormatPattern(f"Timestamp pattern {pattern!r} has no date or time directive")


def format_timestamp(pattern: str, now: datetime) -> str:
    """Formats ``now`` with ``pattern``; raises InvalidFormatPattern."""
    _check_pattern(pattern)
    try:
        return now.strftime(pattern)
    except (ValueError, UnicodeError) as e:
        raise InvalidFormatPattern(f"Cannot apply timestamp pattern {pattern!r}: {e}") from e


def sanitize_filename(name: str) -> str:
    return ILLEGAL_FILENAME_CHARS.sub("-", name)


def timestamp_suffix(pattern: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    try:
        formatted = format_timestamp(pattern, now)
    except InvalidFormatPattern as e:
        logger.warning(f"{e}. Falling back to '{DEFAULT_TIMESTAMP_FORMAT}'.")
        formatted = ""
    formatted = sanitize_filename(formatted)
    if not formatted:
        formatted = sanitize_filename(now.strftime(DEFAULT_TIMESTAMP_FORMAT))
    return formatted


def random_suffix(length: int, chars: str) -> str:
    drawn = "".join(_rng.choice(chars) for _ in range(length)) if chars else ""
    return drawn or RANDOM_FALLBACK


def suffix(settings: Settings, now: Optional[datetime] = None) -> str:
    if settings.filename_suffix == SUFFIX_RANDOM:
        return random_suffix(settings.random_length, settings.random_chars)
    return timestamp_suffix(settings.timestamp_format, now)


def output_name(base: str, settings: Settings, now: Optional[datetime] = None) -> str:
    return f"{base}_{suffix(settings, now)}{OUTPUT_EXTENSION}"


def snake_case(name: str) -> str:
    """``"My Notes (old)"`` -> ``"my_notes_old"``."""
    snake = re.sub(r"\s+", "_", name.strip().lower())
    snake = re.sub(r"[^\w]", "", snake, flags=re.ASCII)
    return snake or EMPTY_BASE_NAME
