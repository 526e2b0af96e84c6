import re
from datetime import datetime

import pytest

from markdown_combiner.errors import InvalidFormatPattern
from markdown_combiner.naming import (
    RANDOM_FALLBACK,
    format_timestamp,
    output_name,
    random_suffix,
    snake_case,
    suffix,
)
from markdown_combiner.settings import Settings

NOW = datetime(2024, 3, 5, 14, 7, 9)


def test_timestamp_suffix_replaces_illegal_characters():
    settings = Settings(timestamp_format="%Y/%m/%d %H:%M")
    assert suffix(settings, NOW) == "2024-03-05 14-07"


def test_timestamp_default_pattern():
    assert suffix(Settings(), NOW) == "2024-Mar-05-140709"


@pytest.mark.parametrize("pattern", ["%Q", "%Y%", "", "%-"])
def test_invalid_or_empty_pattern_falls_back_to_default(pattern):
    assert suffix(Settings(timestamp_format=pattern), NOW) == "2024-Mar-05-140709"


def test_format_timestamp_rejects_unknown_directive():
    with pytest.raises(InvalidFormatPattern):
        format_timestamp("%Y-%Q", NOW)


def test_literal_text_in_pattern_is_kept():
    assert suffix(Settings(timestamp_format="backup %Y"), NOW) == "backup 2024"


def test_random_output_name_shape():
    settings = Settings(filename_suffix="random", random_length=6, random_chars="xyz")
    for _ in range(20):
        assert re.fullmatch(r"base_[xyz]{6}\.md", output_name("base", settings))


def test_random_suffix_length_follows_settings():
    settings = Settings(filename_suffix="random", random_length=32)
    assert len(suffix(settings)) == 32


def test_random_suffix_fallback():
    assert random_suffix(0, "abc") == RANDOM_FALLBACK
    assert random_suffix(4, "") == RANDOM_FALLBACK


def test_output_name_with_timestamp():
    assert output_name("notes", Settings(timestamp_format="%Y%m%d"), NOW) == "notes_20240305.md"


@pytest.mark.parametrize("name, expected", [
    ("Notes", "notes"),
    ("My Notes", "my_notes"),
    ("My   Daily\tNotes", "my_daily_notes"),
    ("Project (old)!", "project_old"),
    ("été", "t"),
    ("***", "folder"),
])
def test_snake_case(name, expected):
    assert snake_case(name) == expected


@pytest.mark.parametrize("pattern", ["YYYY-MMM-DD-HHmmss", "static", "100%%"])
def test_pattern_without_time_fields_falls_back_to_default(pattern):
    assert suffix(Settings(timestamp_format=pattern), NOW) == "2024-Mar-05-140709"


def test_moment_style_pattern_still_changes_over_time():
    settings = Settings(timestamp_format="YYYY-MMM-DD-HHmmss")
    later = datetime(2024, 3, 5, 14, 7, 10)
    assert suffix(settings, NOW) != suffix(settings, later)


@pytest.mark.parametrize("pattern", ["%Y%n%d", "%Y%t%d"])
def test_whitespace_directives_are_rejected(pattern):
    with pytest.raises(InvalidFormatPattern):
        format_timestamp(pattern, NOW)


def test_control_characters_never_reach_the_file_name():
    assert suffix(Settings(timestamp_format="%Y\n%m\t%d"), NOW) == "2024-03-05"
