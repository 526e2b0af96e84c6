import pytest
import yaml

from markdown_combiner.settings import (
    DEFAULT_RANDOM_CHARS,
    DEFAULT_TIMESTAMP_FORMAT,
    Settings,
    clamp_random_length,
    load_settings,
    save_settings,
)


def test_defaults():
    settings = Settings.from_dict({})
    assert settings == Settings()
    assert settings.random_length == 6
    assert settings.filename_suffix == "timestamp"
    assert settings.timestamp_format == DEFAULT_TIMESTAMP_FORMAT


@pytest.mark.parametrize("value, expected", [
    (100, 32),
    (32, 32),
    (1, 1),
    (0, 1),
    (-5, 1),
    ("12", 12),
    ("abc", 6),
    (None, 6),
    (True, 6),
])
def test_random_length_is_clamped(value, expected):
    assert clamp_random_length(value) == expected
    assert Settings.from_dict({"random_length": value}).random_length == expected


def test_missing_random_length_uses_default():
    assert Settings.from_dict({"random_chars": "ab"}).random_length == 6


def test_empty_random_chars_falls_back():
    assert Settings.from_dict({"random_chars": ""}).random_chars == DEFAULT_RANDOM_CHARS
    assert Settings.from_dict({"random_chars": 42}).random_chars == DEFAULT_RANDOM_CHARS


def test_unknown_suffix_strategy_falls_back():
    assert Settings.from_dict({"filename_suffix": "uuid"}).filename_suffix == "timestamp"


def test_camel_case_keys_are_accepted():
    settings = Settings.from_dict({
        "includeDirectoryContext": False,
        "filenameSuffix": "random",
        "randomLength": 100,
        "randomChars": "01",
        "showRibbonIcon": False,
        "somethingElse": 1,
    })
    assert settings == Settings(
        show_ribbon_icon=False,
        include_directory_context=False,
        filename_suffix="random",
        random_length=32,
        random_chars="01",
    )


def test_non_boolean_flag_uses_default():
    assert Settings.from_dict({"include_directory_context": "no"}).include_directory_context is True


def test_updated_revalidates():
    settings = Settings().updated(random_length=99, include_directory_context=False)
    assert settings.random_length == 32
    assert settings.include_directory_context is False


def test_save_and_load(tmp_path):
    path = tmp_path / "config" / "settings.yaml"
    settings = Settings(filename_suffix="random", random_length=8, random_chars="abc")
    save_settings(settings, path)
    assert yaml.safe_load(path.read_text(encoding="utf-8"))["random_length"] == 8
    assert load_settings(path) == settings


def test_load_merges_over_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("randomLength: 100\nfilename_suffix: random\n", encoding="utf-8")
    settings = load_settings(path)
    assert settings.random_length == 32
    assert settings.filename_suffix == "random"
    assert settings.include_directory_context is True


@pytest.mark.parametrize("content", ["", "- a\n- b\n", "key: [unclosed\n"])
def test_load_invalid_content_gives_defaults(tmp_path, content):
    path = tmp_path / "settings.yaml"
    path.write_text(content, encoding="utf-8")
    assert load_settings(path) == Settings()


def test_load_missing_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "missing.yaml") == Settings()


def test_constructor_validates_like_from_dict():
    settings = Settings(filename_suffix="random", random_length=100, random_chars="")
    assert settings.random_length == 32
    assert settings.random_chars == DEFAULT_RANDOM_CHARS
    assert Settings(random_length=0).random_length == 1
    assert Settings(filename_suffix="uuid").filename_suffix == "timestamp"
    assert Settings(timestamp_format=None).timestamp_format == DEFAULT_TIMESTAMP_FORMAT
    assert Settings(include_directory_context="yes").include_directory_context is True
