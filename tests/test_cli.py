import re

from markdown_combiner.__main__ import main
from markdown_combiner.settings import Settings, save_settings


def test_combines_folder(make_vault, tmp_path):
    make_vault({"Notes/a.md": "one"})
    assert main([str(tmp_path), "Notes", "--no-context", "--suffix", "random"]) == 0
    names = [p.name for p in (tmp_path / "Notes").iterdir() if p.name != "a.md"]
    assert len(names) == 1
    assert re.fullmatch(r"notes_[A-Za-z0-9]{6}\.md", names[0])


def test_combines_whole_vault_with_settings_file(make_vault, tmp_path):
    make_vault({"Notes/a.md": "one"})
    settings_path = tmp_path / "settings.yaml"
    save_settings(Settings(filename_suffix="random", random_length=4, random_chars="q"), settings_path)
    assert main([str(tmp_path), "--settings", str(settings_path)]) == 0
    assert (tmp_path / "vault_combined_qqqq.md").exists()


def test_nothing_to_combine(make_vault, tmp_path):
    make_vault({}, folders=["Empty"])
    assert main([str(tmp_path), "Empty", "--no-context"]) == 1
    assert list((tmp_path / "Empty").iterdir()) == []


def test_missing_folder(make_vault, tmp_path):
    make_vault({"Notes/a.md": "one"})
    assert main([str(tmp_path), "Nope"]) == 2


def test_missing_vault(tmp_path):
    assert main([str(tmp_path / "missing")]) == 2
