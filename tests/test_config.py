"""Tests for git-config backed settings."""

from kanbandoc.config import DEFAULTS, init_repo, is_git_repo, read_config, write_config_key


def test_defaults(temp_repo):
    config = read_config(temp_repo)
    assert config["branch"] == DEFAULTS["branch"]
    assert config["display_ids"] == "sequential"
    assert config["color_attempts"] == 20
    assert config["default_template"] == "Standard 3 columns"


def test_write_and_read(temp_repo):
    write_config_key(temp_repo, "display_ids", "random")
    write_config_key(temp_repo, "color_attempts", 5)
    config = read_config(temp_repo)
    assert config["display_ids"] == "random"
    assert config["color_attempts"] == 5


def test_bad_int_falls_back(temp_repo):
    write_config_key(temp_repo, "color_attempts", "lots")
    assert read_config(temp_repo)["color_attempts"] == 20


def test_is_git_repo(temp_repo, tmp_path):
    assert is_git_repo(temp_repo)
    assert not is_git_repo(tmp_path / "missing")

    plain = tmp_path / "plain"
    plain.mkdir()
    assert not is_git_repo(plain)
    init_repo(plain)
    assert is_git_repo(plain)
