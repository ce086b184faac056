"""Tests for configuration loading and precedence."""

import pytest

from smart_paste.config import Config
from smart_paste.editing.preview import DEFAULT_MARKERS


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("SMART_PASTE_OVERLAP_POLICY", "SMART_PASTE_STRICT_LINE_COUNTS",
                "SMART_PASTE_USE_TUI", "SMART_PASTE_LOG_DIR",
                "SMART_PASTE_CLIPBOARD_TIMEOUT"):
        monkeypatch.delenv(key, raising=False)


class TestDefaults:
    def test_defaults(self):
        cfg = Config()
        assert cfg.OVERLAP_POLICY == "reject"
        assert cfg.STRICT_LINE_COUNTS is False
        assert cfg.USE_TUI is True
        assert cfg.LOG_DIR == ".smartpaste/logs"
        assert cfg.CLIPBOARD_TIMEOUT == 5.0
        assert cfg.MARKERS == DEFAULT_MARKERS


class TestYaml:
    def test_load_from_explicit_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text(
            "overlap_policy: allow\n"
            "strict_line_counts: true\n"
            "use_tui: false\n"
            "clipboard_timeout: 2\n"
            "markers:\n"
            "  add: '+'\n"
            "  bogus: '?'\n",
            encoding="utf-8",
        )
        cfg = Config.load(str(path))

        assert cfg.OVERLAP_POLICY == "allow"
        assert cfg.STRICT_LINE_COUNTS is True
        assert cfg.USE_TUI is False
        assert cfg.CLIPBOARD_TIMEOUT == 2.0
        assert cfg.MARKERS["add"] == "+"
        assert cfg.MARKERS["remove"] == DEFAULT_MARKERS["remove"]
        assert "bogus" not in cfg.MARKERS

    def test_found_in_cwd(self, tmp_path, monkeypatch):
        (tmp_path / ".smartpaste.yaml").write_text("overlap_policy: allow\n",
                                                   encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert Config.load().OVERLAP_POLICY == "allow"

    def test_missing_explicit_path_uses_defaults(self, tmp_path):
        cfg = Config.load(str(tmp_path / "nope.yaml"))
        assert cfg.OVERLAP_POLICY == "reject"

    def test_invalid_yaml_uses_defaults(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("overlap_policy: [unclosed\n", encoding="utf-8")
        assert Config.load(str(path)).OVERLAP_POLICY == "reject"

    def test_unknown_policy_falls_back(self):
        assert Config({"overlap_policy": "merge"}).OVERLAP_POLICY == "reject"


class TestEnvironment:
    def test_env_beats_yaml(self, monkeypatch):
        monkeypatch.setenv("SMART_PASTE_OVERLAP_POLICY", "ALLOW")
        monkeypatch.setenv("SMART_PASTE_USE_TUI", "false")
        cfg = Config({"overlap_policy": "reject", "use_tui": True})
        assert cfg.OVERLAP_POLICY == "allow"
        assert cfg.USE_TUI is False

    def test_env_numeric_cast(self, monkeypatch):
        monkeypatch.setenv("SMART_PASTE_CLIPBOARD_TIMEOUT", "0.5")
        assert Config().CLIPBOARD_TIMEOUT == 0.5

    def test_non_numeric_timeout_falls_back(self, tmp_path, monkeypatch):
        path = tmp_path / ".smartpaste.yaml"
        path.write_text("use_tui: false\n", encoding="utf-8")
        monkeypatch.setenv("SMART_PASTE_CLIPBOARD_TIMEOUT", "soon")
        cfg = Config.load(str(path))
        assert cfg.CLIPBOARD_TIMEOUT == 5.0
        assert cfg.USE_TUI is False

    def test_non_numeric_yaml_timeout_falls_back(self):
        assert Config({"clipboard_timeout": "later"}).CLIPBOARD_TIMEOUT == 5.0
