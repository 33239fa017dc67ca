"""Tests for taja.core.script – YAML-based script loading."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from taja.core.script import DEFAULT_SCRIPT_KEY, Script, ScriptRepository, load_script_file
from taja.core.session import TypingSession


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def scripts_dir(tmp_path: Path) -> Path:
    d = tmp_path / "data" / "scripts"
    d.mkdir(parents=True)
    return d


def _write_yaml(path: Path, data: dict) -> None:
    path.write_text(yaml.dump(data, allow_unicode=True, default_flow_style=False), encoding="utf-8")


# ---------------------------------------------------------------------------
# Script dataclass
# ---------------------------------------------------------------------------

class TestScriptDataclass:
    def test_creation(self):
        sc = Script(key="s", title="Song", lines=("ab", "c"))
        assert sc.key == "s"
        assert sc.title == "Song"
        assert sc.lines == ("ab", "c")

    def test_char_count(self):
        assert Script(key="s", title="Song", lines=("ab", "c")).char_count == 3

    def test_frozen(self):
        sc = Script(key="s", title="Song", lines=("a",))
        with pytest.raises(AttributeError):
            sc.title = "Other"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# load_script_file – happy paths
# ---------------------------------------------------------------------------

class TestLoadScriptFile:
    def test_list_content(self, scripts_dir: Path):
        path = scripts_dir / "song.yaml"
        _write_yaml(path, {"title": "Song", "content": ["첫 줄", "둘째 줄"]})
        sc = load_script_file(path)
        assert sc.key == "song"
        assert sc.title == "Song"
        assert sc.lines == ("첫 줄", "둘째 줄")

    def test_multiline_string_content(self, scripts_dir: Path):
        path = scripts_dir / "song.yaml"
        path.write_text("title: Song\ncontent: |\n  one\n\n  two\n", encoding="utf-8")
        assert load_script_file(path).lines == ("one", "two")

    def test_strips_and_drops_blank(self, scripts_dir: Path):
        path = scripts_dir / "song.yaml"
        _write_yaml(path, {"title": "  Song  ", "content": ["  a  ", "", "   ", "b"]})
        sc = load_script_file(path)
        assert sc.title == "Song"
        assert sc.lines == ("a", "b")

    def test_non_string_items(self, scripts_dir: Path):
        path = scripts_dir / "nums.yaml"
        _write_yaml(path, {"title": "Numbers", "content": [123, 4.5]})
        assert load_script_file(path).lines == ("123", "4.5")


# ---------------------------------------------------------------------------
# load_script_file – errors
# ---------------------------------------------------------------------------

class TestLoadScriptFileErrors:
    def test_missing_file(self, scripts_dir: Path):
        with pytest.raises(FileNotFoundError):
            load_script_file(scripts_dir / "missing.yaml")

    def test_empty_file(self, scripts_dir: Path):
        path = scripts_dir / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ValueError, match="expected YAML"):
            load_script_file(path)

    def test_not_a_mapping(self, scripts_dir: Path):
        path = scripts_dir / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="expected YAML"):
            load_script_file(path)

    def test_missing_title(self, scripts_dir: Path):
        path = scripts_dir / "notitle.yaml"
        _write_yaml(path, {"content": ["a"]})
        with pytest.raises(ValueError, match="title"):
            load_script_file(path)

    def test_missing_content(self, scripts_dir: Path):
        path = scripts_dir / "nocontent.yaml"
        _write_yaml(path, {"title": "T"})
        with pytest.raises(ValueError, match="missing 'content'"):
            load_script_file(path)

    def test_blank_content(self, scripts_dir: Path):
        path = scripts_dir / "blank.yaml"
        _write_yaml(path, {"title": "T", "content": ["", "  "]})
        with pytest.raises(ValueError, match="no lines"):
            load_script_file(path)

    def test_invalid_yaml(self, scripts_dir: Path):
        path = scripts_dir / "broken.yaml"
        path.write_text("title: [unclosed\n", encoding="utf-8")
        with pytest.raises(ValueError, match="invalid YAML"):
            load_script_file(path)


# ---------------------------------------------------------------------------
# ScriptRepository
# ---------------------------------------------------------------------------

class TestScriptRepository:
    def test_loads_all_sorted(self, scripts_dir: Path):
        _write_yaml(scripts_dir / "b.yaml", {"title": "B", "content": ["b"]})
        _write_yaml(scripts_dir / "a.yaml", {"title": "A", "content": ["a"]})
        repo = ScriptRepository(scripts_dir)
        assert [sc.key for sc in repo.all()] == ["a", "b"]

    def test_get(self, scripts_dir: Path):
        _write_yaml(scripts_dir / "a.yaml", {"title": "A", "content": ["a"]})
        assert ScriptRepository(scripts_dir).get("a").title == "A"

    def test_get_missing_raises(self, scripts_dir: Path):
        _write_yaml(scripts_dir / "a.yaml", {"title": "A", "content": ["a"]})
        with pytest.raises(KeyError):
            ScriptRepository(scripts_dir).get("zzz")

    def test_default_prefers_default_key(self, scripts_dir: Path):
        _write_yaml(scripts_dir / "a.yaml", {"title": "A", "content": ["a"]})
        _write_yaml(scripts_dir / f"{DEFAULT_SCRIPT_KEY}.yaml", {"title": "D", "content": ["d"]})
        assert ScriptRepository(scripts_dir).default().key == DEFAULT_SCRIPT_KEY

    def test_default_falls_back_to_first(self, scripts_dir: Path):
        _write_yaml(scripts_dir / "b.yaml", {"title": "B", "content": ["b"]})
        _write_yaml(scripts_dir / "a.yaml", {"title": "A", "content": ["a"]})
        assert ScriptRepository(scripts_dir).default().key == "a"

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            ScriptRepository(tmp_path / "nope")

    def test_empty_directory(self, scripts_dir: Path):
        with pytest.raises(ValueError, match="No script files"):
            ScriptRepository(scripts_dir)

    def test_ignores_non_yaml(self, scripts_dir: Path):
        (scripts_dir / "notes.txt").write_text("hello", encoding="utf-8")
        _write_yaml(scripts_dir / "a.yaml", {"title": "A", "content": ["a"]})
        assert [sc.key for sc in ScriptRepository(scripts_dir).all()] == ["a"]


# ---------------------------------------------------------------------------
# Bundled script
# ---------------------------------------------------------------------------

class TestBundledScript:
    def test_default_is_anthem(self):
        sc = ScriptRepository().default()
        assert sc.key == "anthem"
        assert len(sc.lines) == 4
        assert sc.lines[0] == "동해 물과 백두산이 마르고 닳도록"
        assert sc.lines[-1] == "대한 사람 대한으로 길이 보전하세"

    def test_bundled_script_can_be_typed_to_victory(self):
        sc = ScriptRepository().default()
        session = TypingSession(sc.lines)
        assert session.total_chars == sc.char_count
        for line in sc.lines:
            for ch in line:
                session.submit(ch)
        assert session.awaiting_restart is True
        assert session.health == 0.0
        assert session.line_state() == (3, len(sc.lines[3]))
