from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SCRIPT_KEY = "anthem"
SCRIPTS_DIR = Path(__file__).resolve().parent.parent / "data" / "scripts"


@dataclass(frozen=True)
class Script:
    key: str
    title: str
    lines: Tuple[str, ...]

    @property
    def char_count(self) -> int:
        return sum(len(line) for line in self.lines)


def _content_lines(content: object) -> List[str]:
    """Non-blank, stripped lines from a YAML list or a block string."""
    items = content if isinstance(content, list) else str(content).splitlines()
    return [text for text in (str(item).strip() for item in items) if text]


def _parse_script(key: str, source_name: str, raw: object) -> Script:
    if not isinstance(raw, dict) or not raw:
        raise ValueError(f"{source_name}: expected YAML with 'title' and 'content'")
    title = raw.get("title")
    if not isinstance(title, str) or not title.strip():
        raise ValueError(f"{source_name}: missing or invalid 'title'")
    if "content" not in raw or raw["content"] is None:
        raise ValueError(f"{source_name}: missing 'content'")
    lines = _content_lines(raw["content"])
    if not lines:
        raise ValueError(f"{source_name}: 'content' has no lines")
    return Script(key=key, title=title.strip(), lines=tuple(lines))


def load_script_file(path: Path) -> Script:
    """Load a single script YAML file; the file stem becomes the script key."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Script file not found: {path}")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"{path.name}: invalid YAML: {e}") from e
    return _parse_script(path.stem, path.name, raw)


class ScriptRepository:
    """Scripts bundled as ``*.yaml`` files under ``data/scripts``."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else SCRIPTS_DIR
        self._scripts = self._load_scripts()

    def all(self) -> List[Script]:
        return list(self._scripts.values())

    def get(self, key: str) -> Script:
        return self._scripts[key]

    def default(self) -> Script:
        if DEFAULT_SCRIPT_KEY in self._scripts:
            return self._scripts[DEFAULT_SCRIPT_KEY]
        return next(iter(self._scripts.values()))

    def _load_scripts(self) -> Dict[str, Script]:
        if not self._base_dir.exists():
            raise FileNotFoundError(f"Scripts directory not found: {self._base_dir}")

        scripts: Dict[str, Script] = {}
        for script_path in sorted(self._base_dir.glob("*.yaml")):
            scripts[script_path.stem] = load_script_file(script_path)
            logger.debug("Loaded script %s from %s", script_path.stem, script_path)

        if not scripts:
            raise ValueError(f"No script files (*.yaml) found in {self._base_dir}")
        return scripts
