from __future__ import annotations

from pathlib import Path

from sweetkicks_core.home import ensure_sweetkicks_layout, resolve_sweetkicks_home


def test_resolve_sweetkicks_home_from_env(tmp_path: Path) -> None:
    home = resolve_sweetkicks_home({"SWEETKICKS_HOME": str(tmp_path)})
    assert home == tmp_path.resolve()


def test_ensure_sweetkicks_layout_creates_required_dirs(tmp_path: Path) -> None:
    paths = ensure_sweetkicks_layout(tmp_path)

    assert paths.home.exists()
    assert paths.logs_dir.is_dir()
    assert paths.config_dir.is_dir()
    assert paths.core_config_path == tmp_path / "config" / "core.json"
