"""CLI（`shapegrid.api.cli`）のテスト。ウィンドウを開かない経路のみ。"""

from __future__ import annotations

from pathlib import Path

import pytest

from shapegrid.api.cli import build_parser, main
from shapegrid.core.runtime_config import set_config_path


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    set_config_path(None)
    yield
    set_config_path(None)


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])
    assert args.config is None
    assert args.seed is None
    assert not args.no_gui
    assert args.export_svg is None
    assert args.log_level == "WARNING"


def test_parser_upper_cases_log_level() -> None:
    assert build_parser().parse_args(["--log-level", "debug"]).log_level == "DEBUG"


def test_main_export_svg_writes_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "cli.svg"
    assert main(["--export-svg", str(out), "--seed", "4"]) == 0
    assert out.is_file()
    assert "Saved SVG" in capsys.readouterr().out


def test_main_uses_config_file(tmp_path: Path) -> None:
    cfg = tmp_path / "config.yaml"
    cfg.write_text("canvas:\n  size: [320, 240]\n", encoding="utf-8")
    out = tmp_path / "cfg.svg"
    assert main(["--config", str(cfg), "--export-svg", str(out)]) == 0
    assert 'width="320"' in out.read_text(encoding="utf-8")
