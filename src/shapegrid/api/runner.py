"""
どこで: `src/shapegrid/api/runner.py`。公開 API のランナー実装。
何を: pyglet + ModernGL で図形グリッドを描画し、Parameter GUI から操作できるランナーを提供する。
なぜ: エンジン（core）とウィンドウ/GUI（interactive）を 1 か所で配線するため。
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable

import pyglet

from shapegrid.core.parameters import GridParams
from shapegrid.core.runtime_config import runtime_config
from shapegrid.core.scene import RetainedScene
from shapegrid.core.shape_grid import ShapeGrid
from shapegrid.interactive.render_settings import RenderSettings
from shapegrid.interactive.runtime.draw_window_system import DrawWindowSystem
from shapegrid.interactive.runtime.window_loop import WindowTask, run_windows

from ._params import make_rng, resolve_initial_params


def run(
    params: GridParams | Mapping[str, Any] | None = None,
    *,
    config_path: str | Path | None = None,
    parameter_gui: bool = True,
    seed: int | None = None,
    line_thickness: float | None = None,
    render_scale: float = 1.0,
    canvas_size: tuple[int, int] | None = None,
    fps: float = 60.0,
) -> None:
    """pyglet ウィンドウを生成し、図形グリッドをリアルタイム描画する。

    Parameters
    ----------
    params : GridParams or Mapping or None
        初期パラメータ。Mapping の場合は config.yaml の `params` に上書きする。
    config_path : str | Path | None
        設定ファイル（config.yaml）のパス。指定した場合は探索より優先する。
    parameter_gui : bool
        True の場合、別ウィンドウでコントロールパネルを起動する。
    seed : int | None
        合成グリッドの乱数 seed。None なら毎回異なる。
    line_thickness : float | None
        プレビュー用線幅（clip 空間）。None なら config の `canvas.line_thickness`。
    render_scale : float
        キャンバス寸法に掛けるピクセル倍率。
    canvas_size : tuple[int, int] | None
        キャンバスのピクセル寸法。None なら config の `canvas.size`。
    fps : float
        目標フレームレート。`<=0` の場合はスロットリングしない。

    Returns
    -------
    None
        どちらかのウィンドウを閉じると制御を返す。
    """

    resolved = resolve_initial_params(params, config_path=config_path)
    cfg = runtime_config()

    # True にすると Parameter GUI のクリックやドラッグが抜ける事がある。
    pyglet.options["vsync"] = False

    settings = RenderSettings(
        line_thickness=float(
            cfg.line_thickness if line_thickness is None else line_thickness
        ),
        render_scale=float(render_scale),
        canvas_size=cfg.canvas_size if canvas_size is None else canvas_size,
        window_pos=cfg.window_pos_draw,
    )

    # シーンとエンジンは描画と GUI で共有する（単一スレッドで交互に触る）。
    scene = RetainedScene()
    grid = ShapeGrid(resolved, scene, rng=make_rng(seed))

    draw_window = DrawWindowSystem(grid, scene, settings=settings)

    # `closers` は teardown 用（close 順もここで管理する）。
    closers: list[Callable[[], None]] = [draw_window.close]
    tasks = [WindowTask(window=draw_window.window, draw_frame=draw_window.draw_frame)]

    if parameter_gui:
        # Parameter GUI は依存が重い（pyimgui）ので、使うときだけ遅延 import する。
        from shapegrid.interactive.runtime.parameter_gui_system import (
            ParameterGUIWindowSystem,
        )

        gui = ParameterGUIWindowSystem(grid=grid)
        closers.append(gui.close)
        tasks.append(WindowTask(window=gui.window, draw_frame=gui.draw_frame))

    # tick（アニメーション更新）は各フレームの描画前に 1 回だけ行う。
    try:
        run_windows(tasks, fps=fps, on_tick=draw_window.tick)
    finally:
        try:
            grid.dispose()
        finally:
            # 作成順の逆で閉じることで、後に作ったサブシステム（GUI など）から先に破棄できる。
            for close in reversed(closers):
                close()
