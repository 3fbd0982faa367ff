# どこで: `src/shapegrid/interactive/runtime/parameter_gui_system.py`。
# 何を: Parameter GUI を「1フレーム描画できるサブシステム」として提供する。
# なぜ: `src/shapegrid/api/runner.py` の `run()` から GUI 初期化/描画/後始末を分離するため。

from __future__ import annotations

from shapegrid.core.runtime_config import runtime_config
from shapegrid.core.shape_grid import ShapeGrid
from shapegrid.interactive.parameter_gui import ParameterGUI, create_parameter_gui_window


class ParameterGUIWindowSystem:
    """Parameter GUI（別ウィンドウ）のサブシステム。"""

    def __init__(self, *, grid: ShapeGrid) -> None:
        """GUI 用の window と ParameterGUI を初期化する。"""

        cfg = runtime_config()
        w, h = cfg.parameter_gui_window_size
        self.window = create_parameter_gui_window(
            width=w,
            height=h,
            position=cfg.window_pos_parameter_gui,
        )
        self._gui = ParameterGUI(self.window, grid=grid)

    def draw_frame(self) -> None:
        """1 フレーム分の GUI を描画する（`flip()` は呼ばない）。"""

        self._gui.draw_frame()

    def close(self) -> None:
        """GUI を終了し、ウィンドウを破棄する。"""

        self._gui.close()
