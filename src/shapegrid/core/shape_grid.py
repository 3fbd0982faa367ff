# どこで: `src/shapegrid/core/shape_grid.py`。
# 何を: 合成グリッド・表示グリッド・アニメーション時計・シーン上のプリミティブを束ねる ShapeGrid を提供する。
# なぜ: パラメータ変更（再構築/再配置）とフレーム更新を 1 つの窓口から同期的に行うため。

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import numpy as np

from shapegrid.core.animation import AnimationClock, CellPose, compute_frame, rest_pose
from shapegrid.core.catalog import available_shape_names, outline_or_default
from shapegrid.core.composition import build_composition
from shapegrid.core.display_grid import DisplayCell, build_display_cells, grid_line_segments
from shapegrid.core.parameters import PARAM_META, TOPOLOGY_PARAMS, AnimationType, GridParams
from shapegrid.core.scene import GRID_LAYER, SHAPE_LAYER, SceneAdapter, ScenePrimitive

_logger = logging.getLogger(__name__)

GRID_LINE_COLOR = (255, 0, 0)

# キーボード操作での増減に使うクランプ範囲（GUI スライダー範囲とは別）。
_NUDGE_LIMITS: dict[str, tuple[float, float]] = {
    "animation_speed": (0.01, 2.0),
    "movement_amplitude": (0.0, 0.5),
    "rotation_amplitude": (0.0, 2.0),
    "scale_amplitude": (0.0, 1.0),
}

_TOGGLES = frozenset(
    {
        "show_grid",
        "enable_shape_cycling",
        "enable_size_animation",
        "enable_center_scaling",
        "center_scaling_animated",
    }
)

# 変更時に全セルの静止スケールを計算し直すパラメータ。
_CENTER_SCALING_PARAMS = frozenset(
    name
    for name in PARAM_META
    if name == "enable_center_scaling" or name.startswith("center_scaling_")
)


class ShapeGrid:
    """図形グリッドのエンジン本体。

    Parameters
    ----------
    params : GridParams
        パラメータ。変更は `update()` 経由で行う。
    scene : SceneAdapter
        プリミティブの追加/削除/変換を受け持つシーン。
    rng : numpy.random.Generator or None, optional
        合成グリッドと `randomize()` の乱数源。None なら `default_rng()`。

    Notes
    -----
    生成直後に `rebuild()` を 1 回行い、グリッドを埋めた状態にする。
    """

    def __init__(
        self,
        params: GridParams,
        scene: SceneAdapter,
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._params = params
        self._scene = scene
        self._rng = rng if rng is not None else np.random.default_rng()
        self._clock = AnimationClock()
        self._pool: tuple[str, ...] = ()
        self._composition: tuple[str, ...] = ()
        self._cells: list[DisplayCell] = []
        self._grid_primitive: ScenePrimitive | None = None
        self.rebuild()

    # --- 参照 ---

    @property
    def params(self) -> GridParams:
        return self._params

    @property
    def clock(self) -> AnimationClock:
        return self._clock

    @property
    def pool(self) -> tuple[str, ...]:
        """有効カテゴリの正準プール（直近の rebuild 時点）。"""
        return self._pool

    @property
    def composition(self) -> tuple[str, ...]:
        return self._composition

    @property
    def cells(self) -> list[DisplayCell]:
        return self._cells

    @property
    def is_animating(self) -> bool:
        p = self._params
        return bool(
            p.enable_shape_cycling
            or p.enable_size_animation
            or (p.enable_center_scaling and p.center_scaling_animated)
        )

    # --- 構築 ---

    def rebuild(self) -> None:
        """合成グリッドと表示グリッドを丸ごと作り直す。"""
        p = self._params
        self._pool = available_shape_names(p.enabled_shapes)
        self._composition = build_composition(
            width=p.composition_width,
            height=p.composition_height,
            pool=self._pool,
            randomness=p.randomness,
            rng=self._rng,
        )

        self._release_cells()
        self._cells = build_display_cells(p, self._composition)
        for cell in self._cells:
            if p.enable_center_scaling:
                cell.scale = rest_pose(cell.x, cell.y, p, self._clock.time).scale
            primitive = ScenePrimitive(
                geometry=outline_or_default(cell.current_shape),
                color=p.shape_color,
                position=cell.position,
                rotation=cell.rotation,
                scale=cell.scale,
                layer=SHAPE_LAYER,
            )
            self._scene.add(primitive)
            cell.primitive = primitive
        self._refresh_grid_overlay()
        _logger.debug(
            "rebuild: display=%dx%d composition=%dx%d pool=%d",
            p.grid_width,
            p.grid_height,
            p.composition_width,
            p.composition_height,
            len(self._pool),
        )

    def relayout(self) -> None:
        """全セルを基準配置（回転 0、中心スケーリング込み）へ戻す。再構築はしない。"""
        p = self._params
        time = self._clock.time
        for cell in self._cells:
            self._apply_pose(cell, rest_pose(cell.x, cell.y, p, time))
        self._refresh_grid_overlay()

    def dispose(self) -> None:
        """保持している全プリミティブを破棄してシーンから外す。"""
        self._release_cells()
        self._cells = []
        self._release_grid_overlay()

    # --- フレーム更新 ---

    def tick(self, delta: float) -> None:
        """経過秒 `delta` だけアニメーションを進め、表示セルを更新する。

        どちらのトグルも無効な間は時計を進めず、何もしない。
        """
        if not self.is_animating:
            return
        p = self._params
        time = self._clock.advance(delta, p.animation_speed)
        frame = compute_frame(self._cells, p, time, self._pool)

        for cell, pose in zip(self._cells, frame.poses):
            self._apply_pose(cell, pose)
        for index, name in frame.shape_changes.items():
            cell = self._cells[index]
            if cell.primitive is not None:
                self._scene.replace_geometry(cell.primitive, outline_or_default(name))
            cell.current_shape = name

    # --- パラメータ変更 ---

    def update(self, **changes: Any) -> dict[str, Any]:
        """パラメータを変更し、必要な再構築/再配置/時計リセットを行う。

        Returns
        -------
        dict[str, Any]
            実際に値が変わった項目。

        Raises
        ------
        ValueError
            未知のパラメータ名、または不正な値が含まれる場合。
        """
        changed = self._params.apply(changes)
        if changed:
            self._on_params_changed(changed)
        return changed

    def apply_mapping(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        return self.update(**dict(changes))

    def _on_params_changed(self, changed: Mapping[str, Any]) -> None:
        p = self._params
        names = set(changed)
        _logger.debug("params changed: %s", sorted(names))

        # 時計のリセットは再配置より先に行い、静止ポーズを新しい時刻で計算させる。
        if changed.get("enable_shape_cycling") is True:
            self._clock.reset()
        if changed.get("enable_size_animation") is True:
            self._clock.reset()
        if (p.enable_center_scaling and p.center_scaling_animated) and (
            changed.get("enable_center_scaling") is True
            or changed.get("center_scaling_animated") is True
        ):
            self._clock.reset()

        if names & TOPOLOGY_PARAMS:
            if self.is_animating:
                self._clock.reset()
            self.rebuild()
        else:
            if (
                "cell_size" in names
                or ("enable_size_animation" in names and not p.enable_size_animation)
                or names & _CENTER_SCALING_PARAMS
            ):
                self.relayout()
            elif "show_grid" in names:
                self._refresh_grid_overlay()
            if "shape_color" in names:
                self._restyle()

    # --- キーボード由来の操作 ---

    def randomize(self) -> float:
        """randomness を一様乱数で置き換えて再構築し、新しい値を返す。"""
        value = float(self._rng.random())
        self.update(randomness=value)
        return value

    def next_animation_type(self) -> AnimationType:
        """アニメーションモードを次へ巡回させる。"""
        current = AnimationType(self._params.animation_type)
        nxt = AnimationType((int(current) + 1) % len(AnimationType))
        self.update(animation_type=nxt)
        return nxt

    def toggle(self, name: str) -> bool:
        """bool パラメータを反転し、新しい値を返す。"""
        if name not in _TOGGLES:
            raise ValueError(f"トグルできないパラメータ: {name!r}")
        value = not bool(getattr(self._params, name))
        self.update(**{name: value})
        return value

    def nudge(self, name: str, delta: float) -> float:
        """数値パラメータを delta だけ増減し（範囲にクランプ）、新しい値を返す。"""
        if name in _NUDGE_LIMITS:
            lo, hi = _NUDGE_LIMITS[name]
        else:
            meta = PARAM_META.get(name)
            if meta is None or meta.kind != "float":
                raise ValueError(f"増減できないパラメータ: {name!r}")
            lo, hi = float(meta.ui_min), float(meta.ui_max)
        value = float(getattr(self._params, name)) + float(delta)
        value = min(hi, max(lo, value))
        # 0.1 刻みの加減算で生じる 2 進誤差を丸める。
        value = round(value, 6)
        self.update(**{name: value})
        return value

    # --- 内部 ---

    def _apply_pose(self, cell: DisplayCell, pose: CellPose) -> None:
        cell.position = pose.position
        cell.rotation = pose.rotation
        cell.scale = pose.scale
        if cell.primitive is not None:
            self._scene.set_transform(
                cell.primitive,
                position=pose.position,
                rotation=pose.rotation,
                scale=pose.scale,
            )

    def _release_cells(self) -> None:
        for cell in self._cells:
            primitive = cell.primitive
            if primitive is None:
                continue
            self._scene.dispose(primitive)
            self._scene.remove(primitive)
            cell.primitive = None

    def _release_grid_overlay(self) -> None:
        if self._grid_primitive is not None:
            self._scene.dispose(self._grid_primitive)
            self._scene.remove(self._grid_primitive)
            self._grid_primitive = None

    def _refresh_grid_overlay(self) -> None:
        self._release_grid_overlay()
        p = self._params
        if not p.show_grid:
            return
        primitive = ScenePrimitive(
            geometry=grid_line_segments(p.grid_width, p.grid_height, p.cell_size),
            color=GRID_LINE_COLOR,
            layer=GRID_LAYER,
        )
        self._scene.add(primitive)
        self._grid_primitive = primitive

    def _restyle(self) -> None:
        color = self._params.shape_color
        for cell in self._cells:
            if cell.primitive is not None:
                self._scene.replace_geometry(cell.primitive, cell.primitive.geometry, color=color)


__all__ = ["GRID_LINE_COLOR", "ShapeGrid"]
