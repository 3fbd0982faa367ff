# どこで: `src/shapegrid/core/animation.py`。
# 何を: 共有アニメーション時計と、セルごとの移動/回転/スケール/中心スケーリング/シェイプ循環を純関数として計算する。
# なぜ: フレーム更新をシーングラフから切り離し、描画系なしで検証できるようにするため。

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from shapegrid.core.display_grid import base_position
from shapegrid.core.parameters import (
    AnimationType,
    CenterScalingCurve,
    CenterScalingDirection,
    CenterScalingWave,
)

if TYPE_CHECKING:
    from shapegrid.core.display_grid import DisplayCell
    from shapegrid.core.parameters import GridParams


class AnimationClock:
    """シーン全体で共有する単調増加のアニメーション時計。

    `advance()` は呼び出し側がトグル状態を見て呼ぶ。時計自身はトグルを知らない。
    """

    def __init__(self, time: float = 0.0) -> None:
        self._time = float(time)

    @property
    def time(self) -> float:
        return self._time

    def advance(self, delta: float, speed: float) -> float:
        """`time += delta * speed` を適用し、更新後の時刻を返す。"""
        self._time += float(delta) * float(speed)
        return self._time

    def reset(self) -> None:
        self._time = 0.0

    def __repr__(self) -> str:
        return f"AnimationClock(time={self._time!r})"


def cycle_shape_name(
    time: float,
    x: int,
    y: int,
    pool: Sequence[str],
    speed: float,
) -> str | None:
    """時刻とセル座標から決定的に選ばれる図形名を返す。プールが空なら None。"""
    n = len(pool)
    if n == 0:
        return None
    seed = x * 1000 + y * 100
    phase = float(time) * float(speed) + seed * 0.1
    idx = int(math.floor(abs(math.sin(phase)) * n)) % n
    return pool[idx]


def movement_offset(
    time: float,
    x: int,
    y: int,
    *,
    amplitude: float,
    frequency: float,
    cell_size: float,
) -> tuple[float, float]:
    """移動モードの位置オフセット (dx, dy) を返す。"""
    t = float(time) * float(frequency)
    a = float(amplitude) * float(cell_size)
    return math.sin(t + x * 0.5) * a, math.cos(t + y * 0.5) * a


def rotation_angle(
    time: float,
    x: int,
    y: int,
    *,
    amplitude: float,
    frequency: float,
) -> float:
    """回転モードの z 軸回転角 [rad] を返す。"""
    return math.sin(float(time) * float(frequency) + x * 0.3 + y * 0.3) * float(amplitude)


def scale_factor(
    time: float,
    x: int,
    y: int,
    *,
    amplitude: float,
    frequency: float,
) -> float:
    """スケールモードの倍率（cell_size に掛ける係数）を返す。"""
    return 1.0 + math.sin(float(time) * float(frequency) + x * 0.5 + y * 0.5) * float(amplitude)


# 中心スケーリングの揺らぎと最終倍率のクランプ範囲。
_CENTER_WAVE_LIMIT = 0.5
_CENTER_FACTOR_MIN = 0.1
_CENTER_FACTOR_MAX = 3.0


def center_curve(distance: float, curve: CenterScalingCurve) -> float:
    """正規化距離 `distance` (0..1) に曲線を適用した値を返す。"""
    d = float(distance)
    curve = CenterScalingCurve(curve)
    if curve is CenterScalingCurve.EXPONENTIAL:
        return d * d
    if curve is CenterScalingCurve.LOGARITHMIC:
        return math.log2(d + 1.0) if d > 0.0 else 0.0
    if curve is CenterScalingCurve.SINE:
        return math.sin(d * math.pi)
    return d


def center_wave(
    time: float,
    x: int,
    y: int,
    *,
    wave: CenterScalingWave,
    center: tuple[float, float],
    distance: float,
) -> float:
    """中心スケーリングへ加える揺らぎ（±0.5 にクランプ済み）を返す。

    `distance` は中心からの物理距離（cell_size 込み）。
    """
    t = float(time)
    wave = CenterScalingWave(wave)
    if wave is CenterScalingWave.RADIAL:
        offset = math.sin(t * 3.0 + math.hypot(x, y) * 0.5) * 0.5
    elif wave is CenterScalingWave.SPIRAL:
        angle = math.atan2(y - center[1], x - center[0])
        offset = math.sin(t * 2.0 + angle * 3.0 + distance * 0.2) * 0.4
    elif wave is CenterScalingWave.CHAOS:
        offset = (
            math.sin(t * 1.5 + x * 0.8 + y * 0.6) * 0.3
            + math.cos(t * 0.8 + x * 0.4 + y * 0.9) * 0.3
            + math.sin(t * 2.2 + (x + y) * 0.7) * 0.2
        )
    else:
        offset = (
            math.sin(t + x * 0.3 + y * 0.2) * 0.4
            + math.cos(t * 0.7 + x * 0.4 + y * 0.1) * 0.3
            + math.sin(t * 2.0 + (x + y) * 0.1) * 0.3
        )
    return min(_CENTER_WAVE_LIMIT, max(-_CENTER_WAVE_LIMIT, offset))


def center_scaling_factor(x: int, y: int, params: "GridParams", time: float) -> float:
    """グリッド中心からの距離に応じたセル (x, y) のスケール倍率を返す。

    Parameters
    ----------
    x, y : int
        表示グリッド上のセル座標。
    params : GridParams
        `enable_center_scaling` が False なら常に 1.0。
    time : float
        アニメーション時計の時刻。`center_scaling_animated` が True のときだけ使い、
        `center_scaling_speed` を掛けて揺らぎの位相にする。

    Returns
    -------
    float
        `1 + curve(d) * intensity + wave` を [0.1, 3.0] にクランプした値。
        INWARD では `2 - (...)` に反転してからクランプする。

    Notes
    -----
    d は中心からの距離を「中心から角セルまでの距離 * radius」で割り 1 で頭打ちにしたもの。
    1x1 グリッドのように分母が 0 のときは d = 0。
    """
    if not params.enable_center_scaling:
        return 1.0

    cs = float(params.cell_size)
    cx = (params.grid_width - 1) / 2.0
    cy = (params.grid_height - 1) / 2.0
    distance = math.hypot((x - cx) * cs, (y - cy) * cs)
    max_distance = math.hypot(cx * cs, cy * cs) * float(params.center_scaling_radius)
    normalized = min(distance / max_distance, 1.0) if max_distance > 0.0 else 0.0

    factor = 1.0 + center_curve(normalized, params.center_scaling_curve) * float(
        params.center_scaling_intensity
    )
    if params.center_scaling_animated:
        factor += center_wave(
            float(time) * float(params.center_scaling_speed),
            x,
            y,
            wave=params.center_scaling_wave,
            center=(cx, cy),
            distance=distance,
        )
    if CenterScalingDirection(params.center_scaling_direction) is CenterScalingDirection.INWARD:
        factor = 2.0 - factor
    return min(_CENTER_FACTOR_MAX, max(_CENTER_FACTOR_MIN, factor))


@dataclass(frozen=True, slots=True)
class CellPose:
    """セルの配置（中心・z 回転・等方スケール）。"""

    position: tuple[float, float]
    rotation: float
    scale: float


def base_pose(x: int, y: int, params: "GridParams") -> CellPose:
    """セル (x, y) の基準配置（回転 0、スケール cell_size）を返す。"""
    return CellPose(
        position=base_position(
            x,
            y,
            grid_width=params.grid_width,
            grid_height=params.grid_height,
            cell_size=params.cell_size,
        ),
        rotation=0.0,
        scale=float(params.cell_size),
    )


def rest_pose(x: int, y: int, params: "GridParams", time: float) -> CellPose:
    """基準配置のスケールに中心スケーリング倍率を掛けた配置を返す。"""
    pose = base_pose(x, y, params)
    factor = center_scaling_factor(x, y, params, time)
    if factor == 1.0:
        return pose
    return CellPose(position=pose.position, rotation=pose.rotation, scale=pose.scale * factor)


def animated_pose(cell: "DisplayCell", params: "GridParams", time: float) -> CellPose:
    """現在のモードと時刻に応じたセルの配置を返す。

    サイズアニメーションが無効なら `rest_pose()` を返す。有効なら選択モードの成分だけを
    基準値から動かし、それ以外の成分は基準値に留める。中心スケーリングの倍率は
    どちらの場合もスケールへ掛かる。
    """
    pose = rest_pose(cell.x, cell.y, params, time)
    if not params.enable_size_animation:
        return pose

    mode = AnimationType(params.animation_type)
    position = pose.position
    rotation = pose.rotation
    scale = pose.scale

    if mode in (AnimationType.MOVEMENT, AnimationType.COMBINED):
        dx, dy = movement_offset(
            time,
            cell.x,
            cell.y,
            amplitude=params.movement_amplitude,
            frequency=params.movement_frequency,
            cell_size=params.cell_size,
        )
        position = (position[0] + dx, position[1] + dy)
    if mode in (AnimationType.ROTATION, AnimationType.COMBINED):
        rotation = rotation_angle(
            time,
            cell.x,
            cell.y,
            amplitude=params.rotation_amplitude,
            frequency=params.rotation_frequency,
        )
    if mode in (AnimationType.SCALE, AnimationType.COMBINED):
        scale = pose.scale * scale_factor(
            time,
            cell.x,
            cell.y,
            amplitude=params.scale_amplitude,
            frequency=params.scale_frequency,
        )
    return CellPose(position=position, rotation=rotation, scale=scale)


@dataclass(frozen=True, slots=True)
class FrameUpdate:
    """1 フレーム分の更新結果。

    Attributes
    ----------
    poses : tuple[CellPose, ...]
        セル列と同順の配置。
    shape_changes : dict[int, str]
        セル番号 → 新しい図形名。`current_shape` と異なるセルだけを含む。
    """

    poses: tuple[CellPose, ...]
    shape_changes: dict[int, str]


def compute_frame(
    cells: Sequence["DisplayCell"],
    params: "GridParams",
    time: float,
    pool: Sequence[str],
) -> FrameUpdate:
    """セル列の次フレームの配置と図形差し替えを計算する（セルは変更しない）。"""
    poses = tuple(animated_pose(cell, params, time) for cell in cells)

    changes: dict[int, str] = {}
    if params.enable_shape_cycling and pool:
        for i, cell in enumerate(cells):
            name = cycle_shape_name(time, cell.x, cell.y, pool, params.animation_speed)
            if name is not None and name != cell.current_shape:
                changes[i] = name
    return FrameUpdate(poses=poses, shape_changes=changes)


__all__ = [
    "AnimationClock",
    "CellPose",
    "FrameUpdate",
    "animated_pose",
    "base_pose",
    "center_curve",
    "center_scaling_factor",
    "center_wave",
    "compute_frame",
    "cycle_shape_name",
    "movement_offset",
    "rest_pose",
    "rotation_angle",
    "scale_factor",
]
