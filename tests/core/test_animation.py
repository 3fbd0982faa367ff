"""アニメーション時計と純関数群（`shapegrid.core.animation`）のテスト。"""

from __future__ import annotations

import math

import pytest

from shapegrid.core.animation import (
    AnimationClock,
    animated_pose,
    base_pose,
    center_curve,
    center_scaling_factor,
    center_wave,
    compute_frame,
    cycle_shape_name,
    movement_offset,
    rotation_angle,
    scale_factor,
)
from shapegrid.core.display_grid import build_display_cells
from shapegrid.core.parameters import (
    AnimationType,
    CenterScalingCurve,
    CenterScalingDirection,
    CenterScalingWave,
    GridParams,
)


def test_clock_advances_by_delta_times_speed() -> None:
    clock = AnimationClock()
    assert clock.advance(0.5, 0.25) == pytest.approx(0.125)
    assert clock.advance(1.0, 2.0) == pytest.approx(2.125)
    clock.reset()
    assert clock.time == 0.0


def test_cycle_shape_name_formula() -> None:
    pool = tuple(f"s{i}" for i in range(7))
    time, x, y, speed = 3.2, 2, 5, 0.25
    phase = time * speed + (x * 1000 + y * 100) * 0.1
    expected = pool[int(math.floor(abs(math.sin(phase)) * 7)) % 7]
    assert cycle_shape_name(time, x, y, pool, speed) == expected


def test_cycle_shape_name_is_pure() -> None:
    pool = ("a", "b", "c")
    first = [cycle_shape_name(1.7, x, 3, pool, 0.5) for x in range(10)]
    second = [cycle_shape_name(1.7, x, 3, pool, 0.5) for x in range(10)]
    assert first == second
    assert cycle_shape_name(1.7, 0, 0, (), 0.5) is None


def test_movement_offset_scales_with_cell_size() -> None:
    dx1, dy1 = movement_offset(1.0, 2, 3, amplitude=0.1, frequency=0.5, cell_size=1.0)
    dx2, dy2 = movement_offset(1.0, 2, 3, amplitude=0.1, frequency=0.5, cell_size=2.0)
    assert dx1 == pytest.approx(math.sin(0.5 + 1.0) * 0.1)
    assert dy1 == pytest.approx(math.cos(0.5 + 1.5) * 0.1)
    assert (dx2, dy2) == pytest.approx((2 * dx1, 2 * dy1))


def test_rotation_and_scale_formulas() -> None:
    assert rotation_angle(2.0, 1, 1, amplitude=0.5, frequency=0.3) == pytest.approx(
        math.sin(0.6 + 0.6) * 0.5
    )
    assert scale_factor(2.0, 1, 1, amplitude=0.2, frequency=0.4) == pytest.approx(
        1.0 + math.sin(0.8 + 1.0) * 0.2
    )


def _cell(params: GridParams, index: int = 9):
    return build_display_cells(params, ("Rect",) * 900)[index]


def test_pose_is_base_when_size_animation_is_off() -> None:
    params = GridParams(enable_size_animation=False, animation_type=AnimationType.COMBINED)
    cell = _cell(params)
    assert animated_pose(cell, params, 12.3) == base_pose(cell.x, cell.y, params)


@pytest.mark.parametrize(
    ("mode", "moves", "rotates", "scales"),
    [
        (AnimationType.MOVEMENT, True, False, False),
        (AnimationType.ROTATION, False, True, False),
        (AnimationType.SCALE, False, False, True),
        (AnimationType.COMBINED, True, True, True),
    ],
)
def test_only_selected_components_move(
    mode: AnimationType, moves: bool, rotates: bool, scales: bool
) -> None:
    params = GridParams(enable_size_animation=True, animation_type=mode, cell_size=1.5)
    cell = _cell(params)
    base = base_pose(cell.x, cell.y, params)
    pose = animated_pose(cell, params, 1.3)

    assert (pose.position != base.position) is moves
    assert (pose.rotation != 0.0) is rotates
    assert (pose.scale != 1.5) is scales


def test_scale_mode_multiplies_cell_size() -> None:
    params = GridParams(
        enable_size_animation=True, animation_type=AnimationType.SCALE, cell_size=2.0
    )
    cell = _cell(params)
    pose = animated_pose(cell, params, 0.7)
    expected = 2.0 * scale_factor(
        0.7, cell.x, cell.y, amplitude=params.scale_amplitude, frequency=params.scale_frequency
    )
    assert pose.scale == pytest.approx(expected)


def test_compute_frame_reports_only_differing_shapes() -> None:
    params = GridParams(grid_width=3, grid_height=3, enable_shape_cycling=True)
    pool = ("a", "b", "c")
    cells = build_display_cells(params, ("a",) * 900)
    frame = compute_frame(cells, params, 5.0, pool)

    assert len(frame.poses) == 9
    for i, cell in enumerate(cells):
        name = cycle_shape_name(5.0, cell.x, cell.y, pool, params.animation_speed)
        if name == "a":
            assert i not in frame.shape_changes
        else:
            assert frame.shape_changes[i] == name
    # セル自体は変更しない。
    assert all(c.current_shape == "a" for c in cells)


def test_compute_frame_without_cycling_has_no_shape_changes() -> None:
    params = GridParams(grid_width=2, grid_height=2, enable_size_animation=True)
    cells = build_display_cells(params, ("a",) * 900)
    assert compute_frame(cells, params, 5.0, ("a", "b")).shape_changes == {}


# --- 中心スケーリング ---


def _center_params(**overrides) -> GridParams:
    values = dict(grid_width=3, grid_height=3, enable_center_scaling=True)
    values.update(overrides)
    return GridParams(**values)


@pytest.mark.parametrize(
    ("curve", "expected"),
    [
        (CenterScalingCurve.LINEAR, 0.5),
        (CenterScalingCurve.EXPONENTIAL, 0.25),
        (CenterScalingCurve.LOGARITHMIC, math.log2(1.5)),
        (CenterScalingCurve.SINE, 1.0),
    ],
)
def test_center_curve_shapes(curve: CenterScalingCurve, expected: float) -> None:
    assert center_curve(0.5, curve) == pytest.approx(expected)
    assert center_curve(0.0, curve) == pytest.approx(0.0)


def test_center_scaling_is_identity_when_disabled() -> None:
    params = _center_params(enable_center_scaling=False, center_scaling_intensity=2.0)
    assert center_scaling_factor(0, 0, params, 3.0) == 1.0


def test_center_scaling_grows_outward_with_distance() -> None:
    params = _center_params(center_scaling_intensity=0.5)
    # 3x3 の中心セルは距離 0、角セルは正規化距離 1。
    assert center_scaling_factor(1, 1, params, 0.0) == pytest.approx(1.0)
    assert center_scaling_factor(0, 0, params, 0.0) == pytest.approx(1.5)
    # 辺の中点は 1 / sqrt(2)。
    edge = 1.0 / math.sqrt(2.0)
    assert center_scaling_factor(0, 1, params, 0.0) == pytest.approx(1.0 + edge * 0.5)

    exponential = _center_params(
        center_scaling_intensity=0.5, center_scaling_curve=CenterScalingCurve.EXPONENTIAL
    )
    assert center_scaling_factor(0, 1, exponential, 0.0) == pytest.approx(1.25)


def test_center_scaling_inward_mirrors_around_one() -> None:
    params = _center_params(
        center_scaling_intensity=0.5, center_scaling_direction=CenterScalingDirection.INWARD
    )
    assert center_scaling_factor(0, 0, params, 0.0) == pytest.approx(0.5)
    assert center_scaling_factor(1, 1, params, 0.0) == pytest.approx(1.0)


def test_center_scaling_radius_saturates_distance_and_result_is_clamped() -> None:
    narrow = _center_params(center_scaling_intensity=1.0, center_scaling_radius=0.5)
    # 半径を半分にすると辺の中点でも正規化距離は 1 で頭打ち。
    assert center_scaling_factor(0, 1, narrow, 0.0) == pytest.approx(2.0)

    strong = _center_params(center_scaling_intensity=2.0)
    assert center_scaling_factor(0, 0, strong, 0.0) == pytest.approx(3.0)
    inward = _center_params(
        center_scaling_intensity=2.0, center_scaling_direction=CenterScalingDirection.INWARD
    )
    assert center_scaling_factor(0, 0, inward, 0.0) == pytest.approx(0.1)


def test_center_scaling_single_cell_grid_has_zero_distance() -> None:
    params = _center_params(grid_width=1, grid_height=1, center_scaling_intensity=2.0)
    assert center_scaling_factor(0, 0, params, 0.0) == pytest.approx(1.0)


@pytest.mark.parametrize("wave", list(CenterScalingWave))
def test_center_scaling_wave_is_added_with_speed(wave: CenterScalingWave) -> None:
    params = _center_params(
        center_scaling_animated=True,
        center_scaling_wave=wave,
        center_scaling_speed=2.0,
        center_scaling_intensity=0.0,
    )
    offset = center_wave(
        2.6, 2, 0, wave=wave, center=(1.0, 1.0), distance=math.hypot(1.0, 1.0)
    )
    assert -0.5 <= offset <= 0.5
    assert center_scaling_factor(2, 0, params, 1.3) == pytest.approx(1.0 + offset)


def test_center_scaling_radial_wave_formula() -> None:
    offset = center_wave(
        0.4, 3, 4, wave=CenterScalingWave.RADIAL, center=(0.0, 0.0), distance=0.0
    )
    assert offset == pytest.approx(math.sin(0.4 * 3.0 + 5.0 * 0.5) * 0.5)


def test_center_scaling_multiplies_pose_scale() -> None:
    params = _center_params(cell_size=2.0, center_scaling_intensity=0.5)
    cells = build_display_cells(params, ("Rect",) * 900)
    corner = next(c for c in cells if (c.x, c.y) == (0, 0))
    pose = animated_pose(corner, params, 0.0)
    assert pose.scale == pytest.approx(2.0 * 1.5)
    assert pose.rotation == 0.0
    assert pose.position == base_pose(0, 0, params).position

    animated = _center_params(
        cell_size=2.0,
        center_scaling_intensity=0.5,
        enable_size_animation=True,
        animation_type=AnimationType.SCALE,
    )
    pose = animated_pose(corner, animated, 0.7)
    expected = 2.0 * 1.5 * scale_factor(
        0.7, 0, 0, amplitude=animated.scale_amplitude, frequency=animated.scale_frequency
    )
    assert pose.scale == pytest.approx(expected)
