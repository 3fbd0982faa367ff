# どこで: `src/shapegrid/core/parameter_view.py`。
# 何を: GridParams から GUI 行モデルを生成し、ウィジェット出力をパラメータ値へ戻す純粋関数群を提供する。
# なぜ: imgui 依存部と切り離し、行の並び・レンジ・値変換を単体テスト可能に保つため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from shapegrid.core.parameters import CHOICE_TYPES, PARAM_META, GridParams, coerce_param
from shapegrid.core.shape_registry import ShapeCategory

# セクション名 → そのセクションに並べるパラメータ名（表示順）。
PARAM_SECTIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "Grid",
        (
            "grid_width",
            "grid_height",
            "composition_width",
            "composition_height",
            "cell_size",
            "randomness",
            "show_grid",
        ),
    ),
    ("Shapes", ("enabled_shapes",)),
    ("Style", ("shape_color", "background_color")),
    (
        "Animation",
        (
            "enable_shape_cycling",
            "enable_size_animation",
            "animation_type",
            "animation_speed",
            "movement_amplitude",
            "movement_frequency",
            "rotation_amplitude",
            "rotation_frequency",
            "scale_amplitude",
            "scale_frequency",
        ),
    ),
    (
        "Center Scaling",
        (
            "enable_center_scaling",
            "center_scaling_intensity",
            "center_scaling_curve",
            "center_scaling_radius",
            "center_scaling_direction",
            "center_scaling_animated",
            "center_scaling_wave",
            "center_scaling_speed",
        ),
    ),
)


@dataclass(frozen=True, slots=True)
class ParameterRow:
    """GUI 表示用の行モデル。"""

    section: str
    name: str
    label: str
    kind: str
    ui_value: Any
    ui_min: Any | None
    ui_max: Any | None
    choices: Sequence[str] | None


def format_param_label(name: str) -> str:
    """`movement_amplitude` → `Movement Amplitude` の形の表示ラベルを返す。"""

    return " ".join(part.capitalize() for part in str(name).split("_"))


def _ui_value(name: str, value: Any) -> Any:
    if name in CHOICE_TYPES:
        return CHOICE_TYPES[name](value).name.lower()
    if name == "enabled_shapes":
        return tuple(bool(value.get(c, False)) for c in ShapeCategory)
    return value


def rows_from_params(params: GridParams) -> list[ParameterRow]:
    """GridParams から PARAM_SECTIONS の順に ParameterRow を生成する。"""

    rows: list[ParameterRow] = []
    for section, names in PARAM_SECTIONS:
        for name in names:
            meta = PARAM_META[name]
            rows.append(
                ParameterRow(
                    section=section,
                    name=name,
                    label=format_param_label(name),
                    kind=meta.kind,
                    ui_value=_ui_value(name, getattr(params, name)),
                    ui_min=meta.ui_min,
                    ui_max=meta.ui_max,
                    choices=meta.choices,
                )
            )
    return rows


def value_from_widget(row: ParameterRow, value: Any) -> Any:
    """ウィジェットの出力値を GridParams に渡せる値へ変換する。"""

    if row.kind == "categories":
        flags = list(value)
        return {c: bool(flags[i]) for i, c in enumerate(ShapeCategory) if i < len(flags)}
    if row.kind == "choice":
        return coerce_param(row.name, str(value))
    return value


__all__ = [
    "PARAM_SECTIONS",
    "ParameterRow",
    "format_param_label",
    "rows_from_params",
    "value_from_widget",
]
