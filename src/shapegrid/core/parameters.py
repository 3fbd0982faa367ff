# どこで: `src/shapegrid/core/parameters.py`。
# 何を: コントロールパネルが書き込み、グリッドエンジンが読む GridParams と、その GUI 用メタ情報を定義する。
# なぜ: サイズ/挙動の全ノブを 1 つの値オブジェクトへ集約し、検証と既定値を一元管理するため。

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from enum import IntEnum
from typing import Any, Sequence

from shapegrid.core.shape_registry import ShapeCategory


class AnimationType(IntEnum):
    """サイズ/移動アニメーションのモード。"""

    MOVEMENT = 0
    ROTATION = 1
    SCALE = 2
    COMBINED = 3


class CenterScalingCurve(IntEnum):
    """中心からの正規化距離 d (0..1) をスケール量へ写す曲線。"""

    LINEAR = 0
    EXPONENTIAL = 1
    LOGARITHMIC = 2
    SINE = 3


class CenterScalingDirection(IntEnum):
    """OUTWARD は外周ほど大きく、INWARD は外周ほど小さくする。"""

    OUTWARD = 0
    INWARD = 1


class CenterScalingWave(IntEnum):
    """中心スケーリングに重ねる揺らぎの波形。"""

    COMPLEX = 0
    RADIAL = 1
    SPIRAL = 2
    CHAOS = 3


@dataclass(frozen=True, slots=True)
class ParamMeta:
    """パラメータの UI/検証用メタ情報。

    ui_min/ui_max はスライダーのレンジを示すだけで、実値をクランプしない。
    """

    kind: str  # "float" | "int" | "bool" | "rgb" | "choice" | "categories"
    ui_min: Any | None = None
    ui_max: Any | None = None
    choices: Sequence[str] | None = None


def _all_categories_enabled() -> dict[ShapeCategory, bool]:
    return {c: True for c in ShapeCategory}


@dataclass(slots=True)
class GridParams:
    """グリッド合成とアニメーションの全パラメータ。

    Notes
    -----
    書き手はコントロールパネル、読み手はグリッドエンジンの 1 対 1。
    値の変更は `ShapeGrid.update()` 経由で行い、再構築などの副作用を連動させる。
    """

    grid_width: int = 8
    grid_height: int = 8
    composition_width: int = 30
    composition_height: int = 30
    cell_size: float = 1.0
    randomness: float = 1.0
    enabled_shapes: dict[ShapeCategory, bool] = field(default_factory=_all_categories_enabled)
    shape_color: tuple[int, int, int] = (0, 255, 255)
    background_color: tuple[int, int, int] = (0, 0, 0)
    show_grid: bool = False
    enable_shape_cycling: bool = False
    enable_size_animation: bool = False
    animation_type: AnimationType = AnimationType.MOVEMENT
    animation_speed: float = 0.25
    movement_amplitude: float = 0.1
    movement_frequency: float = 0.5
    rotation_amplitude: float = 0.5
    rotation_frequency: float = 0.3
    scale_amplitude: float = 0.2
    scale_frequency: float = 0.4
    enable_center_scaling: bool = False
    center_scaling_intensity: float = 0.5
    center_scaling_curve: CenterScalingCurve = CenterScalingCurve.LINEAR
    center_scaling_radius: float = 1.0
    center_scaling_direction: CenterScalingDirection = CenterScalingDirection.OUTWARD
    center_scaling_animated: bool = False
    center_scaling_wave: CenterScalingWave = CenterScalingWave.COMPLEX
    center_scaling_speed: float = 1.0

    def __post_init__(self) -> None:
        for f in fields(self):
            setattr(self, f.name, coerce_param(f.name, getattr(self, f.name)))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "GridParams":
        """dict（config.yaml の `params` 節など）から GridParams を生成する。"""
        params = cls()
        if data:
            params.apply(dict(data))
        return params

    def apply(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        """変更を検証して反映し、実際に値が変わった項目だけを返す。

        Raises
        ------
        ValueError
            未知のキー、または不正な値が含まれる場合（部分適用はしない）。

        Notes
        -----
        `enabled_shapes` は現在値へのマージとして扱い、指定されなかったカテゴリは維持する。
        """
        coerced = self._coerce_changes(changes)
        changed: dict[str, Any] = {}
        for name, value in coerced.items():
            if getattr(self, name) != value:
                setattr(self, name, value)
                changed[name] = value
        return changed

    def with_updates(self, **changes: Any) -> "GridParams":
        """変更を反映したコピーを返す（自身は変更しない）。"""
        return replace(self, **self._coerce_changes(changes))

    def copy(self) -> "GridParams":
        return replace(self, enabled_shapes=dict(self.enabled_shapes))

    def _coerce_changes(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        coerced: dict[str, Any] = {}
        for name, value in changes.items():
            if name == "enabled_shapes":
                coerced[name] = _coerce_categories(value, base=self.enabled_shapes)
            else:
                coerced[name] = coerce_param(name, value)
        return coerced


PARAM_NAMES: tuple[str, ...] = tuple(f.name for f in fields(GridParams))

TOPOLOGY_PARAMS: frozenset[str] = frozenset(
    {
        "grid_width",
        "grid_height",
        "composition_width",
        "composition_height",
        "randomness",
        "enabled_shapes",
    }
)
"""変更時に合成/表示グリッドの全再構築を要するパラメータ。"""

PARAM_META: dict[str, ParamMeta] = {
    "grid_width": ParamMeta(kind="int", ui_min=1, ui_max=30),
    "grid_height": ParamMeta(kind="int", ui_min=1, ui_max=30),
    "composition_width": ParamMeta(kind="int", ui_min=1, ui_max=30),
    "composition_height": ParamMeta(kind="int", ui_min=1, ui_max=30),
    "cell_size": ParamMeta(kind="float", ui_min=0.5, ui_max=2.0),
    "randomness": ParamMeta(kind="float", ui_min=0.0, ui_max=1.0),
    "enabled_shapes": ParamMeta(
        kind="categories", choices=tuple(c.value for c in ShapeCategory)
    ),
    "shape_color": ParamMeta(kind="rgb", ui_min=0, ui_max=255),
    "background_color": ParamMeta(kind="rgb", ui_min=0, ui_max=255),
    "show_grid": ParamMeta(kind="bool"),
    "enable_shape_cycling": ParamMeta(kind="bool"),
    "enable_size_animation": ParamMeta(kind="bool"),
    "animation_type": ParamMeta(
        kind="choice", choices=tuple(t.name.lower() for t in AnimationType)
    ),
    "animation_speed": ParamMeta(kind="float", ui_min=0.01, ui_max=2.0),
    "movement_amplitude": ParamMeta(kind="float", ui_min=0.01, ui_max=0.5),
    "movement_frequency": ParamMeta(kind="float", ui_min=0.1, ui_max=2.0),
    "rotation_amplitude": ParamMeta(kind="float", ui_min=0.01, ui_max=2.0),
    "rotation_frequency": ParamMeta(kind="float", ui_min=0.1, ui_max=2.0),
    "scale_amplitude": ParamMeta(kind="float", ui_min=0.01, ui_max=1.0),
    "scale_frequency": ParamMeta(kind="float", ui_min=0.1, ui_max=2.0),
    "enable_center_scaling": ParamMeta(kind="bool"),
    "center_scaling_intensity": ParamMeta(kind="float", ui_min=0.0, ui_max=2.0),
    "center_scaling_curve": ParamMeta(
        kind="choice", choices=tuple(c.name.lower() for c in CenterScalingCurve)
    ),
    "center_scaling_radius": ParamMeta(kind="float", ui_min=0.1, ui_max=5.0),
    "center_scaling_direction": ParamMeta(
        kind="choice", choices=tuple(d.name.lower() for d in CenterScalingDirection)
    ),
    "center_scaling_animated": ParamMeta(kind="bool"),
    "center_scaling_wave": ParamMeta(
        kind="choice", choices=tuple(w.name.lower() for w in CenterScalingWave)
    ),
    "center_scaling_speed": ParamMeta(kind="float", ui_min=0.1, ui_max=3.0),
}

CHOICE_TYPES: dict[str, type[IntEnum]] = {
    "animation_type": AnimationType,
    "center_scaling_curve": CenterScalingCurve,
    "center_scaling_direction": CenterScalingDirection,
    "center_scaling_wave": CenterScalingWave,
}
"""kind=choice のパラメータ名 → 値の IntEnum 型。"""


# --- 値の正規化 ---


def coerce_rgb255(value: object) -> tuple[int, int, int]:
    """`#rrggbb` 文字列または 3 要素シーケンスを RGB255 タプルへ正規化する。"""

    if isinstance(value, str):
        text = value.strip().lstrip("#")
        if len(text) != 6:
            raise ValueError(f"rgb 文字列は #rrggbb 形式である必要がある: {value!r}")
        try:
            return int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16)
        except ValueError as exc:
            raise ValueError(f"rgb 文字列を解釈できない: {value!r}") from exc

    try:
        r, g, b = value  # type: ignore[misc]
    except Exception as exc:
        raise ValueError(f"rgb value must be a length-3 sequence: {value!r}") from exc

    def _clamp(v: object) -> int:
        iv = int(v)  # type: ignore[call-overload]
        return 0 if iv < 0 else 255 if iv > 255 else iv

    return _clamp(r), _clamp(g), _clamp(b)


def rgb255_to_hex(rgb: tuple[int, int, int]) -> str:
    r, g, b = coerce_rgb255(rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def rgb255_to_rgb01(rgb: tuple[int, int, int]) -> tuple[float, float, float]:
    r, g, b = coerce_rgb255(rgb)
    return r / 255.0, g / 255.0, b / 255.0


def _coerce_categories(
    value: object, *, base: Mapping[ShapeCategory, bool] | None = None
) -> dict[ShapeCategory, bool]:
    """カテゴリ → bool の mapping を正規化する。

    `base` を渡すとその値を出発点にし（部分更新）、省略時は未指定カテゴリを False とする。
    """
    if not isinstance(value, Mapping):
        raise ValueError(f"enabled_shapes は mapping である必要がある: {value!r}")
    out = {c: bool(base.get(c, False)) if base is not None else False for c in ShapeCategory}
    for key, flag in value.items():
        try:
            category = key if isinstance(key, ShapeCategory) else ShapeCategory(str(key))
        except ValueError as exc:
            raise ValueError(f"未知の図形カテゴリ: {key!r}") from exc
        out[category] = bool(flag)
    return out


def _coerce_choice(name: str, value: object) -> IntEnum:
    enum_type = CHOICE_TYPES[name]
    if isinstance(value, str):
        try:
            return enum_type[value.strip().upper()]
        except KeyError as exc:
            raise ValueError(f"未知の {name}: {value!r}") from exc
    try:
        return enum_type(int(value))  # type: ignore[call-overload]
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"{name} は 0..{len(enum_type) - 1} である必要がある: {value!r}"
        ) from exc


def coerce_param(name: str, value: Any) -> Any:
    """パラメータ名に応じて値を検証/正規化して返す。

    Raises
    ------
    ValueError
        未知のパラメータ名、または不正な値の場合。
    """
    meta = PARAM_META.get(name)
    if meta is None:
        raise ValueError(f"未知のパラメータ: {name!r}")

    kind = meta.kind
    if kind == "int":
        try:
            iv = int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{name} は整数である必要がある: {value!r}") from exc
        if iv < 1:
            raise ValueError(f"{name} は 1 以上である必要がある: got={iv}")
        return iv
    if kind == "float":
        try:
            fv = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{name} は数値である必要がある: {value!r}") from exc
        if name == "randomness":
            return min(1.0, max(0.0, fv))
        if name == "cell_size" and fv <= 0.0:
            raise ValueError(f"cell_size は正の値である必要がある: got={fv}")
        if name == "center_scaling_radius" and fv <= 0.0:
            raise ValueError(f"center_scaling_radius は正の値である必要がある: got={fv}")
        return fv
    if kind == "bool":
        return bool(value)
    if kind == "rgb":
        return coerce_rgb255(value)
    if kind == "choice":
        return _coerce_choice(name, value)
    if kind == "categories":
        return _coerce_categories(value)
    raise ValueError(f"未対応の kind: {kind!r}")  # pragma: no cover


__all__ = [
    "AnimationType",
    "CHOICE_TYPES",
    "CenterScalingCurve",
    "CenterScalingDirection",
    "CenterScalingWave",
    "GridParams",
    "PARAM_META",
    "PARAM_NAMES",
    "ParamMeta",
    "TOPOLOGY_PARAMS",
    "coerce_param",
    "coerce_rgb255",
    "rgb255_to_hex",
    "rgb255_to_rgb01",
]
