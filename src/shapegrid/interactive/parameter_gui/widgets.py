# どこで: `src/shapegrid/interactive/parameter_gui/widgets.py`。
# 何を: ParameterRow.kind を pyimgui の値ウィジェットへ対応付けて描画する。
# なぜ: kind ごとの UI 実装を閉じ込め、GUI 本体から分離するため。

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from shapegrid.core.parameter_view import ParameterRow
from shapegrid.core.shape_registry import ShapeCategory

WidgetFn = Callable[[ParameterRow], tuple[bool, Any]]


def _float_slider_range(row: ParameterRow) -> tuple[float, float]:
    """float スライダーのレンジ (min, max) を返す。

    ui_min/ui_max が None の場合は 0.0..1.0 にフォールバックする。
    """

    min_value = 0.0 if row.ui_min is None else float(row.ui_min)
    max_value = 1.0 if row.ui_max is None else float(row.ui_max)
    return min_value, max_value


def _int_slider_range(row: ParameterRow) -> tuple[int, int]:
    """int スライダーのレンジ (min, max) を返す。"""

    min_value = 1 if row.ui_min is None else int(row.ui_min)
    max_value = 30 if row.ui_max is None else int(row.ui_max)
    if min_value > max_value:
        min_value, max_value = max_value, min_value
    return min_value, max_value


def widget_float_slider(row: ParameterRow) -> tuple[bool, float]:
    """kind=float のスライダーを描画し、(changed, value) を返す。"""

    import imgui  # type: ignore[import-untyped]

    min_value, max_value = _float_slider_range(row)
    return imgui.slider_float(
        "##value", float(row.ui_value), float(min_value), float(max_value), format="%.2f"
    )


def widget_int_slider(row: ParameterRow) -> tuple[bool, int]:
    """kind=int のスライダーを描画し、(changed, value) を返す。"""

    import imgui  # type: ignore[import-untyped]

    min_value, max_value = _int_slider_range(row)
    return imgui.slider_int("##value", int(row.ui_value), int(min_value), int(max_value))


def widget_rgb_color_edit3(row: ParameterRow) -> tuple[bool, tuple[int, int, int]]:
    """kind=rgb のカラーピッカーを描画し、(changed, value) を返す。"""

    import imgui  # type: ignore[import-untyped]

    r, g, b = row.ui_value
    flags = (
        imgui.COLOR_EDIT_UINT8 | imgui.COLOR_EDIT_DISPLAY_RGB | imgui.COLOR_EDIT_INPUT_RGB
    )
    changed, out = imgui.color_edit3(
        "##value", r / 255.0, g / 255.0, b / 255.0, flags=flags
    )
    if not changed:
        return False, (int(r), int(g), int(b))

    r2, g2, b2 = out
    return True, (
        max(0, min(255, int(round(float(r2) * 255.0)))),
        max(0, min(255, int(round(float(g2) * 255.0)))),
        max(0, min(255, int(round(float(b2) * 255.0)))),
    )


def widget_bool_checkbox(row: ParameterRow) -> tuple[bool, bool]:
    """kind=bool のチェックボックスを描画し、(changed, value) を返す。"""

    import imgui  # type: ignore[import-untyped]

    clicked, state = imgui.checkbox("##value", bool(row.ui_value))
    return clicked, bool(state)


def widget_choice_radio(row: ParameterRow) -> tuple[bool, str]:
    """kind=choice のラジオボタン群を描画し、(changed, value) を返す。"""

    import imgui  # type: ignore[import-untyped]

    if row.choices is None or not list(row.choices):
        raise ValueError("choice requires non-empty choices")

    choices = [str(x) for x in row.choices]
    try:
        selected_index = choices.index(str(row.ui_value))
    except ValueError:
        selected_index = 0

    changed_any = False
    for i, choice in enumerate(choices):
        if imgui.radio_button(f"{choice}##{i}", i == selected_index):
            selected_index = i
            changed_any = True
        if i != len(choices) - 1:
            imgui.same_line(0.0, 6.0)

    return changed_any, choices[int(selected_index)]


def widget_category_checkboxes(row: ParameterRow) -> tuple[bool, tuple[bool, ...]]:
    """kind=categories のカテゴリ別チェックボックスを描画し、(changed, flags) を返す。"""

    import imgui  # type: ignore[import-untyped]

    flags = list(row.ui_value)
    changed_any = False
    for i, category in enumerate(ShapeCategory):
        clicked, state = imgui.checkbox(f"{category.value}##cat{i}", bool(flags[i]))
        if clicked:
            flags[i] = bool(state)
            changed_any = True
    return changed_any, tuple(flags)


_KIND_TO_WIDGET: dict[str, WidgetFn] = {
    "float": widget_float_slider,
    "int": widget_int_slider,
    "rgb": widget_rgb_color_edit3,
    "bool": widget_bool_checkbox,
    "choice": widget_choice_radio,
    "categories": widget_category_checkboxes,
}


def render_value_widget(row: ParameterRow) -> tuple[bool, Any]:
    """row.kind に応じたウィジェットを描画し、(changed, value) を返す。

    Raises
    ------
    ValueError
        未知 kind の場合。
    """

    fn = _KIND_TO_WIDGET.get(row.kind)
    if fn is None:
        raise ValueError(f"unknown kind: {row.kind}")
    return fn(row)
