"""Tests for Tailwind class parsing and CSS conversion."""

import pytest

from appstudio.design_mode.tailwind import (
    TAILWIND_COLORS,
    css_value_to_tailwind,
    find_closest_tailwind_color,
    get_tailwind_category,
    is_tailwind_class,
    merge_classes,
    parse_tailwind_classes,
    remove_tailwind_class,
    update_tailwind_class,
)


@pytest.mark.parametrize(
    "class_name",
    [
        "px-4",
        "text-lg",
        "text-blue-500",
        "bg-red-600/50",
        "font-bold",
        "-mt-2",
        "rounded-lg",
        "border",
        "flex",
        "hidden",
        "w-1/2",
        "w-[300px]",
        "content-[x]",
        "hover:bg-red-500",
        "md:hover:text-lg",
        "lg:w-full",
    ],
)
def test_tailwind_classes_are_recognized(class_name):
    assert is_tailwind_class(class_name)


@pytest.mark.parametrize(
    "class_name", ["hero-title", "btn", "[mask-type:alpha]", "hover:btn", "Text-lg"]
)
def test_other_classes_are_not_tailwind(class_name):
    assert not is_tailwind_class(class_name)


def test_parse_tailwind_classes_keeps_order():
    tailwind, other = parse_tailwind_classes("card px-4 hover:bg-blue-500 shadow-md x")

    assert tailwind == ["px-4", "hover:bg-blue-500", "shadow-md"]
    assert other == ["card", "x"]


def test_parse_empty_class_string():
    assert parse_tailwind_classes("") == ([], [])


@pytest.mark.parametrize(
    "class_name, category",
    [
        ("text-lg", "font_size"),
        ("text-center", "text_align"),
        ("text-gray-700", "text_color"),
        ("bg-slate-100", "background_color"),
        ("bg-white", "background_color"),
        ("text-black/50", "text_color"),
        ("border-transparent", "border_color"),
        ("text-red", None),
        ("mx-auto", "margin"),
        ("py-2", "padding"),
        ("border-red-500", "border_color"),
        ("border-dashed", "border_style"),
        ("flex", "display"),
        ("flex-col", "flex_direction"),
        ("z-10", "z_index"),
        ("cursor-pointer", "cursor"),
        ("card", None),
    ],
)
def test_get_tailwind_category(class_name, category):
    assert get_tailwind_category(class_name) == category


def test_update_tailwind_class_replaces_category():
    result = update_tailwind_class("px-4 text-sm card", "font_size", "text-xl")

    assert result == "px-4 card text-xl"


def test_update_tailwind_class_adds_missing_category():
    assert update_tailwind_class("card", "padding", "p-2") == "card p-2"


def test_update_with_unknown_category_raises():
    with pytest.raises(ValueError):
        update_tailwind_class("p-2", "sparkle", "sparkle-9")


def test_remove_tailwind_class():
    result = remove_tailwind_class("p-2 px-4 pt-1 m-2 card", "padding")

    assert result == "m-2 card"


def test_merge_classes_additions_win_per_category():
    result = merge_classes("p-4 text-red-500 btn", "text-blue-500 rounded")

    assert result == "p-4 btn text-blue-500 rounded"


def test_merge_classes_keeps_non_tailwind_base_classes():
    assert merge_classes("btn primary", "p-2") == "btn primary p-2"


@pytest.mark.parametrize(
    "hex_color, expected",
    [
        ("#2563eb", ("blue", "600")),
        ("#2563EB", ("blue", "600")),
        ("#3b82f6", ("blue", "500")),
        ("#000", ("black", "")),
        ("#FFFFFF", ("white", "")),
        ("#dc2625", ("red", "600")),
    ],
)
def test_find_closest_tailwind_color(hex_color, expected):
    assert find_closest_tailwind_color(hex_color) == expected


def test_find_closest_color_expands_short_hex():
    name, shade = find_closest_tailwind_color("#f00")  # type: ignore[misc]

    assert name in TAILWIND_COLORS
    assert shade in TAILWIND_COLORS[name]


@pytest.mark.parametrize("value", ["red", "rgb(0, 0, 0)", "#12345", ""])
def test_find_closest_color_rejects_non_hex(value):
    assert find_closest_tailwind_color(value) is None


@pytest.mark.parametrize(
    "css_property, value, expected",
    [
        ("padding", "10px", "p-3"),
        ("padding-left", "2px", "pl-1"),
        ("margin", "16px", "m-4"),
        ("margin-top", "6px", "mt-2"),
        ("margin", "auto", "m-[auto]"),
        ("color", "#2563eb", "text-blue-600"),
        ("background-color", "#fff", "bg-white"),
        ("border-color", "#ef4444", "border-red-500"),
        ("color", "rgb(1, 2, 3)", "text-[rgb(1, 2, 3)]"),
        ("display", "none", "hidden"),
        ("display", "inline-flex", "inline-flex"),
        ("display", "table", None),
        ("font-weight", "700", "font-bold"),
        ("font-weight", "bold", None),
        ("width", "300px", "w-[300px]"),
        ("z-index", "50", "z-[50]"),
        ("position", "absolute", None),
        ("transform", "scale(2)", None),
    ],
)
def test_css_value_to_tailwind(css_property, value, expected):
    assert css_value_to_tailwind(css_property, value) == expected
