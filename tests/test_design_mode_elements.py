"""Tests for design mode element helpers."""

import pytest

from appstudio.design_mode.elements import (
    detect_element_type,
    is_text_editable,
    normalize_source_path,
    parse_inline_styles,
    should_ignore_element,
    split_class_names,
    to_camel_case,
    to_kebab_case,
)


@pytest.mark.parametrize("tag_name", ["script", "STYLE", "meta", "head", "html"])
def test_ignored_elements(tag_name):
    assert should_ignore_element(tag_name)


@pytest.mark.parametrize("tag_name", ["div", "p", "button", "img"])
def test_selectable_elements(tag_name):
    assert not should_ignore_element(tag_name)


def test_text_editable_needs_direct_text():
    assert is_text_editable("H1", has_direct_text=True)
    assert not is_text_editable("h1", has_direct_text=False)
    assert not is_text_editable("img", has_direct_text=True)


@pytest.mark.parametrize(
    "tag_name, role, expected",
    [
        ("button", None, "button"),
        ("div", "button", "button"),
        ("INPUT", None, "input"),
        ("textarea", None, "input"),
        ("h2", None, "text"),
        ("a", None, "text"),
        ("svg", None, "image"),
        ("section", None, "container"),
        ("li", None, "list"),
        ("table", None, "generic"),
    ],
)
def test_detect_element_type(tag_name, role, expected):
    assert detect_element_type(tag_name, role) == expected


def test_case_conversion():
    assert to_camel_case("background-color") == "backgroundColor"
    assert to_camel_case("color") == "color"
    assert to_kebab_case("borderTopLeftRadius") == "border-top-left-radius"
    assert to_kebab_case(to_camel_case("line-height")) == "line-height"


def test_parse_inline_styles():
    styles = parse_inline_styles(
        "color: red; background-image: url(http://x/y.png);; margin-top:4px; bad"
    )

    assert styles == {
        "color": "red",
        "backgroundImage": "url(http://x/y.png)",
        "marginTop": "4px",
    }


@pytest.mark.parametrize("style_attr", [None, "", " ; ", "color:"])
def test_parse_inline_styles_empty(style_attr):
    assert parse_inline_styles(style_attr) == {}


def test_split_class_names_drops_internal_markers():
    classes = split_class_names("p-4  __vibesdk-hover card __vibesdk_selected")

    assert classes == ["p-4", "card"]
    assert split_class_names(None) == []


@pytest.mark.parametrize(
    "file_path, expected",
    [
        (
            "/workspace/i-3f2a9c1e-7b4d-4e8a-9f10-2b3c4d5e6f70/src/App.tsx",
            "src/App.tsx",
        ),
        ("/workspace/my-app/src/pages/Home.tsx", "src/pages/Home.tsx"),
        ("/app/src/main.tsx", "src/main.tsx"),
        ("/src/index.css", "src/index.css"),
        ("src/App.tsx", "src/App.tsx"),
        ("", ""),
    ],
)
def test_normalize_source_path(file_path, expected):
    assert normalize_source_path(file_path) == expected
