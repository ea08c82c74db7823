"""Element classification helpers shared with the injected design mode client."""

import re
from typing import Final

from .protocol import IGNORED_ELEMENTS, TEXT_EDITABLE_ELEMENTS, ElementType

# Marker classes the client adds to elements it is decorating
INTERNAL_CLASS_PREFIX: Final = "__vibesdk"

_TEXT_TAGS: Final = frozenset(
    {"span", "p", "h1", "h2", "h3", "h4", "h5", "h6", "label", "a"}
)
_INPUT_TAGS: Final = frozenset({"input", "textarea", "select"})
_IMAGE_TAGS: Final = frozenset({"img", "svg"})
_CONTAINER_TAGS: Final = frozenset(
    {"div", "section", "article", "header", "footer", "nav", "main", "aside"}
)
_LIST_TAGS: Final = frozenset({"ul", "ol", "li"})

_WORKSPACE_INSTANCE_PATH: Final = re.compile(r"/workspace/i-[a-f0-9-]+/(.+)")
_WORKSPACE_PATH: Final = re.compile(r"/workspace/[^/]+/(.+)")


def should_ignore_element(tag_name: str) -> bool:
    """Check if an element can never be selected in design mode."""
    return tag_name.lower() in IGNORED_ELEMENTS


def is_text_editable(tag_name: str, has_direct_text: bool) -> bool:
    """Check if an element's text can be edited inline.

    Args:
        tag_name: HTML tag name of the element
        has_direct_text: Whether the element has a non-blank text node child
    """
    return tag_name.lower() in TEXT_EDITABLE_ELEMENTS and has_direct_text


def detect_element_type(tag_name: str, role: str | None = None) -> ElementType:
    """Classify an element for choosing the design panel to show."""
    tag = tag_name.lower()

    if tag == "button" or role == "button":
        return "button"
    if tag in _INPUT_TAGS:
        return "input"
    if tag in _TEXT_TAGS:
        return "text"
    if tag in _IMAGE_TAGS:
        return "image"
    if tag in _CONTAINER_TAGS:
        return "container"
    if tag in _LIST_TAGS:
        return "list"
    return "generic"


def to_camel_case(name: str) -> str:
    """Convert a CSS property name such as ``font-size`` to ``fontSize``."""
    return re.sub(r"-([a-z])", lambda m: m.group(1).upper(), name)


def to_kebab_case(name: str) -> str:
    """Convert a style key such as ``fontSize`` to ``font-size``."""
    return re.sub(r"([A-Z])", r"-\1", name).lower()


def parse_inline_styles(style_attr: str | None) -> dict[str, str]:
    """Parse a ``style`` attribute into camelCase property names.

    Declarations without a property or a value are skipped.
    """
    styles: dict[str, str] = {}
    if not style_attr:
        return styles

    for declaration in style_attr.split(";"):
        prop, _, value = declaration.partition(":")
        prop = prop.strip()
        value = value.strip()
        if prop and value:
            styles[to_camel_case(prop)] = value

    return styles


def split_class_names(class_attr: str | None) -> list[str]:
    """Split a ``class`` attribute, dropping the client's own marker classes."""
    if not class_attr:
        return []
    return [
        cls for cls in class_attr.split() if not cls.startswith(INTERNAL_CLASS_PREFIX)
    ]


def normalize_source_path(file_path: str) -> str:
    """Turn a path reported by the preview container into a project path.

    ``/workspace/i-<uuid>/src/App.tsx`` becomes ``src/App.tsx``; ``/app/`` and
    leading ``/src/`` prefixes are stripped too. Other paths are returned as is.
    """
    if not file_path:
        return file_path

    match = _WORKSPACE_INSTANCE_PATH.search(file_path) or _WORKSPACE_PATH.search(
        file_path
    )
    if match:
        return match.group(1)

    if file_path.startswith("/app/"):
        return file_path[len("/app/") :]

    if file_path.startswith("/src/"):
        return file_path[1:]

    return file_path
