"""Apply design mode style changes to an element's classes and inline styles.

Each change is written as a Tailwind class when possible: the class sent with
the change wins, otherwise the CSS value is converted. Changes flagged for
inline styles, and values Tailwind cannot express, go to the style map.
"""

from collections.abc import Mapping

from ..logging_config import get_logger
from .elements import to_camel_case, to_kebab_case
from .protocol import DesignModeChangeRequest, DesignModeStyleChange
from .tailwind import css_value_to_tailwind, get_tailwind_category, merge_classes

logger = get_logger(__name__)

# Categories whose classes each address one side, corner or axis
_SIDED_CATEGORIES = frozenset(
    {"margin", "padding", "gap", "border_width", "border_radius", "inset"}
)


def apply_style_change(
    change: DesignModeStyleChange, class_name: str, inline_styles: dict[str, str]
) -> str:
    """Apply one change, updating ``inline_styles`` in place.

    Args:
        change: The style change; ``property`` may be camelCase or kebab-case
        class_name: Current class attribute of the element
        inline_styles: Current inline styles keyed by camelCase property

    Returns:
        The updated class string
    """
    style_key = to_camel_case(to_kebab_case(change.property))

    if change.use_inline_style:
        _set_inline_style(inline_styles, style_key, change.new_value)
        return class_name

    tailwind_class = change.tailwind_class or css_value_to_tailwind(
        to_kebab_case(change.property), change.new_value
    )
    if not tailwind_class:
        logger.debug(
            "No Tailwind class for style change, using inline style",
            property=change.property,
            value=change.new_value,
        )
        _set_inline_style(inline_styles, style_key, change.new_value)
        return class_name

    # an inline declaration would override the new class
    inline_styles.pop(style_key, None)
    return _replace_class(class_name, tailwind_class)


def apply_change_request(
    request: DesignModeChangeRequest,
    class_name: str,
    inline_styles: Mapping[str, str] | None = None,
) -> tuple[str, dict[str, str]]:
    """Apply every change of a request in order.

    Returns:
        Tuple of (updated class string, updated inline styles); the inputs are
        left unchanged
    """
    styles = dict(inline_styles or {})
    for change in request.changes:
        class_name = apply_style_change(change, class_name, styles)

    logger.info(
        "Style changes applied",
        selector=request.selector,
        file_path=request.file_path,
        count=len(request.changes),
    )
    return class_name, styles


def format_inline_styles(inline_styles: Mapping[str, str]) -> str:
    """Render a style map back into a ``style`` attribute value."""
    return "; ".join(
        f"{to_kebab_case(prop)}: {value}" for prop, value in inline_styles.items()
    )


def _utility_stem(class_name: str) -> str:
    # "mt-4" -> "mt", "border-t-2" -> "border-t", "p-[10px]" -> "p"
    base, bracket, _ = class_name.lstrip("-").partition("[")
    if bracket:
        return base.rstrip("-")
    stem, _, _ = base.rpartition("-")
    return stem or base


def _replace_class(class_name: str, new_class: str) -> str:
    category = get_tailwind_category(new_class)
    if category not in _SIDED_CATEGORIES:
        return merge_classes(class_name, new_class)

    stem = _utility_stem(new_class)
    kept = [
        cls
        for cls in class_name.split()
        if get_tailwind_category(cls) != category or _utility_stem(cls) != stem
    ]
    return " ".join([*kept, new_class])


def _set_inline_style(inline_styles: dict[str, str], key: str, value: str) -> None:
    # an empty value clears the declaration
    if value.strip():
        inline_styles[key] = value.strip()
    else:
        inline_styles.pop(key, None)
