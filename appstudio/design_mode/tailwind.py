"""Tailwind class parsing and conversion used by design mode style edits."""

import math
import re
from typing import Final

_PALETTE: Final = (
    "slate|gray|zinc|neutral|stone|red|orange|amber|yellow|lime|green|emerald|"
    "teal|cyan|sky|blue|indigo|violet|purple|fuchsia|pink|rose"
)
# Shadeless colors like white, or a palette color with a shade
_COLORS: Final = (
    rf"(?:inherit|current|transparent|black|white|(?:{_PALETTE})-\d{{2,3}})(?:/\d+)?"
)

# Utility class patterns by category; first match wins in get_tailwind_category
TAILWIND_PATTERNS: Final[dict[str, re.Pattern[str]]] = {
    # Typography
    "font_size": re.compile(
        r"^text-(xs|sm|base|lg|xl|2xl|3xl|4xl|5xl|6xl|7xl|8xl|9xl|\[.+\])$"
    ),
    "font_weight": re.compile(
        r"^font-(thin|extralight|light|normal|medium|semibold|bold|extrabold|black)$"
    ),
    "font_family": re.compile(r"^font-(sans|serif|mono)$"),
    "text_color": re.compile(rf"^text-{_COLORS}$"),
    "text_align": re.compile(r"^text-(left|center|right|justify|start|end)$"),
    "text_decoration": re.compile(r"^(underline|overline|line-through|no-underline)$"),
    "text_transform": re.compile(r"^(uppercase|lowercase|capitalize|normal-case)$"),
    "line_height": re.compile(
        r"^leading-(none|tight|snug|normal|relaxed|loose|\d+|\[.+\])$"
    ),
    "letter_spacing": re.compile(
        r"^tracking-(tighter|tight|normal|wide|wider|widest|\[.+\])$"
    ),
    # Background
    "background_color": re.compile(rf"^bg-{_COLORS}$"),
    "background_gradient": re.compile(r"^bg-gradient-(to-[trbl]|to-[trbl]{2})$"),
    # Spacing
    "margin": re.compile(r"^-?m[trblxy]?-(\d+|px|auto|\[.+\])$"),
    "padding": re.compile(r"^p[trblxy]?-(\d+|px|\[.+\])$"),
    "gap": re.compile(r"^gap(-[xy])?-(\d+|px|\[.+\])$"),
    # Border
    "border_width": re.compile(r"^border(-[trblxy])?(-0|(-2|-4|-8)?)?$"),
    "border_color": re.compile(rf"^border-{_COLORS}$"),
    "border_radius": re.compile(
        r"^rounded(-[trblse]{1,2})?(-none|-sm|-md|-lg|-xl|-2xl|-3xl|-full|\[.+\])?$"
    ),
    "border_style": re.compile(r"^border-(solid|dashed|dotted|double|hidden|none)$"),
    # Layout
    "display": re.compile(
        r"^(block|inline-block|inline|flex|inline-flex|grid|inline-grid|hidden|"
        r"contents|flow-root)$"
    ),
    "flex_direction": re.compile(r"^flex-(row|row-reverse|col|col-reverse)$"),
    "justify_content": re.compile(
        r"^justify-(normal|start|end|center|between|around|evenly|stretch)$"
    ),
    "align_items": re.compile(r"^items-(start|end|center|baseline|stretch)$"),
    "flex_wrap": re.compile(r"^flex-(wrap|wrap-reverse|nowrap)$"),
    "flex_grow": re.compile(r"^grow(-0)?$"),
    "flex_shrink": re.compile(r"^shrink(-0)?$"),
    # Sizing
    "width": re.compile(
        r"^w-(\d+|px|auto|full|screen|svw|lvw|dvw|min|max|fit|\d+/\d+|\[.+\])$"
    ),
    "height": re.compile(
        r"^h-(\d+|px|auto|full|screen|svh|lvh|dvh|min|max|fit|\d+/\d+|\[.+\])$"
    ),
    "min_width": re.compile(r"^min-w-(0|full|min|max|fit|\[.+\])$"),
    "min_height": re.compile(
        r"^min-h-(0|full|screen|svh|lvh|dvh|min|max|fit|\[.+\])$"
    ),
    "max_width": re.compile(
        r"^max-w-(0|none|xs|sm|md|lg|xl|2xl|3xl|4xl|5xl|6xl|7xl|full|min|max|fit|"
        r"prose|screen-sm|screen-md|screen-lg|screen-xl|screen-2xl|\[.+\])$"
    ),
    "max_height": re.compile(
        r"^max-h-(\d+|px|none|full|screen|svh|lvh|dvh|min|max|fit|\[.+\])$"
    ),
    # Effects
    "opacity": re.compile(r"^opacity-(\d+|\[.+\])$"),
    "shadow": re.compile(r"^shadow(-sm|-md|-lg|-xl|-2xl|-inner|-none)?$"),
    # Position
    "position": re.compile(r"^(static|fixed|absolute|relative|sticky)$"),
    "inset": re.compile(
        r"^(inset|top|right|bottom|left)-(\d+|px|auto|full|\d+/\d+|-\d+|\[.+\])$"
    ),
    "z_index": re.compile(r"^z-(\d+|auto|\[.+\])$"),
    # Other
    "overflow": re.compile(r"^overflow(-[xy])?-(auto|hidden|clip|visible|scroll)$"),
    "cursor": re.compile(
        r"^cursor-(auto|default|pointer|wait|text|move|help|not-allowed|none|"
        r"context-menu|progress|cell|crosshair|vertical-text|alias|copy|no-drop|"
        r"grab|grabbing|all-scroll|col-resize|row-resize|n-resize|e-resize|"
        r"s-resize|w-resize|ne-resize|nw-resize|se-resize|sw-resize|ew-resize|"
        r"ns-resize|nesw-resize|nwse-resize|zoom-in|zoom-out)$"
    ),
}

# CSS property -> Tailwind utility prefix; "" means the value is the class itself
CSS_TO_TAILWIND_PREFIX: Final[dict[str, str]] = {
    # Typography
    "font-size": "text",
    "font-weight": "font",
    "font-family": "font",
    "color": "text",
    "text-align": "text",
    "text-decoration": "",
    "text-transform": "",
    "line-height": "leading",
    "letter-spacing": "tracking",
    # Background
    "background-color": "bg",
    # Spacing
    "margin": "m",
    "margin-top": "mt",
    "margin-right": "mr",
    "margin-bottom": "mb",
    "margin-left": "ml",
    "padding": "p",
    "padding-top": "pt",
    "padding-right": "pr",
    "padding-bottom": "pb",
    "padding-left": "pl",
    "gap": "gap",
    # Border
    "border-width": "border",
    "border-color": "border",
    "border-radius": "rounded",
    "border-style": "border",
    # Layout
    "display": "",
    "flex-direction": "flex",
    "justify-content": "justify",
    "align-items": "items",
    # Sizing
    "width": "w",
    "height": "h",
    "min-width": "min-w",
    "min-height": "min-h",
    "max-width": "max-w",
    "max-height": "max-h",
    # Effects
    "opacity": "opacity",
    "box-shadow": "shadow",
    # Position
    "position": "",
    "top": "top",
    "right": "right",
    "bottom": "bottom",
    "left": "left",
    "z-index": "z",
}

TAILWIND_COLORS: Final[dict[str, dict[str, str]]] = {
    "slate": {
        "50": "#f8fafc", "100": "#f1f5f9", "200": "#e2e8f0", "300": "#cbd5e1",
        "400": "#94a3b8", "500": "#64748b", "600": "#475569", "700": "#334155",
        "800": "#1e293b", "900": "#0f172a", "950": "#020617",
    },
    "gray": {
        "50": "#f9fafb", "100": "#f3f4f6", "200": "#e5e7eb", "300": "#d1d5db",
        "400": "#9ca3af", "500": "#6b7280", "600": "#4b5563", "700": "#374151",
        "800": "#1f2937", "900": "#111827", "950": "#030712",
    },
    "zinc": {
        "50": "#fafafa", "100": "#f4f4f5", "200": "#e4e4e7", "300": "#d4d4d8",
        "400": "#a1a1aa", "500": "#71717a", "600": "#52525b", "700": "#3f3f46",
        "800": "#27272a", "900": "#18181b", "950": "#09090b",
    },
    "neutral": {
        "50": "#fafafa", "100": "#f5f5f5", "200": "#e5e5e5", "300": "#d4d4d4",
        "400": "#a3a3a3", "500": "#737373", "600": "#525252", "700": "#404040",
        "800": "#262626", "900": "#171717", "950": "#0a0a0a",
    },
    "red": {
        "50": "#fef2f2", "100": "#fee2e2", "200": "#fecaca", "300": "#fca5a5",
        "400": "#f87171", "500": "#ef4444", "600": "#dc2626", "700": "#b91c1c",
        "800": "#991b1b", "900": "#7f1d1d", "950": "#450a0a",
    },
    "orange": {
        "50": "#fff7ed", "100": "#ffedd5", "200": "#fed7aa", "300": "#fdba74",
        "400": "#fb923c", "500": "#f97316", "600": "#ea580c", "700": "#c2410c",
        "800": "#9a3412", "900": "#7c2d12", "950": "#431407",
    },
    "amber": {
        "50": "#fffbeb", "100": "#fef3c7", "200": "#fde68a", "300": "#fcd34d",
        "400": "#fbbf24", "500": "#f59e0b", "600": "#d97706", "700": "#b45309",
        "800": "#92400e", "900": "#78350f", "950": "#451a03",
    },
    "yellow": {
        "50": "#fefce8", "100": "#fef9c3", "200": "#fef08a", "300": "#fde047",
        "400": "#facc15", "500": "#eab308", "600": "#ca8a04", "700": "#a16207",
        "800": "#854d0e", "900": "#713f12", "950": "#422006",
    },
    "lime": {
        "50": "#f7fee7", "100": "#ecfccb", "200": "#d9f99d", "300": "#bef264",
        "400": "#a3e635", "500": "#84cc16", "600": "#65a30d", "700": "#4d7c0f",
        "800": "#3f6212", "900": "#365314", "950": "#1a2e05",
    },
    "green": {
        "50": "#f0fdf4", "100": "#dcfce7", "200": "#bbf7d0", "300": "#86efac",
        "400": "#4ade80", "500": "#22c55e", "600": "#16a34a", "700": "#15803d",
        "800": "#166534", "900": "#14532d", "950": "#052e16",
    },
    "emerald": {
        "50": "#ecfdf5", "100": "#d1fae5", "200": "#a7f3d0", "300": "#6ee7b7",
        "400": "#34d399", "500": "#10b981", "600": "#059669", "700": "#047857",
        "800": "#065f46", "900": "#064e3b", "950": "#022c22",
    },
    "teal": {
        "50": "#f0fdfa", "100": "#ccfbf1", "200": "#99f6e4", "300": "#5eead4",
        "400": "#2dd4bf", "500": "#14b8a6", "600": "#0d9488", "700": "#0f766e",
        "800": "#115e59", "900": "#134e4a", "950": "#042f2e",
    },
    "cyan": {
        "50": "#ecfeff", "100": "#cffafe", "200": "#a5f3fc", "300": "#67e8f9",
        "400": "#22d3ee", "500": "#06b6d4", "600": "#0891b2", "700": "#0e7490",
        "800": "#155e75", "900": "#164e63", "950": "#083344",
    },
    "sky": {
        "50": "#f0f9ff", "100": "#e0f2fe", "200": "#bae6fd", "300": "#7dd3fc",
        "400": "#38bdf8", "500": "#0ea5e9", "600": "#0284c7", "700": "#0369a1",
        "800": "#075985", "900": "#0c4a6e", "950": "#082f49",
    },
    "blue": {
        "50": "#eff6ff", "100": "#dbeafe", "200": "#bfdbfe", "300": "#93c5fd",
        "400": "#60a5fa", "500": "#3b82f6", "600": "#2563eb", "700": "#1d4ed8",
        "800": "#1e40af", "900": "#1e3a8a", "950": "#172554",
    },
    "indigo": {
        "50": "#eef2ff", "100": "#e0e7ff", "200": "#c7d2fe", "300": "#a5b4fc",
        "400": "#818cf8", "500": "#6366f1", "600": "#4f46e5", "700": "#4338ca",
        "800": "#3730a3", "900": "#312e81", "950": "#1e1b4b",
    },
    "violet": {
        "50": "#f5f3ff", "100": "#ede9fe", "200": "#ddd6fe", "300": "#c4b5fd",
        "400": "#a78bfa", "500": "#8b5cf6", "600": "#7c3aed", "700": "#6d28d9",
        "800": "#5b21b6", "900": "#4c1d95", "950": "#2e1065",
    },
    "purple": {
        "50": "#faf5ff", "100": "#f3e8ff", "200": "#e9d5ff", "300": "#d8b4fe",
        "400": "#c084fc", "500": "#a855f7", "600": "#9333ea", "700": "#7e22ce",
        "800": "#6b21a8", "900": "#581c87", "950": "#3b0764",
    },
    "fuchsia": {
        "50": "#fdf4ff", "100": "#fae8ff", "200": "#f5d0fe", "300": "#f0abfc",
        "400": "#e879f9", "500": "#d946ef", "600": "#c026d3", "700": "#a21caf",
        "800": "#86198f", "900": "#701a75", "950": "#4a044e",
    },
    "pink": {
        "50": "#fdf2f8", "100": "#fce7f3", "200": "#fbcfe8", "300": "#f9a8d4",
        "400": "#f472b6", "500": "#ec4899", "600": "#db2777", "700": "#be185d",
        "800": "#9d174d", "900": "#831843", "950": "#500724",
    },
    "rose": {
        "50": "#fff1f2", "100": "#ffe4e6", "200": "#fecdd3", "300": "#fda4af",
        "400": "#fb7185", "500": "#f43f5e", "600": "#e11d48", "700": "#be123c",
        "800": "#9f1239", "900": "#881337", "950": "#4c0519",
    },
}

_VARIANT_PREFIX: Final = re.compile(
    r"^(sm|md|lg|xl|2xl|hover|focus|active|disabled|group-hover|dark):"
)
_BARE_ARBITRARY: Final = re.compile(r"^\[.+\]$")
_PREFIXED_ARBITRARY: Final = re.compile(r"^[a-z]+-\[.+\]$")
_HEX_COLOR: Final = re.compile(r"^([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$")

_DISPLAY_CLASSES: Final = {
    "block": "block",
    "inline-block": "inline-block",
    "inline": "inline",
    "flex": "flex",
    "inline-flex": "inline-flex",
    "grid": "grid",
    "inline-grid": "inline-grid",
    "none": "hidden",
}

_FONT_WEIGHT_CLASSES: Final = {
    "100": "font-thin",
    "200": "font-extralight",
    "300": "font-light",
    "400": "font-normal",
    "500": "font-medium",
    "600": "font-semibold",
    "700": "font-bold",
    "800": "font-extrabold",
    "900": "font-black",
}

_COLOR_CLASS_PREFIX: Final = {
    "color": "text",
    "background-color": "bg",
    "border-color": "border",
}

# Tailwind spacing scale step in pixels
_SPACING_UNIT_PX: Final = 4


def is_tailwind_class(class_name: str) -> bool:
    """Check if a class is a Tailwind utility class.

    Responsive and state variants (``md:``, ``hover:``, ...) are judged by
    their base class.
    """
    if any(pattern.match(class_name) for pattern in TAILWIND_PATTERNS.values()):
        return True

    if _BARE_ARBITRARY.match(class_name):
        return False
    if _PREFIXED_ARBITRARY.match(class_name):
        return True

    if _VARIANT_PREFIX.match(class_name):
        return is_tailwind_class(class_name.split(":")[-1])

    return False


def parse_tailwind_classes(class_name: str) -> tuple[list[str], list[str]]:
    """Split a class string into Tailwind and other classes.

    Returns:
        Tuple of (tailwind classes, other classes), both in original order
    """
    tailwind: list[str] = []
    other: list[str] = []

    for cls in class_name.split():
        if is_tailwind_class(cls):
            tailwind.append(cls)
        else:
            other.append(cls)

    return tailwind, other


def get_tailwind_category(class_name: str) -> str | None:
    """Get the category of a Tailwind class, or None if no pattern matches."""
    for category, pattern in TAILWIND_PATTERNS.items():
        if pattern.match(class_name):
            return category
    return None


def _pattern_for(category: str) -> re.Pattern[str]:
    try:
        return TAILWIND_PATTERNS[category]
    except KeyError:
        raise ValueError(f"Unknown Tailwind category: {category}") from None


def update_tailwind_class(class_name: str, category: str, new_class: str) -> str:
    """Replace the classes of one category with ``new_class``.

    An empty ``new_class`` only removes the existing ones.
    """
    pattern = _pattern_for(category)
    classes = [cls for cls in class_name.split() if not pattern.match(cls)]
    if new_class:
        classes.append(new_class)
    return " ".join(classes)


def remove_tailwind_class(class_name: str, category: str) -> str:
    """Remove every class of one category."""
    return update_tailwind_class(class_name, category, "")


def merge_classes(base: str, additions: str) -> str:
    """Merge two class strings; additions win over base classes of the same category."""
    base_classes = base.split()
    add_classes = additions.split()

    add_categories = {
        category
        for category in (get_tailwind_category(cls) for cls in add_classes)
        if category
    }

    kept = [
        cls for cls in base_classes if get_tailwind_category(cls) not in add_categories
    ]
    return " ".join(kept + add_classes)


def _hex_to_rgb(hex_color: str) -> tuple[int, int, int] | None:
    value = hex_color.lower().lstrip("#")
    if len(value) == 3:
        value = "".join(c * 2 for c in value)
    match = _HEX_COLOR.match(value)
    if not match:
        return None
    r, g, b = (int(part, 16) for part in match.groups())
    return r, g, b


def find_closest_tailwind_color(hex_color: str) -> tuple[str, str] | None:
    """Find the palette color nearest to a hex value.

    Returns:
        Tuple of (color name, shade); shade is "" for black and white.
        None when the value is not a hex color.
    """
    value = hex_color.lower()
    if value in ("#000000", "#000"):
        return "black", ""
    if value in ("#ffffff", "#fff"):
        return "white", ""

    rgb = _hex_to_rgb(value)
    if rgb is None:
        return None

    closest: tuple[str, str] | None = None
    closest_distance = math.inf
    for color_name, shades in TAILWIND_COLORS.items():
        for shade, shade_hex in shades.items():
            shade_rgb = _hex_to_rgb(shade_hex)
            if shade_rgb is None:
                continue
            distance = math.dist(rgb, shade_rgb)
            if distance < closest_distance:
                closest_distance = distance
                closest = (color_name, shade)

    return closest


def css_value_to_tailwind(css_property: str, value: str) -> str | None:
    """Convert a CSS declaration to the closest Tailwind class.

    Returns:
        The class, or None when the property has no Tailwind equivalent
    """
    prefix = CSS_TO_TAILWIND_PREFIX.get(css_property)
    if prefix is None:
        return None

    if css_property in _COLOR_CLASS_PREFIX:
        match = find_closest_tailwind_color(value)
        if match:
            name, shade = match
            color_prefix = _COLOR_CLASS_PREFIX[css_property]
            if shade:
                return f"{color_prefix}-{name}-{shade}"
            return f"{color_prefix}-{name}"
        return f"{prefix}-[{value}]"

    if css_property.startswith(("margin", "padding")):
        number = re.match(r"^\s*(-?\d+(?:\.\d+)?)", value)
        if number:
            # half steps round up
            steps = math.floor(float(number.group(1)) / _SPACING_UNIT_PX + 0.5)
            return f"{prefix}-{steps}"

    if css_property == "display":
        return _DISPLAY_CLASSES.get(value)

    if css_property == "font-weight":
        return _FONT_WEIGHT_CLASSES.get(value)

    if prefix:
        return f"{prefix}-[{value}]"

    return None
