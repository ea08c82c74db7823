"""Design mode protocol.

Message shapes exchanged over ``postMessage`` between the host page and the
preview iframe running the injected design mode client. Field names on the
wire are camelCase; the ``type`` tag alone decides the shape of a message.

Both ends of the channel are versioned independently, so a message whose
``type`` is unknown is ignored rather than treated as an error.
"""

import json
from collections.abc import Callable, Mapping
from typing import Annotated, Any, ClassVar, Final, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..domain.exceptions import MessageValidationError
from ..logging_config import get_logger

logger: Final = get_logger(__name__)

# Prefix for design mode postMessage envelopes to avoid conflicts
DESIGN_MODE_MESSAGE_PREFIX: Final = "vibesdk_design_mode"


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    # Nullable fields that are written as null instead of being left out
    always_emitted: ClassVar[frozenset[str]] = frozenset()


# ============================================================================
# Element data
# ============================================================================


class DesignModeBoundingRect(_WireModel):
    top: float
    left: float
    width: float
    height: float
    bottom: float
    right: float


class DesignModeComputedStyles(_WireModel):
    """Computed CSS values captured for editing, as the browser reports them.

    Values missing from a snapshot default to an empty string.
    """

    # Typography
    font_family: str = ""
    font_size: str = ""
    font_weight: str = ""
    line_height: str = ""
    letter_spacing: str = ""
    text_align: str = ""
    text_decoration: str = ""
    text_transform: str = ""
    color: str = ""

    # Background
    background_color: str = ""
    background_image: str = ""
    background_clip: str = ""
    webkit_background_clip: str = Field(default="", alias="WebkitBackgroundClip")
    webkit_text_fill_color: str = Field(default="", alias="WebkitTextFillColor")

    # Spacing
    margin_top: str = ""
    margin_right: str = ""
    margin_bottom: str = ""
    margin_left: str = ""
    padding_top: str = ""
    padding_right: str = ""
    padding_bottom: str = ""
    padding_left: str = ""

    # Border
    border_top_width: str = ""
    border_right_width: str = ""
    border_bottom_width: str = ""
    border_left_width: str = ""
    border_top_color: str = ""
    border_right_color: str = ""
    border_bottom_color: str = ""
    border_left_color: str = ""
    border_top_left_radius: str = ""
    border_top_right_radius: str = ""
    border_bottom_right_radius: str = ""
    border_bottom_left_radius: str = ""
    border_style: str = ""

    # Layout
    display: str = ""
    flex_direction: str = ""
    justify_content: str = ""
    align_items: str = ""
    gap: str = ""
    width: str = ""
    height: str = ""
    min_width: str = ""
    min_height: str = ""
    max_width: str = ""
    max_height: str = ""

    # Effects
    opacity: str = ""
    box_shadow: str = ""
    transform: str = ""

    # Position
    position: str = ""
    top: str = ""
    right: str = ""
    bottom: str = ""
    left: str = ""
    z_index: str = ""


# CSS properties the client extracts for computed styles, in extraction order
COMPUTED_STYLE_PROPERTIES: Final = (
    "fontFamily",
    "fontSize",
    "fontWeight",
    "lineHeight",
    "letterSpacing",
    "textAlign",
    "textDecoration",
    "textTransform",
    "color",
    "backgroundColor",
    "backgroundImage",
    "backgroundClip",
    "WebkitBackgroundClip",
    "WebkitTextFillColor",
    "marginTop",
    "marginRight",
    "marginBottom",
    "marginLeft",
    "paddingTop",
    "paddingRight",
    "paddingBottom",
    "paddingLeft",
    "borderTopWidth",
    "borderRightWidth",
    "borderBottomWidth",
    "borderLeftWidth",
    "borderTopColor",
    "borderRightColor",
    "borderBottomColor",
    "borderLeftColor",
    "borderTopLeftRadius",
    "borderTopRightRadius",
    "borderBottomRightRadius",
    "borderBottomLeftRadius",
    "borderStyle",
    "display",
    "flexDirection",
    "justifyContent",
    "alignItems",
    "gap",
    "width",
    "height",
    "minWidth",
    "minHeight",
    "maxWidth",
    "maxHeight",
    "opacity",
    "boxShadow",
    "transform",
    "position",
    "top",
    "right",
    "bottom",
    "left",
    "zIndex",
)

# Elements that should be ignored during design mode selection
IGNORED_ELEMENTS: Final = (
    "script",
    "style",
    "link",
    "meta",
    "head",
    "html",
    "noscript",
)

# Elements that typically contain editable text
TEXT_EDITABLE_ELEMENTS: Final = (
    "p",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "span",
    "a",
    "button",
    "label",
    "li",
    "td",
    "th",
    "caption",
    "figcaption",
    "blockquote",
    "cite",
    "q",
    "strong",
    "em",
    "b",
    "i",
    "u",
    "small",
    "mark",
    "del",
    "ins",
    "sub",
    "sup",
)


class DesignModeSourceLocation(_WireModel):
    """Source code location of the component that rendered an element."""

    file_path: str
    line_number: int
    column_number: int | None = None
    component_name: str | None = None


ElementType = Literal[
    "text", "button", "input", "image", "container", "list", "generic"
]


class DesignModeElementData(_WireModel):
    """Snapshot of one DOM element taken on hover or selection."""

    selector: str
    tag_name: str
    class_name: str
    tailwind_classes: list[str] = Field(default_factory=list)
    other_classes: list[str] = Field(default_factory=list)
    inline_styles: dict[str, str] = Field(default_factory=dict)
    computed_styles: DesignModeComputedStyles = Field(
        default_factory=DesignModeComputedStyles
    )
    bounding_rect: DesignModeBoundingRect
    text_content: str | None = None
    is_text_editable: bool
    source_location: DesignModeSourceLocation | None = None
    parent_selector: str | None = None
    child_count: int
    element_type: ElementType | None = None
    has_inline_styles: bool | None = None
    is_nested: bool | None = None


# ============================================================================
# Messages: parent -> iframe
# ============================================================================


class DesignModeEnableMessage(_WireModel):
    type: Literal["design_mode_enable"] = "design_mode_enable"


class DesignModeDisableMessage(_WireModel):
    type: Literal["design_mode_disable"] = "design_mode_disable"


class DesignModePreviewStyleMessage(_WireModel):
    type: Literal["design_mode_preview_style"] = "design_mode_preview_style"
    selector: str
    styles: dict[str, str]


class DesignModeClearPreviewMessage(_WireModel):
    type: Literal["design_mode_clear_preview"] = "design_mode_clear_preview"
    selector: str


class DesignModeSelectElementMessage(_WireModel):
    type: Literal["design_mode_select_element"] = "design_mode_select_element"
    selector: str


class DesignModeUpdateTextMessage(_WireModel):
    type: Literal["design_mode_update_text"] = "design_mode_update_text"
    selector: str
    text: str


DesignModeParentMessage = Annotated[
    DesignModeEnableMessage
    | DesignModeDisableMessage
    | DesignModePreviewStyleMessage
    | DesignModeClearPreviewMessage
    | DesignModeSelectElementMessage
    | DesignModeUpdateTextMessage,
    Field(discriminator="type"),
]


# ============================================================================
# Messages: iframe -> parent
# ============================================================================


class DesignModeReadyMessage(_WireModel):
    type: Literal["design_mode_ready"] = "design_mode_ready"


class DesignModeElementHoveredMessage(_WireModel):
    type: Literal["design_mode_element_hovered"] = "design_mode_element_hovered"
    # None when the pointer left every selectable element
    element: DesignModeElementData | None = None

    always_emitted: ClassVar[frozenset[str]] = frozenset({"element"})


class DesignModeElementSelectedMessage(_WireModel):
    type: Literal["design_mode_element_selected"] = "design_mode_element_selected"
    element: DesignModeElementData


class DesignModeElementDeselectedMessage(_WireModel):
    type: Literal["design_mode_element_deselected"] = "design_mode_element_deselected"


class DesignModeTextEditedMessage(_WireModel):
    type: Literal["design_mode_text_edited"] = "design_mode_text_edited"
    selector: str
    old_text: str
    new_text: str


class DesignModeTextSourceLocation(_WireModel):
    file_path: str
    line_number: int


class DesignModeInlineTextEditMessage(_WireModel):
    """Text committed from double-click editing inside the iframe."""

    type: Literal["design_mode_text_edit"] = "design_mode_text_edit"
    selector: str
    old_text: str
    new_text: str
    source_location: DesignModeTextSourceLocation | None = None


class DesignModeErrorMessage(_WireModel):
    type: Literal["design_mode_error"] = "design_mode_error"
    error: str
    context: str | None = None


DesignModeIframeMessage = Annotated[
    DesignModeReadyMessage
    | DesignModeElementHoveredMessage
    | DesignModeElementSelectedMessage
    | DesignModeElementDeselectedMessage
    | DesignModeTextEditedMessage
    | DesignModeInlineTextEditMessage
    | DesignModeErrorMessage,
    Field(discriminator="type"),
]


# ============================================================================
# Style changes handed to the code modification backend
# ============================================================================


class DesignModeStyleChange(_WireModel):
    property: str
    old_value: str
    new_value: str
    # Tailwind class that corresponds to this change
    tailwind_class: str | None = None
    # Modify inline styles instead of classes
    use_inline_style: bool | None = None


class DesignModeChangeRequest(_WireModel):
    selector: str
    file_path: str | None = None
    changes: list[DesignModeStyleChange] = Field(default_factory=list)


# ============================================================================
# Envelope encoding and parsing
# ============================================================================

_PARENT_ADAPTER: Final[TypeAdapter[Any]] = TypeAdapter(DesignModeParentMessage)
_IFRAME_ADAPTER: Final[TypeAdapter[Any]] = TypeAdapter(DesignModeIframeMessage)

PARENT_MESSAGE_TYPES: Final = frozenset(
    {
        "design_mode_enable",
        "design_mode_disable",
        "design_mode_preview_style",
        "design_mode_clear_preview",
        "design_mode_select_element",
        "design_mode_update_text",
    }
)

IFRAME_MESSAGE_TYPES: Final = frozenset(
    {
        "design_mode_ready",
        "design_mode_element_hovered",
        "design_mode_element_selected",
        "design_mode_element_deselected",
        "design_mode_text_edited",
        "design_mode_text_edit",
        "design_mode_error",
    }
)


def wrap_message(message: BaseModel) -> dict[str, Any]:
    """Build the JSON-ready envelope posted across the frame boundary.

    Optional fields that are unset are left out, matching what the browser
    side sends for absent properties. Fields listed in ``always_emitted`` are
    written as null instead.
    """
    payload = message.model_dump(mode="json", by_alias=True, exclude_none=True)
    for name in getattr(message, "always_emitted", ()):
        field = type(message).model_fields[name]
        payload.setdefault(field.alias or name, None)
    return {"prefix": DESIGN_MODE_MESSAGE_PREFIX, **payload}


def serialize_message(message: BaseModel) -> str:
    """Encode a message envelope as a JSON string."""
    return json.dumps(wrap_message(message))


def _parse(
    data: Any,
    known_types: frozenset[str],
    adapter: TypeAdapter[Any],
    require_prefix: bool,
) -> Any:
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except ValueError:
            logger.debug("Ignoring non-JSON design mode payload")
            return None

    if not isinstance(data, Mapping):
        return None

    if require_prefix and data.get("prefix") != DESIGN_MODE_MESSAGE_PREFIX:
        return None

    message_type = data.get("type")
    if not isinstance(message_type, str) or message_type not in known_types:
        logger.debug("Ignoring unrecognized design mode message", type=message_type)
        return None

    try:
        return adapter.validate_python(dict(data))
    except PydanticValidationError as e:
        logger.warning(
            "Malformed design mode message",
            type=message_type,
            errors=e.error_count(),
        )
        raise MessageValidationError(message_type, str(e)) from e


def parse_parent_message(
    data: Any, require_prefix: bool = True
) -> DesignModeParentMessage | None:
    """Parse a message sent from the parent window to the iframe.

    Args:
        data: Envelope as a mapping or JSON string
        require_prefix: Only accept envelopes carrying the design mode prefix

    Returns:
        The typed message, or None when the payload is not a design mode
        message or its type is unknown

    Raises:
        MessageValidationError: If the type is known but the body is malformed
    """
    message = _parse(data, PARENT_MESSAGE_TYPES, _PARENT_ADAPTER, require_prefix)
    return message  # type: ignore[no-any-return]


def parse_iframe_message(
    data: Any, require_prefix: bool = True
) -> DesignModeIframeMessage | None:
    """Parse a message sent from the iframe to the parent window.

    Same contract as ``parse_parent_message``.
    """
    message = _parse(data, IFRAME_MESSAGE_TYPES, _IFRAME_ADAPTER, require_prefix)
    return message  # type: ignore[no-any-return]


R = TypeVar("R")

Direction = Literal["parent", "iframe"]


class MessageRouter:
    """Dispatch incoming design mode messages to per-type handlers.

    A router reads one direction of the channel: ``"parent"`` for messages
    the iframe receives from the host, ``"iframe"`` for messages the host
    receives from the preview.
    """

    def __init__(self, direction: Direction, require_prefix: bool = True):
        if direction == "parent":
            self._known_types = PARENT_MESSAGE_TYPES
            self._parse: Callable[..., Any] = parse_parent_message
        elif direction == "iframe":
            self._known_types = IFRAME_MESSAGE_TYPES
            self._parse = parse_iframe_message
        else:
            raise ValueError(f"Unknown message direction: {direction}")
        self.direction = direction
        self.require_prefix = require_prefix
        self._handlers: dict[str, Callable[[Any], Any]] = {}

    def register(self, message_type: str, handler: Callable[[Any], Any]) -> None:
        """Register the handler for one message type, replacing any previous one."""
        if message_type not in self._known_types:
            raise ValueError(
                f"'{message_type}' is not a {self.direction} design mode message"
            )
        self._handlers[message_type] = handler

    def on(
        self, message_type: str
    ) -> Callable[[Callable[[Any], R]], Callable[[Any], R]]:
        """Decorator form of ``register``."""

        def decorator(handler: Callable[[Any], R]) -> Callable[[Any], R]:
            self.register(message_type, handler)
            return handler

        return decorator

    def dispatch(self, data: Any) -> Any:
        """Parse a payload and run its handler.

        Returns:
            The handler's result, or None when the payload is ignored
        """
        message = self._parse(data, require_prefix=self.require_prefix)
        if message is None:
            return None

        handler = self._handlers.get(message.type)
        if handler is None:
            logger.debug("No handler for design mode message", type=message.type)
            return None
        return handler(message)
