"""
Classification tables.

Field names that belong in a component's `style`, `props` and `on`
sub-objects. The sets are curated by hand and are expected to stay
mutually exclusive; nothing enforces that at lint time.
"""

from __future__ import annotations

from typing import FrozenSet, Tuple


# ============================================================================
# STYLE PROPERTIES (belong in `style`, not `props`)
# ============================================================================

STYLE_PROPERTIES: FrozenSet[str] = frozenset({
    "width", "height", "margin", "padding", "border", "background", "color",
    "fontSize", "fontFamily", "fontWeight", "textAlign", "display", "position",
    "top", "left", "right", "bottom", "zIndex", "opacity", "visibility",
    "overflow", "cursor", "transition", "transform", "boxSizing", "flex",
    "flexDirection", "justifyContent", "alignItems", "gap", "grid",
    "gridTemplateColumns", "gridTemplateRows", "aspectRatio", "backdropFilter",
    "borderRadius", "boxShadow", "textDecoration", "lineHeight", "letterSpacing",
    "whiteSpace", "wordWrap", "textOverflow", "verticalAlign", "float",
    "clear", "minWidth", "maxWidth", "minHeight", "maxHeight", "flexBasis",
    "flexGrow", "flexShrink", "order", "alignSelf", "justifySelf",
})


# ============================================================================
# HTML ATTRIBUTES (belong in `props`, not `style`)
# ============================================================================

# "data-*" and "aria-*" are literal entries; real prefixed names are
# matched by has_attribute_prefix().
HTML_ATTRIBUTES: FrozenSet[str] = frozenset({
    "id", "class", "className", "data-*", "aria-*", "role", "tabindex",
    "disabled", "readonly", "required", "checked", "selected", "value",
    "placeholder", "title", "alt", "src", "href", "target", "rel",
    "type", "name", "form", "for", "maxlength", "minlength", "pattern",
    "autocomplete", "autofocus", "multiple", "size", "rows", "cols",
})

ATTRIBUTE_PREFIXES: Tuple[str, ...] = ("data-", "aria-")


# ============================================================================
# EVENT HANDLERS (belong in `on`, not `props`)
# ============================================================================

EVENT_HANDLERS: FrozenSet[str] = frozenset({
    "onClick", "onMouseEnter", "onMouseLeave", "onMouseOver", "onMouseOut",
    "onMouseDown", "onMouseUp", "onKeyDown", "onKeyUp", "onKeyPress",
    "onFocus", "onBlur", "onChange", "onInput", "onSubmit", "onLoad",
    "onError", "onResize", "onScroll", "onTouchStart", "onTouchEnd",
    "onTouchMove", "onTouchCancel",
})

# Bare DOM event names accepted inside `on` without the `on` prefix.
ON_OBJECT_EXCEPTIONS: FrozenSet[str] = frozenset({
    "mouseenter", "mouseleave", "click", "keydown", "keyup",
})


def is_style_property(name: str) -> bool:
    return name in STYLE_PROPERTIES


def is_html_attribute(name: str) -> bool:
    return name in HTML_ATTRIBUTES


def is_event_handler(name: str) -> bool:
    return name in EVENT_HANDLERS


def has_attribute_prefix(name: str) -> bool:
    """True for `data-*` / `aria-*` names, independent of HTML_ATTRIBUTES."""
    return name.startswith(ATTRIBUTE_PREFIXES)


def looks_like_event_binding(name: str) -> bool:
    """Heuristic for keys of the `on` object: `on*` or a known bare event."""
    return name.startswith("on") or name in ON_OBJECT_EXCEPTIONS


def overlapping_names() -> dict[str, FrozenSet[str]]:
    """
    Names present in more than one table.

    Only for tests and tooling; validation never consults this, so a name
    listed in two tables can trigger both warnings.
    """
    return {
        "style&attribute": STYLE_PROPERTIES & HTML_ATTRIBUTES,
        "style&event": STYLE_PROPERTIES & EVENT_HANDLERS,
        "attribute&event": HTML_ATTRIBUTES & EVENT_HANDLERS,
    }
