"""
Component detection and placement rules.

A component is an object literal with at least one of the keys `extend`,
`props`, `style` or `on`. Its `props`, `style` and `on` sub-objects are
checked, in that order, for fields that belong in a different sub-object.
"""

from typing import List, Optional, Tuple

from .parser.nodes import ObjectLiteral, Property
from .reporting import Diagnostic, Severity
from .tables import (
    has_attribute_prefix,
    is_event_handler,
    is_html_attribute,
    is_style_property,
    looks_like_event_binding,
)


COMPONENT_KEYS = frozenset({"extend", "props", "style", "on"})


def is_component(obj: ObjectLiteral) -> bool:
    """True if any direct static key is one of COMPONENT_KEYS."""
    return any(key in COMPONENT_KEYS for key in obj.keys())


def resolve_location(prop: Property, component: ObjectLiteral) -> Tuple[int, int]:
    """Property position, else the component's position, else 1:1."""
    if prop.line is not None and prop.column is not None:
        return prop.line, prop.column
    if component.line is not None and component.column is not None:
        return component.line, component.column
    return 1, 1


# ============================================================================
# PLACEMENT RULES
# ============================================================================

class PlacementRule:
    """Checks the fields of one sub-object of a component."""

    sub_object: str = ""

    def check_field(self, name: str) -> List[Tuple[str, str]]:
        """Return (message, suggestion) pairs for a misplaced field name."""
        raise NotImplementedError

    def check(self, component: ObjectLiteral, file: str) -> List[Diagnostic]:
        target = component.get_object(self.sub_object)
        if target is None:
            return []

        diagnostics = []
        for prop in target.static_properties():
            for message, suggestion in self.check_field(prop.key):
                line, column = resolve_location(prop, component)
                diagnostics.append(Diagnostic(
                    file=file,
                    line=line,
                    column=column,
                    message=message,
                    severity=Severity.WARNING,
                    suggestion=suggestion,
                ))
        return diagnostics


class PropsPlacementRule(PlacementRule):
    """Style properties and event handlers do not belong in `props`."""

    sub_object = "props"

    def check_field(self, name: str) -> List[Tuple[str, str]]:
        issues = []
        if is_style_property(name):
            issues.append((
                f"Style property '{name}' should be in 'style' object, not 'props'",
                f"Move '{name}' to the 'style' object",
            ))
        if is_event_handler(name):
            issues.append((
                f"Event handler '{name}' should be in 'on' object, not 'props'",
                f"Move '{name}' to the 'on' object",
            ))
        # data-* / aria-* names belong here
        return issues


class StylePlacementRule(PlacementRule):
    """HTML, data-* and aria-* attributes do not belong in `style`."""

    sub_object = "style"

    def check_field(self, name: str) -> List[Tuple[str, str]]:
        if is_html_attribute(name) or has_attribute_prefix(name):
            return [(
                f"HTML attribute '{name}' should be in 'props' object, not 'style'",
                f"Move '{name}' to the 'props' object",
            )]
        return []


class OnPlacementRule(PlacementRule):
    """Anything in `on` that does not look like an event binding."""

    sub_object = "on"

    def check_field(self, name: str) -> List[Tuple[str, str]]:
        if looks_like_event_binding(name):
            return []
        return [(
            f"'{name}' doesn't look like an event handler and should probably be in 'props'",
            f"Consider moving '{name}' to the 'props' object",
        )]


# Order is part of the output contract: props, then style, then on.
DEFAULT_RULES: Tuple[PlacementRule, ...] = (
    PropsPlacementRule(),
    StylePlacementRule(),
    OnPlacementRule(),
)


def validate_component(
    component: ObjectLiteral,
    file: str = "<unknown>",
    rules: Optional[Tuple[PlacementRule, ...]] = None,
) -> List[Diagnostic]:
    """Run the placement rules over a detected component."""
    diagnostics: List[Diagnostic] = []
    for rule in rules or DEFAULT_RULES:
        diagnostics.extend(rule.check(component, file))
    return diagnostics
