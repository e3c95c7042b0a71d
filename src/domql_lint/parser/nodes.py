"""
Object-literal node model.

A deliberately small view of a parsed source file: object literals, their
properties and the positions needed for diagnostics. Everything else in
the syntax tree is reduced to an opaque ExpressionNode.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Union


class PropertyKind(Enum):
    """How a property was written in the object literal."""
    PAIR = "pair"              # key: value
    SHORTHAND = "shorthand"    # { width }
    METHOD = "method"          # { onClick() {} }, getters, setters
    COMPUTED = "computed"      # { [expr]: value }
    SPREAD = "spread"          # { ...other }


@dataclass
class ExpressionNode:
    """Any value that is not an object literal (string, call, array, ...)."""
    kind: str = "expression"
    line: Optional[int] = None
    column: Optional[int] = None

    def __repr__(self):
        return f"Expression({self.kind})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': 'expression',
            'kind': self.kind,
            'line': self.line,
            'column': self.column,
        }


@dataclass
class Property:
    """
    A single entry of an object literal.

    `key` is the static name for identifier and string-literal keys and
    None for computed keys, numeric keys and spread elements.
    """
    key: Optional[str] = None
    kind: PropertyKind = PropertyKind.PAIR
    value: Optional[Union['ObjectLiteral', ExpressionNode]] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def __repr__(self):
        return f"Property({self.key!r}, {self.kind.value})"

    @property
    def is_static(self) -> bool:
        return self.key is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': 'property',
            'key': self.key,
            'kind': self.kind.value,
            'line': self.line,
            'column': self.column,
            'value': self.value.to_dict() if self.value is not None else None,
        }


@dataclass
class ObjectLiteral:
    """An object literal and its direct properties, in declaration order."""
    properties: List[Property] = field(default_factory=list)
    line: Optional[int] = None
    column: Optional[int] = None

    def __repr__(self):
        return f"Object({len(self.properties)} properties, L{self.line}:{self.column})"

    def static_properties(self) -> Iterator[Property]:
        """Properties with a static name (identifier or string key)."""
        return (p for p in self.properties if p.key is not None)

    def keys(self) -> List[str]:
        return [p.key for p in self.static_properties()]

    def get(self, key: str) -> Optional[Property]:
        """First property with this static name, or None."""
        for prop in self.static_properties():
            if prop.key == key:
                return prop
        return None

    def get_object(self, key: str) -> Optional['ObjectLiteral']:
        """
        Value of the first property named `key` if it is an object literal.

        Only the first property with that name is considered; a later
        duplicate is not a fallback.
        """
        prop = self.get(key)
        if prop is not None and isinstance(prop.value, ObjectLiteral):
            return prop.value
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': 'object',
            'line': self.line,
            'column': self.column,
            'properties': [p.to_dict() for p in self.properties],
        }
