"""
domql_lint.parser - JavaScript/TypeScript parsing

tree-sitter backed parser reduced to the object-literal view the linter
needs: object literals, their properties and source positions.
"""

from domql_lint.parser.nodes import ExpressionNode, ObjectLiteral, Property, PropertyKind
from domql_lint.parser.parser import (
    COMPONENT_DEPTH,
    TSX,
    TYPESCRIPT,
    ParseError,
    SourceTree,
    grammar_for,
    object_literal_from_node,
    parse_file,
    parse_source,
)

__all__ = [
    # Parser
    "ParseError",
    "SourceTree",
    "parse_source",
    "parse_file",
    "grammar_for",
    "object_literal_from_node",
    "COMPONENT_DEPTH",
    "TSX",
    "TYPESCRIPT",
    # Nodes
    "ObjectLiteral",
    "Property",
    "PropertyKind",
    "ExpressionNode",
]
