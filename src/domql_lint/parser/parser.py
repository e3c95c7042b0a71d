"""
JavaScript / TypeScript Parser

Parses source text with tree-sitter and exposes the object literals of the
resulting syntax tree as ObjectLiteral nodes (see nodes.py).

Grammar selection follows the file extension: plain TypeScript files use
the TypeScript grammar (so `<T>value` casts parse), everything else uses the
TSX grammar, which accepts ES modules, JSX and type annotations.

Usage:
    tree = parse_source(text, "src/Button.js")
    for obj in tree.iter_object_literals():
        print(obj.keys())
"""

import codecs
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import PurePath
from typing import Iterator, List, Optional, Union

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from domql_lint.parser.nodes import ExpressionNode, ObjectLiteral, Property, PropertyKind

logger = logging.getLogger(__name__)


TSX = "tsx"
TYPESCRIPT = "typescript"

TYPESCRIPT_EXTENSIONS = frozenset({".ts", ".mts", ".cts"})

# Depth to which nested object values are materialised: the component itself,
# its sub-objects (props/style/on) and their direct properties.
COMPONENT_DEPTH = 2

# Node types that open a function body; `return` is only valid below one.
FUNCTION_TYPES = frozenset({
    "function", "function_expression", "function_declaration",
    "generator_function", "generator_function_declaration",
    "arrow_function", "method_definition",
})

_CODE_POINT_ESCAPE = re.compile(r"\\u\{([0-9a-fA-F]+)\}")


class ParseError(Exception):
    """Source text could not be parsed."""
    def __init__(self, message: str, line: int = None, column: int = None):
        self.message = message
        self.line = line
        self.column = column
        if line is not None:
            super().__init__(f"{message} ({line}:{column})")
        else:
            super().__init__(message)


def grammar_for(filename: str) -> str:
    """Pick the tree-sitter grammar for a file name."""
    if PurePath(filename).suffix.lower() in TYPESCRIPT_EXTENSIONS:
        return TYPESCRIPT
    return TSX


@lru_cache(maxsize=None)
def _get_parser(grammar: str) -> Parser:
    if grammar == TYPESCRIPT:
        language = Language(tree_sitter_typescript.language_typescript())
    else:
        language = Language(tree_sitter_typescript.language_tsx())
    return Parser(language)


# ============================================================================
# POSITIONS
# ============================================================================

def _position(node: Node, source: bytes) -> tuple:
    """1-based (line, column) of a node; columns count characters, not bytes."""
    row, byte_col = node.start_point
    line_start = node.start_byte - byte_col
    prefix = source[line_start:node.start_byte]
    return row + 1, len(prefix.decode("utf-8", errors="replace")) + 1


def _node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


# ============================================================================
# CONVERSION
# ============================================================================

def _unwrap_parens(node: Node) -> Node:
    """Parenthesised expressions are transparent: `({ ... })` is an object."""
    while node.type == "parenthesized_expression":
        inner = [c for c in node.named_children if c.type != "comment"]
        if len(inner) != 1:
            break
        node = inner[0]
    return node


def _unescape(text: str) -> str:
    """Value of one escape sequence, including the `\\u{...}` code point form."""
    match = _CODE_POINT_ESCAPE.fullmatch(text)
    try:
        if match:
            return chr(int(match.group(1), 16))
        return codecs.decode(text, "unicode_escape")
    except (UnicodeError, ValueError, OverflowError):
        return text[1:]


def _string_value(node: Node, source: bytes) -> str:
    parts: List[str] = []
    for child in node.named_children:
        text = _node_text(child, source)
        if child.type == "escape_sequence":
            parts.append(_unescape(text))
        else:
            parts.append(text)
    return "".join(parts)


def _key_name(node: Node, source: bytes) -> Optional[str]:
    """Static name of a property key, None for computed/numeric keys."""
    if node.type in ("property_identifier", "identifier"):
        return _node_text(node, source)
    if node.type == "string":
        return _string_value(node, source)
    return None


def _convert_value(node: Optional[Node], source: bytes, depth: Optional[int]) -> Union[ObjectLiteral, ExpressionNode, None]:
    if node is None:
        return None
    node = _unwrap_parens(node)
    line, column = _position(node, source)
    if node.type == "object" and (depth is None or depth > 0):
        return _convert_object(node, source, None if depth is None else depth - 1)
    return ExpressionNode(kind=node.type, line=line, column=column)


def _convert_property(node: Node, source: bytes, depth: Optional[int]) -> Optional[Property]:
    line, column = _position(node, source)

    if node.type == "pair":
        key_node = node.child_by_field_name("key")
        value = _convert_value(node.child_by_field_name("value"), source, depth)
        if key_node is not None and key_node.type == "computed_property_name":
            return Property(None, PropertyKind.COMPUTED, value, line, column)
        key = _key_name(key_node, source) if key_node is not None else None
        return Property(key, PropertyKind.PAIR, value, line, column)

    if node.type == "shorthand_property_identifier":
        value = ExpressionNode(kind="identifier", line=line, column=column)
        return Property(_node_text(node, source), PropertyKind.SHORTHAND, value, line, column)

    if node.type == "method_definition":
        name_node = node.child_by_field_name("name")
        value = ExpressionNode(kind="function", line=line, column=column)
        if name_node is None or name_node.type == "computed_property_name":
            return Property(None, PropertyKind.COMPUTED, value, line, column)
        return Property(_key_name(name_node, source), PropertyKind.METHOD, value, line, column)

    if node.type == "spread_element":
        return Property(None, PropertyKind.SPREAD, None, line, column)

    # comments and anything the grammar may add later
    return None


def _convert_object(node: Node, source: bytes, depth: Optional[int]) -> ObjectLiteral:
    line, column = _position(node, source)
    obj = ObjectLiteral(line=line, column=column)
    for child in node.named_children:
        prop = _convert_property(child, source, depth)
        if prop is not None:
            obj.properties.append(prop)
    return obj


def object_literal_from_node(node: Node, source: bytes, depth: Optional[int] = COMPONENT_DEPTH) -> ObjectLiteral:
    """
    Convert a tree-sitter `object` node.

    `depth` limits how many levels of nested object values are converted;
    deeper objects become ExpressionNode(kind="object"). None converts the
    whole literal.
    """
    return _convert_object(node, source, depth)


# ============================================================================
# ERRORS
# ============================================================================

def _first_error(root: Node) -> Optional[Node]:
    """First ERROR or MISSING node in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def _error_from_tree(root: Node, source: bytes) -> ParseError:
    node = _first_error(root)
    if node is None:
        return ParseError("Invalid syntax", 1, 1)

    line, column = _position(node, source)
    if node.is_missing:
        return ParseError(f"Missing {node.type!r}", line, column)
    return _unexpected(_offending_leaf(node), source)


def _leaves(node: Node) -> Iterator[Node]:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.children:
            stack.extend(reversed(current.children))
        else:
            yield current


def _offending_leaf(error: Node) -> Node:
    """
    The token an ERROR node failed on.

    Complete constructs the parser recovered inside the ERROR node are
    skipped; the first token after the last of them is reported, or the
    last token when nothing follows it.
    """
    valid_end = error.start_byte
    for child in error.children:
        if child.is_named and not child.is_error and not child.has_error:
            valid_end = child.end_byte

    last = error
    for leaf in _leaves(error):
        if leaf.start_byte >= valid_end and leaf.end_byte > leaf.start_byte:
            return leaf
        last = leaf
    return last


def _unexpected(leaf: Node, source: bytes) -> ParseError:
    snippet = _node_text(leaf, source).splitlines()[0] if leaf.end_byte > leaf.start_byte else ""
    line, column = _position(leaf, source)
    if not snippet:
        return ParseError("Unexpected end of input", line, column)
    if len(snippet) > 20:
        snippet = snippet[:20] + "..."
    return ParseError(f"Unexpected token {snippet!r}", line, column)


def _inside_function(node: Node) -> bool:
    parent = node.parent
    while parent is not None:
        if parent.type in FUNCTION_TYPES:
            return True
        parent = parent.parent
    return False


def _invalid_construct(root: Node, source: bytes) -> Optional[ParseError]:
    """
    Syntax the grammar accepts without an ERROR node but a module parser
    rejects: holes in object literals (`{ a: 1,, b: 2 }`, `{ , }`) and
    `return` outside of a function.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "object":
            previous = None
            for child in node.children:
                if child.type == "," and previous in ("{", ","):
                    return _unexpected(child, source)
                if child.type != "comment":
                    previous = child.type
        elif node.type == "return_statement" and not _inside_function(node):
            line, column = _position(node, source)
            return ParseError("'return' outside of function", line, column)
        stack.extend(reversed(node.children))
    return None


# ============================================================================
# SOURCE TREE
# ============================================================================

@dataclass
class SourceTree:
    """A successfully parsed file."""
    filename: str
    source: bytes
    tree: Tree
    grammar: str = TSX

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def iter_object_nodes(self) -> Iterator[Node]:
        """Every `object` node, outer before inner, in document order."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node.type == "object":
                yield node
            stack.extend(reversed(node.children))

    def iter_object_literals(self, depth: Optional[int] = COMPONENT_DEPTH) -> Iterator[ObjectLiteral]:
        for node in self.iter_object_nodes():
            yield object_literal_from_node(node, self.source, depth)

    def __repr__(self):
        return f"SourceTree({self.filename}, {self.grammar})"


def parse_source(source: str, filename: str = "<unknown>", grammar: str = None) -> SourceTree:
    """
    Parse source text.

    Raises:
        ParseError: the tree contains syntax errors or missing tokens
    """
    grammar = grammar or grammar_for(filename)
    if source.startswith("\ufeff"):
        source = source[1:]
    data = source.encode("utf-8")
    tree = _get_parser(grammar).parse(data)
    if tree.root_node.has_error:
        error = _error_from_tree(tree.root_node, data)
    else:
        error = _invalid_construct(tree.root_node, data)
    if error is not None:
        logger.debug("Parse failed for %s: %s", filename, error)
        raise error
    return SourceTree(filename=filename, source=data, tree=tree, grammar=grammar)


def parse_file(filepath: str) -> SourceTree:
    """Read and parse a file. Handles encoding fallback."""
    from domql_lint.scanner import load_source

    src = load_source(filepath)
    return parse_source(src.text, filename=src.path)
