"""
Object-literal serialization for the `parse` debugging command.

Usage:
    from domql_lint.parser.ast_serde import serialize_objects
"""

import json
from typing import Iterable

from domql_lint.parser.nodes import ObjectLiteral


def serialize_objects(filename: str, objects: Iterable[ObjectLiteral], indent: int = None) -> str:
    """
    Serialize object literals to JSON text.

    Args:
        filename: Source file the literals came from
        objects: Literals in document order
        indent: Passed to json.dumps; None gives compact output
    """
    data = {
        '_type': 'file',
        'filename': str(filename),
        'objects': [obj.to_dict() for obj in objects],
    }
    separators = None if indent else (',', ':')
    return json.dumps(data, indent=indent, separators=separators)

