"""
Syntax tree walker.

Parses one file, visits every object literal in document order (outer
before inner) and validates those that look like components. Nested
literals are visited on their own even when an enclosing literal already
matched.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .parser import ParseError, parse_source
from .reporting import LintResult, parse_error
from .rules import is_component, validate_component
from .scanner import load_source

logger = logging.getLogger(__name__)


def lint_source(path: str, text: str, result: Optional[LintResult] = None) -> LintResult:
    """
    Lint source text that was read from `path`.

    A parse failure adds one error diagnostic at 1:1 and nothing else.
    """
    result = result if result is not None else LintResult()
    result.files_checked += 1

    try:
        tree = parse_source(text, filename=path)
    except ParseError as e:
        logger.debug("%s: parse failed: %s", path, e)
        result.add(parse_error(path, str(e)))
        return result

    components = 0
    for obj in tree.iter_object_literals():
        if not is_component(obj):
            continue
        components += 1
        result.extend(validate_component(obj, path))

    logger.debug("%s: %d component(s)", path, components)
    return result


def lint_file(
    path: Union[str, Path],
    result: Optional[LintResult] = None,
    display_path: Optional[str] = None,
) -> LintResult:
    """
    Read and lint a single file.

    Unreadable files are reported the same way as unparseable ones.
    """
    name = display_path or str(path)
    try:
        src = load_source(path)
    except OSError as e:
        result = result if result is not None else LintResult()
        result.files_checked += 1
        result.add(parse_error(name, e.strerror or str(e)))
        return result
    return lint_source(name, src.text, result)
