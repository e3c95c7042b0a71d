"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domql_lint.parser import ObjectLiteral, Property, parse_source
from domql_lint.reporting import LintResult, Severity
from domql_lint.walker import lint_source


# =============================================================================
# PATH FIXTURES
# =============================================================================

@pytest.fixture
def fixtures_dir():
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def components_dir(fixtures_dir):
    """Path to component source fixtures."""
    return fixtures_dir / "components"


@pytest.fixture
def project_dir(fixtures_dir):
    """Path to a small project with a src/ tree."""
    return fixtures_dir / "project"


@pytest.fixture
def write_file(tmp_path):
    """Write a file under tmp_path, creating parent directories."""
    def _write(relpath: str, text: str) -> Path:
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path
    return _write


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def lint_text(text: str, filename: str = "component.js") -> LintResult:
    """Lint a source snippet."""
    return lint_source(filename, text)


def messages(result: LintResult) -> list:
    """Messages of a result, in order."""
    return [d.message for d in result.diagnostics]


def first_object(text: str, filename: str = "component.js", depth=2) -> ObjectLiteral:
    """First object literal in a snippet."""
    return next(parse_source(text, filename).iter_object_literals(depth=depth))


def component(**sub_objects) -> ObjectLiteral:
    """
    Build a component literal without parsing.

    component(props=["width", "id"]) gives { props: { width, id } } with
    every node lacking a source position.
    """
    obj = ObjectLiteral()
    for key, names in sub_objects.items():
        inner = ObjectLiteral(properties=[Property(key=name) for name in names])
        obj.properties.append(Property(key=key, value=inner))
    return obj
