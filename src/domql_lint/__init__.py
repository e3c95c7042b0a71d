"""
domql-lint - component structure linter

Finds DOMQL-style component object literals in JavaScript/TypeScript
sources and reports fields placed in the wrong `props`, `style` or `on`
sub-object.
"""

__version__ = "0.1.0"
__author__ = "domql-lint contributors"

from domql_lint.reporting import Diagnostic, LintResult, Severity
from domql_lint.walker import lint_file, lint_source
