"""
Lint runner.

Resolves the configured file patterns and lints every file, in file-list
order. With jobs > 1 files are linted in worker processes and the
per-file results are merged back in the same order.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from typing import Iterable, Sequence

from .config import LintConfig
from .reporting import LintResult
from .scanner import discover_files, resolve_path
from .walker import lint_file, lint_source

logger = logging.getLogger(__name__)


def _lint_one(job: tuple[str, str]) -> LintResult:
    display, fs_path = job
    return lint_file(fs_path, display_path=display)


def lint_paths(cfg: LintConfig, files: Sequence[str]) -> LintResult:
    """Lint already-discovered file identifiers."""
    jobs = [(f, str(resolve_path(cfg, f))) for f in files]
    result = LintResult()

    if cfg.jobs > 1 and len(jobs) > 1:
        logger.debug("Linting %d files with %d workers", len(jobs), cfg.jobs)
        with ProcessPoolExecutor(max_workers=cfg.jobs) as executor:
            for file_result in executor.map(_lint_one, jobs):
                result.merge(file_result)
        return result

    for display, fs_path in jobs:
        lint_file(fs_path, result, display_path=display)
    return result


def lint_sources(sources: Iterable[tuple[str, str]]) -> LintResult:
    """Lint (file identifier, source text) pairs in order."""
    result = LintResult()
    for path, text in sources:
        lint_source(path, text, result)
    return result


def run(cfg: LintConfig) -> LintResult:
    """Discover files for cfg and lint them."""
    files = discover_files(cfg)
    logger.info("Found %d files to analyze", len(files))
    result = lint_paths(cfg, files)
    logger.info(
        "Checked %d files: %d errors, %d warnings",
        result.files_checked, len(result.errors), len(result.warnings),
    )
    return result
