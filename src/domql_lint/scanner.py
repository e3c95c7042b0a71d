"""
File discovery and source loading.

Handles:
- Glob include/ignore pattern expansion
- Source file loading with encoding fallback
"""

from __future__ import annotations

import fnmatch
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from .config import LintConfig

logger = logging.getLogger(__name__)

_GLOB_CHARS = set("*?[")


@dataclass(frozen=True)
class SourceFile:
    """A loaded source file."""
    path: str
    text: str


def load_source(path: str | Path) -> SourceFile:
    """
    Load a single source file.

    Tries UTF-8 with BOM, then UTF-8, then latin-1 (which always succeeds).

    Raises:
        OSError: the file cannot be read
    """
    data = Path(path).read_bytes()
    for encoding in ("utf-8-sig", "utf-8", "latin-1"):
        try:
            text = data.decode(encoding)
            break
        except UnicodeDecodeError:
            continue
    return SourceFile(path=str(path), text=text)


# =============================================================================
# Pattern matching
# =============================================================================

def _match_part(name: str, pattern: str) -> bool:
    # Wildcards never match dot-files unless the pattern asks for them
    if name.startswith(".") and not pattern.startswith("."):
        return False
    return fnmatch.fnmatchcase(name, pattern)


def match_glob(path: str, pattern: str) -> bool:
    """
    Match a forward-slash path against a glob pattern with ** support.

    - "**/*.js" matches "a.js" (zero directories) and "src/ui/a.js"
    - "*" and "?" never cross a "/"
    - a trailing "**" matches everything below
    """
    pattern_parts = [p for p in pattern.split("/") if p not in ("", ".")]
    path_parts = [p for p in path.split("/") if p not in ("", ".")]

    def match_recursive(p_idx: int, path_idx: int) -> bool:
        if p_idx >= len(pattern_parts):
            return path_idx >= len(path_parts)

        current = pattern_parts[p_idx]

        if current == "**":
            if match_recursive(p_idx + 1, path_idx):
                return True
            # Consume one directory (never a dot-directory) and retry
            if path_idx < len(path_parts) and not path_parts[path_idx].startswith("."):
                return match_recursive(p_idx, path_idx + 1)
            return False

        if path_idx >= len(path_parts):
            return False
        if _match_part(path_parts[path_idx], current):
            return match_recursive(p_idx + 1, path_idx + 1)
        return False

    return match_recursive(0, 0)


def matches_any(path: str, patterns: tuple[str, ...] | list[str]) -> bool:
    return any(match_glob(path, p) for p in patterns)


def _static_prefix(pattern: str) -> tuple[str, str]:
    """Split a pattern into its literal directory prefix and the glob rest."""
    parts = pattern.split("/")
    prefix: list[str] = []
    for i, part in enumerate(parts[:-1]):
        if _GLOB_CHARS & set(part):
            return "/".join(prefix), "/".join(parts[i:])
        prefix.append(part)
    return "/".join(prefix), parts[-1]


def _is_ignored(cfg: LintConfig, path: str, absolute: bool) -> bool:
    if matches_any(path, cfg.ignore):
        return True
    if absolute:
        # Relative ignore patterns still apply to files under the root
        try:
            rel = Path(path).relative_to(cfg.root).as_posix()
        except ValueError:
            return False
        return matches_any(rel, cfg.ignore)
    return False


def _is_pruned_dir(cfg: LintConfig, rel_dir: str, absolute: bool) -> bool:
    """A directory is pruned when an ignore `dir/**` pattern covers it."""
    probe = rel_dir + "/__any__"
    covering = tuple(p for p in cfg.ignore if p.endswith("/**"))
    if not covering:
        return False
    if matches_any(probe, covering):
        return True
    if absolute:
        try:
            rel = Path(probe).relative_to(cfg.root).as_posix()
        except ValueError:
            return False
        return matches_any(rel, covering)
    return False


# =============================================================================
# Discovery
# =============================================================================

def _expand_pattern(cfg: LintConfig, pattern: str) -> Iterator[str]:
    normalized = pattern.replace("\\", "/")
    absolute = os.path.isabs(pattern)

    prefix, rest = _static_prefix(normalized)
    if absolute:
        base = Path(prefix or "/")
        shown_prefix = base.as_posix()
    else:
        base = cfg.root / prefix
        shown_prefix = prefix

    if not _GLOB_CHARS & set(rest):
        shown = _join(shown_prefix, rest)
        if (base / rest).is_file() and not _is_ignored(cfg, shown, absolute):
            yield shown
        return

    if not base.is_dir():
        return

    wants_dot = any(part.startswith(".") for part in rest.split("/"))

    for dirpath, dirnames, filenames in os.walk(base):
        sub = Path(dirpath).relative_to(base).as_posix()
        sub = "" if sub == "." else sub
        shown_dir = _join(shown_prefix, sub)

        dirnames[:] = [
            d for d in sorted(dirnames)
            if (wants_dot or not d.startswith("."))
            and not _is_pruned_dir(cfg, _join(shown_dir, d), absolute)
        ]

        for name in sorted(filenames):
            if not match_glob(_join(sub, name), rest):
                continue
            shown = _join(shown_dir, name)
            if _is_ignored(cfg, shown, absolute):
                continue
            yield shown


def _join(a: str, b: str) -> str:
    if not a:
        return b
    if not b:
        return a
    return f"{a}/{b}"


def discover_files(cfg: LintConfig) -> list[str]:
    """
    Resolve the include/ignore patterns of cfg into an ordered file list.

    Relative patterns yield paths relative to cfg.root; absolute patterns
    yield absolute paths. The result is de-duplicated and sorted.
    """
    found: set[str] = set()
    for pattern in cfg.files:
        matched = set(_expand_pattern(cfg, pattern))
        logger.debug("Pattern %s matched %d files", pattern, len(matched))
        found |= matched
    files = sorted(found)
    logger.debug("Discovered %d files under %s", len(files), cfg.root)
    return files


def resolve_path(cfg: LintConfig, path: str) -> Path:
    """Filesystem path for a discovered file identifier."""
    p = Path(path)
    return p if p.is_absolute() else cfg.root / p
