"""
CLI entry point for domql-lint.

Usage:
    domql-lint [lint] [--files P1,P2] [--ignore P1,P2]    Lint matching files
    domql-lint project [path]                           Lint <path>/src/**/*.js
    domql-lint parse <file>                             Show component literals of a file

Exit status is 0 when no file failed to parse (warnings do not count),
1 otherwise, 2 for configuration problems.
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import ConfigError, load_config, split_patterns
from .runner import run

logger = logging.getLogger(__name__)

COMMANDS = ("lint", "project", "parse")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S',
    )


def _report(result, json_output: bool) -> None:
    if json_output:
        print(result.render_json())
    else:
        print(f"Checked {result.files_checked} files\n")
        print(result.render_human())


def cmd_lint(args) -> int:
    """Lint files matching the configured patterns."""
    try:
        cfg = load_config(
            args.root,
            config_path=args.config,
            files=split_patterns(args.files) if args.files else None,
            ignore=split_patterns(args.ignore) if args.ignore else None,
            jobs=args.jobs,
            json_output=args.json,
        )
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logger.debug("Config: %s", cfg)
    result = run(cfg)
    _report(result, cfg.json_output)
    return 0 if result.success else 1


def cmd_project(args) -> int:
    """Lint the `src` tree of a project directory."""
    target = Path(args.path).resolve()
    pattern = (target / "src" / "**" / "*.js").as_posix()
    print(f"Running domql-lint on: {target}\n")

    try:
        cfg = load_config(target, files=[pattern], jobs=args.jobs)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    result = run(cfg)
    _report(result, json_output=False)

    if not result.success:
        print("\nLinter found issues that need to be fixed", file=sys.stderr)
        print("Fix the parse errors listed above and run again; warnings alone do not fail the run.", file=sys.stderr)
        return 1

    print("\nLinter run complete!")
    print("\nTo add this to your build process:")
    print("1. Add to package.json scripts:")
    print('   "lint:domql": "domql-lint project ."')
    print("\n2. Run before builds:")
    print("   npm run lint:domql && npm run build")
    return 0


def cmd_parse(args) -> int:
    """Parse a file and print its component literals as JSON."""
    from .parser import COMPONENT_DEPTH, ParseError, parse_file
    from .parser.ast_serde import serialize_objects
    from .rules import is_component

    try:
        tree = parse_file(args.file)
    except (ParseError, OSError) as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return 1

    depth = None if args.all else COMPONENT_DEPTH
    objects = [obj for obj in tree.iter_object_literals(depth=depth) if args.all or is_component(obj)]
    print(serialize_objects(args.file, objects, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="domql-lint",
        description="Check that component fields live in the right props/style/on object",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    domql-lint --files "src/**/*.js,src/**/*.jsx"
    domql-lint lint --ignore "node_modules/**,dist/**,build/**" --json
    domql-lint project ../my-app
    domql-lint parse src/components/Button.js
""",
    )
    parser.add_argument('--version', action='version', version=f'domql-lint {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # lint
    lint_p = subparsers.add_parser('lint', help='Lint files matching glob patterns')
    lint_p.add_argument('--files', help='Comma-separated glob patterns to include')
    lint_p.add_argument('--ignore', help='Comma-separated glob patterns to exclude')
    lint_p.add_argument('--root', default='.', help='Directory patterns are relative to (default: cwd)')
    lint_p.add_argument('--config', help='YAML config file')
    lint_p.add_argument('--json', action='store_true', default=None, help='Output as JSON')
    lint_p.add_argument('-j', '--jobs', type=int, help='Worker processes (default: 1)')
    lint_p.add_argument('-v', '--verbose', action='store_true')
    lint_p.set_defaults(func=cmd_lint)

    # project
    project_p = subparsers.add_parser('project', help='Lint <path>/src/**/*.js')
    project_p.add_argument('path', nargs='?', default='.', help='Project directory (default: cwd)')
    project_p.add_argument('-j', '--jobs', type=int, help='Worker processes (default: 1)')
    project_p.add_argument('-v', '--verbose', action='store_true')
    project_p.set_defaults(func=cmd_project)

    # parse
    parse_p = subparsers.add_parser('parse', help='Show the component literals of a file')
    parse_p.add_argument('file', help='File to parse')
    parse_p.add_argument('-a', '--all', action='store_true', help='Include every object literal, fully expanded')
    parse_p.add_argument('-v', '--verbose', action='store_true')
    parse_p.set_defaults(func=cmd_parse)

    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    argv = list(sys.argv[1:] if argv is None else argv)

    # `lint` is the default command
    if not argv or (argv[0] not in COMMANDS and argv[0] not in ('-h', '--help', '--version')):
        argv.insert(0, 'lint')

    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
