"""CLI entrypoints for dokgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .assembler import document_project
from .config import ConfigError, load_config
from .detect import UnsupportedProjectError, detect_project
from .logging import configure_logging, get_logger
from .manifest import ManifestError
from .renderers import FORMAT_HTML, FORMAT_MARKDOWN, RecordError, load_record, render, to_json

ACTION_PARSE = "parse"
ACTIONS = (ACTION_PARSE, FORMAT_MARKDOWN, FORMAT_HTML)

_DEFAULT_OUTPUTS = {
    FORMAT_MARKDOWN: "documentation.md",
    FORMAT_HTML: "documentation.html",
}

_logger = get_logger("cli")


def _parse_action(value: str) -> str:
    if value not in ACTIONS:
        raise argparse.ArgumentTypeError(f"'{value}' is not an available command")
    return value


def _path_exists(value: str) -> Path:
    path = Path(value)
    if not path.exists():
        raise argparse.ArgumentTypeError(f"'{value}' does not exist")
    return path


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dokgen",
        description=(
            "Extract documentation from a Cargo project (parse) or render a "
            "documentation record as Markdown (md) or HTML (html)."
        ),
    )
    parser.add_argument(
        "action",
        type=_parse_action,
        help="One of: parse, md, html.",
    )
    parser.add_argument(
        "path",
        type=_path_exists,
        help="Project directory for 'parse', documentation record file otherwise.",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file (defaults to documentation.dok / .md / .html).",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only show warnings and errors on the console.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    return parser


def _run_parse(parser: argparse.ArgumentParser, path: Path, output: str | None) -> Path:
    if not path.is_dir():
        parser.exit(1, f"Error: For '{ACTION_PARSE}', the path must be a directory.\n")

    print(f"=> Directory exists: {path}")
    print("=> Detecting project type...")
    try:
        project_type = detect_project(path)
    except UnsupportedProjectError as exc:
        parser.exit(1, f"Error: {exc}\n")
    print(f"  -> Project type detected: {project_type}")

    print("=> Parsing project...")
    try:
        config = load_config(path)
        record = document_project(path, config)
    except (ConfigError, ManifestError) as exc:
        parser.exit(1, f"dokgen parse failed: {exc}\n")
    except OSError as exc:
        parser.exit(1, f"dokgen parse failed: {exc}\nRun with --verbose for more details.\n")
    except UnicodeDecodeError as exc:
        parser.exit(1, f"dokgen parse failed: a project file is not valid UTF-8 text ({exc})\n")

    target = Path(output or config.output)
    target.write_text(to_json(record), encoding="utf-8")
    return target


def _run_render(
    parser: argparse.ArgumentParser, action: str, path: Path, output: str | None
) -> Path:
    if not path.is_file():
        parser.exit(1, f"Error: For '{action}', the path must be a file.\n")

    try:
        record = load_record(path)
    except (RecordError, OSError, UnicodeDecodeError) as exc:
        parser.exit(1, f"dokgen {action} failed: {exc}\n")

    target = Path(output or _DEFAULT_OUTPUTS[action])
    target.write_text(render(record, action), encoding="utf-8")
    return target


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for dokgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file
    )

    if args.action == ACTION_PARSE:
        target = _run_parse(parser, args.path, args.output)
    else:
        target = _run_render(parser, args.action, args.path, args.output)

    _logger.debug("Wrote %s", target.resolve())
    print(f"Documentation written to {_relativize(target)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
