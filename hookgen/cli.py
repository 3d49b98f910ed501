"""CLI entrypoints for hookgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import load_config
from .logging import configure_logging
from .models import CompileStatus
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_project_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root or its .hookgen.yml (defaults to current directory).",
    )
    parser.add_argument(
        "--source",
        action="append",
        dest="sources",
        help="Component source to enable; repeat for several (defaults to configured sources).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hookgen",
        description="Stage colocated component hooks and generate their index module.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_parser = subparsers.add_parser(
        "compile",
        help="Copy changed hooks files and regenerate the index when needed.",
    )
    _add_verbose_option(compile_parser, suppress_default=True)
    _add_project_options(compile_parser)
    compile_parser.add_argument(
        "--output-dir",
        default=None,
        help="Override compiler.hooks_output_dir (relative paths resolve against the project root).",
    )

    list_parser = subparsers.add_parser(
        "list",
        help="Show the hooks and CSS files colocated with known components.",
    )
    _add_verbose_option(list_parser, suppress_default=True)
    _add_project_options(list_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for hookgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        config = load_config(Path(args.path))
        output_dir = None
        if getattr(args, "output_dir", None):
            output_dir = Path(args.output_dir)
            if not output_dir.is_absolute():
                output_dir = config.root / output_dir
        orchestrator = Orchestrator.from_config(
            config, output_dir=output_dir, sources=args.sources
        )
    except (RuntimeError, ValueError, TypeError) as exc:
        parser.exit(1, f"hookgen: {exc}\n")

    if args.command == "compile":
        try:
            status = orchestrator.run()
        except RuntimeError as exc:
            parser.exit(1, f"hookgen compile failed: {exc}\nRun with --verbose for more details.\n")
        if status is CompileStatus.NOOP:
            print("No changes")
        else:
            print(f"Changes applied in {_relativize(orchestrator.output_dir)}")
    elif args.command == "list":
        assets = orchestrator.locate()
        print("Hooks:")
        for candidate in sorted(assets.hooks, key=lambda item: item.destination_name):
            print(f"  {candidate.destination_name} <- {_relativize(candidate.source_path)}")
        print("Styles:")
        for candidate in sorted(assets.styles, key=lambda item: item.destination_name):
            print(f"  {candidate.destination_name} <- {_relativize(candidate.source_path)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
