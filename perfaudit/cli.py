"""CLI entrypoint for perfaudit."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging
from .orchestrator import AuditOptions, AuditRunner
from .reporting import render_console, render_html, render_json


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="perfaudit",
        description="Audit a front-end project's dependencies, sources and build output for performance issues.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )

    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--json",
        dest="output_format",
        action="store_const",
        const="json",
        help="Write the JSON report instead of printing the console summary.",
    )
    output.add_argument(
        "--html",
        dest="output_format",
        action="store_const",
        const="html",
        help="Write a static HTML report.",
    )
    parser.set_defaults(output_format="console")

    scope = parser.add_mutually_exclusive_group()
    scope.add_argument(
        "--performance-only",
        action="store_true",
        help="Skip build-output analysis.",
    )
    scope.add_argument(
        "--bundle-only",
        action="store_true",
        help="Skip manifest and source-pattern analysis.",
    )

    parser.add_argument(
        "--no-report",
        action="store_true",
        help="Do not write any report file.",
    )
    parser.add_argument(
        "--emit-configs",
        action="store_true",
        help="Generate an optimized config for the detected bundler (webpack, vite or rollup).",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for report files (defaults to the project root).",
    )
    return parser


def _options_from_args(args: argparse.Namespace) -> AuditOptions:
    return AuditOptions(
        run_performance=not args.bundle_only,
        run_bundle=not args.performance_only,
        output_format=args.output_format,
        write_report=not args.no_report,
        emit_configs=bool(args.emit_configs),
        output_dir=args.output_dir,
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for perfaudit."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    options = _options_from_args(args)
    runner = AuditRunner()

    try:
        result = runner.run(args.path, options)
        outcome = runner.write_reports(result, options)
    except (FileNotFoundError, NotADirectoryError, PermissionError) as exc:
        parser.exit(1, f"{exc}\n")
    except ConfigError as exc:
        parser.exit(1, f"Invalid configuration: {exc}\n")
    except Exception as exc:  # pragma: no cover - unexpected failure
        parser.exit(1, f"Analysis failed: {exc}\nRun with --verbose for more details.\n")

    if options.output_format == "console":
        print(render_console(result), end="")
        if outcome.json_path is not None:
            print(f"\nDetailed report saved to {_relativize(outcome.json_path)}")
    elif options.output_format == "json":
        if outcome.json_path is not None:
            print(f"JSON report saved to {_relativize(outcome.json_path)}")
        else:
            print(render_json(result))
    else:
        if outcome.html_path is not None:
            print(f"HTML report saved to {_relativize(outcome.html_path)}")
        else:
            print(render_html(result), end="")

    for item in result.artifacts:
        print(f"Generated {_relativize(Path(item))}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
