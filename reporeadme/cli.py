"""CLI entrypoints for reporeadme commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging, get_logger, status_logger
from .models import GenerationResult
from .orchestrator import ReadmeGenerator
from .resolver import scan_directory


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


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output",
        help="Write the README to this file instead of printing it.",
    )
    parser.add_argument(
        "--config",
        default=".",
        help="Directory or file holding .reporeadme.yml (defaults to current directory).",
    )
    parser.add_argument(
        "--log-file",
        help="Also write debug-level logs to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reporeadme",
        description="Generate a templated README for a GitHub repository or local folder.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    url_parser = subparsers.add_parser(
        "url",
        help="Generate a README for a public GitHub repository.",
    )
    _add_verbose_option(url_parser, suppress_default=True)
    _add_output_options(url_parser)
    url_parser.add_argument("url", help="Repository URL, e.g. https://github.com/user/repo")

    folder_parser = subparsers.add_parser(
        "folder",
        help="Generate a README from the files of a local folder.",
    )
    _add_verbose_option(folder_parser, suppress_default=True)
    _add_output_options(folder_parser)
    folder_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project folder (defaults to current directory).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for reporeadme commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = getattr(args, "log_file", None)
    configure_logging(verbose=bool(args.verbose), log_file=Path(log_file) if log_file else None)
    logger = get_logger("cli")

    if args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
        return

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    generator = ReadmeGenerator.from_config(config, on_status=status_logger(logger))

    if args.command == "url":
        result = generator.generate_from_url(args.url)
    elif args.command == "folder":
        try:
            paths = list(scan_directory(Path(args.path)))
        except NotADirectoryError as exc:
            parser.exit(1, f"{exc}\n")
        result = generator.generate_from_paths(paths)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")

    _emit(parser, result, args.output)


def _emit(parser: argparse.ArgumentParser, result: GenerationResult, output: str | None) -> None:
    if not result.ok:
        parser.exit(
            1,
            f"reporeadme failed: {result.error}\nRun with --verbose for more details.\n",
        )
    if output:
        target = Path(output)
        target.write_text(result.readme or "", encoding="utf-8")
        print(f"README written to {_relativize(target)}")
    else:
        sys.stdout.write(result.readme or "")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
