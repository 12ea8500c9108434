from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from termhtml.config import settings  # noqa: E402
from termhtml.services.preview import wrap_preview  # noqa: E402
from termhtml.services.terminal_emulator import InputTooLargeError, TerminalEmulator  # noqa: E402


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(message)s")


def _read_input(path: str | None) -> bytes:
    if path is None or path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def _run_render(args: argparse.Namespace) -> int:
    raw = _read_input(args.file)
    emulator = TerminalEmulator()
    try:
        if args.plain:
            output = emulator.render_text(raw)
        else:
            output = emulator.render(raw)
    except InputTooLargeError as exc:
        logging.error("%s", exc)
        return 1
    if args.preview and not args.plain:
        output = wrap_preview(output, args.title)
    sys.stdout.write(output)
    if not output.endswith("\n"):
        sys.stdout.write("\n")
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn  # lazy import so `render` works without the server extras loaded

    if args.init_db:
        from termhtml.db import init_models

        asyncio.run(init_models())
        logging.info("Created database tables")
    logging.info("Serving on http://%s:%s", args.host, args.port)
    uvicorn.run("termhtml.main:app", host=args.host, port=args.port)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="terminal-to-html",
        description="Render terminal output (ANSI escape sequences) as HTML or plain text",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    render_parser = subparsers.add_parser("render", help="Render a file or stdin")
    render_parser.add_argument("file", nargs="?", default=None, help="Input file (default: stdin)")
    render_parser.add_argument(
        "--preview",
        action="store_true",
        help="Wrap the HTML in a standalone page with the terminal stylesheet.",
    )
    render_parser.add_argument("--plain", action="store_true", help="Output plain text instead of HTML.")
    render_parser.add_argument("--title", default=None, help="Page title used with --preview.")
    render_parser.set_defaults(func=_run_render)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP render service")
    serve_parser.add_argument(
        "--host",
        default=settings.http_host,
        help="Interface to bind (defaults to TERMHTML_HTTP_HOST).",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=settings.http_port,
        help="Port to listen on (defaults to TERMHTML_HTTP_PORT).",
    )
    serve_parser.add_argument(
        "--init-db",
        action="store_true",
        help="Create the log tables before serving (for setups without alembic).",
    )
    serve_parser.set_defaults(func=_run_serve)

    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    _configure_logging(args.verbose)
    try:
        return args.func(args)
    except KeyboardInterrupt:
        logging.info("Interrupted, shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
