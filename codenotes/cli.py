from __future__ import annotations

import argparse
import asyncio
import html
import logging
import sys
from typing import Sequence, TextIO

from .api.service import ApiSettings
from .exception_handler import ErrorHandler, configure_logging
from .store import DocumentStore, create_store
from .widget import (
    ConnectionState,
    InputField,
    ListState,
    ListView,
    Outcome,
    SnippetSession,
    StatusKind,
    StatusMessage,
)

logger = logging.getLogger("codenotes")

_STATUS_ICONS = {
    StatusKind.SUCCESS: "✅",
    StatusKind.ERROR: "❌",
    StatusKind.INFO: "ℹ️",
}


class ConsolePresenter:
    """Print status lines as they happen and keep the latest list for the end."""

    def __init__(
        self,
        *,
        assume_yes: bool = False,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.assume_yes = assume_yes
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self.view: ListView | None = None

    def show_status(self, status: StatusMessage) -> None:
        stream = self.err if status.kind is StatusKind.ERROR else self.out
        print(f"{_STATUS_ICONS[status.kind]} {status.title}: {status.message}", file=stream)

    def render_list(self, view: ListView) -> None:
        self.view = view

    def set_connection_state(self, state: ConnectionState) -> None:
        logger.debug("Store connection: %s", state.label)

    def set_submit_enabled(self, enabled: bool, *, saving: bool = False) -> None:
        if saving:
            logger.debug("Saving...")

    def clear_code(self) -> None:
        return None

    def focus(self, field: InputField) -> None:
        return None

    def confirm(self, prompt: str) -> bool:
        if self.assume_yes:
            return True
        try:
            answer = input(f"{prompt} [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in {"y", "yes"}

    def print_list(self) -> None:
        view = self.view
        if view is None or view.state is ListState.LOADING:
            return
        if view.state is not ListState.ITEMS:
            print(view.message, file=self.out)
            return
        for item in view.items:
            print(f"[{item.id}] {item.date} (saved: {item.time})", file=self.out)
            for line in html.unescape(item.code_html).splitlines():
                print(f"    {line}", file=self.out)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Save, list and delete date-stamped code notes",
    )
    parser.add_argument(
        "--backend",
        choices=["redis", "memory"],
        default=None,
        help=(
            "Store backend (defaults to CODENOTES_STORE_BACKEND or redis); "
            "memory lives only as long as this process, so it is meant for "
            "serve and for tests"
        ),
    )
    parser.add_argument(
        "--redis-url",
        dest="redis_url",
        default=None,
        help="Override Redis URL (defaults to REDIS_URL env variable)",
    )
    parser.add_argument(
        "--collection",
        default=None,
        help="Collection holding the snippets (defaults to CODENOTES_COLLECTION or savedCodes)",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        help="Logging level (defaults to LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Save a new snippet")
    add_parser.add_argument("--date", required=True, help="Date for the snippet (YYYY-MM-DD)")
    add_parser.add_argument(
        "--code",
        default=None,
        help="Snippet text (read from stdin when omitted)",
    )

    subparsers.add_parser("list", help="List saved snippets, newest first")

    delete_parser = subparsers.add_parser("delete", help="Delete a saved snippet")
    delete_parser.add_argument("snippet_id", help="Identifier shown by the list command")
    delete_parser.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Skip the confirmation prompt",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the web widget")
    serve_parser.add_argument("--host", default=None, help="Bind address (defaults to CODENOTES_HOST)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (defaults to CODENOTES_PORT)")

    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace) -> ApiSettings:
    settings = ApiSettings.from_env()
    if args.backend:
        settings.store_backend = args.backend
    if args.redis_url:
        settings.redis_url = args.redis_url
    if args.collection:
        settings.collection = args.collection
    if args.log_level:
        settings.log_level = args.log_level
    if args.command == "serve":
        if args.host:
            settings.host = args.host
        if args.port:
            settings.port = args.port
    return settings


async def run_command(
    args: argparse.Namespace,
    settings: ApiSettings,
    presenter: ConsolePresenter,
    error_handler: ErrorHandler,
    *,
    store: DocumentStore | None = None,
) -> Outcome:
    snippet_store = store or create_store(settings.store_config())
    session = SnippetSession(
        snippet_store,
        presenter,
        collection=settings.collection,
        error_handler=error_handler,
    )
    try:
        outcome = await session.probe()
        if not outcome.ok:
            return outcome
        if args.command == "add":
            code = args.code if args.code is not None else sys.stdin.read()
            outcome = await session.create(args.date, code)
        elif args.command == "delete":
            outcome = await session.delete(args.snippet_id, confirmed=True if args.yes else None)
        return outcome
    finally:
        await snippet_store.close()


def serve(settings: ApiSettings) -> None:
    import uvicorn

    from .api.server import create_app

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    settings = resolve_settings(args)
    error_handler = ErrorHandler(configure_logging(settings.log_level))

    if args.command == "serve":
        serve(settings)
        return

    presenter = ConsolePresenter(assume_yes=getattr(args, "yes", False))
    try:
        outcome = asyncio.run(run_command(args, settings, presenter, error_handler))
    except KeyboardInterrupt:
        print("\n⚠️ Interrupted", file=sys.stderr)
        sys.exit(1)

    presenter.print_list()

    report = error_handler.format_error_report()
    if report:
        print(report, file=sys.stderr)

    if not outcome.ok and not outcome.aborted:
        sys.exit(1)


if __name__ == "__main__":
    main()
