"""Main CLI entry point for the coda-pages command.

This module provides the Typer application that drives the page formulas
from a terminal. Each command builds an invocation context from the config
file and environment, then calls the formula dispatcher.
"""

import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

import typer

from coda_pages import __version__
from coda_pages.coda_client.api_wrapper import APIWrapper
from coda_pages.coda_client.auth import Authenticator
from coda_pages.coda_client.errors import (
    APIUnreachableError,
    AuthorizationError,
    EndpointNotBoundError,
    InvalidCredentialsError,
    JobTimeoutError,
    PackError,
)
from coda_pages.config.config_loader import DEFAULT_CONFIG_PATH, ConfigLoader
from coda_pages.connection.endpoints import make_endpoint_resolver
from coda_pages.formulas.context import InvocationContext
from coda_pages.formulas.dispatcher import FormulaDispatcher
from coda_pages.formulas.pages import build_registry
from coda_pages.cli.models import ExitCode
from coda_pages.cli.output import OutputHandler

app = typer.Typer(
    name="coda-pages",
    help="""Manage the pages of a Coda doc.

QUICK START:
  export CODA_API_TOKEN=...                              # or put it in .env
  coda-pages --doc <docId> list-pages                    # List pages
  coda-pages --doc <docId> add-page --name Notes         # Add a page
  coda-pages --doc <docId> copy-page <page> "Copy"       # Copy a page""",
    add_completion=False,
    rich_markup_mode=None,
)

logger = logging.getLogger(__name__)


@dataclass
class CLIState:
    """Global options shared by every command."""
    config_path: str = DEFAULT_CONFIG_PATH
    doc_id: Optional[str] = None
    verbosity: int = 0
    no_color: bool = False


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'coda_pages' namespace logger to avoid affecting
    third-party libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    # Configure package logger (not root logger)
    app_logger = logging.getLogger("coda_pages")
    app_logger.setLevel(level)

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    # Console handler (stderr, so stdout stays clean for results)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    # File handler (if logdir specified)
    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"coda-pages_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _exit_code_for(error: Exception) -> ExitCode:
    if isinstance(error, (InvalidCredentialsError, AuthorizationError)):
        return ExitCode.AUTH_ERROR
    if isinstance(error, APIUnreachableError):
        return ExitCode.NETWORK_ERROR
    if isinstance(error, JobTimeoutError):
        return ExitCode.JOB_TIMEOUT
    return ExitCode.GENERAL_ERROR


@contextmanager
def _handle_errors(output: OutputHandler) -> Iterator[None]:
    """Turn pack errors into a message and an exit code."""
    try:
        yield
    except typer.Exit:
        raise
    # Expected failures: message only, no traceback
    except PackError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        output.error(str(e))
        raise typer.Exit(_exit_code_for(e))
    except Exception as e:
        logger.exception("Unexpected error")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _state(ctx: typer.Context) -> CLIState:
    return ctx.obj if isinstance(ctx.obj, CLIState) else CLIState()


def _output(ctx: typer.Context) -> OutputHandler:
    state = _state(ctx)
    return OutputHandler(verbosity=state.verbosity, no_color=state.no_color)


def _build_context(state: CLIState) -> InvocationContext:
    """Load config and credentials and build the invocation context."""
    config = ConfigLoader.load(state.config_path)
    authenticator = Authenticator(mode=config.auth_mode, endpoint=config.api_base_url)
    api = APIWrapper(authenticator, base_url=config.api_base_url, timeout=config.request_timeout)
    return InvocationContext(
        api=api,
        config=config,
        endpoint_resolver=make_endpoint_resolver(config.auth_mode, config.api_base_url),
        doc_id=state.doc_id or config.doc_id,
        endpoint=config.endpoint,
    )


def _dispatcher() -> FormulaDispatcher:
    return FormulaDispatcher(build_registry())


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    config: str = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        help="Path to the config file",
        metavar="PATH",
    ),
    doc: Optional[str] = typer.Option(
        None,
        "--doc",
        envvar="CODA_DOC_ID",
        help="Doc ID to operate on (system auth mode)",
        metavar="DOC_ID",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=results only, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Manage the pages of a Coda doc."""
    if version:
        typer.echo(f"coda-pages version {__version__}")
        raise typer.Exit()

    # No command given, show help
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    _configure_logging(verbosity, logdir)
    ctx.obj = CLIState(
        config_path=config,
        doc_id=doc,
        verbosity=verbosity,
        no_color=no_color,
    )


@app.command("list-pages")
def list_pages(
    ctx: typer.Context,
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        help="Maximum number of pages to return (default: 100)",
    ),
) -> None:
    """List pages of the doc as ID / name pairs."""
    output = _output(ctx)
    with _handle_errors(output):
        context = _build_context(_state(ctx))
        pages = _dispatcher().invoke("ListPages", [limit], context)
        output.print_pages(pages)


@app.command("add-page")
def add_page(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None, "--name", help="Name of the page"),
    parent: Optional[str] = typer.Option(None, "--parent", help="Parent page ID"),
    subtitle: Optional[str] = typer.Option(None, "--subtitle", help="Subtitle of the page"),
    icon: Optional[str] = typer.Option(None, "--icon", help="Icon name (see search-icons)"),
    cover_image: Optional[str] = typer.Option(None, "--cover-image", help="Cover image URL"),
    content: Optional[str] = typer.Option(None, "--content", help="Page content in Markdown"),
    content_file: Optional[Path] = typer.Option(
        None,
        "--content-file",
        help="Read Markdown content from a file",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """Add a page and print its ID."""
    output = _output(ctx)
    with _handle_errors(output):
        if content_file is not None:
            content = content_file.read_text(encoding="utf-8")
        context = _build_context(_state(ctx))
        page_id = _dispatcher().invoke(
            "AddPage",
            [name, parent, subtitle, icon, cover_image, content],
            context,
        )
        output.info("Page created")
        output.print(page_id)


@app.command("rename-page")
def rename_page(
    ctx: typer.Context,
    page: str = typer.Argument(..., help="ID or name of the page (IDs are unambiguous)"),
    name: Optional[str] = typer.Option(None, "--name", help="New name"),
    subtitle: Optional[str] = typer.Option(None, "--subtitle", help="New subtitle"),
    icon: Optional[str] = typer.Option(None, "--icon", help="New icon name"),
    cover_image: Optional[str] = typer.Option(None, "--cover-image", help="New cover image URL"),
) -> None:
    """Rename a page or change its subtitle, icon or cover image."""
    output = _output(ctx)
    with _handle_errors(output):
        context = _build_context(_state(ctx))
        page_id = _dispatcher().invoke(
            "RenamePage",
            [page, name, subtitle, icon, cover_image],
            context,
        )
        output.info("Page updated")
        output.print(page_id)


@app.command("copy-page")
def copy_page(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="ID or name of the page to copy"),
    new_name: str = typer.Argument(..., help="Name of the copy"),
    parent: Optional[str] = typer.Option(None, "--parent", help="Parent page ID for the copy"),
) -> None:
    """Copy a page with its content and print the new page's ID."""
    output = _output(ctx)
    with _handle_errors(output):
        context = _build_context(_state(ctx))
        with output.spinner(f"Copying {source}..."):
            page_id = _dispatcher().invoke("CopyPage", [source, new_name, parent], context)
        output.info("Page copied")
        output.print(page_id)


@app.command("search-pages")
def search_pages(
    ctx: typer.Context,
    query: str = typer.Argument("", help="Text to match against page names"),
) -> None:
    """Suggest pages by name (the page autocomplete)."""
    output = _output(ctx)
    with _handle_errors(output):
        context = _build_context(_state(ctx))
        options = _dispatcher().autocomplete("RenamePage", "pageIdOrName", query, context)
        output.print_options(options)


@app.command("search-icons")
def search_icons(
    ctx: typer.Context,
    query: str = typer.Argument("", help="Icon search term"),
) -> None:
    """Suggest icon names (the icon autocomplete)."""
    output = _output(ctx)
    with _handle_errors(output):
        context = _build_context(_state(ctx))
        options = _dispatcher().autocomplete("AddPage", "iconName", query, context)
        output.print_options(options)


@app.command("whoami")
def whoami(ctx: typer.Context) -> None:
    """Show the user behind the token and the current doc."""
    output = _output(ctx)
    with _handle_errors(output):
        context = _build_context(_state(ctx))
        try:
            endpoint = context.doc_endpoint
        except EndpointNotBoundError:
            # Identity alone is still useful before a doc is chosen
            endpoint = None
            output.warning("No doc selected: pass --doc or run select-doc")
        output.print(context.connection_resolver().describe_connection(endpoint))


@app.command("select-doc")
def select_doc(
    ctx: typer.Context,
    doc_id: Optional[str] = typer.Option(
        None,
        "--doc-id",
        help="Bind the connection to this doc (must be owned by you)",
    ),
) -> None:
    """List docs you own, or bind the connection to one of them."""
    output = _output(ctx)
    state = _state(ctx)
    with _handle_errors(output):
        context = _build_context(state)
        options = context.connection_resolver().list_selectable_documents(doc_id)

        if not doc_id:
            output.print_options(options)
            return

        # Ownership was checked above; persist the binding
        config = context.config
        config.doc_id = doc_id
        config.endpoint = options[0].value
        ConfigLoader.save(state.config_path, config)
        output.success(f"Connected to {options[0].display}")
        output.info(f"  Endpoint: {config.endpoint}")
        output.info(f"  Config file: {state.config_path}")


@app.command("formulas")
def formulas(ctx: typer.Context) -> None:
    """Describe the registered formulas and their parameters."""
    output = _output(ctx)
    for formula in build_registry():
        params = ", ".join(
            f"{p.name}{'?' if p.optional else ''}: {p.type.value}" for p in formula.parameters
        )
        kind = "action" if formula.is_action else "formula"
        output.print(f"{formula.name}({params}) -> {formula.result_type.value}  [{kind}]")
        output.print(f"    {formula.description}")


def main() -> None:
    """Main entry point for the CLI application."""
    app()


if __name__ == "__main__":
    main()
