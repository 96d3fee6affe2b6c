"""
xcmd Command-Line Interface
Main entry point: `x <what you want to do>`.
"""

import sys
from typing import List, Optional

import typer
from rich.console import Console
from rich.text import Text
from loguru import logger

from xcmd import __version__
from xcmd.core.config import config
from xcmd.core.credentials import resolve_api_key, store_api_key
from xcmd.core.exceptions import CredentialMissingError
from xcmd.core.executor import ShellExecutor
from xcmd.core.fetcher import SuggestionFetcher
from xcmd.core.keypress import (
    CancellationSignal,
    KeypressDecisions,
    RawTerminal,
    supports_keypress,
)
from xcmd.core.loop import LoopState, SuggestionLoop
from xcmd.core.status import StatusReporter
from xcmd.llm.llm_factory import create_llm_client

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

INIT_QUERY = "init"
USAGE_EXAMPLE = "x list s3 buckets"

app = typer.Typer(
    name="x",
    help="Turn a natural-language request into a single shell command.",
    add_completion=False,
    # Everything after the first word belongs to the query, even "-la"
    context_settings={"allow_interspersed_args": False, "ignore_unknown_options": True},
)

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"xcmd version [bold cyan]{__version__}[/bold cyan]")
        raise typer.Exit()


def _print_usage() -> None:
    console.print("Use like:")
    text = Text()
    text.append("$ ", style="green")
    text.append(USAGE_EXAMPLE, style="bold")
    console.print(text)


def _init_api_key() -> None:
    """Ask for an API key and store it in the key file."""
    api_key = typer.prompt(
        "Enter your OpenAI API key",
        default="",
        show_default=False,
        hide_input=True,
    )
    try:
        store_api_key(config.api_key_file, api_key)
    except ValueError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(EXIT_FAILURE)
    except OSError as e:
        err_console.print(f"[red]Could not write {config.api_key_file}: {e}[/red]")
        raise typer.Exit(EXIT_FAILURE)
    console.print("API key saved")


def _interactive_session() -> bool:
    """Keypress prompts need a terminal on both stdin and stdout."""
    return supports_keypress(sys.stdin) and supports_keypress(sys.stdout)


def _run_non_interactive(query: str, fetcher: SuggestionFetcher) -> int:
    status = StatusReporter(console=console, err_console=err_console, interactive=False)
    outcome = SuggestionLoop(fetcher, status).run(query)
    if outcome.state is LoopState.INTERRUPTED:
        return EXIT_INTERRUPTED
    return EXIT_OK if outcome.succeeded else EXIT_FAILURE


def _run_interactive(query: str, fetcher: SuggestionFetcher) -> int:
    cancel = CancellationSignal()
    status = StatusReporter(console=console, err_console=err_console, interactive=True)
    executor = ShellExecutor()

    with RawTerminal(sys.stdin) as terminal:

        def handoff(command: str) -> None:
            # The command gets the terminal in its normal mode
            terminal.release()
            executor.launch(command)

        loop = SuggestionLoop(
            fetcher,
            status,
            decisions=KeypressDecisions(cancel, stream=sys.stdin),
            execute=handoff,
            cancel=cancel,
        )
        outcome = loop.run(query)

        if outcome.state is LoopState.INTERRUPTED:
            status.interrupted()
            terminal.release()
            logger.debug(f"Interrupted ({cancel.reason}), exiting")
            return EXIT_INTERRUPTED

    status.close()
    if not outcome.succeeded:
        return EXIT_FAILURE

    executor.wait()
    return EXIT_OK


@app.command()
def suggest(
    query: Optional[List[str]] = typer.Argument(
        None,
        help="What you want to do, in plain words (or `init` to store an API key)"
    ),
    mock: bool = typer.Option(
        False,
        "--mock",
        help="Use built-in mock LLM responses (offline demo mode)"
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model", "-m",
        help="Model to use (default: X_MODEL or gpt-5-mini)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose logging"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show xcmd version and exit"
    )
):
    """
    Suggest one shell command for a request.

    Examples:
        x list s3 buckets
        x find files larger than 100MB in this directory
        x init
    """
    if verbose:
        config.enable_verbose()

    text = " ".join(query or []).strip()
    if not text:
        _print_usage()
        return

    if text == INIT_QUERY:
        _init_api_key()
        return

    use_mock = mock or config.mock_mode
    api_key = resolve_api_key(config.api_key_file)
    if not api_key and not use_mock:
        console.print(str(CredentialMissingError()), markup=False)
        raise typer.Exit(EXIT_FAILURE)

    client = create_llm_client(config, api_key=api_key, model=model, mock=use_mock)
    fetcher = SuggestionFetcher(
        client,
        model=model or config.model,
        reasoning_effort=config.reasoning_effort,
    )

    try:
        if _interactive_session():
            exit_code = _run_interactive(text, fetcher)
        else:
            exit_code = _run_non_interactive(text, fetcher)
    except KeyboardInterrupt:
        raise typer.Exit(EXIT_INTERRUPTED)

    if exit_code != EXIT_OK:
        raise typer.Exit(exit_code)


def main():
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
