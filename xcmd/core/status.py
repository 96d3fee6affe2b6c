"""
Status reporting for the suggestion loop.
"""

from typing import Optional

from rich.console import Console, Group
from rich.live import Live
from rich.spinner import Spinner
from rich.text import Text


class StatusReporter:
    """
    Shows what the loop is doing.

    Interactive runs get a single live region (spinner while fetching, the
    suggestion plus key hints while waiting). Non-interactive runs print only
    the bare command on stdout and failures on stderr, so the output can be
    piped or captured.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
        interactive: bool = False
    ):
        """Initialize status reporter."""
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)
        self.interactive = interactive
        self._live: Optional[Live] = None

    # ------------------------------------------------------------------
    # Live helpers
    # ------------------------------------------------------------------
    def _show(self, renderable) -> None:
        if self._live is None:
            self._live = Live(renderable, console=self.console, refresh_per_second=12, transient=True)
            self._live.start()
        else:
            self._live.update(renderable)

    def close(self) -> None:
        """Stop the live region, if one is showing."""
        if self._live is not None:
            self._live.stop()
            self._live = None

    @staticmethod
    def _command_line(command: str) -> Text:
        text = Text()
        text.append("$ ", style="green")
        text.append(command, style="bold")
        return text

    # ------------------------------------------------------------------
    # Loop callbacks
    # ------------------------------------------------------------------
    def fetching(self, query: str) -> None:
        if self.interactive:
            self._show(Spinner("dots", text=Text(query), style="cyan"))

    def proposing(self, suggestion: str) -> None:
        if not self.interactive:
            return
        self._show(Group(
            self._command_line(suggestion),
            Text(""),
            Text("enter → run command", style="dim"),
            Text("space → new suggestion", style="dim"),
        ))

    def accepted(self, suggestion: str) -> None:
        self.close()
        self.console.print(self._command_line(suggestion))

    def printed(self, suggestion: str) -> None:
        self.close()
        self.console.print(suggestion, markup=False, highlight=False, soft_wrap=True)

    def failed(self, message: str) -> None:
        self.close()
        if self.interactive:
            self.console.print(Text(f"✗ {message}", style="red"))
        else:
            self.err_console.print(message, markup=False, highlight=False, soft_wrap=True)

    def interrupted(self) -> None:
        self.close()
