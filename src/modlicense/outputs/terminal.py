"""Terminal output using Rich.

Prints one line per resolved module, colored by license state, and tracks
whether the run should fail.
"""

import threading
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from modlicense.config import Config, LicenseState
from modlicense.models import LicenseRecord, Module, StatusType
from modlicense.outputs.base import BaseOutput

_STATUS_STYLES = {
    StatusType.NORMAL: "dim",
    StatusType.WARNING: "yellow",
    StatusType.ERROR: "red",
}


class TerminalOutput(BaseOutput):
    """Output that reports results to the terminal.

    In plain mode every result is printed as it completes. Otherwise a
    progress bar is shown while modules are resolved.

    A module fails the run when its lookup errored, no license was found,
    its license is denied, or an allow list is configured and the license
    is not on it.

    Attributes:
        config: Configuration providing the allow and deny lists.
        modules: All modules being resolved, used for the progress total.
        plain: Disable the live progress bar.
        verbose: Print progress messages from finders.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        modules: Optional[list[Module]] = None,
        console: Optional[Console] = None,
        plain: bool = False,
        verbose: bool = False,
    ) -> None:
        self.config = config or Config()
        self.modules = list(modules or [])
        self.console = console if console is not None else Console()
        self.plain = plain
        self.verbose = verbose
        self.results: dict[Module, LicenseState] = {}
        self.failed: set[Module] = set()
        self._lock = threading.Lock()
        self._progress: Optional[Progress] = None
        self._task = None

    def _ensure_progress(self) -> None:
        if self.plain or self._progress is not None:
            return

        self._progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            console=self.console,
            transient=True,
        )
        self._task = self._progress.add_task(
            "Resolving licenses...", total=len(self.modules) or None
        )
        self._progress.start()

    def _print(self, message: str) -> None:
        if self._progress is not None:
            self._progress.console.print(message)
        else:
            self.console.print(message)

    def start(self, module: Module) -> None:
        with self._lock:
            self._ensure_progress()
            if self.verbose:
                self._print(f"[dim]{escape(str(module))}: starting[/dim]")

    def update(self, module: Module, status: StatusType, message: str) -> None:
        if not self.verbose:
            return
        style = _STATUS_STYLES.get(status, "dim")
        with self._lock:
            self._print(f"[{style}]{escape(str(module))}: {escape(message)}[/{style}]")

    def finish(
        self,
        module: Module,
        license: Optional[LicenseRecord],
        error: Optional[Exception],
    ) -> None:
        state = self.config.license_state(license)
        failed = (
            error is not None
            or license is None
            or state is LicenseState.DENIED
            or (self.config.allow and state is not LicenseState.ALLOWED)
        )

        name = escape(str(module))
        if error is not None and license is None:
            line = f"[red]✗ {name} error: {escape(str(error))}[/red]"
        elif license is None:
            line = f"[yellow]? {name} no license found[/yellow]"
        elif state is LicenseState.DENIED:
            line = f"[red]✗ {name} {escape(str(license))} (denied)[/red]"
        elif failed:
            line = f"[yellow]? {name} {escape(str(license))} (not allowed)[/yellow]"
        elif state is LicenseState.ALLOWED:
            line = f"[green]✓ {name} {escape(str(license))}[/green]"
        else:
            line = f"  {name} {escape(str(license))}"

        with self._lock:
            self.results[module] = state
            if failed:
                self.failed.add(module)
            self._print(line)
            if self._progress is not None:
                self._progress.advance(self._task)

    def stop(self) -> None:
        """Remove the live progress bar without printing a summary."""
        with self._lock:
            self._stop_progress()

    def _stop_progress(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None

    def close(self) -> None:
        with self._lock:
            self._stop_progress()

            total = len(self.results)
            if self.failed:
                self.console.print(
                    f"\n[red]{len(self.failed)}/{total} modules failed the license check[/red]"
                )
            else:
                self.console.print(f"\n[green]All {total} modules passed[/green]")

    def exit_code(self) -> int:
        """Return 1 if any module failed, 0 otherwise."""
        return 1 if self.failed else 0
