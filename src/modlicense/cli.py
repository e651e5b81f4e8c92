"""Command-line interface for modlicense.

Provides the main entry point for auditing the licenses of the modules
compiled into Go binaries, and for managing the license cache.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from modlicense.cache import ModuleCache
from modlicense.config import Config, load_config
from modlicense.engine import ResolutionEngine
from modlicense.exceptions import (
    CacheError,
    CacheIntegrityError,
    ConfigurationError,
    ScanError,
)
from modlicense.finders import BaseFinder, GitHubFinder, OverrideFinder
from modlicense.models import Module
from modlicense.outputs import MultiOutput, TerminalOutput
from modlicense.scanners import get_scanner
from modlicense.translators import default_translators

app = typer.Typer(
    name="modlicense",
    help="Audit the licenses of the dependencies compiled into Go binaries.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("modlicense")


def _setup_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger("modlicense").setLevel(level)


def _read_modules(binaries: list[Path]) -> list[Module]:
    """Read and deduplicate the modules of every binary.

    Raises:
        ScanError: If a binary cannot be read or has no dependencies.
    """
    modules: dict[Module, None] = {}
    for binary in binaries:
        scanner = get_scanner(binary)
        found = scanner.scan()
        if not found:
            raise ScanError(
                f"{binary} was compiled without Go modules or has zero dependencies"
            )
        logger.debug("Read %d modules from %s (%s)", len(found), binary, scanner.source_name)
        modules.update(dict.fromkeys(found))
    return list(modules)


async def _resolve(
    modules: list[Module],
    config: Config,
    output: TerminalOutput,
    cache: Optional[ModuleCache],
    github_token: Optional[str],
    lookup: bool,
) -> None:
    """Resolve every module's license, reporting to ``output``."""
    finders: list[BaseFinder] = []
    if lookup:
        finders = [
            OverrideFinder(config.override),
            GitHubFinder(github_token=github_token),
        ]

    engine = ResolutionEngine(
        finders=finders,
        translators=default_translators(config.translate) if lookup else [],
        output=MultiOutput([output]),
        cache=cache,
    )
    async with engine:
        await engine.run(modules)


@app.command()
def scan(
    binaries: Annotated[
        list[Path],
        typer.Argument(
            help="Go binaries (or module info dumps) to analyze",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="Configuration file with allow/deny/override/translate rules",
            exists=True,
            readable=True,
        ),
    ] = None,
    cache_path: Annotated[
        Optional[Path],
        typer.Option(
            "--cache",
            help="License cache file to read and update",
        ),
    ] = None,
    lookup: Annotated[
        bool,
        typer.Option(
            "--license/--no-license",
            help="Look up licenses. If disabled, modules are listed without licenses",
        ),
    ] = True,
    plain: Annotated[
        bool,
        typer.Option(
            "--plain",
            help="Plain terminal output, no live progress",
        ),
    ] = False,
    github_token: Annotated[
        Optional[str],
        typer.Option(
            "--github-token",
            envvar="GITHUB_TOKEN",
            help="GitHub API token for higher rate limits",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output",
        ),
    ] = False,
) -> None:
    """Resolve the license of every dependency in one or more binaries.

    Exit codes:
        0 - Every module has an acceptable license
        1 - A module failed the check or an error occurred
    """
    _setup_logging(verbose)

    try:
        config = load_config(config_path) if config_path else Config()
    except ConfigurationError as e:
        err_console.print(f"[red]Error parsing configuration:[/red] {e}")
        raise typer.Exit(code=1)

    try:
        modules = _read_modules(binaries)
    except (ScanError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    module_cache = None
    if cache_path:
        module_cache = ModuleCache(cache_path)
        module_cache.load()

    output = TerminalOutput(
        config=config,
        modules=modules,
        console=console,
        plain=plain,
        verbose=verbose,
    )

    try:
        asyncio.run(
            _resolve(modules, config, output, module_cache, github_token, lookup)
        )
    except CacheIntegrityError as e:
        # The cache is left unsaved.
        output.stop()
        err_console.print(f"[red]Cache integrity violation:[/red] {e}")
        raise typer.Exit(code=1)
    except ConfigurationError as e:
        output.stop()
        err_console.print(f"[red]Error parsing configuration:[/red] {e}")
        raise typer.Exit(code=1)

    # Without lookups, missing licenses are expected.
    exit_code = output.exit_code() if lookup else 0
    if module_cache is not None:
        try:
            module_cache.save()
        except CacheError as e:
            err_console.print(f"[red]Error saving cache:[/red] {e}")
            exit_code = 1

    output.close()
    raise typer.Exit(code=exit_code)


@app.command()
def cache(
    action: Annotated[
        str,
        typer.Argument(help="Cache action: 'show' or 'clear'"),
    ],
    path: Annotated[
        Path,
        typer.Argument(help="License cache file"),
    ],
    module: Annotated[
        Optional[str],
        typer.Argument(help="Specific module path to clear (optional)"),
    ] = None,
) -> None:
    """Manage a license cache file.

    Actions:
        show  - Display cache location, module/version counts, and size
        clear - Clear all cached entries (or a specific module path)
    """
    cache_instance = ModuleCache(path)
    cache_instance.load()

    if action == "show":
        info = cache_instance.info()
        console.print(f"[bold]Cache Location:[/bold] {info['path']}")
        console.print(f"[bold]Modules:[/bold] {info['modules']}")
        console.print(f"[bold]Versions:[/bold] {info['versions']}")
        console.print(f"[bold]Size:[/bold] {info['size_bytes'] / 1024:.1f} KB")

    elif action == "clear":
        removed = cache_instance.clear(module)
        try:
            cache_instance.save()
        except CacheError as e:
            err_console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(code=1)

        if module:
            console.print(f"[green]Cleared cache for:[/green] {module} ({removed} removed)")
        else:
            console.print(f"[green]Cache cleared[/green] ({removed} modules removed)")

    else:
        err_console.print(f"[red]Unknown action:[/red] {action}")
        err_console.print("Valid actions: show, clear")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
