"""qjsx-resolve - inspect how the QJSX loader resolves import specifiers."""

import logging
import os
from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from .console import console
from .console import error_console
from .filesystem import is_loadable_file
from .loader import FileModuleLoader
from .loader import ModuleLoadError
from .loader import ModuleLoaderAdapter
from .logging_setup import init_json_logging
from .settings import load_settings

logger = logging.getLogger(__name__)

search_path_option = click.option(
    "--search-path",
    "-s",
    default=None,
    help="Search path to use instead of the QJSXPATH environment variable",
)
config_option = click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Settings file with a 'resolution' section",
)


def build_adapter(search_path: str | None, config: Path | None) -> ModuleLoaderAdapter:
    """Create an adapter over the current environment.

    --search-path replaces the search-path variable for this invocation only.

    Raises:
        click.ClickException: If the settings file is invalid
    """
    try:
        settings = load_settings(config)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    environ = dict(os.environ)
    if search_path is not None:
        environ[settings.env_var] = search_path

    return ModuleLoaderAdapter(FileModuleLoader(), settings, environ)


@click.group(invoke_without_command=True)
@click.version_option(package_name="qjsx-loader")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Write JSONL logs to this file")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level for --log-file (default: QJSX_LOG_LEVEL or INFO)",
)
@click.pass_context
def cli(ctx: click.Context, log_file: str | None, log_level: str | None):
    """QJSX module resolution.

    Bare specifiers are searched in the QJSXPATH directories
    (e.g. QJSXPATH=./my_modules:./lib), trying <dir>/<name>/index.js,
    <dir>/<name>.js and <dir>/<name>. Relative and absolute specifiers try
    <name>, <name>.js and <name>/index.js. "node:fs" is looked up as "node/fs".
    """
    if log_file:
        init_json_logging(log_file, log_level)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit()


@cli.command()
@click.argument("specifiers", nargs=-1, required=True)
@search_path_option
@config_option
@click.pass_context
def resolve(ctx: click.Context, specifiers: tuple[str, ...], search_path: str | None, config: Path | None):
    """Print the file each SPECIFIER resolves to."""
    adapter = build_adapter(search_path, config)

    unresolved = 0
    for specifier in specifiers:
        resolution = adapter.resolve_with_stage(specifier)
        if resolution is None:
            unresolved += 1
            console.print(
                f"[yellow]{escape(specifier)}[/yellow] [dim]-> not found (native loader fallback)[/dim]",
                soft_wrap=True,
            )
            continue
        console.print(
            f"[cyan]{escape(specifier)}[/cyan] -> {escape(resolution.path)} [dim]({resolution.stage})[/dim]",
            soft_wrap=True,
        )

    if unresolved:
        ctx.exit(1)


@cli.command()
@click.argument("specifier")
@search_path_option
@config_option
def candidates(specifier: str, search_path: str | None, config: Path | None):
    """Show every candidate probed for SPECIFIER, in order."""
    adapter = build_adapter(search_path, config)

    table = Table(title=f"Candidates for {escape(specifier)}", show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Stage", style="cyan")
    table.add_column("Candidate")
    table.add_column("Match", justify="center")

    matched = False
    for index, (stage, candidate) in enumerate(adapter.candidates(specifier), start=1):
        hit = is_loadable_file(candidate)
        table.add_row(str(index), stage, escape(candidate), "[green]✓[/green]" if hit else "")
        if hit:
            matched = True
            break

    console.print(table)
    if not matched:
        console.print("[dim]No candidate matched; the native loader receives the normalized specifier.[/dim]")


@cli.command()
@click.argument("specifier")
@search_path_option
@config_option
@click.pass_context
def load(ctx: click.Context, specifier: str, search_path: str | None, config: Path | None):
    """Resolve SPECIFIER and print the loaded module source."""
    adapter = build_adapter(search_path, config)
    try:
        module = adapter(specifier)
    except ModuleLoadError as e:
        logger.error(f"[module:load] {specifier} failed: {e.message}")
        error_console.print(f"[red]Error:[/red] {escape(e.message)}", soft_wrap=True)
        ctx.exit(1)

    click.echo(module.source, nl=not module.source.endswith("\n"))


def main():
    cli()


if __name__ == "__main__":
    main()
