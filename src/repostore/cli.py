"""CLI for repostore."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import load_storage_settings
from .constants import CONFIG_FILE
from .errors import ConfigError, ErrorKind, ErrorResponse
from .storage import FileSystemStorageProvider, make_storage_provider
from .storage_models import DirectoryInfo
from .utils import format_timestamp, humanize_size


app = typer.Typer(help="""\
Inspect and manage a local artifact store: check quota usage, list,
upload, download and remove stored files.""")

console = Console()
err_console = Console(stderr=True)


def _fail(error: ErrorResponse) -> None:
    """Print an error response and exit.

    Raises:
        typer.Exit: Always; code 2 for insufficient storage, 1 otherwise
    """
    err_console.print(f"[red]✗[/red] {error}")
    if error.kind == ErrorKind.INSUFFICIENT_STORAGE:
        raise typer.Exit(2)
    raise typer.Exit(1)


def _provider(ctx: typer.Context) -> FileSystemStorageProvider:
    return ctx.obj["provider"]


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Path = typer.Option(Path(CONFIG_FILE), "--config", "-c", help="Path to repostore.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Load settings and open the store."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        settings = load_storage_settings(config)
        provider = make_storage_provider(settings)
    except (ConfigError, NotImplementedError) as e:
        err_console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(1)

    ctx.obj = {"settings": settings, "provider": provider}
    ctx.call_on_close(provider.shutdown)


@app.command()
def usage(ctx: typer.Context):
    """Show how much space the store uses against its quota."""
    provider = _provider(ctx)
    result = provider.usage()
    if result.is_err:
        _fail(result.error)

    console.print(f"Root:  {provider.root}")
    console.print(f"Quota: {ctx.obj['settings'].quota}")
    console.print(f"Used:  {humanize_size(result.value)} ({result.value} bytes)")
    if provider.is_full():
        console.print("[red]Status: FULL[/red]")
    else:
        console.print("[green]Status: OK[/green]")


@app.command("ls")
def list_files(
    ctx: typer.Context,
    directory: str = typer.Argument(".", help="Directory relative to the store root"),
):
    """List a directory of the store.

    Examples:
        repostore ls
        repostore ls releases/com/example
    """
    provider = _provider(ctx)
    result = provider.get_files(directory)
    if result.is_err:
        _fail(result.error)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Size", justify="right")
    table.add_column("Modified")

    for path in sorted(result.value):
        if provider.is_directory(path):
            table.add_row(f"[cyan]{path.name}/[/cyan]", "-", "")
            continue
        size = provider.get_file_size(path).map(humanize_size).unwrap_or("?")
        modified = provider.get_last_modified_time(path).map(format_timestamp).unwrap_or("?")
        table.add_row(path.name, size, modified)

    console.print(table)


@app.command()
def stat(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File or directory relative to the store root"),
):
    """Show details of a stored file or directory."""
    result = _provider(ctx).get_file_details(path)
    if result.is_err:
        _fail(result.error)

    details = result.value
    console.print(f"Name: {details.name}")
    console.print(f"Type: {details.type.value}")
    if isinstance(details, DirectoryInfo):
        console.print(f"Entries: {len(details.files)}")
        for name in details.files:
            console.print(f"  • {name}")
    else:
        console.print(f"Content type: {details.content_type}")
        console.print(f"Size: {humanize_size(details.content_length)} ({details.content_length} bytes)")
        console.print(f"Modified: {format_timestamp(details.last_modified)}")


@app.command()
def put(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Destination relative to the store root"),
    source: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Local file to upload"),
):
    """Upload a local file into the store.

    Examples:
        repostore put releases/com/example/lib/1.0/lib-1.0.jar build/libs/lib.jar
    """
    with source.open("rb") as stream:
        result = _provider(ctx).put_file(path, stream, size=source.stat().st_size)
    if result.is_err:
        _fail(result.error)

    console.print(f"[green]✓[/green] Stored {path} ({humanize_size(result.value.content_length)})")


@app.command()
def cat(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File relative to the store root"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to a file instead of stdout"),
):
    """Print (or save) the content of a stored file."""
    result = _provider(ctx).get_file(path)
    if result.is_err:
        _fail(result.error)

    with result.value as stream:
        data = stream.read()

    if output:
        output.write_bytes(data)
        console.print(f"[green]✓[/green] Saved {path} to {output}")
    else:
        typer.echo(data, nl=False)


@app.command()
def rm(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File or empty directory relative to the store root"),
):
    """Remove a stored file or empty directory."""
    result = _provider(ctx).remove_file(path)
    if result.is_err:
        _fail(result.error)

    console.print(f"[green]✓[/green] Removed {path}")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
