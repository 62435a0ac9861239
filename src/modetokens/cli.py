"""
modetokens CLI.

    modetokens build      # resolve, validate and write outputs
    modetokens validate   # resolve and validate only
"""

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from modetokens._version import get_version
from modetokens.core.build import BuildReport, build_project
from modetokens.core.errors import ManifestError, TokenError
from modetokens.core.manifest import (
    MANIFEST_FILE,
    SUPPORTED_FORMATS,
    ProjectManifest,
    find_manifest,
    load_manifest,
)
from modetokens.emitters import write_outputs

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"modetokens {get_version()}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


app = typer.Typer(
    help="""modetokens - design token compiler

Resolves nested token trees per mode, checks that every mode of a type
defines the same variables, validates deprecated/removed ledgers and
writes SCSS, JSON, DTCG and TypeScript outputs.
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """modetokens CLI main callback for global options."""
    pass


def _load(manifest: str | None, project: Path) -> ProjectManifest:
    if manifest:
        return load_manifest(Path(manifest).resolve())
    return find_manifest(project.resolve())


def _print_report(report: BuildReport) -> None:
    """Print per-type status, then every error in one FATAL panel."""
    for result in report.results:
        if result.ok:
            modes = ", ".join(result.collection.mode_names()) if result.collection else ""
            console.print(f"[green]✓[/green] {escape(result.type)} [dim]({escape(modes)})[/dim]")
        else:
            console.print(
                f"[red]✗[/red] {escape(result.type)} [dim]({len(result.errors)} errors)[/dim]"
            )

    if report.ok:
        return

    body = Text()
    for type_name, errors in report.errors_by_type().items():
        body.append(f"{type_name}\n", style="bold")
        for error in errors:
            body.append("  • ")
            body.append(f"{error}\n", style="red")
    err_console.print(
        Panel(
            body,
            title=Text.assemble(
                ("[FATAL]", "bold red"), " The build failed due to the following errors"
            ),
            border_style="red",
        )
    )


@app.command()
def build(
    manifest: str | None = typer.Option(
        None, "--manifest", "-m", help=f"Path to {MANIFEST_FILE} (default: ./{MANIFEST_FILE})"
    ),
    project: Path = typer.Option(Path("."), "--project", "-p", help="Project root"),  # noqa: B008
    out: str | None = typer.Option(None, "--out", "-o", help="Output directory"),
    formats: list[str] | None = typer.Option(  # noqa: B008
        None, "--format", "-f", help=f"Output format ({', '.join(SUPPORTED_FORMATS)})"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """
    Build every token type and write outputs for the valid ones.

    All types are processed before the command fails, so every error is reported.
    """
    configure_logging(verbose)
    try:
        mf = _load(manifest, project)
        selected = formats or mf.build.formats
        unknown = [f for f in selected if f not in SUPPORTED_FORMATS]
        if unknown:
            raise ManifestError(f"Unsupported output formats: {', '.join(unknown)}")
        report = build_project(mf)
    except TokenError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    _print_report(report)
    out_dir = Path(out).resolve() if out else mf.out_path
    written = write_outputs(report, out_dir, selected, mf.name)
    if not report.ok:
        raise typer.Exit(code=1)
    console.print(f"✨ Built {len(report.results)} token types ({len(written)} files) 🎉")


@app.command()
def validate(
    manifest: str | None = typer.Option(None, "--manifest", "-m", help=f"Path to {MANIFEST_FILE}"),
    project: Path = typer.Option(Path("."), "--project", "-p", help="Project root"),  # noqa: B008
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Resolve and validate every token type without writing outputs."""
    configure_logging(verbose)
    try:
        report = build_project(_load(manifest, project))
    except TokenError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    _print_report(report)
    if not report.ok:
        raise typer.Exit(code=1)
    console.print("OK: tokens are valid.")


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
