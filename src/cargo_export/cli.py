"""CLI for cargo-export."""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cargo_export.config import load_export_config
from cargo_export.config.models import ExportConfig
from cargo_export.constants import PACKAGE_VERSION
from cargo_export.errors import BuildFailedError, ExportError
from cargo_export.observability import configure_logging
from cargo_export.pipeline import ExportPipeline
from cargo_export.schemas.enums import TargetKind
from cargo_export.schemas.events import ExportSummary

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help=(
        "cargo-export copies test, bench and binary executables built by cargo "
        "into a directory under stable names."
    ),
)
console = Console(stderr=True, soft_wrap=True)

EXAMPLES = """
Examples:

  cargo export --output target/tests -- test
    Export all test binaries into target/tests.

  cargo export --output target/benches --kind bench -- bench
    Export benchmark binaries into target/benches.
"""


@app.command()
def version() -> None:
    """Print the cargo-export version."""
    typer.echo(PACKAGE_VERSION)


@app.command("export", epilog=EXAMPLES)
def export(
    build_args: list[str] | None = typer.Argument(
        None,
        metavar="-- CARGO_COMMAND [CARGO_OPTIONS...]",
        help="Build tool arguments, forwarded after `--`.",
        show_default=False,
    ),
    output: Path = typer.Option(
        ..., "--output", "-o", help="Directory receiving the exported executables."
    ),
    kind: list[TargetKind] | None = typer.Option(
        None,
        "--kind",
        "-k",
        help="Target kind to export; repeatable. Defaults to every kind.",
        case_sensitive=False,
    ),
    tag: str | None = typer.Option(
        None, "--tag", "-t", help="Tag added to the exported file names."
    ),
    no_default_options: bool = typer.Option(
        False,
        "--no-default-options",
        "-n",
        help="Do not add --message-format=json and --no-run to the build command.",
    ),
    fail_on_empty: bool = typer.Option(
        False, "--fail-on-empty", help="Exit non-zero when nothing was exported."
    ),
    include_unit_tests: bool = typer.Option(
        False,
        "--include-unit-tests",
        help="Let unit-test builds of lib/bin/example targets match --kind test.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print files copied."),
    config: Path | None = typer.Option(
        None, "--config", help="Path to cargo-export.yaml override."
    ),
) -> None:
    """Build with cargo and export the produced executables."""
    if not build_args:
        raise typer.BadParameter(
            "Missing build tool arguments, e.g. `-- test`.", param_hint="CARGO_COMMAND"
        )
    try:
        export_config = load_export_config(
            config,
            cli_overrides=_cli_overrides(
                kind=kind,
                tag=tag,
                no_default_options=no_default_options,
                fail_on_empty=fail_on_empty,
                include_unit_tests=include_unit_tests,
                verbose=verbose,
            ),
        )
    except (OSError, ValueError, ValidationError) as exc:
        console.print(f"[red]Configuration failed:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    configure_logging(console, verbose=export_config.verbose)
    try:
        summary = ExportPipeline(export_config, output).run(build_args)
    except BuildFailedError as exc:
        console.print(f"[red]\\[cargo-export][/red] {escape(str(exc))}; nothing exported")
        raise typer.Exit(code=exc.exit_code) from exc
    except ExportError as exc:
        console.print(f"[red]\\[cargo-export][/red] {escape(str(exc))}")
        raise typer.Exit(code=exc.exit_code) from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="CARGO_COMMAND") from exc

    _render_summary(summary, export_config)


def _cli_overrides(
    *,
    kind: list[TargetKind] | None,
    tag: str | None,
    no_default_options: bool,
    fail_on_empty: bool,
    include_unit_tests: bool,
    verbose: bool,
) -> dict[str, object]:
    overrides: dict[str, object] = {
        "kinds": [item.value for item in kind] if kind else None,
        "tag": tag,
    }
    # Flags only ever switch behaviour on; leaving them off defers to config.
    if no_default_options:
        overrides["default_options"] = False
    if fail_on_empty:
        overrides["fail_on_empty"] = True
    if include_unit_tests:
        overrides["include_unit_tests"] = True
    if verbose:
        overrides["verbose"] = True
    return overrides


def _render_summary(summary: ExportSummary, config: ExportConfig) -> None:
    if config.verbose and summary.exported:
        table = Table(title="Exported Artifacts")
        table.add_column("Name", no_wrap=True)
        table.add_column("Package")
        table.add_column("Target")
        table.add_column("Source")
        for artifact in summary.exported:
            table.add_row(
                artifact.destination_name,
                artifact.package_name,
                artifact.target_name,
                str(artifact.source_path),
            )
        console.print(table)
    noun = "artifact" if summary.count == 1 else "artifacts"
    console.print(
        f"[green]\\[cargo-export][/green] exported {summary.count} {noun} "
        f"to {escape(str(summary.output_dir))}"
    )
