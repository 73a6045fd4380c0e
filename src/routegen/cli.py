from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from routegen.domain.models import GenerateOptions
from routegen.orchestrator.pipeline import GenerateResult, run_generate


app = typer.Typer(no_args_is_help=True, add_completion=False)

endpoints_app = typer.Typer(no_args_is_help=True)
app.add_typer(endpoints_app, name="endpoints")

console = Console()
err_console = Console(stderr=True)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log rule misses and skipped endpoints"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
) -> None:
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _routes_dir(routes: str) -> Path:
    routes_path = Path(routes).expanduser().resolve()
    if not routes_path.exists():
        raise typer.BadParameter(f"Routes directory does not exist: {routes_path}")
    if not routes_path.is_dir():
        raise typer.BadParameter(f"Routes path is not a directory: {routes_path}")
    return routes_path


def _report_failures(result: GenerateResult) -> None:
    for f in result.failures:
        err_console.print(f"[bold red]malformed[/bold red] {f.file_path}: {f.message}")


@app.command()
def generate(
    routes: str = typer.Argument(..., help="Directory of JSON route descriptions (one namespace)"),
    style: str = typer.Option("positional", help="Signature style: positional|kwargs"),
    out: Optional[str] = typer.Option(None, help="Output path (default: print to stdout)"),
    client_module: str = typer.Option("Octokit", help="Enclosing Ruby module"),
    client_class: str = typer.Option("Client", help="Enclosing Ruby class"),
) -> None:
    routes_path = _routes_dir(routes)
    fmt = style.lower().strip()
    if fmt not in ("positional", "kwargs"):
        raise typer.BadParameter("style must be one of: positional, kwargs")

    options = GenerateOptions(style=fmt, client_module=client_module, client_class=client_class)
    result = run_generate(routes_path, options=options)

    if out:
        out_path = Path(out).expanduser()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(result.module_text, encoding="utf-8")
        console.print(
            f"[bold green]Wrote[/bold green] {len(result.generated)} endpoints "
            f"({result.namespace}) to: {out_path}"
        )
    else:
        # plain stdout: the module text must not be reflowed
        typer.echo(result.module_text, nl=False)

    if result.skipped:
        err_console.print(f"Skipped (verb not generated): {len(result.skipped)}")
    _report_failures(result)
    if result.failures:
        raise typer.Exit(code=1)


@endpoints_app.command("list")
def endpoints_list(
    routes: str = typer.Argument(..., help="Directory of JSON route descriptions"),
    format: str = typer.Option("table", help="Output format: table|json"),
) -> None:
    routes_path = _routes_dir(routes)
    result = run_generate(routes_path)

    rows = [
        {
            "file": e.file_path,
            "verb": e.route.verb,
            "path": e.route.path,
            "method": e.named.method_name,
            "alias": e.named.alternate_name,
            "priority": list(e.named.priority_key),
        }
        for e in result.endpoints
    ]

    if format.lower() == "json":
        typer.echo(json.dumps(rows, indent=2))
        _report_failures(result)
        return

    console.print(f"[bold]Namespace:[/bold] {result.namespace}")
    console.print(f"[bold]Endpoints:[/bold] {len(rows)}")

    table = Table(show_header=True, header_style="bold")
    table.add_column("VERB", no_wrap=True)
    table.add_column("PATH")
    table.add_column("METHOD")
    table.add_column("ALIAS")
    table.add_column("PRIORITY", no_wrap=True)

    for r in rows:
        table.add_row(
            r["verb"],
            r["path"],
            r["method"] or "-",
            r["alias"] or "",
            ",".join(str(k) for k in r["priority"]),
        )

    console.print(table)
    _report_failures(result)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
