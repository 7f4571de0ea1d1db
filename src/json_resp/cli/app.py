import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from json_resp.attrs import ClientFacing
from json_resp.cli.targets import load_taxonomy
from json_resp.config import get_settings
from json_resp.errors import CompileError, ContractViolation, TargetError
from json_resp.log import configure_logging
from json_resp.openapi import combine_errors
from json_resp.taxonomy import JsonErrorEnum

app = typer.Typer(
    name="json-resp",
    help="json-resp CLI: check error taxonomies and export their OpenAPI documentation.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()
err_console = Console(stderr=True)

TargetArg = Annotated[str, typer.Argument(help="Taxonomy to load, as `pkg.module:Class` or `file.py:Class`.")]


@app.callback()
def root(
    log_level: Annotated[
        str | None, typer.Option(help="Logging level (default: $JSON_RESP_LOG_LEVEL or WARNING).")
    ] = None,
) -> None:
    configure_logging(log_level or get_settings().log_level)


def _load(target: str) -> type[JsonErrorEnum]:
    try:
        return load_taxonomy(target)
    except TargetError as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2) from exc
    except CompileError as exc:
        table = Table(title=f"{len(exc.diagnostics)} error(s)", show_lines=False)
        table.add_column("span")
        table.add_column("message")
        for diagnostic in exc.diagnostics:
            table.add_row(diagnostic.span, diagnostic.message)
        console.print(table)
        raise typer.Exit(code=1) from exc


@app.command("check")
def check(target: TargetArg) -> None:
    """Compile a taxonomy and list its cases."""
    taxonomy = _load(target)
    ir = taxonomy.__json_resp__.ir

    table = Table(title=f"{ir.type_name} (internal code: {ir.config.internal_error_code})")
    for h in ["case", "kind", "status", "code", "payload", "hint"]:
        table.add_column(h)
    for case in ir.cases:
        attrs = case.attributes
        payload = "no" if case.naive else "yes"
        if isinstance(attrs, ClientFacing):
            table.add_row(case.name, "request", str(attrs.status), attrs.code, payload, attrs.hint or "")
        else:
            table.add_row(case.name, "internal", "500", ir.config.internal_error_code, payload, "")
    console.print(table)
    console.print(f"({len(ir.cases)} cases)")


@app.command("openapi")
def openapi(
    target: TargetArg,
    indent: Annotated[int, typer.Option(help="JSON indentation.")] = 2,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write to this file instead of stdout.")] = None,
) -> None:
    """Print the OpenAPI components (schemas and responses) of a taxonomy."""
    taxonomy = _load(target)
    text = json.dumps(taxonomy.oai.components(), indent=indent)
    if output is None:
        typer.echo(text)
    else:
        output.write_text(text + "\n", encoding="utf-8")
        console.print(f"[green]Wrote {len(taxonomy.oai)} artifact(s) to {output}[/green]")


@app.command("combine")
def combine(
    target: TargetArg,
    first: Annotated[str, typer.Argument(help="First documented error.")],
    second: Annotated[str, typer.Argument(help="Second documented error.")],
    indent: Annotated[int, typer.Option(help="JSON indentation.")] = 2,
) -> None:
    """Print the documentation of two errors sharing a status, merged into one response."""
    taxonomy = _load(target)
    try:
        combined = combine_errors(taxonomy.oai[first], taxonomy.oai[second])
    except KeyError as exc:
        err_console.print(f"[red]{taxonomy.__name__} documents no error named {exc.args[0]!r}[/red]")
        raise typer.Exit(code=2) from exc
    except ContractViolation as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    typer.echo(json.dumps({"responses": combined.responses(), "components": combined.components()}, indent=indent))


@app.command("demo")
def demo(
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:
    """Serve the demo application."""
    import uvicorn

    from json_resp.api.demo import create_app

    console.print(f"[green]Starting demo server on {host}:{port} (docs at /docs)[/green]")
    uvicorn.run(create_app(), host=host, port=port)


def main() -> None:
    app()
