"""CLI commands for wirecall.

Developer tooling around the wire protocol: inspect tokens and names, call a
remote procedure, or serve a router with uvicorn.
"""

from __future__ import annotations

import asyncio
import importlib
import json
from typing import Any

import typer
from rich.console import Console

from wirecall import __version__
from wirecall.cli.logging_utils import configure_logging
from wirecall.codec import decode, encode
from wirecall.naming import to_identifier_form, to_wire_form
from wirecall.utils.exceptions import CodecError, RpcClientError

app = typer.Typer(
    name="wirecall",
    help="wirecall - typed RPC over a single dynamic endpoint",
    no_args_is_help=True,
)

console = Console(stderr=True)


def version_callback(value: bool):
    if value:
        console.print(f"wirecall v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(None, "--version", callback=version_callback, is_eager=True),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """wirecall - typed RPC over a single dynamic endpoint."""
    from wirecall.config.access import get_config

    configure_logging(get_config().logging, verbose=verbose)


def _parse_json_arg(raw: str, what: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        console.print(f"[red]{what} is not valid JSON:[/red] {exc}")
        raise typer.Exit(2) from exc


def _parse_headers(pairs: list[str]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            console.print(f"[red]Invalid header[/red] {pair!r}; expected KEY=VALUE")
            raise typer.Exit(2)
        headers[key.strip()] = value.strip()
    return headers


def _load_object(target: str) -> Any:
    module_name, sep, attribute = target.partition(":")
    if not sep or not attribute:
        console.print(f"[red]Invalid target[/red] {target!r}; expected module:attribute")
        raise typer.Exit(2)
    module = importlib.import_module(module_name)
    return getattr(module, attribute)


@app.command("encode")
def encode_command(value: str = typer.Argument(..., help="JSON value (NaN allowed)")):
    """Encode a JSON value into an input token."""
    try:
        typer.echo(encode(_parse_json_arg(value, "VALUE")))
    except CodecError as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(1) from exc


@app.command("decode")
def decode_command(token: str = typer.Argument(..., help="Input token")):
    """Decode an input token back to JSON."""
    try:
        value = decode(token)
    except CodecError as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(1) from exc
    typer.echo(json.dumps(value, indent=2, ensure_ascii=False))


@app.command("name")
def name_command(
    name: str = typer.Argument(..., help="Procedure name"),
    to_identifier: bool = typer.Option(False, "--to-identifier", "-i", help="Convert wire form to identifier form"),
):
    """Show the wire form (or identifier form) of a procedure name."""
    typer.echo(to_identifier_form(name) if to_identifier else to_wire_form(name))


@app.command("init")
def init_command(force: bool = typer.Option(False, "--force", help="Overwrite an existing config file")):
    """Write the effective configuration to ~/.wirecall/config.json."""
    from wirecall.config.access import get_config
    from wirecall.config.loader import get_config_path, save_config

    path = get_config_path()
    if path.exists() and not force:
        console.print(f"[yellow]Config already exists at {path}[/yellow] (use --force to overwrite)")
        raise typer.Exit(1)
    save_config(get_config(), path)
    console.print(f"[green]✓[/green] Wrote config to {path}")


@app.command("call")
def call_command(
    procedure: str = typer.Argument(..., help="Procedure name, e.g. getUser"),
    input: str = typer.Option(None, "--input", help="Input as JSON"),
    url: str = typer.Option(None, "--url", help="Base URL (defaults to client.base_url)"),
    header: list[str] = typer.Option([], "--header", "-H", help="Extra header KEY=VALUE"),
):
    """Call a remote procedure and print its data."""
    from wirecall.client.remote import create_rpc_client, httpx_transport
    from wirecall.codec import UNDEFINED
    from wirecall.config.access import get_config

    config = get_config()
    headers = {**config.client.headers, **_parse_headers(header)}
    client = create_rpc_client(
        url=url or config.client.base_url,
        headers=headers,
        transport=httpx_transport(config.client.timeout),
    )
    payload = _parse_json_arg(input, "--input") if input is not None else UNDEFINED

    try:
        data = asyncio.run(client.procedure(procedure).fetch(payload))
    except (RpcClientError, CodecError) as exc:
        console.print(f"[red]Call failed:[/red] {exc.message}")
        if getattr(exc, "details", None):
            console.print(f"[dim]{exc.details}[/dim]")
        raise typer.Exit(1) from exc
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


@app.command("serve")
def serve_command(
    target: str = typer.Argument(..., help="Router as module:attribute"),
    ctx: str = typer.Option(None, "--ctx", help="Context factory as module:attribute"),
    host: str = typer.Option(None, "--host", help="Bind host (defaults to server.host)"),
    port: int = typer.Option(None, "--port", "-p", help="Bind port (defaults to server.port)"),
    prefix: str = typer.Option(None, "--prefix", help="Route prefix (defaults to server.prefix)"),
):
    """Serve a router over HTTP."""
    import uvicorn

    from wirecall.api.server import create_app
    from wirecall.config.access import get_config

    config = get_config().model_copy(deep=True)
    if host is not None:
        config.server.host = host
    if port is not None:
        config.server.port = port
    if prefix is not None:
        config.server.prefix = prefix

    rpc_router = _load_object(target)
    ctx_factory = _load_object(ctx) if ctx else None
    application = create_app(router=rpc_router, ctx=ctx_factory, config=config)
    console.print(
        f"[green]✓[/green] Serving {len(rpc_router)} procedures at "
        f"http://{config.server.host}:{config.server.port}{config.server.prefix}/{{trpc}}"
    )
    uvicorn.run(application, host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    app()
