# SPDX-License-Identifier: MIT

import json
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from archideck.repository.configuration import CONFIGURATION_REPO
from archideck.repository.kintone_settings import KINTONE_SETTINGS_REPO
from archideck.service.kintone_proxy import KintoneProxy
from archideck.service.kintone_server import serve as serve_proxy
from archideck.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

console = Console()


def _parse_record(record: str) -> dict[str, Any]:
    try:
        parsed = json.loads(record)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"Record must be JSON: {e}")
    if not isinstance(parsed, dict):
        raise typer.BadParameter("Record must be a JSON object")
    return parsed


def _call(action: str, data: Optional[dict[str, Any]] = None) -> None:
    config = CONFIGURATION_REPO.get_config()
    with KintoneProxy(timeout=config["kintone_timeout"]) as proxy:
        result = proxy.handle({"action": action, "data": data or {}})

    payload = result["payload"]
    if payload.get("success"):
        console.print_json(data=payload.get("data"))
        return

    console.print(f"[red]{result['status']}: {payload.get('error')}[/red]")
    for key in ("hint", "details", "debug"):
        if payload.get(key):
            console.print(f"[dim]{key}: {payload[key]}[/dim]")
    raise typer.Exit(1)


@app.command("settings, st")
def settings() -> None:
    """Show the active kintone settings."""
    active = KINTONE_SETTINGS_REPO.get_active_settings()
    if active is None:
        console.print("No active kintone settings")
        raise typer.Exit(0)

    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("domain", active["domain"] or "")
    table.add_row("app_id", str(active["app_id"] or ""))
    table.add_row("api_token", "********" if active["api_token"] else "")
    table.add_row("field_customer", active["field_customer"] or "")
    table.add_row("field_sales", active["field_sales"] or "")
    table.add_row("field_design", active["field_design"] or "")
    table.add_row("field_ic", active["field_ic"] or "")
    table.add_row("field_construction", active["field_construction"] or "")
    console.print(table)


@app.command("set-settings, ss")
def set_settings(
    domain: Annotated[
        Optional[str], typer.Option("--domain", help="e.g. example.cybozu.com")
    ] = None,
    app_id: Annotated[Optional[str], typer.Option("--app-id")] = None,
    api_token: Annotated[Optional[str], typer.Option("--api-token")] = None,
    field_customer: Annotated[Optional[str], typer.Option("--field-customer")] = None,
    field_sales: Annotated[Optional[str], typer.Option("--field-sales")] = None,
    field_design: Annotated[Optional[str], typer.Option("--field-design")] = None,
    field_ic: Annotated[Optional[str], typer.Option("--field-ic")] = None,
    field_construction: Annotated[
        Optional[str], typer.Option("--field-construction")
    ] = None,
) -> None:
    """Save kintone connection settings and field mappings."""
    KINTONE_SETTINGS_REPO.save_settings(
        domain=domain,
        app_id=app_id,
        api_token=api_token,
        field_customer=field_customer,
        field_sales=field_sales,
        field_design=field_design,
        field_ic=field_ic,
        field_construction=field_construction,
    )
    console.print("[green]kintone settings saved[/green]")


@app.command("test, t")
def test() -> None:
    """Check that the stored settings can read the app."""
    _call("test")


@app.command("records, rs")
def records(
    query: Annotated[
        Optional[str], typer.Option("--query", "-q", help="kintone query string")
    ] = None,
) -> None:
    """Fetch records (kintone returns at most 500)."""
    _call("getRecords", {"query": query} if query else {})


@app.command("record, r", no_args_is_help=True)
def record(record_id: str) -> None:
    """Fetch one record."""
    _call("getRecord", {"recordId": record_id})


@app.command("add, a", no_args_is_help=True)
def add(
    record: Annotated[str, typer.Argument(help='JSON, e.g. {"顧客名": {"value": "山田"}}')],
) -> None:
    """Create a record."""
    _call("addRecord", {"record": _parse_record(record)})


@app.command("update, u", no_args_is_help=True)
def update(
    record_id: str,
    record: Annotated[str, typer.Argument(help="JSON object of fields to update")],
) -> None:
    """Update a record."""
    _call("updateRecord", {"recordId": record_id, "record": _parse_record(record)})


@app.command("mappings, mp")
def mappings() -> None:
    """Show which kintone fields feed the dashboard."""
    _call("getFieldMappings")


@app.command("serve")
def serve(
    host: Annotated[str, typer.Option("--host")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port")] = 8787,
) -> None:
    """Run the proxy endpoint for browser clients."""
    config = CONFIGURATION_REPO.get_config()
    console.print(f"Serving kintone proxy on http://{host}:{port}")
    with KintoneProxy(timeout=config["kintone_timeout"]) as proxy:
        try:
            serve_proxy(proxy, host, port)
        except KeyboardInterrupt:
            console.print("Stopped")
