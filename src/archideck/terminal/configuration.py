# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from archideck import configuration
from archideck.repository.configuration import CONFIGURATION_REPO
from archideck.terminal.custom_typer import AliasedTyperGroup
from archideck.terminal.validate import (
    validate_log_level,
    validate_max_events,
    validate_tab,
)

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _config_table(title: Optional[str] = None) -> Table:
    config = CONFIGURATION_REPO.get_config()

    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "data_path",
        config["data_path"] if config["data_path"] else "None (platform default)",
    )
    table.add_row("resolved data path", str(configuration.DATA_PATH))
    table.add_row(
        "show_header", "✓ Enabled" if config["show_header"] else "✗ Disabled"
    )
    table.add_row("default_tab", config["default_tab"])
    table.add_row("max_events_per_day", str(config["max_events_per_day"]))
    table.add_row("log_level", config["log_level"])
    table.add_row("kintone_timeout", str(config["kintone_timeout"]))
    return table


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    Console().print(_config_table())


@app.command("set, s")
def set(
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="Directory path for storing data files"),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path", help="Reset data path to the platform default"
        ),
    ] = False,
    show_header: Annotated[
        Optional[bool],
        typer.Option("--show-header/--no-show-header", help="Show view headers"),
    ] = None,
    default_tab: Annotated[
        Optional[str],
        typer.Option(
            "--default-tab", callback=validate_tab, help="Tab used when --tab is omitted"
        ),
    ] = None,
    max_events_per_day: Annotated[
        Optional[int],
        typer.Option(
            "--max-events-per-day",
            callback=validate_max_events,
            help="Entries shown per calendar day",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", callback=validate_log_level),
    ] = None,
    kintone_timeout: Annotated[
        Optional[float],
        typer.Option("--kintone-timeout", help="Seconds before a kintone call fails"),
    ] = None,
) -> None:
    """
    Update configuration settings.
    """
    if kintone_timeout is not None and kintone_timeout <= 0:
        raise typer.BadParameter("Timeout must be positive")

    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        show_header=show_header,
        default_tab=default_tab,
        max_events_per_day=max_events_per_day,
        log_level=log_level,
        kintone_timeout=kintone_timeout,
    )

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(_config_table("Updated Configuration"))
