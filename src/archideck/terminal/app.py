# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from archideck.log import configure_logging
from archideck.terminal import (
    catalog,
    configuration,
    designer,
    kintone,
    project,
    task,
)
from archideck.terminal.calendar import calendar, tabs
from archideck.terminal.custom_typer import OrderedAliasedTyperGroup
from archideck.terminal.validate import validate_log_level
from archideck.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="ArchiDeck - construction project deadlines in the CLI",
    no_args_is_help=True,
)
app.command(name="calendar, cal")(calendar)
app.command(name="tabs, tb")(tabs)
app.add_typer(project.app, name="project, p", help="Manage projects")
app.add_typer(task.app, name="task, t", help="Manage standalone tasks")
app.add_typer(catalog.app, name="catalog, ca", help="Browse the task catalog")
app.add_typer(designer.app, name="designer, d", help="Manage staff tabs")
app.add_typer(kintone.app, name="kintone, k", help="Talk to kintone")
app.add_typer(configuration.app, name="config, c", help="View and change settings")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in views",
        ),
    ] = False,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            callback=validate_log_level,
            help="Override the configured log level",
        ),
    ] = None,
) -> None:
    """
    ArchiDeck - construction project deadlines in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)
    if log_level is not None:
        configure_logging(log_level)


def run() -> None:
    app()
