# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from archideck.model.designer import Department
from archideck.query.visibility import RESERVED_MODES
from archideck.repository.designer import DESIGNER_REPO
from archideck.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

console = Console()


@app.command("add, a", no_args_is_help=True)
def add(
    name: Annotated[str, typer.Argument(help="staff member name")],
    department: Annotated[Department, typer.Option("--department", "-d")],
) -> None:
    """Register a staff member who gets a sidebar tab."""
    if name.strip() == "":
        raise typer.BadParameter("Name cannot be blank")
    if name.strip() in [str(mode) for mode in RESERVED_MODES]:
        console.print(
            f"[yellow]'{name.strip()}' is also a reserved tab; "
            "use --person to view their calendar[/yellow]"
        )

    DESIGNER_REPO.save_new_designer(name, department)
    console.print(f"[green]Added {name.strip()} ({department})[/green]")


@app.command("list, ls")
def list_designers(
    department: Annotated[
        Optional[Department], typer.Option("--department", "-d")
    ] = None,
) -> None:
    """List staff members."""
    if department is None:
        designers = DESIGNER_REPO.get_all_designers()
    else:
        designers = DESIGNER_REPO.get_designers_by_department(department)

    table = Table(box=box.SIMPLE)
    table.add_column("name")
    table.add_column("department")
    for designer in designers:
        table.add_row(designer["name"], str(designer["department"]))
    console.print(table)


@app.command("remove, rm", no_args_is_help=True)
def remove(name: str) -> None:
    """Remove a staff member."""
    if not DESIGNER_REPO.remove_designer(name):
        console.print(f"[red]Error: '{name}' not found[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Removed {name}[/green]")
