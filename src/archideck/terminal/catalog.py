# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from archideck.model.task_definition import TaskCategory
from archideck.repository.task_catalog import TASK_CATALOG_REPO
from archideck.terminal.custom_typer import AliasedTyperGroup
from archideck.view.views.project import task_catalog_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("list, ls")
def list_catalog(
    category: Annotated[
        Optional[TaskCategory], typer.Option("--category", "-c")
    ] = None,
) -> None:
    """List task definitions, optionally for one category."""
    if category is None:
        tasks = TASK_CATALOG_REPO.get_all_tasks()
    else:
        tasks = TASK_CATALOG_REPO.get_tasks_by_category(category)
    task_catalog_view(tasks)
