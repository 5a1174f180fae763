"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdsite.cli.commands import check_cmd, export_cmd, list_cmd, new_cmd, show_cmd


app = typer.Typer(name="mdsite", no_args_is_help=True, help="Front-matter content toolkit for static sites")

app.command(name="check")(check_cmd)
app.command(name="list")(list_cmd)
app.command(name="show")(show_cmd)
app.command(name="export")(export_cmd)
app.command(name="new")(new_cmd)
