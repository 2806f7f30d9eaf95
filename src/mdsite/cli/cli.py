"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdsite.cli.commands import build_cmd, render_cmd


app = typer.Typer(name="mdsite", no_args_is_help=True, help="Markdown to static site + RSS generator")

app.command(name="build")(build_cmd)
app.command(name="render")(render_cmd)
