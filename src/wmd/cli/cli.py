"""CLI entrypoint: Typer app definition and command registration"""

import typer

from wmd.cli.commands import meta_cmd, render_cmd, show_cmd


app = typer.Typer(name="wmd", no_args_is_help=True, help="WMD article renderer: .wmd -> HTML fragment + JSON")

app.command(name="render")(render_cmd)
app.command(name="show")(show_cmd)
app.command(name="meta")(meta_cmd)
