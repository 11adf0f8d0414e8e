"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdfigures.cli.commands import config_cmd, render_cmd, scan_cmd


app = typer.Typer(name="mdfigures", no_args_is_help=True, help="Render markdown with implicit figures")

app.command(name="render")(render_cmd)
app.command(name="scan")(scan_cmd)
app.command(name="config")(config_cmd)
