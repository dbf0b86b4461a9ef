"""CLI entrypoint: Typer app definition and command registration"""

import typer

from outbreak.cli.commands import convert_cmd, main_callback, outline_cmd, translate_cmd


app = typer.Typer(name="outbreak", no_args_is_help=True, help="Obsidian to Logseq document converter")

app.callback()(main_callback)
app.command(name="convert")(convert_cmd)
app.command(name="translate")(translate_cmd)
app.command(name="outline")(outline_cmd)
