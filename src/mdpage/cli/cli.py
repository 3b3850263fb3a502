"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdpage.cli.commands import render_cmd


app = typer.Typer(name="mdpage", no_args_is_help=True, help="Render templates and Markdown pages through layouts")

app.command(name="render")(render_cmd)


@app.callback()
def main():
    """Render templates and Markdown pages through layouts."""
