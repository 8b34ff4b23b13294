"""CLI entrypoint: Typer app definition and command registration"""

from typing import Annotated

import typer

from mdview.cli.commands import headings_cmd, info_cmd, render_cmd, slug_cmd, toc_cmd


app = typer.Typer(name="mdview", no_args_is_help=True, help="Markdown viewer core: headings, TOC and image paths")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr")] = False,
    ):
    ctx.obj = {"verbose": verbose}


app.command(name="toc")(toc_cmd)
app.command(name="headings")(headings_cmd)
app.command(name="render")(render_cmd)
app.command(name="slug")(slug_cmd)
app.command(name="info")(info_cmd)
