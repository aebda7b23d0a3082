"""CLI entrypoint: Typer app definition and command registration"""

from typing import Annotated, Optional

import typer

from mdblog.cli.commands import (
    _settings, build_cmd, check_cmd, list_cmd, setup_logging, show_cmd, tags_cmd,
)


app = typer.Typer(name="mdblog", no_args_is_help=True, help="Blog content catalog: validate, query, and export MDX posts")


@app.callback()
def main(
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR")] = None,
    ):
    setup_logging(_settings(overrides={"log_level": log_level}).log_level)


app.command(name="check")(check_cmd)
app.command(name="list")(list_cmd)
app.command(name="show")(show_cmd)
app.command(name="tags")(tags_cmd)
app.command(name="build")(build_cmd)
