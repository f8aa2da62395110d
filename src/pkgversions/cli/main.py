import asyncio
import json
import logging
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.logging import RichHandler

from ..config import load_settings
from ..domain.errors import ConfigError
from ..provider import build_data_source
from ..datasource import VersionsDataSource
from ..resolution.encoders import Encoding
from ..resolution.resolver import FailurePolicy
from ..schema.versions import versions_schema
from ..services.info import VersionsInfoService
from .config_commands import app as config_app

app = typer.Typer()
console = Console()

app.add_typer(config_app, name="config", help="Manage pkgversions configuration")


def setup_logging(verbose: int):
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG

    logger = logging.getLogger("pkgversions")
    logger.setLevel(level)
    # avoid stacking handlers when the app is invoked more than once in a process
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)


def get_data_source(
    registry_url: Optional[str] = None,
    raw: bool = False,
    sentinel: bool = False,
) -> VersionsDataSource:
    settings = load_settings(
        registry_url=registry_url,
        encoding=Encoding.RAW if raw else None,
        failure_policy=FailurePolicy.SENTINEL if sentinel else None,
    )
    return build_data_source(settings)


@app.callback()
def main_callback(
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Increase log output (-vv for debug)")
):
    """look up package version metadata from the registry."""
    setup_logging(verbose)


@app.command()
def show(
    packages: List[str] = typer.Argument(..., help="Package names to look up"),
    version: Optional[str] = typer.Option(None, "--version", help="Show a single version only"),
    fips: bool = typer.Option(False, "--fips", help="With --version, look up the FIPS variant"),
    raw: bool = typer.Option(False, "--raw", help="Encode results as raw JSON text"),
    sentinel: bool = typer.Option(False, "--sentinel", help="Substitute placeholder metadata when the registry fails"),
    registry_url: Optional[str] = typer.Option(None, "--registry-url", help="Override the configured registry"),
    as_json: bool = typer.Option(False, "--json", help="Print the data source state as JSON"),
):
    """show version metadata for one or more packages."""
    try:
        data_source = get_data_source(registry_url, raw=raw, sentinel=sentinel)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    service = VersionsInfoService(data_source, console)
    try:
        responses = asyncio.run(service.fetch_all(packages))

        if as_json:
            ok = service.show_json(responses)
        else:
            ok = True
            for name, response in responses.items():
                if not service.show(name, response, version=version, fips=fips):
                    ok = False
    finally:
        data_source.close()

    if not ok:
        raise typer.Exit(code=1)


@app.command()
def schema():
    """print the versions data source schema as JSON."""
    console.print_json(json.dumps(versions_schema().describe()))


if __name__ == "__main__":
    app()
