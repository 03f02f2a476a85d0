"""
cidrkit command line entry point.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import replace

import click
from rich.console import Console
from rich.markup import escape

from cidrkit import __version__
from cidrkit.config import get_settings
from cidrkit.ip.cli import ip
from cidrkit.logging_config import LoggerSink, setup_logging


@click.group()
@click.version_option(__version__, prog_name="cidrkit")
@click.option("--debug", is_flag=True, help="Log calculation details to the console")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Also write log entries to this file")
@click.pass_context
def main(ctx, debug: bool, log_file: str | None):
    """cidrkit - IPv4 address, mask and CIDR arithmetic."""
    try:
        settings = get_settings()
    except ValueError as e:
        Console().print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)

    if debug:
        settings = replace(settings, level="DEBUG")
    if log_file:
        settings = replace(settings, log_file=log_file, log_entries=True)

    logger = setup_logging(settings)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["sink"] = LoggerSink(logger, enabled=debug or settings.log_entries)


main.add_command(ip)


if __name__ == "__main__":
    main()
