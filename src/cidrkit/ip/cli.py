"""
IPv4 arithmetic CLI commands.
"""

import json
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cidrkit.ip.core import (
    BinaryAddressDecoder,
    MaskToCidrEncoder,
    SubnetRangeCalculator,
)
from cidrkit.ip.errors import AddressError
from cidrkit.logging_config import LogSink


def _sink(ctx: click.Context) -> LogSink | None:
    """Log sink injected by the top-level command, if any."""
    obj = ctx.find_object(dict)
    return obj.get("sink") if obj else None


def _fail(console: Console, error: Exception):
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    sys.exit(1)


@click.group()
def ip():
    """IPv4 address, mask and CIDR arithmetic."""
    pass


@ip.command()
@click.argument("bits")
@click.pass_context
def decode(ctx, bits: str):
    """Decode a 32-character binary address into dotted-decimal.

    Examples:
        cidrkit ip decode 10000100101000101110011111111100
    """
    console = Console()

    try:
        address = BinaryAddressDecoder(_sink(ctx)).decode(bits)
    except AddressError as e:
        _fail(console, e)

    console.print(address)


@ip.command()
@click.argument("address")
@click.pass_context
def encode(ctx, address: str):
    """Encode a dotted-decimal address as 32 binary digits.

    Examples:
        cidrkit ip encode 132.162.231.252
    """
    console = Console()

    try:
        bits = BinaryAddressDecoder(_sink(ctx)).encode(address)
    except AddressError as e:
        _fail(console, e)

    console.print(bits)


@ip.command("range")
@click.argument("cidrs", nargs=-1, required=True)
@click.option("--json-output", "json_out", is_flag=True, help="Output as JSON")
@click.pass_context
def range_cmd(ctx, cidrs: tuple[str, ...], json_out: bool):
    """Calculate subnet, first/last host and broadcast of CIDRs.

    Every CIDR is processed even when some of them are invalid; the
    exit status is 1 if any of them failed.

    \b
    Examples:
        cidrkit ip range 192.168.23.55/20
        cidrkit ip range 10.0.0.0/8 172.16.0.0/12 --json-output
    """
    console = Console()
    results = SubnetRangeCalculator(_sink(ctx)).compute_ranges(cidrs)
    failed = any(not result.ok for result in results)

    if json_out:
        output = []
        for result in results:
            if result.ok:
                output.append({"cidr": result.cidr, "success": True, **result.range.to_dict()})
            else:
                output.append({"cidr": result.cidr, "success": False, "error": str(result.error)})
        click.echo(json.dumps(output, indent=2))
        if failed:
            sys.exit(1)
        return

    for result in results:
        if not result.ok:
            console.print(f"[red]Error:[/red] {escape(str(result.error))}")
            continue

        r = result.range
        table = Table(title=f"Subnet Range: {escape(result.cidr)}", show_header=False, box=None)
        table.add_column("Property", style="cyan")
        table.add_column("Value", style="white")

        table.add_row("Subnet", r.subnet)
        table.add_row("Min", r.min)
        table.add_row("Max", r.max)
        table.add_row("Broadcast", r.broadcast)
        table.add_row("Prefix Length", f"/{r.prefix_length}")
        table.add_row("Usable Hosts", f"{r.usable_hosts:,}")

        console.print(table)

    if failed:
        sys.exit(1)


@ip.command()
@click.argument("address")
@click.argument("mask")
@click.pass_context
def cidr(ctx, address: str, mask: str):
    """Combine an address and a dotted-decimal subnet mask into CIDR.

    Examples:
        cidrkit ip cidr 192.168.0.1 255.255.240.0
    """
    console = Console()

    try:
        result = MaskToCidrEncoder(_sink(ctx)).to_cidr(address, mask)
    except AddressError as e:
        _fail(console, e)

    console.print(result)


@ip.command()
@click.argument("prefix", type=int)
@click.pass_context
def mask(ctx, prefix: int):
    """Show the dotted-decimal subnet mask for a prefix length.

    Examples:
        cidrkit ip mask 20
    """
    console = Console()

    try:
        result = MaskToCidrEncoder(_sink(ctx)).to_mask(prefix)
    except AddressError as e:
        _fail(console, e)

    console.print(result)
