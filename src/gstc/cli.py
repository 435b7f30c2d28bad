"""gstc command line client.

Usage:
    gstc ping                                   # Check the daemon is up
    gstc pipeline create p0 videotestsrc ! fakesink
    gstc pipeline play p0                       # Also: pause, stop, eos, delete
    gstc element set p0 videotestsrc0 pattern 18
    gstc bus wait p0 eos --bus-timeout -1       # Block until end of stream

    gstc --address 10.0.0.2 --port 5000 ping    # Remote daemon
    gstc --protocol http --port 5001 ping       # gstd HTTP interface

Connection options can also be set with GSTC_ADDRESS, GSTC_PORT,
GSTC_TIMEOUT, GSTC_KEEP_OPEN and GSTC_PROTOCOL.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from dataclasses import replace

import click

from .client import GstClient
from .config import PROTOCOLS, ClientConfig
from .exceptions import GstcError
from .status import is_daemon_error, is_ok, status_name


def _run(ctx: click.Context, operation: Callable[[GstClient], int]) -> None:
    """Connect, run one operation, report its status and exit."""
    config: ClientConfig = ctx.obj
    try:
        client = GstClient.from_config(config)
    except GstcError as e:
        click.echo(f"Cannot connect to daemon at {config.address}:{config.port}: {e}", err=True)
        sys.exit(1)

    with client:
        status = operation(client)
        response = client.last_response

    if is_ok(status):
        click.echo("OK")
        return

    message = f"Failed: {status_name(status)} ({status})"
    if is_daemon_error(status) and response is not None and response.description:
        message += f": {response.description}"
    click.echo(message, err=True)
    sys.exit(1)


@click.group()
@click.option("--address", default=None, help="Daemon host [env: GSTC_ADDRESS]")
@click.option("--port", type=int, default=None, help="Daemon port [env: GSTC_PORT]")
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Connect/receive timeout in seconds, 0 waits forever [env: GSTC_TIMEOUT]",
)
@click.option(
    "--keep-open/--no-keep-open",
    default=None,
    help="Reuse one connection for all requests [env: GSTC_KEEP_OPEN]",
)
@click.option(
    "--protocol",
    type=click.Choice(PROTOCOLS),
    default=None,
    help="Wire protocol [env: GSTC_PROTOCOL]",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every request and response")
@click.pass_context
def main(
    ctx: click.Context,
    address: str | None,
    port: int | None,
    timeout: float | None,
    keep_open: bool | None,
    protocol: str | None,
    verbose: bool,
) -> None:
    """gstc - control a GStreamer Daemon."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    # Explicit options override GSTC_* variables, which override defaults
    overrides = {
        "address": address,
        "port": port,
        "timeout": timeout,
        "keep_open": keep_open,
        "protocol": protocol,
    }
    try:
        config = ClientConfig.from_env()
        ctx.obj = replace(config, **{k: v for k, v in overrides.items() if v is not None})
    except ValueError as e:
        raise click.UsageError(f"Invalid configuration: {e}") from e


@main.command()
@click.pass_context
def ping(ctx: click.Context) -> None:
    """Check that the daemon is reachable."""
    _run(ctx, lambda client: client.ping())


# =============================================================================
# Pipeline Commands
# =============================================================================


@main.group()
def pipeline() -> None:
    """Manage pipelines."""


@pipeline.command("create")
@click.argument("name")
@click.argument("description", nargs=-1, required=True)
@click.pass_context
def pipeline_create(ctx: click.Context, name: str, description: tuple[str, ...]) -> None:
    """Create pipeline NAME from a gst-launch DESCRIPTION.

    Examples:

        gstc pipeline create p0 videotestsrc ! autovideosink
    """
    _run(ctx, lambda client: client.pipeline_create(name, " ".join(description)))


@pipeline.command("delete")
@click.argument("name")
@click.pass_context
def pipeline_delete(ctx: click.Context, name: str) -> None:
    """Delete pipeline NAME."""
    _run(ctx, lambda client: client.pipeline_delete(name))


@pipeline.command("play")
@click.argument("name")
@click.pass_context
def pipeline_play(ctx: click.Context, name: str) -> None:
    """Set pipeline NAME to playing."""
    _run(ctx, lambda client: client.pipeline_play(name))


@pipeline.command("pause")
@click.argument("name")
@click.pass_context
def pipeline_pause(ctx: click.Context, name: str) -> None:
    """Set pipeline NAME to paused."""
    _run(ctx, lambda client: client.pipeline_pause(name))


@pipeline.command("stop")
@click.argument("name")
@click.pass_context
def pipeline_stop(ctx: click.Context, name: str) -> None:
    """Set pipeline NAME to null."""
    _run(ctx, lambda client: client.pipeline_stop(name))


@pipeline.command("eos")
@click.argument("name")
@click.pass_context
def pipeline_eos(ctx: click.Context, name: str) -> None:
    """Inject an end-of-stream event into pipeline NAME."""
    _run(ctx, lambda client: client.pipeline_inject_eos(name))


# =============================================================================
# Element Commands
# =============================================================================


@main.group()
def element() -> None:
    """Manage pipeline elements."""


@element.command("set")
@click.argument("pipeline_name")
@click.argument("element_name")
@click.argument("prop")
@click.argument("value")
@click.pass_context
def element_set(
    ctx: click.Context, pipeline_name: str, element_name: str, prop: str, value: str
) -> None:
    """Set property PROP of ELEMENT_NAME in PIPELINE_NAME to VALUE.

    The daemon's answer is not checked; OK means the update was sent.
    """
    _run(ctx, lambda client: client.element_set(pipeline_name, element_name, prop, value))


# =============================================================================
# Bus Commands
# =============================================================================


@main.group()
def bus() -> None:
    """Wait for pipeline bus messages."""


@bus.command("wait")
@click.argument("pipeline_name")
@click.argument("message")
@click.option(
    "--bus-timeout",
    default=-1,
    help="Daemon bus timeout, passed verbatim (-1 waits forever, 0 polls)",
)
@click.pass_context
def bus_wait(ctx: click.Context, pipeline_name: str, message: str, bus_timeout: int) -> None:
    """Block until MESSAGE (e.g. eos, error) appears on PIPELINE_NAME's bus."""
    _run(ctx, lambda client: client.pipeline_bus_wait(pipeline_name, message, bus_timeout))


if __name__ == "__main__":
    main()
