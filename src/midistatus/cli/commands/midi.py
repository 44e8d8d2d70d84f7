"""MIDI command implementations."""

import logging
import time
from datetime import datetime
from typing import Optional

import click

from midistatus.devices import DeviceEvent, DialectRegistry
from midistatus.exceptions import DeviceNotFoundError
from midistatus.midi import ConnectionNegotiator, list_endpoints, list_inputs, select_endpoint

from ..errors import exit_with_error, log_path_from

logger = logging.getLogger(__name__)


@click.group(name="midi")
def midi_group():
    """MIDI device commands."""
    pass


@midi_group.command(name="list")
def list_midi():
    """List available MIDI ports with the ids accepted by --device."""
    endpoints = list_endpoints()

    click.echo("MIDI Input Ports:\n")
    if not endpoints["input"]:
        click.echo("  No MIDI input ports found.")
    else:
        for endpoint in endpoints["input"]:
            click.echo(f"  [{endpoint.id}] {endpoint.name}")

    click.echo("\nMIDI Output Ports:\n")
    if not endpoints["output"]:
        click.echo("  No MIDI output ports found.")
    else:
        for endpoint in endpoints["output"]:
            click.echo(f"  [{endpoint.id}] {endpoint.name}")


@midi_group.command(name="monitor")
@click.option(
    '--device', '-d',
    type=str,
    default=None,
    help='MIDI input id or name prefix (default: first input)'
)
@click.pass_context
def monitor_midi(ctx, device: Optional[str]):
    """
    Connect to a device and print its input events.

    Press Ctrl+C to stop monitoring.
    """
    inputs = list_inputs()
    endpoint = select_endpoint(inputs, device) if device else next(iter(inputs), None)
    if endpoint is None:
        exit_with_error(DeviceNotFoundError(device or ""), log_path_from(ctx))

    def show(event: DeviceEvent) -> None:
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        click.echo(f"[{timestamp}] {event!r}")

    driver = DialectRegistry().create_driver(endpoint.name, ConnectionNegotiator())
    driver.add_listener(show)

    try:
        with driver:
            driver.connect(endpoint)
            driver.wait_settled()
            if not driver.connected:
                exit_with_error(driver.error, log_path_from(ctx))

            click.echo(f"Monitoring {endpoint.name} ({driver.config.display_name})")
            click.echo("Press Ctrl+C to stop\n")
            while True:
                time.sleep(0.1)

    except KeyboardInterrupt:
        click.echo("\n\nStopping monitor...")
