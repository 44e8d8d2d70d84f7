"""Run command - polls trackers and draws on the grid until Ctrl+C."""

import logging
from pathlib import Path
from typing import Optional

import click

from midistatus.core import Controller, resolve_selector
from midistatus.exceptions import DeviceNotFoundError
from midistatus.midi import list_inputs
from midistatus.models import DEFAULT_CONFIG_PATH, DEFAULT_PROFILE_PATH, AppConfig, Profile

from ..errors import exit_with_error, log_path_from

logger = logging.getLogger(__name__)


def prompt_for_device() -> str:
    """
    List input endpoints and ask for one.

    Raises:
        DeviceNotFoundError: If there are no input endpoints
    """
    inputs = list_inputs()
    if not inputs:
        raise DeviceNotFoundError("")

    click.echo("No MIDI device configured. Available inputs:\n")
    for endpoint in inputs:
        click.echo(f"  [{endpoint.id}] {endpoint.name}")
    click.echo()
    return click.prompt("Select a device (id or name)", type=str).strip()


@click.command()
@click.option(
    '--config', 'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help='Application config (created with defaults if missing)'
)
@click.option(
    '--profile', 'profile_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_PROFILE_PATH,
    show_default=True,
    help='Display profile (created empty if missing)'
)
@click.option(
    '--device', '-d',
    type=str,
    default=None,
    help='MIDI input id or name prefix (overrides profile and config)'
)
@click.pass_context
def run(ctx, config_path: Path, profile_path: Path, device: Optional[str]):
    """
    Poll trackers and draw their values on the device.

    The device is taken from --device, else the profile's "device", else
    the config's "default_device". If none is set you are asked to pick
    one.

    \b
    Examples:
      midistatus run
      midistatus run --profile office.json --device 1
    """
    controller = None
    try:
        config = AppConfig.load_or_create(config_path)
        profile = Profile.load_or_create(profile_path)

        if not resolve_selector(config, profile, device):
            device = prompt_for_device()

        controller = Controller(config, profile, device)
        click.echo(f"Drawing on {controller.endpoint.name}. Press Ctrl+C to stop.")
        controller.run()

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        click.echo("\nShutting down...", err=True)
    except click.Abort:
        raise
    except Exception as e:
        logger.exception("Error running display")
        exit_with_error(e, log_path_from(ctx))
    finally:
        if controller is not None:
            controller.shutdown()
