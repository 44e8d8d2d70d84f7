"""Config command - create and inspect config.json and profile.json."""

from pathlib import Path

import click

from midistatus.models import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_PROFILE_PATH,
    AppConfig,
    Profile,
    ProfileItem,
    TrackerConfig,
    TrackerType,
)
from midistatus.persistence import PydanticPersistence

from ..errors import exit_with_error, log_path_from

config_option = click.option(
    '--config', 'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help='Application config path'
)
profile_option = click.option(
    '--profile', 'profile_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_PROFILE_PATH,
    show_default=True,
    help='Display profile path'
)


def example_profile() -> Profile:
    """A profile with one ping item, as a starting point."""
    return Profile(
        trackers=[
            TrackerConfig(
                tracker_type=TrackerType.PING,
                update_interval=10000,
                items=[ProfileItem(stat_key="https://example.com", pos_x=1, pos_y=1, colors=[5, 21])],
            )
        ]
    )


@click.group(name="config")
def config_group():
    """Configuration file commands."""
    pass


@config_group.command(name="init")
@config_option
@profile_option
@click.option('--force', is_flag=True, help='Overwrite existing files (a .bak copy is kept)')
def init_config(config_path: Path, profile_path: Path, force: bool):
    """Write a default config and an example profile."""
    for path, model in ((config_path, AppConfig()), (profile_path, example_profile())):
        if path.exists() and not force:
            click.echo(f"Skipped {path} (exists, use --force to overwrite)")
            continue
        PydanticPersistence.save_json(model, path)
        click.echo(f"Wrote {path}")


@config_group.command(name="show")
@config_option
@profile_option
@click.pass_context
def show_config(ctx, config_path: Path, profile_path: Path):
    """Print the config and profile as loaded (with defaults filled in)."""
    try:
        config = PydanticPersistence.load_json(config_path, AppConfig)
        profile = PydanticPersistence.load_json(profile_path, Profile)
    except FileNotFoundError as e:
        click.echo(f"{e}. Run 'midistatus config init' first.", err=True)
        ctx.exit(1)
    except Exception as e:
        exit_with_error(e, log_path_from(ctx))

    click.echo(f"# {config_path}")
    click.echo(config.model_dump_json(indent=2))
    click.echo(f"\n# {profile_path}")
    click.echo(profile.model_dump_json(indent=2))
