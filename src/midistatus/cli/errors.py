"""Error output shared by the commands."""

import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import click

from midistatus.exceptions import format_error_for_display

logger = logging.getLogger(__name__)


def exit_with_error(error: Exception, log_path: Optional[Path] = None) -> NoReturn:
    """Show a clean error message without traceback and exit with code 1."""
    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)

    if log_path:
        click.echo(f"\nFor details, check the log file: {log_path}", err=True)
    click.echo("For logging options, run: midistatus --help", err=True)

    sys.exit(1)


def log_path_from(ctx: click.Context) -> Optional[Path]:
    return (ctx.find_root().obj or {}).get("log_path")
