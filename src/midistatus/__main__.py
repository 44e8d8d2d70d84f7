"""Allow running as ``python -m midistatus``."""

from midistatus.cli.main import cli

if __name__ == "__main__":
    cli()
