"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
FitFlow, a product of Garudex Labs

FitFlow - Entry Point.

This is the main entry point for the FitFlow terminal client.
"""

import sys
from typing import Optional

import click

from fitflow._version import __version__


@click.command()
@click.option(
    "--workspace",
    "-w",
    type=click.Path(file_okay=False),
    default=None,
    help="Workspace directory (default: ~/.fitflow)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Configuration file (default: <workspace>/config.yaml)",
)
@click.option(
    "--reset",
    is_flag=True,
    help="Clear the saved session and start from the welcome screen",
)
@click.option(
    "--compact",
    is_flag=True,
    help="Use compact mode for small terminals",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override the configured log level",
)
@click.version_option(version=__version__, prog_name="fitflow")
def main(
    workspace: Optional[str],
    config_path: Optional[str],
    reset: bool,
    compact: bool,
    log_level: Optional[str],
) -> None:
    """
    FitFlow - your AI-powered fitness companion.

    Walks new users through a short onboarding and keeps returning users
    signed in between runs.

    Examples:

        # Start FitFlow
        fitflow

        # Start over from the welcome screen
        fitflow --reset

        # Use a separate workspace
        fitflow --workspace /tmp/fitflow-demo
    """
    # Lazy imports to speed up --help
    from rich.console import Console

    from fitflow.config.settings import load_config
    from fitflow.exceptions import ConfigurationError, StoreError
    from fitflow.flow.app import FlowApp
    from fitflow.flow.theme import FLOW_THEME
    from fitflow.flow.workspace import get_workspace, set_workspace

    ws = set_workspace(workspace) if workspace else get_workspace()

    try:
        ws.ensure_dirs()
        config = load_config(
            config_path or str(ws.config_path),
            home_dir=str(ws.root),
        )
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(f"Error: cannot create workspace {ws.root}: {e}", err=True)
        sys.exit(1)

    if log_level:
        config.logging.level = log_level.upper()
    if compact:
        config.ui.compact_mode = True

    console = Console(theme=FLOW_THEME)
    app = FlowApp(config=config, console=console)

    try:
        app.start(reset=reset)
    except StoreError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
