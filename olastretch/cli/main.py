# olastretch/cli/main.py

"""
Main entry point for the olastretch CLI application.
Uses Click for command-line interface handling.
"""

import logging

import click

from olastretch.version import __version__
from .base_cmd import ConfigGroup, verbose_option, quiet_option
from .stretch_cmd import stretch_cmd, info_cmd

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


# --- Main CLI Group ---
@click.group(context_settings=CONTEXT_SETTINGS, cls=ConfigGroup)
@click.version_option(__version__, '-V', '--version', package_name='olastretch', prog_name='olastretch')
@verbose_option
@quiet_option
@click.pass_context
def main_cli(ctx, verbose: int, quiet: bool):
    """
    olastretch: change the duration of audio without changing its pitch,
    using time-domain overlap-add with linear crossfades.

    Configuration is loaded from:
    Defaults -> ./olastretch.toml -> ~/.config/olastretch/olastretch.toml -> Env Vars

    Use -v for verbose output, -vv for debug output, -q for quiet mode.
    """
    logger.debug(f"olastretch CLI group invoked (verbose={verbose}, quiet={quiet}).")


# --- Register Commands ---
main_cli.add_command(stretch_cmd)
main_cli.add_command(info_cmd)

cli = main_cli

if __name__ == "__main__":
    cli()
