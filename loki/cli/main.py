"""Main CLI entry point for Loki."""

import logging

import click
from colorama import init

from loki import __version__
from loki.cli.output import BANNER
from loki.cli.commands import init_cmd, add_cmd, commit_cmd, log_cmd, diff_cmd

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class LokiGroup(click.Group):
    """Custom Group class to display banner before help."""
    
    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)


@click.group(cls=LokiGroup)
@click.version_option(version=__version__)
@click.option('-C', '--repo-path', type=click.Path(file_okay=False), default=None,
              help='Run as if loki was started in this directory')
@click.option('-v', '--verbose', is_flag=True, help='Log debug information to stderr')
@click.pass_context
def cli(ctx, repo_path, verbose):
    ctx.ensure_object(dict)
    ctx.obj['repo_path'] = repo_path
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')


# Register commands
cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(commit_cmd)
cli.add_command(log_cmd)
cli.add_command(diff_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
