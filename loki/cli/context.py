"""Repository lookup shared by CLI commands."""

import click

from loki.core.errors import NotARepository
from loki.core.repository import Repository
from loki.cli.output import error


def require_repository(ctx: click.Context) -> Repository:
    """
    Locate the repository for the current invocation.
    
    Uses the --repo-path option when given, otherwise searches upwards
    from the current directory. Aborts when no repository is found.
    """
    start = (ctx.obj or {}).get('repo_path') or '.'
    try:
        return Repository.discover(start)
    except NotARepository as e:
        click.echo(error(str(e)))
        raise click.Abort()
