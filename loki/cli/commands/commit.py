"""Commit command - create a commit from staged changes."""

import click
from loki.core.errors import LokiError
from loki.cli.context import require_repository
from loki.cli.output import success, error, info


@click.command('commit')
@click.argument('message', required=False)
@click.option('-m', '--message', 'message_opt', help='Commit message')
@click.pass_context
def commit_cmd(ctx, message, message_opt):
    """
    Record staged changes to the repository.
    
    Creates a commit holding the current index, links it to the previous
    commit and moves HEAD to it. The index is emptied afterwards.
    
    Examples:
        loki commit "Add README"
        loki commit -m "Fix typo"
    """
    message = message_opt if message_opt is not None else message
    if message is None:
        click.echo(error("Commit message required (loki commit '<message>')"))
        raise click.Abort()
    
    repo = require_repository(ctx)
    
    try:
        staged = len(repo.index)
        commit_hash = repo.commit(message)
    except (LokiError, OSError) as e:
        click.echo(error(f"Commit failed: {e}"))
        raise click.Abort()
    
    click.echo(success(f"Commit successful with commit Id: {commit_hash}"))
    if staged == 0:
        click.echo(info("No files were staged; recorded an empty commit"))
