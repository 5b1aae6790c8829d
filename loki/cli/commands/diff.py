"""Diff command - show changes introduced by the last commit."""

import click
from loki.core.config import get_config
from loki.core.errors import LokiError
from loki.cli.context import require_repository
from loki.cli.output import error, info


@click.command('diff')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.pass_context
def diff_cmd(ctx, no_color):
    """
    Show changes between HEAD and its parent commit.
    
    For every file recorded in the HEAD commit, prints added lines with
    '+' and removed lines with '-'. Files not present in the parent commit
    are listed as new. Files that only exist in the parent commit are not
    shown.
    
    Examples:
        loki diff
        loki diff --no-color
    """
    repo = require_repository(ctx)
    use_color = not no_color and get_config(repo).get_bool('color', 'ui', fallback=True)
    
    try:
        diffs = repo.diff.diff_head()
    except (LokiError, OSError) as e:
        click.echo(error(f"Diff failed: {e}"))
        raise click.Abort()
    
    if not any(d.has_changes for d in diffs):
        click.echo(info("No changes to display"))
        return
    
    click.echo(repo.diff.format_diff(diffs, color=use_color))
