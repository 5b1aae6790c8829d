"""Add command - stage files for commit."""

import click
from pathlib import Path
from loki.core.errors import LokiError
from loki.cli.context import require_repository
from loki.cli.output import success, error


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
@click.pass_context
def add_cmd(ctx, paths):
    """
    Add file contents to the staging area.
    
    Stores each file in the object database and appends it to the index.
    Modified files must be added again to stage the new content.
    
    Examples:
        loki add README
        loki add src/main.py docs/index.md
    """
    repo = require_repository(ctx)
    
    base = Path((ctx.obj or {}).get('repo_path') or Path.cwd())
    failed_files = []

    for path_pattern in paths:
        path = Path(path_pattern)
        resolved_path = path if path.is_absolute() else base / path
        
        try:
            digest = repo.add(resolved_path)
        except (LokiError, OSError) as e:
            failed_files.append((path_pattern, str(e)))
            continue
        
        click.echo(success(f"{digest}  {repo.relative_path(resolved_path)}"))
    
    if failed_files:
        click.echo(error(f"Failed to add {len(failed_files)} file(s):"))
        for file, reason in failed_files:
            click.echo(error(f"  {click.format_filename(file)}: {reason}"))
        raise click.Abort()
