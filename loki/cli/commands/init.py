"""Initialize a new Loki repository."""

import click
from pathlib import Path
from loki.core.repository import Repository
from loki.cli.output import success, error, info


@click.command('init')
@click.argument('path', required=False)
@click.pass_context
def init_cmd(ctx, path):
    """
    Initialize a new Loki repository.
    
    Creates a .loki directory with the object store, HEAD and index.
    Running init again on an existing repository is safe: nothing that
    already exists is overwritten.
    
    Examples:
        loki init                   # Initialize in current directory
        loki init my-project        # Initialize in my-project directory
    """
    path = path or (ctx.obj or {}).get('repo_path') or '.'
    
    try:
        repo_path = Path(path).resolve()
        
        if not repo_path.exists():
            repo_path.mkdir(parents=True)
            click.echo(info(f"Created directory {repo_path}"))
        
        repo = Repository(str(repo_path))
        existed = repo.is_initialized()
        repo.init()
        
        if existed:
            click.echo(success(f"Reinitialized existing Loki repository in {repo.loki_dir}"))
            return
        
        click.echo(success(f"Initialized empty Loki repository in {repo.loki_dir}"))
        click.echo(info("Next steps:"))
        click.echo(info("  loki add <file>"))
        click.echo(info("  loki commit '<message>'"))
        
    except PermissionError:
        click.echo(error(f"Permission denied: Cannot create repository at {path}"))
        raise click.Abort()
    except OSError as e:
        click.echo(error(f"Failed to initialize repository: {e}"))
        raise click.Abort()
