"""Log command - show commit history."""

import click
from colorama import Fore, Style
from loki.core.errors import LokiError
from loki.cli.context import require_repository
from loki.cli.output import error, info


def format_commit(entry, oneline: bool = False) -> str:
    """Format a single log entry."""
    if oneline:
        first_line = entry.message.split('\n')[0]
        return f"{Fore.YELLOW}{entry.digest[:7]}{Style.RESET_ALL} {first_line}"
    
    lines = [
        f"{Fore.YELLOW}Commit  : {entry.digest}{Style.RESET_ALL}",
        f"Message : {entry.message}",
        f"Time    : {entry.time}",
        "_____________________________",
        "",
    ]
    return '\n'.join(lines)


@click.command('log')
@click.option('-n', '--max-count', type=click.IntRange(min=0), help='Limit number of commits')
@click.option('--oneline', is_flag=True, help='Show each commit on a single line')
@click.pass_context
def log_cmd(ctx, max_count, oneline):
    """
    Show commit history.
    
    Lists commits from HEAD back to the first commit, most recent first.
    
    Examples:
        loki log
        loki log -n 5
        loki log --oneline
    """
    repo = require_repository(ctx)
    
    try:
        head = repo.head()
        if not head:
            click.echo(info("No commits yet"))
            return
        
        for entry in repo.history.walk(head, limit=max_count):
            click.echo(format_commit(entry, oneline=oneline))
    except (LokiError, OSError) as e:
        click.echo(error(f"Log failed: {e}"))
        raise click.Abort()
