"""CLI commands for Loki."""

from loki.cli.commands.init import init_cmd
from loki.cli.commands.add import add_cmd
from loki.cli.commands.commit import commit_cmd
from loki.cli.commands.log import log_cmd
from loki.cli.commands.diff import diff_cmd

__all__ = ['init_cmd', 'add_cmd', 'commit_cmd', 'log_cmd', 'diff_cmd']
