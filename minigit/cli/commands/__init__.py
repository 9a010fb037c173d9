"""CLI commands for minigit."""

from minigit.cli.commands.init import init_cmd
from minigit.cli.commands.add import add_cmd
from minigit.cli.commands.commit import commit_cmd
from minigit.cli.commands.status import status_cmd
from minigit.cli.commands.log import log_cmd
from minigit.cli.commands.objects import cat_file_cmd, count_objects_cmd

__all__ = ['init_cmd', 'add_cmd', 'commit_cmd', 'status_cmd', 'log_cmd',
           'cat_file_cmd', 'count_objects_cmd']
