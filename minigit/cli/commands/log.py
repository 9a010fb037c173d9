"""Log command - show commit history."""

import click
from minigit.core.repository import Repository
from minigit.core.errors import MinigitError
from minigit.cli.output import error, warning
from colorama import Fore, Style


def display_commit_oneline(commit_hash, commit):
    """Display commit in one-line format."""
    message = commit.summary
    if len(message) > 60:
        message = message[:57] + "..."

    click.echo(f"{Fore.YELLOW}{commit_hash[:7]}{Style.RESET_ALL} {message} {Fore.CYAN}({commit.timestamp}){Style.RESET_ALL}")


def display_commit_full(commit_hash, commit):
    """Display commit in full format."""
    click.echo(f"{Fore.YELLOW}commit {commit_hash}{Style.RESET_ALL}")

    if commit.parent:
        click.echo(f"Parent:    {commit.parent}")

    click.echo(f"Date:      {commit.timestamp}")

    click.echo()
    for line in commit.message.split('\n'):
        click.echo(f"    {line}")

    if commit.files:
        click.echo()
        click.echo("    Files:")
        for entry in commit.files:
            click.echo(f"      - {entry.path}")
    click.echo()


@click.command('log')
@click.option('-n', '--max-count', type=click.IntRange(min=1), help='Limit number of commits to show')
@click.option('--oneline', is_flag=True, help='Show commits in one-line format')
@click.argument('commit', required=False)
def log_cmd(max_count, oneline, commit):
    """
    Show commit logs.

    Walks history from the tip of main (or COMMIT), newest first. Without
    -n the limit comes from the log.maxcount setting (default 10).

    Examples:
        minigit log                # Show recent commits
        minigit log -n 3           # Show last 3 commits
        minigit log --oneline      # Show compact one-line format
        minigit log a1b2c3d        # Show history from specific commit
    """
    try:
        repo = Repository.open()

        if commit:
            start_hash = repo.objects.resolve_prefix(commit)
        else:
            start_hash = repo.head_commit()

        if max_count is None:
            max_count = repo.config.log_max_count()
    except (MinigitError, ValueError) as e:
        click.echo(error(f"log: {e}"))
        raise click.Abort()

    if not start_hash:
        click.echo(warning("No commits yet"))
        return

    try:
        walk = repo.history(start_hash, max_count)
        for commit_hash, commit_obj in walk:
            if oneline:
                display_commit_oneline(commit_hash, commit_obj)
            else:
                display_commit_full(commit_hash, commit_obj)
    except ValueError as e:
        click.echo(error(f"log: {e}"))
        raise click.Abort()
    except MinigitError as e:
        click.echo(error(f"log: cannot read commit {start_hash[:7]}: {e}"))
        raise click.Abort()

    if walk.truncated:
        click.echo(warning("History is incomplete; older commits could not be read"))
