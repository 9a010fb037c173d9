"""Status command - show branch and staging area."""

import click
from minigit.core.repository import Repository
from minigit.core.hash import hash_file
from minigit.core.errors import MinigitError
from minigit.cli.output import success, error, info
from colorama import Fore, Style


def get_staged_changes(repo, index):
    """
    Compare each staged entry with the working file.

    Returns:
        List of (path, sha1, state) where state is 'staged', 'modified'
        (working file changed since it was staged) or 'deleted'
    """
    changes = []
    for entry in index:
        working_file = repo.work_tree / entry.path
        if not working_file.is_file():
            state = 'deleted'
        elif hash_file(str(working_file)) != entry.sha1:
            state = 'modified'
        else:
            state = 'staged'
        changes.append((entry.path, entry.sha1, state))
    return changes


@click.command('status')
def status_cmd():
    """
    Show the working tree status.

    Displays:
    - Current branch and its tip commit
    - Files staged for the next commit, in staging order
    - Staged files changed or removed in the working tree since staging

    Examples:
        minigit status
    """
    try:
        repo = Repository.open()
        branch = repo.refs.get_current_branch()
        tip = repo.head_commit()
        index = repo.load_index()
        changes = get_staged_changes(repo, index)
    except (MinigitError, OSError) as e:
        click.echo(error(f"status: {e}"))
        raise click.Abort()

    click.echo(f"On branch {Fore.CYAN}{branch}{Style.RESET_ALL}")
    if tip:
        click.echo(f"Tip: {Fore.YELLOW}{tip[:7]}{Style.RESET_ALL}")
    else:
        click.echo("No commits yet")
    click.echo()

    if not changes:
        click.echo(success("Nothing staged"))
        click.echo(info("Use 'minigit add <file>' to stage changes"))
        return

    click.echo(Fore.GREEN + "Staged files:" + Style.RESET_ALL)
    for path, sha1, state in changes:
        click.echo(f"  {Fore.GREEN}+ {path}{Style.RESET_ALL} ({sha1[:7]})")

    changed_after_staging = [(path, state) for path, _, state in changes if state != 'staged']
    if changed_after_staging:
        click.echo()
        click.echo(Fore.YELLOW + "Changed since staged:" + Style.RESET_ALL)
        click.echo(info("  (use \"minigit add <file>...\" to stage the new content)"))
        for path, state in changed_after_staging:
            click.echo(f"  {Fore.YELLOW}{state + ':':<10} {path}{Style.RESET_ALL}")
