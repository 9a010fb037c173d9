"""Commit command - create a commit from staged changes."""

import click
from minigit.core.repository import Repository
from minigit.core.errors import MinigitError, NothingToCommitError
from minigit.cli.output import success, error, info


@click.command('commit')
@click.argument('message', required=False)
@click.option('-m', '--message', 'message_opt', help='Commit message')
def commit_cmd(message, message_opt):
    """
    Record changes to the repository.

    Creates a commit from the staged files, links it to the current tip
    of main and clears the staging area.

    Examples:
        minigit commit "Initial commit"
        minigit commit -m "Add feature"
    """
    message = message_opt or message
    if not message:
        click.echo(error("commit: message required. Use -m \"message\""))
        raise click.Abort()

    try:
        repo = Repository.open()
    except MinigitError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    try:
        parent = repo.head_commit()
        file_count = len(repo.load_index())
        commit_hash = repo.commit(message)
    except NothingToCommitError:
        click.echo(error("Nothing to commit (staging area is empty)"))
        click.echo(info("Use 'minigit add <file>' to stage changes"))
        raise click.Abort()
    except MinigitError as e:
        click.echo(error(f"commit: {e}"))
        raise click.Abort()

    click.echo(success(f"Created commit {commit_hash[:7]}"))
    click.echo(info(f"Message: {message.splitlines()[0]}"))
    if parent:
        click.echo(info(f"Parent: {parent[:7]}"))
    else:
        click.echo(info("(root commit)"))
    click.echo(info(f"Files: {file_count}"))
