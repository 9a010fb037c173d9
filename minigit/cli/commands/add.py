"""Add command - stage files for commit."""

import click
from pathlib import Path
from minigit.core.repository import Repository
from minigit.core.errors import MinigitError
from minigit.cli.output import success, error, info


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
def add_cmd(paths):
    """
    Add file contents to the staging area.

    Each file is stored as a blob and recorded in the index. Staging a
    path again replaces its previous content. Directories are not
    staged; pass the files themselves.

    Examples:
        minigit add file.txt
        minigit add a.txt b.txt
    """
    try:
        repo = Repository.open()
    except MinigitError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    added_files = []
    failed_files = []

    for path_arg in paths:
        path = Path(path_arg)
        if not path.is_absolute():
            path = Path.cwd() / path

        if path.is_dir():
            failed_files.append((path_arg, "is a directory"))
            continue

        try:
            index = repo.load_index()
            sha1 = index.add_file(repo, path)
            added_files.append((repo.relative_path(path), sha1))
        except MinigitError as e:
            failed_files.append((path_arg, str(e)))

    if added_files:
        click.echo(success(f"Added {len(added_files)} file(s) to staging area"))
        for rel_path, sha1 in added_files:
            click.echo(info(f"  {rel_path} ({sha1[:7]})"))

    if failed_files:
        for file, reason in failed_files:
            click.echo(error(f"add {file}: {reason}"))
        raise click.Abort()
