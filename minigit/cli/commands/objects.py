"""Object inspection - show stored objects."""

import click
from minigit.core.repository import Repository
from minigit.core.errors import CorruptRecordError, MinigitError
from minigit.cli.output import error, info
from colorama import Fore, Style


def object_type(repo, sha1):
    """'commit' if the object parses as a commit record, else 'blob'."""
    try:
        repo.objects.read_commit(sha1)
        return 'commit'
    except CorruptRecordError:
        return 'blob'


@click.command('cat-file')
@click.option('-t', '--type', 'show_type', is_flag=True, help='Show object type')
@click.option('-s', '--size', 'show_size', is_flag=True, help='Show object size')
@click.option('-p', '--pretty', is_flag=True, help='Pretty-print object content')
@click.argument('object_hash')
def cat_file_cmd(show_type, show_size, pretty, object_hash):
    """
    Show object content, type, or size.

    OBJECT may be abbreviated to 4 or more characters. The store keeps
    blobs and commits side by side; the type shown is inferred from the
    content.

    Examples:
        minigit cat-file -t abc123     # Show object type
        minigit cat-file -s abc123     # Show object size
        minigit cat-file -p abc123     # Pretty-print object content
    """
    try:
        repo = Repository.open()
        full_hash = repo.objects.resolve_prefix(object_hash)
        data = repo.objects.get(full_hash)

        if show_type:
            click.echo(object_type(repo, full_hash))
            return

        if show_size:
            click.echo(len(data))
            return

        if pretty and object_type(repo, full_hash) == 'commit':
            commit = repo.objects.read_commit(full_hash)
            click.echo(f"{Fore.YELLOW}parent {commit.parent or '(none)'}{Style.RESET_ALL}")
            click.echo(f"timestamp {commit.timestamp}")
            for entry in commit.files:
                click.echo(f"blob {Fore.YELLOW}{entry.sha1}{Style.RESET_ALL}    {entry.path}")
            click.echo()
            click.echo(commit.message)
            return
    except MinigitError as e:
        click.echo(error(f"cat-file {object_hash}: {e}"))
        raise click.Abort()

    try:
        click.echo(data.decode('utf-8'), nl=False)
    except UnicodeDecodeError:
        click.echo(f"<binary data: {len(data)} bytes>")


@click.command('count-objects')
@click.option('-v', '--verbose', is_flag=True, help='Show breakdown by type')
def count_objects_cmd(verbose):
    """
    Count objects in the repository.

    Examples:
        minigit count-objects          # Show object count and size
        minigit count-objects -v       # Show blob/commit breakdown
    """
    try:
        repo = Repository.open()
    except MinigitError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    total_objects = 0
    total_size = 0
    type_counts = {'commit': 0, 'blob': 0}

    try:
        for sha1 in repo.objects:
            total_objects += 1
            total_size += repo.objects.object_path(sha1).stat().st_size
            if verbose:
                type_counts[object_type(repo, sha1)] += 1
    except (MinigitError, OSError) as e:
        click.echo(error(f"count-objects: {e}"))
        raise click.Abort()

    click.echo(f"{total_objects} objects, {total_size / 1024:.1f} KiB")
    if verbose:
        click.echo(info(f"  commits: {type_counts['commit']}"))
        click.echo(info(f"  blobs:   {type_counts['blob']}"))
