"""Initialize a new minigit repository."""

import click
from pathlib import Path
from minigit.core.repository import Repository
from minigit.core.errors import MinigitError, RepositoryExistsError
from minigit.cli.output import success, error, info, warning


@click.command('init')
@click.argument('path', default='.')
def init_cmd(path):
    """
    Initialize a new minigit repository.

    Creates a .minigit directory with the object store, the main branch
    reference, HEAD and an empty staging index. Running it again in an
    existing repository changes nothing.

    Examples:
        minigit init                # Initialize in current directory
        minigit init my-project     # Initialize in my-project directory
    """
    repo_path = Path(path).resolve()
    repo = Repository(str(repo_path))

    try:
        if not repo_path.exists():
            repo_path.mkdir(parents=True)
            click.echo(info(f"Created directory {repo_path}"))

        repo.init()
    except RepositoryExistsError:
        click.echo(warning(f"Repository already exists at {repo.minigit_dir}"))
        return
    except OSError as e:
        click.echo(error(f"init: cannot create {repo_path}: {e}"))
        raise click.Abort()
    except MinigitError as e:
        click.echo(error(f"init: {e}"))
        raise click.Abort()

    click.echo(success(f"Initialized empty minigit repository in {repo.minigit_dir}"))
    click.echo(info("  .minigit/objects/     - Object database"))
    click.echo(info("  .minigit/refs/heads/  - Branch reference"))
    click.echo(info("  .minigit/HEAD         - Current branch pointer"))
    click.echo(info("  .minigit/index        - Staging area"))
