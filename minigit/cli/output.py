"""CLI output utilities and formatting."""

import logging

import click
from colorama import Fore, Style

BANNER = f"""
{Fore.CYAN}{Style.BRIGHT}minigit{Style.RESET_ALL} {Fore.WHITE}- a minimal content-addressed version control engine{Style.RESET_ALL}
"""


def success(message: str) -> str:
    """Format success message in green."""
    return f"{Fore.GREEN}✓ {message}{Style.RESET_ALL}"


def info(message: str) -> str:
    """Format info message in cyan."""
    return f"{Fore.CYAN}→ {message}{Style.RESET_ALL}"


def warning(message: str) -> str:
    """Format warning message in yellow."""
    return f"{Fore.YELLOW}⚠ {message}{Style.RESET_ALL}"


def error(message: str) -> str:
    """Format error message in red."""
    return f"{Fore.RED}✗ {message}{Style.RESET_ALL}"


class ClickLogHandler(logging.Handler):
    """Print log records from the core through click, in the CLI's colors."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if record.levelno >= logging.ERROR:
                click.echo(error(message), err=True)
            elif record.levelno >= logging.WARNING:
                click.echo(warning(message), err=True)
            else:
                click.echo(info(message), err=True)
        except Exception:
            self.handleError(record)


def setup_logging(verbose: bool = False) -> None:
    """Route the minigit logger to the terminal."""
    logger = logging.getLogger('minigit')
    for handler in list(logger.handlers):
        if isinstance(handler, ClickLogHandler):
            logger.removeHandler(handler)

    logger.addHandler(ClickLogHandler())
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
