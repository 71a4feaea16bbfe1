"""
sarufi-chat CLI — `sarufi` command.

Commands:
  sarufi            Interactive chat UI
  sarufi bots       List your bots and exit
"""

import asyncio
import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

import click
from rich.console import Console

from sarufi_chat import __version__
from sarufi_chat.errors import StartupConfigError
from sarufi_chat.gateway import SarufiGateway
from sarufi_chat.transport.http import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_S

console = Console()
API_KEY_ENV = "SARUFI_API_KEY"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def _setup_logging(log_file: Optional[str], level: str) -> None:
    """Log to a rotating file when asked; otherwise stay silent, the UI owns the terminal."""
    root = logging.getLogger("sarufi_chat")
    root.handlers.clear()
    root.propagate = False
    if not log_file:
        root.addHandler(logging.NullHandler())
        return
    root.setLevel(level.upper())
    handler = RotatingFileHandler(log_file, maxBytes=2_000_000, backupCount=3)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def _get_gateway() -> SarufiGateway:
    ctx = click.get_current_context()
    cfg = ctx.find_root().obj or {}
    api_key = cfg.get("api_key")
    if not api_key:
        raise StartupConfigError(f"{API_KEY_ENV} not found, kindly add the key to your environment")
    return SarufiGateway(
        api_key=api_key,
        base_url=cfg.get("base_url", DEFAULT_BASE_URL),
        timeout=cfg.get("timeout", DEFAULT_TIMEOUT_S),
    )


def _run(coro):
    return asyncio.run(coro)


@click.group(invoke_without_command=True)
@click.version_option(__version__)
@click.option("--api-key", envvar=API_KEY_ENV, default="", hidden=True)
@click.option("--base-url", envvar="SARUFI_BASE_URL", default=DEFAULT_BASE_URL, show_default=True,
              help="Sarufi API base URL")
@click.option("--timeout", default=DEFAULT_TIMEOUT_S, type=float, show_default=True,
              help="Per-request HTTP timeout in seconds")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Write logs to this file")
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              default="INFO", show_default=True)
@click.pass_context
def main(ctx: click.Context, api_key: str, base_url: str, timeout: float, log_file: Optional[str], log_level: str):
    """Chat with your Sarufi bots from the terminal."""
    ctx.obj = {"api_key": api_key, "base_url": base_url, "timeout": timeout}
    _setup_logging(log_file, log_level)
    if ctx.invoked_subcommand is not None:
        return

    try:
        gateway = _get_gateway()
    except StartupConfigError as e:
        console.print(str(e), markup=False)
        raise SystemExit(1)
    from sarufi_chat.ui.app import run

    if run(gateway):
        console.print("OOOOPs, something went wrong", markup=False)
        raise SystemExit(1)


# Register subcommands from separate modules
from sarufi_chat.cli.bots import bots  # noqa: E402

main.add_command(bots)


if __name__ == "__main__":
    main()
