"""CLI: sarufi bots"""

import json

import click
from rich.console import Console
from rich.table import Table

from sarufi_chat.errors import SarufiChatError

console = Console()


def _get_gateway():
    from sarufi_chat.cli.main import _get_gateway
    return _get_gateway()


def _run(coro):
    from sarufi_chat.cli.main import _run
    return _run(coro)


@click.command("bots")
@click.option("--json-output", "--json", is_flag=True)
def bots(json_output: bool):
    """List your bots."""

    async def _list():
        gateway = _get_gateway()
        try:
            with console.status("Authenticating..."):
                result = await gateway.authenticate()
        finally:
            await gateway.close()
        if json_output:
            click.echo(json.dumps([b.model_dump() for b in result], indent=2))
            return
        table = Table(title=f"My Sarufi Bots ({len(result)} total)")
        table.add_column("ID", style="bold")
        table.add_column("Name")
        table.add_column("Description")
        for b in result:
            table.add_row(str(b.id), b.name, b.description or "")
        console.print(table)

    try:
        _run(_list())
    except SarufiChatError as e:
        console.print(str(e), style="red", markup=False)
        raise SystemExit(1)
