import click

from cli.get_vault_state import get_vault_state
from cli.plan_deposit import plan_deposit


@click.group()
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx):
    pass


# Deposit pre-flight check / execution
cli.add_command(plan_deposit, "plan_deposit")

# Read-only vault snapshot
cli.add_command(get_vault_state, "get_vault_state")
