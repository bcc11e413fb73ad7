"""Click entry point: `broker <user> <bundle> <action> [args...]` or `broker <user> ls`."""

from __future__ import annotations

import os
import sys

import click

from broker.config import ensure_layout, get_settings, validate_settings
from broker.dispatcher import dispatch
from broker.errors import BrokerError, UsageError
from broker.lister import headline, list_actions
from broker.logging import clear_context, configure_logging
from broker.store.access import parse_access

LIST_TOKEN = "ls"
SSH_COMMAND_ENV = "SSH_ORIGINAL_COMMAND"

USAGE = """\
Broker: Streamlined Remote Task Execution via SSH

Usage Synopsis:
  To execute an action remotely:
    ssh <server> <stack> <action> [additional_args...]

  To list available stacks and actions:
    ssh <server> ls

Direct Invocation:
  When invoking Broker directly, specify the target user explicitly:
    broker <user> <stack> <action> [additional_args...]
    broker <user> ls

Practical Examples:
  Deploy a website using a specific branch:
    ssh acme.com website deploy --branch=main

  List all stacks and actions available for a user on a server:
    ssh acme.com ls
"""


def _resolve_command(command: tuple[str, ...]) -> tuple[str, ...]:
    """Fall back to the SSH forced-command payload when no command was given."""
    if command:
        return command
    original = os.environ.get(SSH_COMMAND_ENV, "")
    return tuple(original.split())


def run_list(user: str) -> None:
    settings = get_settings()
    access = parse_access(settings.access_path)
    click.echo(f"\n{headline(user)}\n")
    for line in list_actions(access, user):
        click.echo(line)
    click.echo()


def run(user: str, command: tuple[str, ...]) -> int:
    command = _resolve_command(command)
    if command and command[0] == LIST_TOKEN:
        run_list(user)
        return 0
    if len(command) < 2:
        raise UsageError("missing <stack> and <action>")
    bundle, action, *args = command
    return dispatch(user, bundle, action, args, settings=get_settings())


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
    add_help_option=False,
)
@click.argument("user", required=False, default="")
@click.argument("command", nargs=-1, type=click.UNPROCESSED)
def cli(user: str, command: tuple[str, ...]) -> None:
    """Run a permitted bundle action for USER, or list them with `ls`."""
    settings = get_settings()
    configure_logging(settings.log_level, json_output=settings.app_env == "prod")
    clear_context()
    try:
        validate_settings(settings)
        ensure_layout(settings)
        if not user:
            raise UsageError("missing <user>")
        status = run(user, command)
    except UsageError as exc:
        click.echo(USAGE, err=True)
        click.echo(str(exc), err=True)
        sys.exit(exc.exit_code)
    except BrokerError as exc:
        click.echo(str(exc), err=True)
        sys.exit(exc.exit_code)
    sys.exit(status)
