"""Command-line interface for Authority.

This module provides the CLI commands for initializing the database and
driving the account lifecycle by hand.
"""

import asyncio
import uuid
from typing import Any, Awaitable, Callable, TypeVar

import click
from sqlalchemy.ext.asyncio import AsyncSession

from authority.core.config import Settings, get_settings
from authority.core.logging import (
    LoggingContext,
    bind_correlation_id,
    clear_context,
    configure_logging,
)
from authority.domain.exceptions import PersistenceError
from authority.domain.services import AccountLifecycleService, Outcome
from authority.infrastructure.persistence import (
    DatabaseManager,
    SQLCredentialStore,
    init_database,
)
from authority.infrastructure.service_factory import (
    create_account_service,
    create_notification_gateway,
    create_throttle_tracker,
)

T = TypeVar("T")


def _run_with_service(
    work: Callable[[AccountLifecycleService, AsyncSession], Awaitable[T]],
) -> T:
    """Run ``work`` with a service bound to a fresh session, then clean up.

    Pending notification emails are delivered before the database is closed.
    """
    ctx = click.get_current_context()
    settings: Settings = ctx.obj

    async def run() -> T:
        bind_correlation_id(f"cli_{uuid.uuid4().hex[:12]}")
        db = DatabaseManager(settings)
        gateway = create_notification_gateway(settings)
        try:
            with LoggingContext(command=ctx.info_name):
                async with db.session() as session:
                    service = create_account_service(session, gateway, settings)
                    result = await work(service, session)
                await gateway.drain()
            return result
        finally:
            await db.disconnect()
            clear_context()

    return asyncio.run(run())


def _report(outcome: Outcome, **details: Any) -> None:
    if not outcome.success:
        click.echo(f"Error: {outcome.message}", err=True)
        raise SystemExit(1)
    click.echo(outcome.message)
    for label, value in details.items():
        click.echo(f"  {label}: {value}")


@click.group()
@click.version_option(version="0.1.0", prog_name="Authority")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Set log level (overrides environment)",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Authority - user account lifecycle management.

    Register, activate, update, list and remove users.
    """
    settings = get_settings()
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level})
    configure_logging(settings)
    ctx.obj = settings


@cli.command("init-db")
@click.pass_obj
def init_db(settings: Settings) -> None:
    """Create the database tables."""

    async def initialize() -> None:
        db = DatabaseManager(settings)
        try:
            await init_database(db)
        finally:
            await db.disconnect()

    asyncio.run(initialize())
    click.echo("Database initialized successfully.")


@cli.command("create-group")
@click.argument("name")
@click.option("--description", default=None, help="What the group is for")
def create_group(name: str, description: str | None) -> None:
    """Create a group users can be added to."""

    async def create(service: AccountLifecycleService, session: AsyncSession):
        return await SQLCredentialStore(session).create_group(name, description)

    try:
        group = _run_with_service(create)
    except PersistenceError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1)
    click.echo(f"Group created.\n  Group ID: {group.id}\n  Name:     {group.name}")


@cli.command("register")
@click.argument("email")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password (prompts if not provided)",
)
def register(email: str, password: str) -> None:
    """Register a user and send the activation email."""

    async def work(service: AccountLifecycleService, session: AsyncSession):
        return await service.register(email, password)

    outcome = _run_with_service(work)
    _report(outcome, **{"User ID": outcome.user_id})


@cli.command("activate")
@click.argument("user_id")
@click.argument("code")
def activate(user_id: str, code: str) -> None:
    """Activate a user with the code from the activation email."""

    async def work(service: AccountLifecycleService, session: AsyncSession):
        return await service.activate(user_id, code)

    _report(_run_with_service(work))


@cli.command("resend")
@click.argument("email")
def resend(email: str) -> None:
    """Send a new activation email."""

    async def work(service: AccountLifecycleService, session: AsyncSession):
        return await service.resend_activation(email)

    _report(_run_with_service(work))


@cli.command("update")
@click.argument("user_id")
@click.option("--first-name", default=None, help="New first name (kept if omitted)")
@click.option("--last-name", default=None, help="New last name (kept if omitted)")
@click.option(
    "--group",
    "groups",
    multiple=True,
    help="Group ID the user should belong to (repeatable). Omitted groups are left.",
)
def update(user_id: str, first_name: str | None, last_name: str | None, groups: tuple[str, ...]) -> None:
    """Update a user's names and group memberships."""

    async def work(service: AccountLifecycleService, session: AsyncSession):
        current = await service.get_by_id(user_id)
        if current is not None:
            first = current.first_name if first_name is None else first_name
            last = current.last_name if last_name is None else last_name
        else:
            first, last = first_name, last_name
        return await service.update(user_id, first, last, groups)

    outcome = _run_with_service(work)
    _report(
        outcome,
        **{
            "Added groups": ", ".join(sorted(outcome.added_group_ids)) or "-",
            "Removed groups": ", ".join(sorted(outcome.removed_group_ids)) or "-",
        },
    )


@cli.command("remove")
@click.argument("user_id")
def remove(user_id: str) -> None:
    """Delete a user."""

    async def work(service: AccountLifecycleService, session: AsyncSession):
        return await service.remove(user_id)

    if not _run_with_service(work):
        click.echo("Error: User not found", err=True)
        raise SystemExit(1)
    click.echo("User removed.")


@cli.command("show")
@click.argument("user_id")
def show(user_id: str) -> None:
    """Show a single user."""

    async def work(service: AccountLifecycleService, session: AsyncSession):
        return await service.get_by_id(user_id)

    user = _run_with_service(work)
    if user is None:
        click.echo("Error: User not found", err=True)
        raise SystemExit(1)

    click.echo(
        f"  User ID:   {user.id}\n"
        f"  Email:     {user.email}\n"
        f"  Name:      {user.full_name or '-'}\n"
        f"  Activated: {'yes' if user.activated else 'no'}\n"
        f"  Groups:    {', '.join(sorted(user.group_ids)) or '-'}"
    )


@cli.command("list-users")
def list_users() -> None:
    """List all users with their status."""

    async def work(service: AccountLifecycleService, session: AsyncSession):
        return await service.list_all()

    views = _run_with_service(work)
    if not views:
        click.echo("No users.")
        return
    for view in views:
        name = " ".join(part for part in (view.first_name, view.last_name) if part) or "-"
        click.echo(f"{view.id}  {view.email:<32}  {view.status.value:<10}  {name}")


@cli.command("suspend")
@click.argument("user_id")
def suspend(user_id: str) -> None:
    """Suspend a user for the configured suspension time."""
    _throttle_action(user_id, "suspend")
    click.echo("User suspended.")


@cli.command("ban")
@click.argument("user_id")
def ban(user_id: str) -> None:
    """Ban a user. Bans cannot be lifted."""
    _throttle_action(user_id, "ban")
    click.echo("User banned.")


def _throttle_action(user_id: str, action: str) -> None:
    settings: Settings = click.get_current_context().obj
    if not settings.throttle_enabled:
        click.echo("Error: Throttling is disabled", err=True)
        raise SystemExit(1)

    async def work(service: AccountLifecycleService, session: AsyncSession) -> bool:
        if await service.get_by_id(user_id) is None:
            return False
        tracker = create_throttle_tracker(session, settings)
        await getattr(tracker, action)(user_id)
        return True

    if not _run_with_service(work):
        click.echo("Error: User not found", err=True)
        raise SystemExit(1)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
