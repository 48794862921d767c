"""Click CLI commands for operating roomdesk."""

from __future__ import annotations

import asyncio
import sys

import click
from dotenv import load_dotenv

from roomdesk.config import get_settings
from roomdesk.models.user import Role
from roomdesk.services.errors import ServiceError, ValidationFault
from roomdesk.services.logging_service import configure_logging


@click.group()
def cli() -> None:
    """roomdesk administration commands."""
    load_dotenv()
    configure_logging(get_settings().log_level)


async def _create_admin(email: str, password: str, first_name: str, last_name: str) -> str:
    from roomdesk.database import close_database, init_database, run_migrations
    from roomdesk.services.auth_service import AuthService
    from roomdesk.services.user_service import UserService

    await init_database()
    try:
        await run_migrations()
        user_service = UserService()
        existing = await user_service.find_by_email(email)
        if existing is not None:
            if existing.role is Role.ADMIN:
                return f"User {email} is already an admin (id: {existing.id})"
            await user_service.update_role(existing.id, Role.ADMIN)
            return f"Promoted {email} to admin (id: {existing.id})"

        user = await AuthService(user_service=user_service).register(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password,
            role=Role.ADMIN,
        )
        return f"Admin created: {user.id} {user.email}"
    finally:
        await close_database()


@cli.command("create-admin")
@click.option("--email", required=True, help="Login email for the admin.")
@click.option(
    "--password",
    required=True,
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password for a new admin (ignored when promoting an existing user).",
)
@click.option("--first-name", default="Admin", show_default=True)
@click.option("--last-name", default="User", show_default=True)
def create_admin(email: str, password: str, first_name: str, last_name: str) -> None:
    """Create an ADMIN user, or promote an existing user to ADMIN."""
    if len(password) < 6:
        click.echo("Password must be at least 6 characters long", err=True)
        sys.exit(2)

    email = email.strip()
    try:
        message = asyncio.run(_create_admin(email, password, first_name, last_name))
    except ValidationFault as e:
        for field, messages in e.errors.items():
            click.echo(f"{field}: {', '.join(messages)}", err=True)
        sys.exit(1)
    except ServiceError as e:
        click.echo(f"Failed: {e.message}", err=True)
        sys.exit(1)

    click.echo(message)


if __name__ == "__main__":
    cli()
