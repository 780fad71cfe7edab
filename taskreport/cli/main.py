"""
Task Report API - operator CLI

Usage:
    taskreport serve                      # Run the API with uvicorn
    taskreport seed                       # Create the default admin and developer
    taskreport reset-admin-password -e admin@example.com -p NewPass@1
"""

import argparse
import asyncio
import sys

from rich.console import Console
from rich.table import Table

from taskreport.core.config import settings
from taskreport.core.database import Database
from taskreport.core.exceptions import TaskReportError

console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI"""
    parser = argparse.ArgumentParser(
        prog="taskreport",
        description="Task Report API - daily developer task reporting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  taskreport serve --reload                        Run the API for development
  taskreport seed                                  Create default accounts
  taskreport reset-admin-password -e a@b.com -p x  Set (or create) an admin

Configuration is read from the environment and from .env
(DATABASE_URL, JWT_SECRET_KEY, SEED_ADMIN_EMAIL, ...).
"""
    )

    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default=settings.SERVER_HOST, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=settings.SERVER_PORT, help="Bind port")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    subparsers.add_parser("seed", help="Create the default admin and developer accounts")

    reset_parser = subparsers.add_parser(
        "reset-admin-password", help="Set an admin's password, creating the admin if missing"
    )
    reset_parser.add_argument("--email", "-e", default=settings.SEED_ADMIN_EMAIL, help="Admin email")
    reset_parser.add_argument("--password", "-p", required=True, help="New password")
    reset_parser.add_argument("--name", "-n", default=settings.SEED_ADMIN_NAME, help="Name if the admin is created")

    return parser


async def run_seed() -> int:
    from taskreport.services.seed_service import seed_default_accounts

    database = Database()
    try:
        await database.create_all()
        async with database.session() as db:
            results = await seed_default_accounts(db)
    except TaskReportError as e:
        console.print(f"[red]✗ {e.message}[/red]")
        return 1
    finally:
        await database.dispose()

    table = Table(title="Seeded accounts")
    table.add_column("Email", style="cyan")
    table.add_column("Role")
    table.add_column("Result")
    for email, role, created in results:
        table.add_row(email, role.value, "[green]created[/green]" if created else "[yellow]exists[/yellow]")
    console.print(table)
    return 0


async def run_reset_admin_password(email: str, password: str, name: str) -> int:
    from taskreport.services.seed_service import reset_admin_password

    database = Database()
    try:
        await database.create_all()
        async with database.session() as db:
            created = await reset_admin_password(db, email, password, name=name)
    except TaskReportError as e:
        console.print(f"[red]✗ {e.message}[/red]")
        return 1
    finally:
        await database.dispose()

    if created:
        console.print(f"[green]✓ Admin {email} created[/green]")
    else:
        console.print(f"[green]✓ Password updated for {email}[/green]")
    return 0


def serve(host: str, port: int, reload: bool) -> int:
    import uvicorn

    console.print(f"[bold]{settings.APP_NAME}[/bold] on http://{host}:{port}{settings.api_prefix}")
    uvicorn.run("taskreport.main:app", host=host, port=port, reload=reload)
    return 0


def main(argv=None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        return serve(args.host, args.port, args.reload)
    if args.command == "seed":
        return asyncio.run(run_seed())
    if args.command == "reset-admin-password":
        return asyncio.run(run_reset_admin_password(args.email, args.password, args.name))

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
