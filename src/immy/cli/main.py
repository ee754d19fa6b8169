"""Immy admin CLI.

Usage:
    immy init-db                                  # Create tables
    immy add-child 7 "Emma" --age 5 --interests space
    immy serve --reload                           # Run the API with uvicorn

Children are created outside the public API's registration flow; this
is the operator's way to attach them to an existing account.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import sys
from typing import Optional

import click
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from immy import __version__
from immy.config import settings

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from a synchronous Click handler.

    Offloads to a thread when an event loop is already running
    (e.g. CliRunner inside an async test).
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


async def _create_schema(database_url: str) -> None:
    from immy.db.models import Base

    engine = create_async_engine(database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


async def _add_child(
    database_url: str,
    user_id: int,
    name: str,
    age: Optional[int],
    interests: Optional[str],
):
    from immy.db.models import User
    from immy.services.child_service import ChildService

    engine = create_async_engine(database_url)
    try:
        async with AsyncSession(engine, expire_on_commit=False) as session:
            if await session.get(User, user_id) is None:
                return None
            return await ChildService(session).create_child(
                owner_id=user_id, name=name, age=age, interests=interests
            )
    finally:
        await engine.dispose()


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="immy")
@click.option(
    "--database-url",
    default=None,
    help="Database URL (defaults to IMMY_DATABASE_URL)",
)
@click.pass_context
def main(ctx: click.Context, database_url: Optional[str]):
    """Immy: parenting coach API administration."""
    ctx.ensure_object(dict)
    ctx.obj["database_url"] = database_url or settings.database_url


@main.command("init-db")
@click.pass_context
def init_db(ctx: click.Context):
    """Create all tables that do not exist yet."""
    _run(_create_schema(ctx.obj["database_url"]))
    click.secho("Schema created.", fg="green")


@main.command("add-child")
@click.argument("user_id", type=int)
@click.argument("name")
@click.option("--age", type=click.IntRange(0, 21), default=None, help="Age in years")
@click.option("--interests", default=None, help="Free-text interests")
@click.pass_context
def add_child(
    ctx: click.Context,
    user_id: int,
    name: str,
    age: Optional[int],
    interests: Optional[str],
):
    """Attach a child record to an existing account."""
    child = _run(_add_child(ctx.obj["database_url"], user_id, name, age, interests))
    if child is None:
        click.secho(f"Error: user {user_id} not found", fg="red", err=True)
        sys.exit(1)
    click.echo(f"Child #{child.id} ({child.name}) added to user {user_id}")


@main.command()
@click.option("--host", default=None, help="Bind address (defaults to IMMY_HOST)")
@click.option("--port", type=int, default=None, help="Port (defaults to IMMY_PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "immy.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
