"""CLI entry point for redis-session-store.

Invoked as::

    redis-session-store [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m redis_session_store.cli.main

Commands
--------
- version  — Show version information
- count    — Count the sessions in the store
- clear    — Remove every session in the store
- show     — Load and display the session behind a cookie value
- ttl      — Show the remaining Redis TTL for a session

Connection settings come from ``--url`` / ``--prefix`` or the
``REDIS_SESSION_*`` environment variables read by ``RedisStoreConfig``.
"""
from __future__ import annotations

import asyncio
import sys
from collections.abc import Awaitable, Callable
from typing import TypeVar

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from redis_session_store.config import RedisStoreConfig
from redis_session_store.errors import SessionStoreError
from redis_session_store.storage.base import SessionStore
from redis_session_store.storage.redis import RedisSessionStore

console = Console()

T = TypeVar("T")

_UNPREFIXED_WARNING = (
    "[yellow]No prefix configured: this acts on every key in the Redis "
    "database, not only sessions.[/yellow]"
)


# ---------------------------------------------------------------------------
# Store factory
# ---------------------------------------------------------------------------


def _make_store(config: RedisStoreConfig) -> SessionStore:
    """Instantiate the store described by ``config``."""
    return RedisSessionStore.from_config(config)


def _run(store: SessionStore, operation: Callable[[SessionStore], Awaitable[T]]) -> T:
    """Run ``operation`` against ``store`` on a fresh event loop, then close it.

    Domain errors are printed and turned into exit status 1.
    """

    async def _main() -> T:
        try:
            return await operation(store)
        finally:
            await store.aclose()

    try:
        return asyncio.run(_main())
    except SessionStoreError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.option("--url", default=None, help="Redis URL (env: REDIS_SESSION_URL).")
@click.option("--prefix", default=None, help="Key prefix (env: REDIS_SESSION_PREFIX).")
@click.version_option(package_name="redis-session-store")
@click.pass_context
def cli(ctx: click.Context, url: str | None, prefix: str | None) -> None:
    """Inspect and maintain a Redis session store"""
    ctx.ensure_object(dict)
    overrides: dict[str, object] = {}
    if url is not None:
        overrides["url"] = url
    if prefix is not None:
        overrides["prefix"] = prefix
    try:
        config = RedisStoreConfig.from_env()
        if overrides:
            config = config.with_overrides(**overrides)
    except ValidationError as exc:
        console.print(f"[red]Error:[/red] invalid configuration: {escape(str(exc))}")
        sys.exit(1)
    ctx.obj["config"] = config


def _store(ctx: click.Context) -> SessionStore:
    return _make_store(ctx.obj["config"])


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show version information."""
    from redis_session_store import __version__

    console.print(f"[bold]redis-session-store[/bold] v{__version__}")


# ---------------------------------------------------------------------------
# count
# ---------------------------------------------------------------------------


@cli.command(name="count")
@click.pass_context
def count_command(ctx: click.Context) -> None:
    """Print the number of sessions in the store."""
    config: RedisStoreConfig = ctx.obj["config"]
    if config.prefix is None:
        console.print(_UNPREFIXED_WARNING)
    total = _run(_store(ctx), lambda store: store.count())
    console.print(f"[bold]{total}[/bold] session(s)")


# ---------------------------------------------------------------------------
# clear
# ---------------------------------------------------------------------------


@cli.command(name="clear")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def clear_command(ctx: click.Context, yes: bool) -> None:
    """Remove every session in the store."""
    config: RedisStoreConfig = ctx.obj["config"]
    if config.prefix is None:
        console.print(_UNPREFIXED_WARNING)
    if not yes:
        target = f"prefix {config.prefix!r}" if config.prefix else "the whole database"
        click.confirm(f"Clear all sessions under {target}?", abort=True)
    _run(_store(ctx), lambda store: store.clear_store())
    console.print("[green]Store cleared.[/green]")


# ---------------------------------------------------------------------------
# show
# ---------------------------------------------------------------------------


@cli.command(name="show")
@click.argument("cookie_value")
@click.option("--json-output", is_flag=True, help="Output raw JSON instead of a table.")
@click.pass_context
def show_command(ctx: click.Context, cookie_value: str, json_output: bool) -> None:
    """Load and display the session behind COOKIE_VALUE."""
    session = _run(_store(ctx), lambda store: store.load_session(cookie_value))
    if session is None:
        console.print("[yellow]No session found for that cookie.[/yellow]")
        sys.exit(1)

    if json_output:
        console.print_json(session.model_dump_json())
        return

    table = Table(title=f"Session {session.id[:12]}...", show_lines=True)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")

    table.add_row("id", session.id)
    table.add_row("expiry", session.expiry.isoformat() if session.expiry else "never")
    table.add_row("expired", str(session.is_expired))
    table.add_row("keys", str(len(session)))
    for key, value in sorted(session.data.items()):
        table.add_row(f"data.{key}", repr(value))

    console.print(table)


# ---------------------------------------------------------------------------
# ttl
# ---------------------------------------------------------------------------


@cli.command(name="ttl")
@click.argument("cookie_value")
@click.pass_context
def ttl_command(ctx: click.Context, cookie_value: str) -> None:
    """Show the remaining Redis TTL for the session behind COOKIE_VALUE."""
    store = _store(ctx)
    if not isinstance(store, RedisSessionStore):
        console.print("[red]The configured store does not report TTLs.[/red]")
        sys.exit(1)

    async def _ttl() -> tuple[bool, float | None]:
        session = await store.load_session(cookie_value)
        if session is None:
            return False, None
        remaining = await store.ttl_for_session(session)
        return True, None if remaining is None else remaining.total_seconds()

    found, seconds = _run(store, lambda _: _ttl())
    if not found:
        console.print("[yellow]No session found for that cookie.[/yellow]")
        sys.exit(1)
    if seconds is None:
        console.print("No TTL (session never expires).")
    else:
        console.print(f"[bold]{seconds:.1f}[/bold] second(s) remaining")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


if __name__ == "__main__":
    cli()
