"""Command-line interface for BucketBase.

``serve`` runs the admin API. The other commands open a console session on
the configured storage backend and print what it sees.
"""

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Any, NoReturn, TypeVar

import click

from bucketbase.core.config import get_settings
from bucketbase.core.exceptions import BucketBaseError
from bucketbase.core.logging import configure_logging, get_logger

T = TypeVar("T")


def _run_console(
    site: str,
    token: str | None,
    action: Callable[[Any], Awaitable[T]],
) -> T:
    """Run ``action`` against a console session, turning core errors into exit 1."""
    from bucketbase.application.console import AdminConsole

    settings = get_settings()
    configure_logging(settings)

    async def run() -> T:
        async with AdminConsole.from_settings(settings) as console:
            if token:
                console.login(token)
            console.switch_site(site)
            return await action(console)

    try:
        return asyncio.run(run())
    except BucketBaseError as e:
        click.echo(f"ERROR ({e.code}): {e.message}", err=True)
        raise SystemExit(1)


site_option = click.option(
    "--site",
    "site",
    default="default",
    show_default=True,
    help="Site to operate on",
)
token_option = click.option(
    "--token",
    envvar="BUCKETBASE_ACCESS_TOKEN",
    default=None,
    help="Access token for admin API calls (remote backend)",
)


@click.group()
@click.version_option(version="0.1.0", prog_name="BucketBase")
def cli() -> None:
    """BucketBase - sites, collections and records on object storage."""


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the admin API server."""
    import uvicorn

    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port

    configure_logging(settings)
    logger = get_logger(__name__)
    logger.info(
        "Starting BucketBase server",
        host=bind_host,
        port=bind_port,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "bucketbase.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
def templates() -> None:
    """List the site templates and the collections they create."""
    from bucketbase.domain.services import list_site_templates

    for template in list_site_templates():
        slugs = ", ".join(c.slug for c in template.collections) or "-"
        click.echo(f"{template.id:<10} {template.name:<12} collections: {slugs}")


@cli.command()
@site_option
@token_option
def sites(site: str, token: str | None) -> None:
    """List the sites known to the storage backend."""

    async def action(console):
        return await console.sites.list_sites()

    for entry in _run_console(site, token, action):
        click.echo(f"{entry.id:<20} {entry.name}")


@cli.command()
@site_option
def collections(site: str) -> None:
    """List the collections of a site."""

    async def action(console):
        return await console.schemas.get_collections()

    for collection in _run_console(site, None, action):
        click.echo(f"{collection.slug:<20} {collection.name:<24} fields: {len(collection.fields)}")


@cli.command()
@click.argument("slug")
@site_option
def records(slug: str, site: str) -> None:
    """Print the records of a collection as JSON."""

    async def action(console):
        return await console.records.get_records(slug)

    click.echo(json.dumps([r.to_dict() for r in _run_console(site, None, action)], indent=2))


@cli.command()
def info() -> None:
    """Display BucketBase configuration."""
    settings = get_settings()

    click.echo(f"""
BucketBase v{settings.app_version}
{'=' * 40}

Console:
  Backend:      {settings.storage_backend}
  Bundle:       {settings.bundle_path or '(packaged sample)'}
  Content URL:  {settings.content_base_url or '-'}
  API URL:      {settings.api_base_url or '-'}
  Layout:       {settings.storage_layout}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  API Prefix:   {settings.api_prefix}
  Object store: {settings.object_store}
  Bucket:       {settings.s3_bucket or '-'}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
