"""blogwords CLI — run the services, poke the pipeline, read the snapshot.

Usage:
    blogwords serve                 # WebSocket + HTTP API (uvicorn)
    blogwords poll                  # Long-running poller process
    blogwords tick                  # Fetch + count once, print the top words
    blogwords tick --publish        # ...and write the snapshot to Redis
    blogwords show --top 20         # Read the published snapshot from the API
"""

from __future__ import annotations

import asyncio
import json
import os
import sys
from typing import Optional

import click
import httpx

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:8080"


def _api_url() -> str:
    return os.environ.get("BLOGWORDS_API_URL", DEFAULT_API_URL).rstrip("/")


def _client() -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the blogwords server."""
    return httpx.AsyncClient(base_url=_api_url(), timeout=30.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _print_words(words: list[tuple[str, int]]) -> None:
    if not words:
        click.echo("(no words)")
        return
    width = max(len(w) for w, _ in words)
    for word, count in words:
        click.echo(f"{word.ljust(width)}  {count}")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="blogwords")
def cli():
    """Live word frequencies for a WordPress blog."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: BLOGWORDS_HOST).")
@click.option("--port", type=int, default=None, help="Port (default: BLOGWORDS_PORT / PORT).")
def serve(host: Optional[str], port: Optional[int]):
    """Run the WebSocket + HTTP server."""
    import uvicorn

    from blogwords.config import settings

    uvicorn.run(
        "blogwords.main:app",
        host=host or settings.host,
        port=port or settings.port,
    )


@cli.command()
def poll():
    """Run the blog poller until interrupted."""
    from blogwords.poller.main import main as poller_main

    poller_main()


@cli.command()
@click.option("--publish", is_flag=True, help="Write the result to Redis.")
@click.option("--top", type=int, default=20, show_default=True)
def tick(publish: bool, top: int):
    """Fetch the blog once and print the most frequent words."""
    from blogwords.fetcher.blog_client import BlogClient
    from blogwords.words import count_words, top_words

    async def _tick() -> bool:
        async with BlogClient() as blog:
            result = await blog.fetch_documents()
        if not result.ok:
            click.secho(f"Fetch failed: {result.error}", fg="red", err=True)
            return False

        freq = count_words(result.documents)
        click.secho(
            f"{len(result.documents)} posts, {sum(freq.values())} words, "
            f"{len(freq)} unique",
            bold=True,
        )
        _print_words(top_words(freq, top))

        if publish:
            from blogwords.realtime.pubsub import SnapshotStore, close_redis, init_redis

            await init_redis()
            try:
                await SnapshotStore().publish(freq)
            finally:
                await close_redis()
            click.secho("Snapshot published", fg="green")
        return True

    if not asyncio.run(_tick()):
        sys.exit(1)


@cli.command()
@click.option("--top", type=int, default=None, help="Only the N most frequent words.")
@click.option("--json", "as_json", is_flag=True, help="Raw JSON output.")
def show(top: Optional[int], as_json: bool):
    """Show the snapshot the server is currently serving."""

    async def _show():
        params = {"top": top} if top else None
        async with _client() as client:
            try:
                resp = await client.get("/api/v1/snapshot", params=params)
            except httpx.ConnectError:
                click.secho(f"Server not reachable at {_api_url()}", fg="red", err=True)
                return None
        if resp.status_code == 404:
            click.secho("No snapshot published yet", fg="yellow", err=True)
            return None
        if resp.is_error:
            click.secho(f"Server error {resp.status_code}: {resp.text}", fg="red", err=True)
            return None
        return resp.json()

    data = asyncio.run(_show())
    if data is None:
        sys.exit(1)
    if as_json:
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return
    click.secho(
        f"{data['key']}: {data['total_words']} words, {data['unique_words']} unique",
        bold=True,
    )
    _print_words(list(data["words"].items()))


def main():
    cli()


if __name__ == "__main__":
    main()
