from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional

import typer

from product_store.app import get_settings, setup_logging
from product_store.app.settings import StoreSettings
from product_store.exceptions import ProductStoreError
from product_store.products import CursorPaginator

app = typer.Typer(no_args_is_help=True, add_completion=False, help="File-backed product store")


def _settings(data_dir: Optional[Path], **overrides) -> StoreSettings:
    settings = get_settings(data_dir=data_dir, **overrides)
    if settings.data_dir is None:
        typer.echo("data storage path must be given with --data-dir or PRODUCT_STORE_DATA_DIR", err=True)
        raise typer.Exit(code=2)
    return settings


@app.command("serve")
def serve(
        data_dir: Optional[Path] = typer.Option(None, help="Directory holding product files"),
        host: Optional[str] = typer.Option(None, help="Bind host (default from settings)"),
        port: Optional[int] = typer.Option(None, help="Bind port (default 8080)"),
        reload: bool = typer.Option(False, help="Reload on code changes (development only)"),
):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from product_store.api.fastapi import create_app

    settings = _settings(data_dir, host=host, port=port)
    setup_logging(level=settings.log_level, fmt=settings.log_format)
    settings.data_dir.mkdir(parents=True, exist_ok=True)

    if reload:
        # uvicorn needs an import string to reload; settings travel through the env.
        os.environ["PRODUCT_STORE_DATA_DIR"] = str(settings.data_dir)
        uvicorn.run(
            "product_store.main:app",
            host=settings.host,
            port=settings.port,
            reload=True,
        )
        return
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


@app.command("page")
def page(
        data_dir: Optional[Path] = typer.Option(None, help="Directory holding product files"),
        cursor: Optional[str] = typer.Option(None, help="Id of the last product already seen"),
        limit: Optional[int] = typer.Option(None, min=0, help="Page size (default from settings)"),
):
    """Print one page of products as JSON."""
    from product_store.api.fastapi import build_store

    settings = _settings(data_dir)
    paginator = CursorPaginator(build_store(settings), start_sentinel=settings.cursor_start_sentinel)
    try:
        result = paginator.paginate(
            cursor=cursor,
            limit=settings.default_page_limit if limit is None else limit,
        )
    except ProductStoreError as exc:
        typer.echo(exc.message, err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps([p.model_dump() for p in result.items], indent=settings.json_indent))
    if result.next_cursor:
        typer.echo(f"next cursor: {result.next_cursor}", err=True)


@app.command("clean")
def clean(
        data_dir: Optional[Path] = typer.Option(None, help="Directory holding product files"),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Remove every product file from the store."""
    from product_store.api.fastapi import build_store

    settings = _settings(data_dir)
    if not yes:
        typer.confirm(f"Remove every product under {settings.data_dir}?", abort=True)
    try:
        removed = build_store(settings).clear()
    except ProductStoreError as exc:
        typer.echo(exc.message, err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Removed {removed} product file(s)")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
