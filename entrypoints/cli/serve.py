from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import uvicorn

from strady.adapters.config import config
from strady.domain.rates import RateTableStore

app = typer.Typer(help="Strady.imo API server and rate-file tools.")


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: STRADY_HOST)"),
    port: Optional[int] = typer.Option(None, help="Listen port (default: STRADY_PORT / PORT, else 3001)"),
) -> None:
    """
    Run the HTTP API.
    """
    uvicorn.run(
        "strady.api.http:create_app",
        factory=True,
        host=host or config.HOST,
        port=port or config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )


@app.command("check-rates")
def check_rates(
    path: Optional[Path] = typer.Argument(None, help="Rate CSV to inspect (default: configured rate file)"),
) -> None:
    """
    Parse a rate file the way the API does and report what would be served.
    """
    target = path or config.rates_path
    table = RateTableStore(target).reload()
    if table.loaded_at is None:
        typer.echo(f"{target}: not found (API would serve an empty list)")
        raise typer.Exit(code=1)

    columns = list(table.rows[0].keys()) if table.rows else []
    typer.echo(f"{target}: {len(table)} rows, {table.skipped_rows} skipped")
    if columns:
        typer.echo("columns: " + ", ".join(columns))


if __name__ == "__main__":
    app()
