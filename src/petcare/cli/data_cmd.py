"""petcare export / import."""

from __future__ import annotations

import json
from pathlib import Path

import click

from petcare.app import PetCareApp

from .common import run_with_app


@click.command("export")
@click.argument("path", type=click.Path(dir_okay=False, writable=True, path_type=Path))
@click.pass_context
def export_cmd(ctx: click.Context, path: Path) -> None:
    """Write every collection to PATH as JSON."""

    async def action(app: PetCareApp) -> dict:
        return await app.export_data()

    data = run_with_app(ctx, action)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False))
    click.echo(f"Exported to {path}")


@click.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def import_cmd(ctx: click.Context, path: Path) -> None:
    """Replace stored collections with those in the JSON export at PATH."""
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{path} is not valid JSON: {e}") from e

    async def action(app: PetCareApp) -> dict[str, int]:
        return await app.import_data(data)

    counts = run_with_app(ctx, action)
    summary = ", ".join(f"{n} {kind}" for kind, n in counts.items()) or "nothing"
    click.echo(f"Imported {summary}")
