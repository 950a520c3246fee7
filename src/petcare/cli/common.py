"""Shared setup logic for CLI commands."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import TypeVar

import click

from petcare.app import PetCareApp
from petcare.core.config import Config
from petcare.core.exceptions import PetCareError
from petcare.core.utils.dt import local_now
from petcare.core.utils.logging import setup_from_config

R = TypeVar("R")


def load_config(ctx: click.Context) -> Config:
    opts = ctx.obj or {}
    config = Config(config_file=opts.get("config_file"), data_dir=opts.get("data_dir"))
    setup_from_config(config, verbose=bool(opts.get("verbose")))
    return config


def run_with_app(ctx: click.Context, action: Callable[[PetCareApp], Awaitable[R]]) -> R:
    """Build the app, load its data, run *action*, and map errors to click."""
    config = load_config(ctx)

    async def _run() -> R:
        app = PetCareApp(config, clock=local_now)
        await app.load()
        return await action(app)

    try:
        return asyncio.run(_run())
    except PetCareError as e:
        raise click.ClickException(str(e)) from e


def fmt_date(value: datetime | None) -> str:
    if value is None:
        return "-"
    return value.astimezone().strftime("%Y-%m-%d %H:%M")
