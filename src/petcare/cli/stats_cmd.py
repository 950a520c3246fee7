"""petcare stats: task statistics."""

from __future__ import annotations

import json

import click

from petcare.analytics import StatisticsReport
from petcare.app import PetCareApp

from .common import run_with_app


def _render(report: StatisticsReport) -> list[str]:
    lines = [
        f"This week:  {report.weekly.completed_tasks}/{report.weekly.total_tasks} done"
        f" ({report.weekly_progress:.0f}%), {report.weekly.overdue_tasks} overdue",
        f"This month: {report.monthly.completed_tasks}/{report.monthly.total_tasks} done"
        f" ({report.monthly_progress:.0f}%), {report.monthly.overdue_tasks} overdue",
        f"Active reminders: {report.weekly.active_reminders}",
        f"Current streak: {report.current_streak} day(s)",
        f"Tasks per day: {report.average_tasks_per_day:.2f}",
    ]
    most_common = report.most_common_category
    if most_common is not None:
        lines.append(f"Most common category: {most_common[0].value} ({most_common[1]})")
    active = report.most_active_pet
    if active is not None:
        lines.append(f"Most active pet: {active.pet_name} ({active.tasks_completed} done)")
    for pet in report.pets:
        lines.append(f"  {pet.pet_name}: {pet.tasks_completed} done, {pet.tasks_pending} pending")
    return lines


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print the full report as JSON.")
@click.pass_context
def stats(ctx: click.Context, as_json: bool) -> None:
    """Show weekly, monthly and per-pet statistics."""

    async def action(app: PetCareApp) -> StatisticsReport:
        return app.report()

    report = run_with_app(ctx, action)
    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return
    for line in _render(report):
        click.echo(line)
