"""petcare pets / tasks / complete / reminders."""

from __future__ import annotations

import click

from petcare.app import PetCareApp
from petcare.models import Task
from petcare.repositories import TaskFilter

from .common import fmt_date, run_with_app


def _task_line(task: Task, pet_names: dict[str, str]) -> str:
    mark = "x" if task.is_completed else " "
    pet = pet_names.get(task.pet_id, "") if task.pet_id else ""
    repeat = f" (every {task.recurrence_interval} {task.recurrence_type.value})" if task.recurrence else ""
    line = f"[{mark}] {task.id[:8]}  {fmt_date(task.due_date):16}  {task.priority.value:7}  {task.title}{repeat}"
    return f"{line}  @{pet}" if pet else line


@click.command()
@click.option("--all", "show_all", is_flag=True, help="Include inactive pets.")
@click.pass_context
def pets(ctx: click.Context, show_all: bool) -> None:
    """List pets."""

    async def action(app: PetCareApp) -> None:
        listed = app.pets.items if show_all else app.pets.active_pets
        if not listed:
            click.echo("No pets yet.")
            return
        now = app.clock()
        for pet in sorted(listed, key=lambda p: p.name.lower()):
            age = pet.age_years(now)
            extra = f", {age}y" if age is not None else ""
            flag = "" if pet.is_active else " (inactive)"
            click.echo(f"{pet.id[:8]}  {pet.name} ({pet.type.value}{extra}){flag}")

    run_with_app(ctx, action)


@click.command()
@click.argument("view", type=click.Choice(["all", "today", "overdue", "upcoming"]), default="all")
@click.option("--completed", is_flag=True, help="Include completed tasks in the 'all' view.")
@click.pass_context
def tasks(ctx: click.Context, view: str, completed: bool) -> None:
    """List tasks: all, today, overdue or upcoming."""

    async def action(app: PetCareApp) -> None:
        match view:
            case "today":
                listed = app.tasks.todays_tasks
            case "overdue":
                listed = app.tasks.overdue_tasks
            case "upcoming":
                listed = app.tasks.upcoming_tasks(app.settings.analytics.upcoming_limit)
            case _:
                listed = app.tasks.filtered(TaskFilter(show_completed=completed))
        if not listed:
            click.echo("No tasks.")
            return
        names = {p.id: p.name for p in app.pets.items}
        for task in listed:
            click.echo(_task_line(task, names))

    run_with_app(ctx, action)


@click.command()
@click.argument("task_id")
@click.pass_context
def complete(ctx: click.Context, task_id: str) -> None:
    """Mark a task as done. TASK_ID may be an unambiguous prefix."""

    async def action(app: PetCareApp) -> Task:
        matches = [t for t in app.tasks.items if t.id.startswith(task_id)]
        if len(matches) != 1:
            reason = "No task matches" if not matches else "Ambiguous task id"
            raise click.ClickException(f"{reason}: {task_id}")
        return await app.tasks.mark_completed(matches[0])

    task = run_with_app(ctx, action)
    click.echo(f"Completed: {task.title}")
    if task.is_recurring and task.next_due_date is not None:
        click.echo(f"Next due: {fmt_date(task.next_due_date)}")


@click.command()
@click.option("--disabled", is_flag=True, help="Show disabled reminders instead.")
@click.pass_context
def reminders(ctx: click.Context, disabled: bool) -> None:
    """List reminders with their next trigger time."""

    async def action(app: PetCareApp) -> None:
        listed = app.reminders.disabled_reminders if disabled else app.reminders.enabled_reminders
        if not listed:
            click.echo("No reminders.")
            return
        now = app.clock()
        for reminder in sorted(listed, key=lambda r: r.scheduled_date):
            nxt = reminder.next_trigger_date(now)
            repeat = f" every {reminder.repeat_type.value}" if reminder.is_repeating and reminder.repeat_type else ""
            click.echo(f"{reminder.id[:8]}  next {fmt_date(nxt):16}  {reminder.title}{repeat}")

    run_with_app(ctx, action)
