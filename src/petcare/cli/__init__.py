"""PetCare CLI: inspect pets, tasks, reminders and statistics."""

import click

from petcare import __version__


@click.group()
@click.version_option(version=__version__, package_name="petcare")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    envvar="PETCARE_CONFIG",
    help="YAML or JSON config file.",
)
@click.option("--data-dir", type=click.Path(file_okay=False), help="Where PetCare keeps its data.")
@click.option("-v", "--verbose", is_flag=True, help="Log at INFO level.")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, data_dir: str | None, verbose: bool) -> None:
    """PetCare: pet care tasks, reminders and statistics."""
    ctx.obj = {"config_file": config_file, "data_dir": data_dir, "verbose": verbose}


from .data_cmd import export_cmd, import_cmd
from .list_cmd import complete, pets, reminders, tasks
from .stats_cmd import stats

main.add_command(pets)
main.add_command(tasks)
main.add_command(complete)
main.add_command(reminders)
main.add_command(stats)
main.add_command(export_cmd)
main.add_command(import_cmd)
