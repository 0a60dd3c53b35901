"""prdtasks CLI entrypoint."""

import asyncio
import json
import sys
from pathlib import Path

import click

from .config.loader import ConfigError, create_default_config, load_config
from .generators.base import GeneratorError, GeneratorOptions
from .generators.factory import create_task_generator
from .generators.runner import PrdInputError, run_generator
from .tasks.parser import extract_title
from .utils.format import format_task_line, format_task_preview
from .utils.logging import setup_logging
from .validation.pipeline import TaskGraphError, check_task_graph, truncate_tasks
from .validation.schema import TaskValidationError

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
}


def _load_config_or_exit(ctx: click.Context):
    config_path: Path = ctx.obj["config_path"]
    try:
        config = load_config(config_path)
    except ConfigError as e:
        click.echo(f"✗ Configuration error: {e}", err=True)
        sys.exit(1)

    setup_logging(
        level="DEBUG" if ctx.obj["verbose"] else config.logging.level,
        log_dir=config.logging.log_dir,
        file_name=config.logging.file_name,
        rotation_mb=config.logging.rotation_mb,
        backup_count=config.logging.backup_count,
        console=ctx.obj["verbose"],
    )
    return config


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--config",
    "-c",
    default=".prdtasks/config.yml",
    help="Path to configuration file",
    type=click.Path(exists=False, path_type=Path),
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.pass_context
def cli(ctx: click.Context, config: Path, verbose: bool) -> None:
    """prdtasks - turn a PRD into a validated, dependency-ordered task list."""
    setup_logging(level="DEBUG" if verbose else "WARNING")

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose


@cli.command()
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Overwrite existing configuration",
)
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Initialize prdtasks configuration."""
    config_path: Path = ctx.obj["config_path"]

    if config_path.exists() and not force:
        click.echo(f"Configuration already exists: {config_path}")
        click.echo("Use --force to overwrite")
        sys.exit(1)

    try:
        create_default_config(config_path)
    except OSError as e:
        click.echo(f"✗ Failed to create configuration: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Created configuration: {config_path}")
    click.echo("\nNext steps:")
    click.echo(f"  1. Review and customize {config_path}")
    click.echo("  2. Run: prdtasks generate <prd.md> --output tasks.json")


@cli.command()
@click.argument("prd_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--max-tasks",
    "-n",
    type=click.IntRange(1, 200),
    default=None,
    help="Maximum number of tasks to generate",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write tasks JSON to file instead of stdout",
)
@click.option(
    "--source-prd",
    default=None,
    help="PRD label recorded in the version block",
)
@click.pass_context
def generate(
    ctx: click.Context,
    prd_file: Path,
    max_tasks: int | None,
    output: Path | None,
    source_prd: str | None,
) -> None:
    """Generate tasks from a PRD markdown file."""
    config = _load_config_or_exit(ctx)
    try:
        prd_text = prd_file.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        click.echo(f"✗ Invalid PRD: {prd_file} is not valid UTF-8 ({e.reason} at byte {e.start})", err=True)
        sys.exit(1)

    if source_prd is None and config.generator.structured_version:
        source_prd = extract_title(prd_text) or prd_file.name

    options = GeneratorOptions(
        max_tasks=max_tasks or config.generator.max_tasks,
        model=config.generator.model,
        temperature=config.generator.temperature,
        source_prd=source_prd,
    )

    try:
        generator = create_task_generator(config.generator)
        tasks_json = asyncio.run(run_generator(generator, prd_text, options, config.limits))
    except PrdInputError as e:
        click.echo(f"✗ Invalid PRD: {e}", err=True)
        sys.exit(1)
    except (GeneratorError, TaskValidationError, TaskGraphError) as e:
        click.echo(f"✗ Task generation failed: {e}", err=True)
        sys.exit(1)

    payload = json.dumps(tasks_json.to_dict(), indent=config.output.indent or None, ensure_ascii=False)
    preview = format_task_preview(tasks_json.tasks, config.output.preview_count)

    if output is None:
        click.echo(payload)
        click.echo(f"✓ {len(tasks_json.tasks)} tasks: {preview}", err=True)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(payload + "\n", encoding="utf-8")
    click.echo(f"✓ Wrote {len(tasks_json.tasks)} tasks to {output}")
    if ctx.obj["verbose"]:
        for task in tasks_json.tasks:
            click.echo(f"  {format_task_line(task)}")
    else:
        click.echo(f"  {preview}")


@cli.command()
@click.argument("tasks_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--max-tasks",
    "-n",
    type=click.IntRange(1, 200),
    default=None,
    help="Truncate the collection before writing",
)
@click.option(
    "--write",
    "-w",
    "write_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the sanitized collection to file",
)
@click.pass_context
def validate(
    ctx: click.Context,
    tasks_file: Path,
    max_tasks: int | None,
    write_path: Path | None,
) -> None:
    """Validate a tasks JSON file (structure, ids, dependencies)."""
    config = _load_config_or_exit(ctx)

    try:
        with open(tasks_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        click.echo(f"✗ Invalid JSON in {tasks_file}: {e}", err=True)
        sys.exit(1)

    report = check_task_graph(data)

    if report.issues:
        click.echo(f"✗ {len(report.issues)} structural issue(s):")
        for issue in report.issues:
            click.echo(f"  {issue}")
        sys.exit(1)

    if report.dropped_deps:
        click.echo(f"! Removed {report.dropped_deps} dangling or self dependencies")
    if report.duplicates:
        click.echo(f"✗ Duplicate task ids: {', '.join(report.duplicates)}")
    if report.cycle:
        click.echo(f"✗ Dependency cycle: {' -> '.join(report.cycle)}")
    if not report.valid:
        sys.exit(1)

    tasks_json = report.tasks_json
    if max_tasks:
        tasks_json = truncate_tasks(tasks_json, max_tasks)

    click.echo(f"✓ {len(tasks_json.tasks)} tasks valid")

    if write_path:
        payload = json.dumps(tasks_json.to_dict(), indent=config.output.indent or None, ensure_ascii=False)
        write_path.write_text(payload + "\n", encoding="utf-8")
        click.echo(f"✓ Wrote {write_path}")


if __name__ == "__main__":
    cli()
