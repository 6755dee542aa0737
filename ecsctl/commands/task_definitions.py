import logging
from typing import Optional

import typer
from rich.console import Console

from ecsctl.config import Config
from ecsctl.modules import tasks
from ecsctl.modules.follow import LogFollower
from ecsctl.modules.output import EventPrinter, OutputConfiguration
from ecsctl.utils import RetryError, TaskRunError
from ecsctl.utils import aws

logger = logging.getLogger(__name__)

# Progress notes go to stderr, stdout carries task ARNs and log lines
console = Console(stderr=True)

app = typer.Typer(help="Work with ECS task definitions.")

FATAL_ERRORS = aws.API_ERRORS + (TaskRunError, RetryError)

@app.command("run")
def run_task_definition(
    ctx: typer.Context,
    family: str = typer.Argument(..., metavar="TASK-DEFINITION", help="Task definition family"),
    cluster: str = typer.Option(..., "--cluster", "-c", help="(required) Cluster to run the task on"),
    revision: Optional[str] = typer.Option(None, "--revision", help="Task definition revision (default: latest)"),
    follow: bool = typer.Option(False, "--follow", "-f", help="Follow the task's log stream until it stops"),
    exit_on_signal: bool = typer.Option(False, "--exit", help="Stop the task when interrupted while following"),
    expand: bool = typer.Option(False, "--expand", "-e", help="Indent JSON log messages"),
    raw: bool = typer.Option(False, "--raw", "-r", help="Print log messages without JSON formatting"),
    raw_string: bool = typer.Option(False, "--raw-string", "-s", help="Do not quote JSON string values"),
    hide_stream_name: bool = typer.Option(False, "--hide-stream-name", help="Omit the log stream name"),
    hide_date: bool = typer.Option(False, "--hide-date", help="Omit the event timestamp"),
    invert: bool = typer.Option(False, "--invert", "-i", help="Render JSON keys in a dark color"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
):
    """Run a Task Definition."""
    settings = ctx.obj or {}
    region, profile = settings.get("region"), settings.get("profile")
    try:
        Config.validate()
    except ValueError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=1)

    try:
        ecs = aws.get_client("ecs", region=region, profile=profile)
        task_definition, qualified_name = tasks.resolve_task_definition(ecs, family, revision)
        task_run = tasks.run_task(ecs, cluster, qualified_name)
    except FATAL_ERRORS as e:
        typer.echo(str(e))
        raise typer.Exit(code=1)

    if not follow:
        typer.echo(task_run.task_arn)
        raise typer.Exit()

    console.print(f"🚀 Started task {task_run.task_arn} ({qualified_name}) on {cluster}")

    if exit_on_signal:
        tasks.stop_on_signal(ecs, task_run)

    source = tasks.log_source(task_definition)
    if source is None:
        logger.debug(f"{family} does not log through {Config.LOG_DRIVER}, nothing to follow")
        raise typer.Exit()

    stream_name = source.stream_name(task_run.task_id)
    output = OutputConfiguration(
        expand=expand,
        raw=raw,
        raw_string=raw_string,
        hide_stream_name=hide_stream_name,
        hide_date=hide_date,
        invert=invert,
        no_color=no_color,
    )

    console.print(f"📡 Following log stream {source.group}/{stream_name}")
    try:
        logs = aws.get_client("logs", region=source.region or region, profile=profile)
        follower = LogFollower(ecs, logs, task_run, source.group, stream_name, EventPrinter(output))
        status = follower.follow()
    except FATAL_ERRORS as e:
        typer.echo(str(e))
        raise typer.Exit(code=1)

    console.print(f"✅ Task {task_run.task_id} is {status}")
