"""
Task definition resolution, task submission and task status.

Functions here take a boto3 ECS client and raise on failure; turning an
error into an exit code is left to the command layer.
"""
import logging
import signal
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ecsctl.config import Config
from ecsctl.utils import TaskRunError, format_failures, task_id_from_arn
from ecsctl.utils.aws import API_ERRORS

logger = logging.getLogger(__name__)

@dataclass
class TaskRun:
    task_arn: str
    cluster: str
    last_status: Optional[str] = None

    @property
    def task_id(self) -> str:
        return task_id_from_arn(self.task_arn)

    @property
    def stopped(self) -> bool:
        return self.last_status == Config.STOPPED_STATUS

@dataclass
class LogSource:
    """Where the awslogs driver writes one container's output."""
    group: str
    prefix: str
    container_name: str
    region: Optional[str] = None

    def stream_name(self, task_id: str) -> str:
        return f"{self.prefix}/{self.container_name}/{task_id}"

def resolve_task_definition(ecs, family: str, revision: Optional[str] = None) -> Tuple[Dict[str, Any], str]:
    """
    Describe `family` and pick the revision to run.

    Returns the task definition and the `family:revision` string. Without an
    explicit revision the one reported by DescribeTaskDefinition is used,
    which is the latest active revision of the family.
    """
    result = ecs.describe_task_definition(taskDefinition=family)
    task_definition = result["taskDefinition"]
    if not revision:
        revision = str(task_definition["revision"])
    logger.debug(f"Resolved task definition {family} to revision {revision}")
    return task_definition, f"{family}:{revision}"

def run_task(ecs, cluster: str, task_definition: str, started_by: Optional[str] = None) -> TaskRun:
    """Submit one task and return it; an empty result raises TaskRunError."""
    result = ecs.run_task(
        cluster=cluster,
        taskDefinition=task_definition,
        startedBy=started_by or Config.STARTED_BY,
    )
    tasks = result.get("tasks", [])
    if not tasks:
        reasons = format_failures(result.get("failures"))
        raise TaskRunError("task failed to run" + (f": {reasons}" if reasons else ""))

    task = tasks[0]
    logger.debug(f"RunTask started {task['taskArn']} on {cluster}")
    return TaskRun(task_arn=task["taskArn"], cluster=cluster, last_status=task.get("lastStatus"))

def refresh_status(ecs, task_run: TaskRun) -> str:
    """Re-query the task and record its last status."""
    result = ecs.describe_tasks(cluster=task_run.cluster, tasks=[task_run.task_id])
    tasks = result.get("tasks", [])
    if not tasks:
        reasons = format_failures(result.get("failures"))
        raise TaskRunError(f"task {task_run.task_id} not found" + (f": {reasons}" if reasons else ""))

    task_run.last_status = tasks[0].get("lastStatus")
    return task_run.last_status

def log_source(task_definition: Dict[str, Any]) -> Optional[LogSource]:
    """
    Log location of the first container definition.

    Returns None when that container does not log through awslogs, in which
    case there is nothing to follow.
    """
    container = task_definition["containerDefinitions"][0]
    log_configuration = container.get("logConfiguration") or {}
    if log_configuration.get("logDriver") != Config.LOG_DRIVER:
        return None

    options = log_configuration.get("options", {})
    return LogSource(
        group=options.get("awslogs-group", ""),
        prefix=options.get("awslogs-stream-prefix", ""),
        container_name=container["name"],
        region=options.get("awslogs-region"),
    )

def stop_on_signal(ecs, task_run: TaskRun, signals=(signal.SIGINT, signal.SIGTERM)) -> None:
    """
    Install handlers that stop `task_run` and end the process.

    The StopTask call is best effort: its outcome is only logged.
    """
    def handler(signum, frame):
        logger.debug(f"Received signal {signum}, stopping task {task_run.task_arn}")
        try:
            ecs.stop_task(cluster=task_run.cluster, task=task_run.task_arn)
        except API_ERRORS as e:
            logger.debug(f"StopTask for {task_run.task_arn} failed: {e}")
        sys.exit(0)

    for signum in signals:
        signal.signal(signum, handler)
