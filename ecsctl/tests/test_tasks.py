import signal
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from ecsctl.modules import tasks
from ecsctl.modules.tasks import LogSource, TaskRun
from ecsctl.utils import TaskRunError, task_id_from_arn

TASK_ARN = "arn:aws:ecs:us-east-1:123456789012:task/default/0a1b2c3d"

def task_definition(log_configuration=None, revision=7):
    container = {"name": "web", "image": "nginx"}
    if log_configuration is not None:
        container["logConfiguration"] = log_configuration
    return {"family": "app", "revision": revision, "containerDefinitions": [container]}

AWSLOGS = {
    "logDriver": "awslogs",
    "options": {"awslogs-group": "/ecs/app", "awslogs-stream-prefix": "app", "awslogs-region": "eu-west-1"},
}

@pytest.mark.parametrize(
    "task_arn",
    [
        "arn:aws:ecs:us-east-1:123456789012:task/0a1b2c3d",
        "arn:aws:ecs:us-east-1:123456789012:task/default/0a1b2c3d",
    ],
)
def test_task_id_from_arn(task_arn):
    assert task_id_from_arn(task_arn) == "0a1b2c3d"

def test_resolve_defaults_to_described_revision():
    ecs = MagicMock()
    ecs.describe_task_definition.return_value = {"taskDefinition": task_definition(revision=12)}

    definition, name = tasks.resolve_task_definition(ecs, "app")

    assert name == "app:12"
    assert definition["revision"] == 12
    ecs.describe_task_definition.assert_called_once_with(taskDefinition="app")

def test_resolve_keeps_explicit_revision():
    ecs = MagicMock()
    ecs.describe_task_definition.return_value = {"taskDefinition": task_definition(revision=12)}

    _, name = tasks.resolve_task_definition(ecs, "app", "3")

    assert name == "app:3"

def test_run_task_returns_first_task():
    ecs = MagicMock()
    ecs.run_task.return_value = {"tasks": [{"taskArn": TASK_ARN, "lastStatus": "PROVISIONING"}], "failures": []}

    task_run = tasks.run_task(ecs, "default", "app:12")

    assert task_run == TaskRun(task_arn=TASK_ARN, cluster="default", last_status="PROVISIONING")
    assert task_run.task_id == "0a1b2c3d"
    ecs.run_task.assert_called_once_with(cluster="default", taskDefinition="app:12", startedBy="ecsctl")

def test_run_task_without_tasks_fails():
    ecs = MagicMock()
    ecs.run_task.return_value = {
        "tasks": [],
        "failures": [{"arn": "arn:aws:ecs:us-east-1:123456789012:container-instance/x", "reason": "RESOURCE:MEMORY"}],
    }

    with pytest.raises(TaskRunError) as excinfo:
        tasks.run_task(ecs, "default", "app:12")

    assert str(excinfo.value).startswith("task failed to run")
    assert "RESOURCE:MEMORY" in str(excinfo.value)

def test_refresh_status_records_last_status():
    ecs = MagicMock()
    ecs.describe_tasks.return_value = {"tasks": [{"taskArn": TASK_ARN, "lastStatus": "STOPPED"}]}
    task_run = TaskRun(task_arn=TASK_ARN, cluster="default", last_status="RUNNING")

    assert tasks.refresh_status(ecs, task_run) == "STOPPED"
    assert task_run.stopped

def test_refresh_status_unknown_task_fails():
    ecs = MagicMock()
    ecs.describe_tasks.return_value = {"tasks": [], "failures": [{"arn": TASK_ARN, "reason": "MISSING"}]}

    with pytest.raises(TaskRunError, match="MISSING"):
        tasks.refresh_status(ecs, TaskRun(task_arn=TASK_ARN, cluster="default"))

def test_log_source_from_awslogs_configuration():
    source = tasks.log_source(task_definition(AWSLOGS))

    assert source == LogSource(group="/ecs/app", prefix="app", container_name="web", region="eu-west-1")
    assert source.stream_name("0a1b2c3d") == "app/web/0a1b2c3d"

@pytest.mark.parametrize("log_configuration", [None, {"logDriver": "json-file"}, {"logDriver": "splunk", "options": {}}])
def test_log_source_other_drivers(log_configuration):
    assert tasks.log_source(task_definition(log_configuration)) is None

def test_stop_on_signal_stops_task_and_exits(monkeypatch):
    handlers = {}
    monkeypatch.setattr(signal, "signal", lambda signum, handler: handlers.__setitem__(signum, handler))
    ecs = MagicMock()

    tasks.stop_on_signal(ecs, TaskRun(task_arn=TASK_ARN, cluster="default"))

    assert set(handlers) == {signal.SIGINT, signal.SIGTERM}
    with pytest.raises(SystemExit) as excinfo:
        handlers[signal.SIGTERM](signal.SIGTERM, None)
    assert excinfo.value.code == 0
    ecs.stop_task.assert_called_once_with(cluster="default", task=TASK_ARN)

def test_stop_on_signal_ignores_stop_failure(monkeypatch):
    handlers = {}
    monkeypatch.setattr(signal, "signal", lambda signum, handler: handlers.__setitem__(signum, handler))
    ecs = MagicMock()
    ecs.stop_task.side_effect = ClientError({"Error": {"Code": "InvalidParameterException", "Message": "bad"}}, "StopTask")

    tasks.stop_on_signal(ecs, TaskRun(task_arn=TASK_ARN, cluster="default"))

    with pytest.raises(SystemExit) as excinfo:
        handlers[signal.SIGINT](signal.SIGINT, None)
    assert excinfo.value.code == 0
