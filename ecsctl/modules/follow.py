"""
Follow a task's CloudWatch log stream until the task stops.

Each iteration drains new events from the stream, re-queries the task
status and sleeps for the poll interval. Log query errors are tolerated up
to a fixed number of consecutive failures; status query errors are not.

FilterLogEvents is re-issued with startTime set to the newest timestamp seen
so far, so events at exactly that timestamp come back on the next pass. The
watermark remembers their ids and drops them.
"""
import logging
import time
from typing import Any, Callable, Dict, Optional, Set

from ecsctl.config import Config
from ecsctl.modules import tasks
from ecsctl.modules.tasks import TaskRun
from ecsctl.utils import RetryError
from ecsctl.utils.aws import API_ERRORS

logger = logging.getLogger(__name__)

class LogWatermark:
    """Newest event timestamp seen plus the event ids seen at that timestamp."""

    def __init__(self):
        self.timestamp: Optional[int] = None
        self.seen_ids: Set[str] = set()

    def advance(self, timestamp: int) -> None:
        if self.timestamp is None or timestamp > self.timestamp:
            self.timestamp = timestamp
            self.seen_ids = set()

    def observe(self, event: Dict[str, Any]) -> bool:
        """Record an event; False if it was already seen and must be skipped."""
        self.advance(event["timestamp"])
        event_id = event["eventId"]
        if event_id in self.seen_ids:
            return False
        self.seen_ids.add(event_id)
        return True

class LogFollower:
    def __init__(
        self,
        ecs,
        logs,
        task_run: TaskRun,
        log_group: str,
        stream_name: str,
        render: Callable[[Dict[str, Any]], None],
        poll_interval: Optional[float] = None,
        retry_limit: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.ecs = ecs
        self.logs = logs
        self.task_run = task_run
        self.log_group = log_group
        self.stream_name = stream_name
        self.render = render
        self.poll_interval = Config.POLL_INTERVAL if poll_interval is None else poll_interval
        self.retry_limit = Config.LOG_RETRY_LIMIT if retry_limit is None else retry_limit
        self.sleep = sleep
        self.watermark = LogWatermark()
        self.failures = 0

    def drain(self) -> int:
        """Fetch every page of new events and render the unseen ones."""
        kwargs = {
            "logGroupName": self.log_group,
            "logStreamNames": [self.stream_name],
        }
        if self.watermark.timestamp is not None:
            kwargs["startTime"] = self.watermark.timestamp

        rendered = 0
        while True:
            page = self.logs.filter_log_events(**kwargs)
            for event in page.get("events", []):
                if self.watermark.observe(event):
                    self.render(event)
                    rendered += 1

            next_token = page.get("nextToken")
            if not next_token:
                return rendered
            kwargs["nextToken"] = next_token

    def poll_logs(self) -> None:
        """One drain pass; failures count towards the retry ceiling."""
        try:
            self.drain()
        except API_ERRORS as e:
            self.failures += 1
            logger.warning(f"Log query failed ({self.failures}/{self.retry_limit}): {e}")
            if self.failures >= self.retry_limit:
                raise RetryError(
                    f"Failed after {self.failures} attempts. Last error: {str(e)}"
                ) from e
        else:
            self.failures = 0

    def follow(self) -> str:
        """Poll until the task stops; returns the final status."""
        logger.debug(f"Following {self.log_group}/{self.stream_name}")
        while True:
            self.poll_logs()
            status = tasks.refresh_status(self.ecs, self.task_run)
            logger.debug(f"Task {self.task_run.task_id} is {status}")
            if self.task_run.stopped:
                return status
            self.sleep(self.poll_interval)
