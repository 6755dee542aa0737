"""Utility functions and helpers for the ecsctl application."""

class RetryError(Exception):
    """Raised when a tolerated operation keeps failing past its retry ceiling."""
    pass

class TaskRunError(Exception):
    """Raised when ECS accepts a request but reports no usable task."""
    pass

def task_id_from_arn(task_arn: str) -> str:
    """Extract the task ID from an ECS task ARN.

    Both arn:aws:ecs:region:account:task/task-id and the newer
    arn:aws:ecs:region:account:task/cluster/task-id formats are handled.
    """
    return task_arn.rsplit("/", 1)[-1]

def format_failures(failures) -> str:
    """Render the `failures` list of an ECS response as one line."""
    parts = []
    for failure in failures or []:
        reason = failure.get("reason", "unknown")
        arn = failure.get("arn")
        detail = failure.get("detail")
        text = f"{arn}: {reason}" if arn else reason
        if detail:
            text = f"{text} ({detail})"
        parts.append(text)
    return "; ".join(parts)
