import typer
import logging
import sys
from typing import Optional
from ecsctl.commands import clusters, task_definitions
from ecsctl.logging import setup_logging

app = typer.Typer()

# Global debug flag
debug_mode = False

# Add all command groups
app.add_typer(clusters.app, name="clusters")
app.add_typer(task_definitions.app, name="task-definitions")

# Global options callback
@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
    region: Optional[str] = typer.Option(None, "--region", help="AWS region (default: AWS_REGION)"),
    profile: Optional[str] = typer.Option(None, "--profile", help="AWS profile (default: AWS_PROFILE)"),
):
    """ECSCTL - Amazon ECS command line client."""
    global debug_mode
    debug_mode = debug
    setup_logging(debug)
    ctx.obj = {"region": region, "profile": profile}
    if debug:
        logging.debug("Debug mode enabled")

if __name__ == "__main__":
    try:
        app()
    except Exception as e:
        if debug_mode:
            import traceback
            logging.error(f"Unhandled exception: {e}\n{traceback.format_exc()}")
        else:
            logging.error(f"Error: {e}")
        sys.exit(1)
