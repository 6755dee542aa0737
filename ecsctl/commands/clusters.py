import typer

from ecsctl.modules.clusters import iter_cluster_arns
from ecsctl.utils import aws

clusters_app = typer.Typer(help="Inspect ECS clusters.")

@clusters_app.command("list")
def list_clusters(ctx: typer.Context):
    """List clusters."""
    settings = ctx.obj or {}
    try:
        ecs = aws.get_client("ecs", region=settings.get("region"), profile=settings.get("profile"))
        for arn in iter_cluster_arns(ecs):
            typer.echo(arn)
    except aws.API_ERRORS as e:
        typer.echo(str(e))
        raise typer.Exit(code=1)

app = clusters_app
