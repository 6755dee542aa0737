import logging
from typing import Iterator

logger = logging.getLogger(__name__)

def iter_cluster_arns(ecs) -> Iterator[str]:
    """
    Yield every cluster ARN, one ListClusters page at a time.

    Each page's nextToken is passed to the following request; iteration
    ends on the first page that has none. Request errors propagate.
    """
    kwargs = {}
    page = 0
    while True:
        result = ecs.list_clusters(**kwargs)
        page += 1
        arns = result.get("clusterArns", [])
        logger.debug(f"ListClusters page {page}: {len(arns)} clusters")
        for arn in arns:
            yield arn

        next_token = result.get("nextToken")
        if not next_token:
            break
        kwargs["nextToken"] = next_token
