from unittest.mock import MagicMock, call

import pytest
from botocore.exceptions import ClientError

from ecsctl.modules.clusters import iter_cluster_arns

def arn(name):
    return f"arn:aws:ecs:us-east-1:123456789012:cluster/{name}"

def test_pages_are_concatenated_in_order():
    ecs = MagicMock()
    ecs.list_clusters.side_effect = [
        {"clusterArns": [arn("a"), arn("b")], "nextToken": "t1"},
        {"clusterArns": [], "nextToken": "t2"},
        {"clusterArns": [arn("c")]},
    ]

    assert list(iter_cluster_arns(ecs)) == [arn("a"), arn("b"), arn("c")]
    assert ecs.list_clusters.call_args_list == [
        call(),
        call(nextToken="t1"),
        call(nextToken="t2"),
    ]

def test_stops_on_first_page_without_token():
    ecs = MagicMock()
    ecs.list_clusters.side_effect = [
        {"clusterArns": [arn("only")], "nextToken": None},
        {"clusterArns": [arn("never")]},
    ]

    assert list(iter_cluster_arns(ecs)) == [arn("only")]
    assert ecs.list_clusters.call_count == 1

def test_arns_are_yielded_before_the_next_page_is_requested():
    ecs = MagicMock()
    ecs.list_clusters.side_effect = [
        {"clusterArns": [arn("a")], "nextToken": "t1"},
        {"clusterArns": [arn("b")]},
    ]

    arns = iter_cluster_arns(ecs)
    assert next(arns) == arn("a")
    assert ecs.list_clusters.call_count == 1

def test_request_error_propagates():
    ecs = MagicMock()
    ecs.list_clusters.side_effect = [
        {"clusterArns": [arn("a")], "nextToken": "t1"},
        ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "ListClusters"),
    ]

    seen = []
    with pytest.raises(ClientError):
        for item in iter_cluster_arns(ecs):
            seen.append(item)
    assert seen == [arn("a")]
