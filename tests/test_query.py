"""Tests for the Feature query."""

from unittest.mock import Mock

import pytest

from rollup.query import build_feature_query, run_feature_query


@pytest.fixture
def client():
    return Mock()


def test_query_text_filters_features():
    query = build_feature_query("Web\\Release 3", "Release")

    assert "[System.WorkItemType] = 'Feature'" in query
    assert "[System.State] <> 'Removed'" in query
    assert "[System.IterationPath] UNDER 'Web\\Release 3'" in query
    assert "[System.Tags] CONTAINS 'Release'" in query
    assert query.endswith("ORDER BY [System.ChangedDate] DESC")


def test_returns_ids_in_response_order(client):
    client.run_query.return_value = {
        "workItems": [{"id": 103, "url": "u"}, {"id": 101, "url": "u"}, {"id": 102, "url": "u"}]
    }

    assert run_feature_query(client, "Web\\R1", "Release") == [103, 101, 102]
    client.run_query.assert_called_once_with(build_feature_query("Web\\R1", "Release"))


def test_empty_result(client):
    client.run_query.return_value = {"workItems": []}
    assert run_feature_query(client, "Web\\R1", "Release") == []


def test_missing_work_items_is_empty(client):
    client.run_query.return_value = {"queryType": "flat"}
    assert run_feature_query(client, "Web\\R1", "Release") == []
