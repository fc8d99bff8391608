"""
Unit tests for query composition: key forwarding/renaming, filter expressions, query shape.
"""

import json

import pytest

from cvat_query.application.composer import build_query, compose, compose_filter_expression
from cvat_query.application.dto import ById, Search, SelfLookup
from cvat_query.application.schemas import (
    CLOUD_STORAGES,
    JOBS,
    ORGANIZATIONS,
    PERFORMANCE_REPORTS,
    PROJECTS,
    TASKS,
    USERS,
    WEBHOOKS,
)
from cvat_query.domain.errors import ExclusiveFieldsViolation, MalformedFilterExpression, UnknownFilterField


class TestProjectFilterExpression:
    def test_project_id_without_prior_filter(self):
        params = compose({"projectId": 7}, TASKS)
        assert params == {"filter": '{"and":[{"==":[{"var":"project_id"},7]}]}'}

    def test_project_id_with_prior_filter(self):
        prior = '{"==":[{"var":"name"},"x"]}'
        params = compose({"filter": prior, "projectId": 7}, TASKS)
        assert params["filter"] == '{"and":[{"==":[{"var":"name"},"x"]},{"==":[{"var":"project_id"},7]}]}'

    def test_key_order_does_not_matter(self):
        prior = '{"==":[{"var":"name"},"x"]}'
        a = compose({"filter": prior, "projectId": 7}, TASKS)
        b = compose({"projectId": 7, "filter": prior}, TASKS)
        assert a == b

    def test_prior_conjunction_is_wrapped_whole(self):
        prior = '{"and":[{"==":[{"var":"status"},"annotation"]},{"==":[{"var":"mode"},"interpolation"]}]}'
        params = compose({"filter": prior, "projectId": 3}, TASKS)
        assert json.loads(params["filter"]) == {
            "and": [json.loads(prior), {"==": [{"var": "project_id"}, 3]}]
        }

    def test_repeated_composition_nests(self):
        once = compose_filter_expression(None, "project_id", 7)
        twice = compose_filter_expression(once, "project_id", 7)
        assert json.loads(twice) == {"and": [json.loads(once), {"==": [{"var": "project_id"}, 7]}]}

    def test_malformed_prior_filter(self):
        with pytest.raises(MalformedFilterExpression):
            compose({"filter": "{broken", "projectId": 7}, TASKS)

    def test_prior_filter_alone_is_forwarded_untouched(self):
        assert compose({"filter": "{broken"}, TASKS) == {"filter": "{broken"}


class TestCompose:
    def test_jobs_renames_and_forwards(self):
        params = compose({"taskID": 4, "type": "ground_truth", "page": 2}, JOBS)
        assert params == {"task_id": 4, "type": "ground_truth", "page": 2}

    def test_jobs_identity_key_becomes_id(self):
        assert compose({"jobID": 99}, JOBS) == {"id": 99}

    def test_tasks_forward_list(self):
        flt = {"page": 1, "sort": "-id", "search": "street", "ordering": "name"}
        assert compose(flt, TASKS) == flt

    def test_webhooks_project_id_renamed(self):
        assert compose({"projectId": 7, "search": "hook"}, WEBHOOKS) == {"project_id": 7, "search": "hook"}

    def test_users_drop_self_and_falsy_values(self):
        params = compose({"self": False, "is_active": False, "search": "", "limit": 10}, USERS)
        assert params == {"limit": 10}

    def test_performance_report_renames(self):
        params = compose({"taskID": 4}, PERFORMANCE_REPORTS)
        assert params == {"task_id": 4}
        params = compose({"startDate": "2024-01-01", "endDate": "2024-02-01"}, PERFORMANCE_REPORTS)
        assert params == {"start_date": "2024-01-01", "end_date": "2024-02-01"}

    def test_input_is_not_mutated(self):
        flt = {"projectId": 7, "filter": '{"==":[{"var":"name"},"x"]}'}
        snapshot = dict(flt)
        compose(flt, TASKS)
        assert flt == snapshot


class TestBuildQuery:
    def test_identity_lookup(self):
        query = build_query({"id": 42}, TASKS)
        assert query == ById(id=42, params={"id": 42})

    def test_job_identity_lookup(self):
        assert build_query({"jobID": 99}, JOBS) == ById(id=99, params={"id": 99})

    def test_job_identity_lookup_drops_listing_keys(self):
        query = build_query({"jobID": 99, "taskID": 4, "type": "annotation"}, JOBS)
        assert query == ById(id=99, params={"id": 99})

    def test_task_identity_lookup_keeps_other_params(self):
        query = build_query({"id": 42, "sort": "name"}, TASKS)
        assert query == ById(id=42, params={"id": 42, "sort": "name"})

    def test_search_unpaginated(self):
        query = build_query({"search": "city"}, PROJECTS)
        assert query == Search(params={"search": "city"}, paginated=False)

    def test_search_paginated(self):
        query = build_query({"page": 2, "sort": "name"}, CLOUD_STORAGES)
        assert isinstance(query, Search)
        assert query.paginated

    def test_users_self(self):
        assert build_query({"self": True, "search": "ignored"}, USERS) == SelfLookup()

    def test_users_never_paginated(self):
        assert build_query({"limit": 5}, USERS) == Search(params={"limit": 5}, paginated=False)

    def test_organizations_forward_everything(self):
        query = build_query({"search": "acme", "filter": "{}"}, ORGANIZATIONS)
        assert query == Search(params={"search": "acme", "filter": "{}"}, paginated=False)

    def test_validation_runs_first(self):
        with pytest.raises(UnknownFilterField):
            build_query({"id": 1, "page": 1, "bogus": 1}, TASKS)
        with pytest.raises(ExclusiveFieldsViolation):
            build_query({"id": 1, "page": 1}, TASKS)
