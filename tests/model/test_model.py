# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""High-level tests demonstrating how to construct the Hermes collection model."""

import json

import pytest
from pydantic import ValidationError

from hermes.model import BodyKind, Collection, Folder, HttpMethod, Request


def test_request_defaults() -> None:
    """A request without fields is a GET with no URL and no body."""
    r = Request()
    assert r.name == ""
    assert r.identifier is None
    assert r.method == HttpMethod.GET
    assert r.url == ""
    assert r.body is None
    assert r.body_kind is None
    assert r.headers == {}
    assert r.form == {}


def test_request_with_body() -> None:
    r = Request(name="create", method=HttpMethod.POST, body='{"a": 1}', body_kind=BodyKind.JSON)
    assert r.method == "POST"
    assert r.body_kind == BodyKind.JSON


def test_method_from_string() -> None:
    """Methods are validated from their upper-case names."""
    assert Request(method="DELETE").method == HttpMethod.DELETE
    with pytest.raises(ValidationError):
        Request(method="FETCH")


def test_default_containers_are_not_shared() -> None:
    a = Request()
    b = Request()
    a.headers["X"] = "1"
    assert b.headers == {}


def test_nested_folders() -> None:
    """Folders nest arbitrarily and hold their own requests."""
    inner = Folder(name="inner", requests=[Request(name="r1"), Request(name="r2")])
    outer = Folder(name="outer", folders=[inner], requests=[Request(name="r0")])
    assert outer.folders[0].name == "inner"
    assert len(outer.folders[0].requests) == 2


def test_collection_defaults() -> None:
    c = Collection()
    assert c.name == "Untitled Collection"
    assert c.environments == {}
    assert c.active_environment == ""
    assert c.environment_active is False
    assert c.unresolved_environments == []


def test_request_count_includes_folders() -> None:
    folder = Folder(
        name="f",
        requests=[Request(name="a")],
        folders=[Folder(name="g", requests=[Request(name="b"), Request(name="c")])],
    )
    c = Collection(requests=[Request(name="top")], folders=[folder])
    assert c.request_count() == 4


def test_active_variables_when_enabled() -> None:
    c = Collection(
        environments={"dev": {"HOST": "localhost"}, "prod": {"HOST": "example.com"}},
        active_environment="prod",
        environment_active=True,
    )
    assert c.active_variables() == {"HOST": "example.com"}


def test_active_variables_when_disabled() -> None:
    c = Collection(environments={"dev": {"HOST": "localhost"}}, active_environment="dev")
    assert c.active_variables() == {}


def test_active_variables_returns_a_copy() -> None:
    c = Collection(environments={"dev": {"A": "1"}}, active_environment="dev", environment_active=True)
    c.active_variables()["A"] = "changed"
    assert c.environments["dev"]["A"] == "1"


def test_json_dump() -> None:
    """Collections serialize to JSON with enum values as plain strings."""
    c = Collection(
        name="api",
        requests=[Request(name="r", method=HttpMethod.PUT, body_kind=BodyKind.TEXT, body="hi")],
    )
    data = json.loads(c.model_dump_json())
    assert data["name"] == "api"
    assert data["requests"][0]["method"] == "PUT"
    assert data["requests"][0]["body_kind"] == "text"
