"""Tests for channel namespacing."""
from __future__ import annotations

import pytest

from src.asyncapi_prep.channels import normalize_namespace, prefix_channels
from src.shared.errors import ComponentNotFoundError


@pytest.mark.parametrize(
    "namespace, expected",
    [("foo", "foo/"), ("foo/", "foo/"), ("tchibo/s4hana/dev", "tchibo/s4hana/dev/")],
)
def test_normalize_namespace(namespace: str, expected: str):
    assert normalize_namespace(namespace) == expected


def test_prefix_channels():
    definition = {"subscribe": {"message": {"$ref": "#/components/messages/M"}}}
    document = {"channels": {"a/b": definition, "c": {}}}
    prefix_channels(document, "foo")
    assert list(document["channels"]) == ["foo/a/b", "foo/c"]
    assert document["channels"]["foo/a/b"] is definition


def test_prefix_channels_with_trailing_slash():
    document = {"channels": {"a/b": {}}}
    prefix_channels(document, "foo/")
    assert list(document["channels"]) == ["foo/a/b"]


def test_missing_channels():
    with pytest.raises(ComponentNotFoundError, match='"channels"'):
        prefix_channels({"components": {}}, "foo")


def test_empty_channels_are_kept():
    document = {"channels": {}}
    prefix_channels(document, "foo")
    assert document["channels"] == {}
