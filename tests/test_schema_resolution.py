"""Unit tests for schema selector resolution."""

import pytest

from propguard.validators.models import RuleOptions, RuleOverrides, SchemaDescriptor
from propguard.validators.schema import is_schema_like, normalize_requested, resolve


def _selector(value):
    return RuleOptions.model_validate({"schema": value}).schema_selector


@pytest.mark.parametrize(
    "schema, expected",
    [(None, []), ("create", ["create"]), (["a", "b"], ["a", "b"]), (("a",), ["a"]), ([], [])],
)
def test_normalize_requested(schema, expected):
    assert normalize_requested(schema) == expected


@pytest.mark.parametrize(
    "value, expected",
    [("create", True), (["a", "b"], True), (("a",), True), ([], True), ({"password": "x"}, False), (None, False), (["a", 1], False)],
)
def test_is_schema_like(value, expected):
    assert is_schema_like(value) is expected


def test_untagged_rule_always_eligible():
    assert resolve(None, []).eligible is True
    assert resolve(None, ["create"]).eligible is True


def test_tagged_rule_needs_explicit_request():
    assert resolve(_selector("create"), []).eligible is False
    assert resolve(_selector({"for": "create"}), []).eligible is False
    assert resolve(_selector(["create"]), []).eligible is False


def test_plain_name():
    assert resolve(_selector("create"), ["update", "create"]) == (True, None)
    assert resolve(_selector("create"), ["update"]).eligible is False


def test_descriptor_returns_its_overrides():
    resolution = resolve(_selector({"for": "custom", "options": {"message": "X"}}), ["custom"])

    assert resolution.eligible is True
    assert resolution.overrides.updates() == {"message": "X"}


def test_first_matching_list_entry_decides():
    selector = _selector([{"for": "a", "options": {"message": "from a"}}, "b", {"for": "c", "options": {"message": "from c"}}])

    assert resolve(selector, ["c", "a"]).overrides.updates() == {"message": "from a"}
    assert resolve(selector, ["b", "c"]) == (True, None)
    assert resolve(selector, ["c"]).overrides.updates() == {"message": "from c"}
    assert resolve(selector, ["z"]).eligible is False


def test_merged_options_override_wins():
    base = RuleOptions(priority=0, message="base", optional=False)

    merged = base.merged(RuleOverrides(message="X", optional=True))

    assert merged.message == "X"
    assert merged.optional is True
    assert merged.priority == 0
    assert base.message == "base"


def test_descriptor_accepts_python_keyword():
    descriptor = SchemaDescriptor(for_="custom", options=RuleOverrides(inverse=True))

    assert resolve(descriptor, ["custom"]).overrides.updates() == {"inverse": True}
