"""Unit tests for core/utils/merge.py"""

from mdpage.core.utils.merge import clone, deep_merge


def test_deep_merge_nested_mappings():
    base = {"site": {"title": "A", "url": "x"}, "n": 1}
    merged = deep_merge(base, {"site": {"title": "B"}})
    assert merged == {"site": {"title": "B", "url": "x"}, "n": 1}


def test_deep_merge_replaces_lists_and_scalars():
    merged = deep_merge({"tags": ["a", "b"], "n": 1}, {"tags": ["c"], "n": {"x": 1}})
    assert merged == {"tags": ["c"], "n": {"x": 1}}


def test_deep_merge_does_not_mutate_or_alias_inputs():
    base = {"page": {"tags": ["a"]}}
    override = {"page": {"extra": {"k": "v"}}}
    merged = deep_merge(base, override)
    merged["page"]["tags"].append("b")
    merged["page"]["extra"]["k"] = "changed"
    assert base == {"page": {"tags": ["a"]}}
    assert override == {"page": {"extra": {"k": "v"}}}


def test_clone_shares_non_container_objects():
    hook = object()
    copied = clone({"hook": hook, "items": [{"a": 1}]})
    assert copied["hook"] is hook
    assert copied["items"] == [{"a": 1}]
