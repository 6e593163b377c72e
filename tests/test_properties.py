"""Tests for the property merge used when creating locale variants.

번역 시 원본 properties와 번역된 properties를 병합하는 규칙을 검증합니다.
"""
import copy

import pytest

from src.models.properties import merge_properties


SAMPLES = [
    {},
    {"a": 1},
    {"Heading": "Hi", "Seo": {"Title": "t", "Meta": {"Robots": "index"}}, "Tags": ["x"]},
]


@pytest.mark.parametrize("base", SAMPLES)
def test_no_override_returns_equal_copy(base):
    result = merge_properties(base, None)

    assert result == base
    assert result is not base


@pytest.mark.parametrize("override", SAMPLES)
def test_empty_base_yields_override(override):
    assert merge_properties({}, override) == override


def test_override_wins_for_scalar_keys():
    assert merge_properties({"k": "source", "n": 1}, {"k": "translated"}) == {
        "k": "translated",
        "n": 1,
    }


def test_nested_mappings_are_merged_recursively():
    result = merge_properties({"x": {"a": 1, "b": 2}}, {"x": {"b": 3, "c": 4}})

    assert result == {"x": {"a": 1, "b": 3, "c": 4}}


def test_deeply_nested_merge():
    base = {"Seo": {"Meta": {"Title": "Hello", "Robots": "index"}}}
    override = {"Seo": {"Meta": {"Title": "Hej"}}}

    assert merge_properties(base, override) == {
        "Seo": {"Meta": {"Title": "Hej", "Robots": "index"}}
    }


def test_scalar_override_replaces_nested_mapping():
    assert merge_properties({"x": {"a": 1}}, {"x": "scalar"}) == {"x": "scalar"}


def test_mapping_override_replaces_scalar():
    assert merge_properties({"x": "scalar"}, {"x": {"a": 1}}) == {"x": {"a": 1}}


def test_keys_only_in_base_survive():
    assert merge_properties({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}


def test_sequences_are_replaced_not_merged():
    result = merge_properties({"Tags": ["a", "b", "c"]}, {"Tags": ["z"]})

    assert result == {"Tags": ["z"]}


def test_new_keys_from_override_are_added():
    assert merge_properties({"a": 1}, {"b": {"c": 2}}) == {"a": 1, "b": {"c": 2}}


def test_merge_does_not_mutate_inputs():
    base = {"x": {"a": 1, "b": 2}, "Tags": ["a"], "Name": "n"}
    override = {"x": {"b": 3, "c": {"d": 4}}, "Tags": ["b"]}
    base_snapshot = copy.deepcopy(base)
    override_snapshot = copy.deepcopy(override)

    merge_properties(base, override)

    assert base == base_snapshot
    assert override == override_snapshot


@pytest.mark.parametrize("base", [None, "text", 42, ["a"]])
def test_non_mapping_base_yields_copy_of_override(base):
    override = {"a": 1}

    result = merge_properties(base, override)

    assert result == override
    assert result is not override


@pytest.mark.parametrize("base", [None, "text", 42])
def test_non_mapping_base_without_override_is_returned_as_is(base):
    assert merge_properties(base) is base
