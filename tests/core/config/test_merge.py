# tests/core/config/test_merge.py
"""
Testes da política de deep-merge de configuração.

- escalares são sobrescritos
- dicionários são mesclados recursivamente
- listas são sobrescritas integralmente
- None não conta como conflito de tipo
- conflitos de tipo são rejeitados
- os inputs não são mutados
"""

import copy

import pytest

from irisrap.core.config import ConfigTypeConflictError, deep_merge


def test_merge_simple_override():
    base = {"a": 1, "b": 2}
    override = {"b": 99}
    base_before = copy.deepcopy(base)
    override_before = copy.deepcopy(override)

    assert deep_merge(base, override) == {"a": 1, "b": 99}
    assert base == base_before
    assert override == override_before


def test_merge_nested_dicts():
    base = {"report": {"dpi": 100, "filename": "report.md"}}
    override = {"report": {"dpi": 72}}

    assert deep_merge(base, override) == {"report": {"dpi": 72, "filename": "report.md"}}


def test_merge_lists_are_replaced():
    base = {"analysis": {"categories": ["setosa", "versicolor", "virginica"]}}
    override = {"analysis": {"categories": ["setosa"]}}

    assert deep_merge(base, override)["analysis"]["categories"] == ["setosa"]


def test_merge_none_is_not_a_type_conflict():
    assert deep_merge({"categories": None}, {"categories": ["a"]}) == {"categories": ["a"]}
    assert deep_merge({"path": "x.csv"}, {"path": None}) == {"path": None}


def test_merge_type_conflict_raises():
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"analysis": {"on_undefined": "nan"}}, {"analysis": 3})


def test_merge_new_keys_are_added():
    assert deep_merge({"a": 1}, {"b": {"c": 2}}) == {"a": 1, "b": {"c": 2}}
