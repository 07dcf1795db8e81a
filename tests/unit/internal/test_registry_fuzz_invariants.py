from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from wonderbox.codegen import resolve_dependencies
from wonderbox.container import Container

_SEEDS = (3, 7, 13, 31, 71)


@dataclass
class _FuzzGraph:
    container: Container
    types: list[type[Any]]
    dependency_index: list[int | None]
    registered: list[bool]


def _next_state(state: int) -> int:
    return (state * 1103515245 + 12345) & 0x7FFFFFFF


def _make_leaf_type(*, name: str) -> type[Any]:
    def _init(self: Any, marker: int) -> None:
        self.marker = marker

    return type(name, (), {"__init__": _init})


def _make_node_type(*, name: str, dependency_type: type[Any]) -> type[Any]:
    def _init(self: Any, dependency: Any) -> None:
        self.dependency = dependency

    _init.__annotations__ = {"dependency": dependency_type, "return": None}
    return resolve_dependencies(strict=True)(type(name, (), {"__init__": _init}))


def _build_random_graph(seed: int, *, type_count: int = 24) -> _FuzzGraph:
    state = seed
    container = Container()
    graph = _FuzzGraph(container=container, types=[], dependency_index=[], registered=[])

    for index in range(type_count):
        state = _next_state(state)
        name = f"_FuzzType_{seed}_{index}"
        if graph.types and state % 10 < 6:
            dependency_index = state % len(graph.types)
            node_type = _make_node_type(name=name, dependency_type=graph.types[dependency_index])
            container.register_autoresolvable(node_type)
            graph.types.append(node_type)
            graph.dependency_index.append(dependency_index)
            graph.registered.append(True)
            continue

        leaf_type = _make_leaf_type(name=name)
        state = _next_state(state)
        registered = state % 4 != 0
        if registered:
            container.register_clone(leaf_type(index))
        graph.types.append(leaf_type)
        graph.dependency_index.append(None)
        graph.registered.append(registered)

    return graph


def _expected_presence(graph: _FuzzGraph) -> list[bool]:
    present: list[bool] = []
    for index, dependency_index in enumerate(graph.dependency_index):
        if dependency_index is None:
            present.append(graph.registered[index])
        else:
            present.append(present[dependency_index])
    return present


def _leaf_index(graph: _FuzzGraph, index: int) -> int:
    dependency_index = graph.dependency_index[index]
    while dependency_index is not None:
        index = dependency_index
        dependency_index = graph.dependency_index[index]
    return index


@pytest.mark.parametrize("seed", _SEEDS)
def test_fuzz_resolution_is_absent_exactly_when_a_leaf_is_missing(seed: int) -> None:
    graph = _build_random_graph(seed)
    expected = _expected_presence(graph)

    for index, requested_type in enumerate(graph.types):
        resolved = graph.container.resolve(requested_type)
        assert (resolved is not None) is expected[index], requested_type.__name__


@pytest.mark.parametrize("seed", _SEEDS)
def test_fuzz_resolved_values_never_leak_across_types(seed: int) -> None:
    graph = _build_random_graph(seed)
    expected = _expected_presence(graph)

    for index, requested_type in enumerate(graph.types):
        if not expected[index]:
            continue
        value = graph.container.resolve(requested_type)
        current_index = index
        while graph.dependency_index[current_index] is not None:
            assert type(value) is graph.types[current_index]
            current_index = graph.dependency_index[current_index]  # type: ignore[assignment]
            value = value.dependency
        assert type(value) is graph.types[current_index]
        assert value.marker == _leaf_index(graph, index)


@pytest.mark.parametrize("seed", _SEEDS)
def test_fuzz_repeated_resolution_returns_fresh_equal_graphs(seed: int) -> None:
    graph = _build_random_graph(seed)
    expected = _expected_presence(graph)

    for index, requested_type in enumerate(graph.types):
        if not expected[index]:
            continue
        first = graph.container.resolve(requested_type)
        second = graph.container.resolve(requested_type)
        assert first is not second


@pytest.mark.parametrize("seed", _SEEDS)
def test_fuzz_registration_of_one_type_does_not_affect_others(seed: int) -> None:
    graph = _build_random_graph(seed)
    before = _expected_presence(graph)
    missing_leaves = [
        index
        for index, dependency_index in enumerate(graph.dependency_index)
        if dependency_index is None and not graph.registered[index]
    ]
    if not missing_leaves:
        pytest.skip("seed produced no missing leaves")

    repaired = missing_leaves[0]
    graph.container.register_clone(graph.types[repaired](repaired))
    graph.registered[repaired] = True
    after = _expected_presence(graph)

    for index, requested_type in enumerate(graph.types):
        resolved = graph.container.resolve(requested_type)
        assert (resolved is not None) is after[index]
        if _leaf_index(graph, index) != repaired:
            assert after[index] is before[index]
