from __future__ import annotations

import copy

from wonderbox._internal.providers import ProviderKind, ProviderSpec
from wonderbox._internal.registry import ProvidersRegistry
from wonderbox._internal.type_key import TypeKey
from wonderbox.container import Container


class _Config:
    def __init__(self, values: list[int]) -> None:
        self.values = values


class _Built:
    @classmethod
    def autoresolve(cls, container: Container) -> _Built | None:
        return cls()


def test_add_returns_none_for_new_key() -> None:
    registry = ProvidersRegistry()

    previous = registry.add(ProviderSpec.for_factory(TypeKey.of(int), lambda: 1))

    assert previous is None
    assert len(registry) == 1
    assert TypeKey.of(int) in registry


def test_add_replaces_and_returns_previous_spec() -> None:
    registry = ProvidersRegistry()
    first = ProviderSpec.for_factory(TypeKey.of(int), lambda: 1)
    second = ProviderSpec.for_clone(TypeKey.of(int), 2, copy.deepcopy)

    registry.add(first)
    previous = registry.add(second)

    assert previous is first
    assert registry.find(TypeKey.of(int)) is second
    assert len(registry) == 1


def test_find_missing_key_returns_none() -> None:
    assert ProvidersRegistry().find(TypeKey.of(str)) is None


def test_keys_lists_registered_keys() -> None:
    registry = ProvidersRegistry()
    registry.add(ProviderSpec.for_factory(TypeKey.of(int), lambda: 1))
    registry.add(ProviderSpec.for_factory(TypeKey.of(str), lambda: "a"))

    assert set(registry.keys()) == {TypeKey.of(int), TypeKey.of(str)}


def test_clone_spec_produces_independent_copies() -> None:
    stored = _Config([1, 2])
    spec = ProviderSpec.for_clone(TypeKey.of(_Config), stored, copy.deepcopy)

    first = spec.produce(Container())
    first.values.append(3)
    second = spec.produce(Container())

    assert spec.kind is ProviderKind.CLONE
    assert first is not stored
    assert second.values == [1, 2]
    assert stored.values == [1, 2]


def test_clone_spec_with_none_value_produces_none() -> None:
    spec = ProviderSpec.for_clone(TypeKey.of(_Config), None, copy.deepcopy)

    assert spec.produce(Container()) is None


def test_factory_spec_calls_factory_each_time() -> None:
    calls: list[int] = []

    def factory() -> int:
        calls.append(1)
        return len(calls)

    spec = ProviderSpec.for_factory(TypeKey.of(int), factory)

    assert spec.produce(Container()) == 1
    assert spec.produce(Container()) == 2
    assert spec.kind is ProviderKind.FACTORY


def test_autoresolvable_spec_delegates_to_capability() -> None:
    spec = ProviderSpec.for_autoresolvable(TypeKey.of(_Built), _Built)

    assert isinstance(spec.produce(Container()), _Built)
    assert spec.kind is ProviderKind.AUTORESOLVED
